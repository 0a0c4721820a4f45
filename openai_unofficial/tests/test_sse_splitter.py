"""Unit tests for the SSE frame splitter.

Covers:
- Frames are independent of how the byte stream is chunked.
- CR, LF and CRLF line endings, a leading BOM and multi-line data.
- Comments and unknown fields are ignored; ``event:`` is kept.
- ``[DONE]`` ends the session; ``close`` flushes an unterminated frame.
"""
from __future__ import annotations

from openai_unofficial.base.streaming import DONE_MARKER, STREAM_END, SSEFrameSplitter, WireFrame
from openai_unofficial.tests.utils import split_every


STREAM = (
    b": keep-alive\n"
    b"data: {\"a\":1}\n\n"
    b"event: delta\n"
    b"data: {\"b\":2}\n\n"
    b"id: 7\nretry: 100\n"
    b"data: {\"c\":3}\n\n"
    b"data: [DONE]\n\n"
)

EXPECTED = [
    WireFrame(data=b'{"a":1}'),
    WireFrame(data=b'{"b":2}', event="delta"),
    WireFrame(data=b'{"c":3}'),
    STREAM_END,
]


def _run(chunks):
    splitter = SSEFrameSplitter()
    out = []
    for c in chunks:
        out.extend(splitter.feed(c))
    out.extend(splitter.close())
    return out


def test_single_chunk_yields_all_frames_then_end():
    assert _run([STREAM]) == EXPECTED  # nosec B101 - asserts are appropriate in unit tests


def test_every_split_offset_yields_identical_frames():
    for offset in range(1, len(STREAM)):
        got = _run([STREAM[:offset], STREAM[offset:]])
        assert got == EXPECTED, f"split at {offset} produced {got!r}"  # nosec B101 - asserts are appropriate in unit tests


def test_one_byte_chunks_yield_identical_frames():
    assert _run(split_every(STREAM, 1)) == EXPECTED  # nosec B101 - asserts are appropriate in unit tests


def test_crlf_and_cr_line_endings():
    crlf = STREAM.replace(b"\n", b"\r\n")
    cr = STREAM.replace(b"\n", b"\r")
    assert _run([crlf]) == EXPECTED  # nosec B101 - asserts are appropriate in unit tests
    assert _run(split_every(crlf, 1)) == EXPECTED  # nosec B101 - asserts are appropriate in unit tests
    assert _run(split_every(cr, 3)) == EXPECTED  # nosec B101 - asserts are appropriate in unit tests


def test_cr_at_chunk_boundary_waits_for_following_lf():
    splitter = SSEFrameSplitter()
    assert splitter.feed(b"data: x\r") == []  # nosec B101 - asserts are appropriate in unit tests
    # The LF completes the CRLF pair; it must not count as an empty line.
    assert splitter.feed(b"\n") == []  # nosec B101 - asserts are appropriate in unit tests
    assert splitter.feed(b"\r\n") == [WireFrame(data=b"x")]  # nosec B101 - asserts are appropriate in unit tests


def test_leading_bom_is_stripped_even_when_split():
    data = b"\xef\xbb\xbf" + STREAM
    assert _run([data]) == EXPECTED  # nosec B101 - asserts are appropriate in unit tests
    assert _run(split_every(data, 1)) == EXPECTED  # nosec B101 - asserts are appropriate in unit tests


def test_multiple_data_lines_join_with_newline():
    frames = _run([b"data: first\ndata:second\ndata:  third\n\n"])
    assert frames == [WireFrame(data=b"first\nsecond\n third")]  # nosec B101 - asserts are appropriate in unit tests


def test_blank_lines_without_data_do_not_emit_frames():
    frames = _run([b"\n\n: comment\n\nevent: ping\n\n"])
    assert frames == []  # nosec B101 - asserts are appropriate in unit tests


def test_done_marker_stops_consuming_input():
    splitter = SSEFrameSplitter()
    out = splitter.feed(b"data: [DONE]\n\ndata: {\"late\":true}\n\n")
    assert out == [STREAM_END]  # nosec B101 - asserts are appropriate in unit tests
    assert splitter.done and splitter.closed  # nosec B101 - asserts are appropriate in unit tests
    assert splitter.feed(b"data: {}\n\n") == []  # nosec B101 - asserts are appropriate in unit tests
    assert splitter.close() == []  # nosec B101 - asserts are appropriate in unit tests


def test_done_marker_requires_exact_payload():
    frames = _run([b"data: [DONE] \n\n"])
    assert frames == [WireFrame(data=b"[DONE] ")]  # nosec B101 - asserts are appropriate in unit tests
    assert DONE_MARKER == b"[DONE]"  # nosec B101 - asserts are appropriate in unit tests


def test_close_flushes_unterminated_frame():
    splitter = SSEFrameSplitter()
    assert splitter.feed(b"data: {\"tail\":1}") == []  # nosec B101 - asserts are appropriate in unit tests
    assert splitter.close() == [WireFrame(data=b'{"tail":1}')]  # nosec B101 - asserts are appropriate in unit tests
    assert splitter.closed and not splitter.done  # nosec B101 - asserts are appropriate in unit tests
    assert splitter.feed(b"data: more\n\n") == []  # nosec B101 - asserts are appropriate in unit tests


def test_close_flushes_unterminated_done_marker():
    splitter = SSEFrameSplitter()
    splitter.feed(b"data: {}\n\ndata: [DONE]")
    assert splitter.close() == [STREAM_END]  # nosec B101 - asserts are appropriate in unit tests
    assert splitter.done  # nosec B101 - asserts are appropriate in unit tests


def test_reset_starts_a_new_session():
    splitter = SSEFrameSplitter()
    splitter.feed(b"data: [DONE]\n\n")
    splitter.reset()
    assert not splitter.closed  # nosec B101 - asserts are appropriate in unit tests
    assert splitter.feed("data: again\n\n") == [WireFrame(data=b"again")]  # nosec B101 - asserts are appropriate in unit tests


def test_iter_frames_does_not_pull_past_done():
    pulled = []

    def chunks():
        for c in (b"data: {}\n\n", b"data: [DONE]\n\n", b"data: {\"x\":1}\n\n"):
            pulled.append(c)
            yield c

    frames = list(SSEFrameSplitter().iter_frames(chunks()))
    assert frames == [WireFrame(data=b"{}"), STREAM_END]  # nosec B101 - asserts are appropriate in unit tests
    assert len(pulled) == 2  # nosec B101 - asserts are appropriate in unit tests

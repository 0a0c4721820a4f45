"""SSE frame splitter.

Turns an unbounded sequence of byte chunks, split at arbitrary offsets (one
byte at a time included), into complete :class:`WireFrame` values following
the standard server-sent events framing rules:

- lines end at ``\\n``, ``\\r\\n`` or ``\\r``;
- ``data:`` lines accumulate (one leading space stripped, several lines joined
  with ``\\n``), ``event:`` names the frame, a blank line completes it;
- comment lines and any other field (``id:``, ``retry:``, garbage without a
  recognized prefix) are ignored.

A payload of exactly ``[DONE]`` is the OpenAI terminal marker: it is returned
as the :data:`STREAM_END` sentinel and the session stops consuming input.

Buffering is bounded by the longest unterminated line. One instance handles
one session at a time; :meth:`SSEFrameSplitter.reset` starts a new one.
"""
from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Union

from .deltas import STREAM_END, StreamEnd
from .wire_frame import WireFrame

DONE_MARKER = b"[DONE]"
_BOM = b"\xef\xbb\xbf"

SplitterOutput = Union[WireFrame, StreamEnd]


class SSEFrameSplitter:
    """Stateful byte-chunk to SSE frame decoder."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Discard all buffered state and start a new session."""
        self._buffer = bytearray()
        self._scan_pos = 0
        self._data_lines: List[bytes] = []
        self._event: Optional[str] = None
        self._started = False
        self._done = False
        self._closed = False

    @property
    def done(self) -> bool:
        """True once the ``[DONE]`` marker has been seen."""
        return self._done

    @property
    def closed(self) -> bool:
        """True once :meth:`close` ran or the ``[DONE]`` marker was seen."""
        return self._closed or self._done

    def feed(self, chunk: Union[bytes, bytearray, memoryview, str]) -> List[SplitterOutput]:
        """Consume one transport chunk and return the frames it completed."""
        if self.closed or not chunk:
            return []
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        self._buffer += chunk
        if not self._started:
            if len(self._buffer) < len(_BOM) and _BOM.startswith(bytes(self._buffer)):
                return []
            if self._buffer.startswith(_BOM):
                del self._buffer[: len(_BOM)]
            self._started = True
        out: List[SplitterOutput] = []
        for line in self._drain_lines():
            item = self._process_line(line)
            if item is None:
                continue
            out.append(item)
            if item is STREAM_END:
                self._buffer.clear()
                self._scan_pos = 0
                break
        return out

    def close(self) -> List[SplitterOutput]:
        """Signal transport EOF and flush a trailing unterminated frame.

        Servers occasionally omit the final blank line; whatever complete
        ``data:`` content is pending is still delivered.
        """
        if self.closed:
            return []
        out: List[SplitterOutput] = []
        tail = bytes(self._buffer)
        self._buffer.clear()
        self._scan_pos = 0
        if tail:
            # EOF terminates the last line.
            for line in tail.replace(b"\r\n", b"\n").replace(b"\r", b"\n").split(b"\n"):
                item = self._process_line(line)
                if item is None:
                    continue
                out.append(item)
                if item is STREAM_END:
                    return out
        item = self._dispatch()
        if item is not None:
            out.append(item)
        self._closed = True
        return out

    def iter_frames(self, chunks: Iterable[bytes]) -> Iterator[SplitterOutput]:
        """Lazily split a whole chunk sequence, flushing at exhaustion.

        Stops pulling from ``chunks`` as soon as the ``[DONE]`` marker is seen.
        """
        for chunk in chunks:
            yield from self.feed(chunk)
            if self._done:
                return
        yield from self.close()

    # ------------------------------------------------------------------
    def _drain_lines(self) -> List[bytes]:
        """Remove and return every complete line currently buffered."""
        buf = self._buffer
        lines: List[bytes] = []
        start = 0
        pos = self._scan_pos
        cr = buf.find(b"\r", pos)
        while True:
            nl = buf.find(b"\n", pos)
            if 0 <= cr < pos:
                cr = buf.find(b"\r", pos)
            if nl < 0 and cr < 0:
                pos = len(buf)
                break
            if cr < 0 or 0 <= nl < cr:
                line_end, pos = nl, nl + 1
            else:
                if cr + 1 >= len(buf):
                    # CR at the end of the buffer: wait to see if LF follows.
                    pos = cr
                    break
                line_end = cr
                pos = cr + 2 if buf[cr + 1] == 0x0A else cr + 1
            lines.append(bytes(buf[start:line_end]))
            start = pos
        del buf[:start]
        self._scan_pos = pos - start
        return lines

    def _process_line(self, line: bytes) -> Optional[SplitterOutput]:
        if not line:
            return self._dispatch()
        if line.startswith(b"data:"):
            value = line[5:]
            if value.startswith(b" "):
                value = value[1:]
            self._data_lines.append(value)
        elif line.startswith(b"event:"):
            value = line[6:]
            if value.startswith(b" "):
                value = value[1:]
            self._event = value.decode("utf-8", errors="replace")
        return None

    def _dispatch(self) -> Optional[SplitterOutput]:
        if not self._data_lines:
            self._event = None
            return None
        data = b"\n".join(self._data_lines)
        event = self._event
        self._data_lines = []
        self._event = None
        if data == DONE_MARKER:
            self._done = True
            return STREAM_END
        return WireFrame(data=data, event=event)


__all__ = ["SSEFrameSplitter", "SplitterOutput", "DONE_MARKER"]

"""Response emitter: the streaming pipeline driven by the host.

Wires the SSE frame splitter, the delta decoder and the aggregation engine
together for one streamed request:

    bytes chunk -> WireFrame -> Delta... -> StreamSnapshot...

The host pushes transport chunks in and pulls snapshots out. The terminal
snapshot (``done=True``) carries the :class:`AggregatedResponse` and is
produced either by the ``[DONE]`` marker during :meth:`ResponseEmitter.push`
or by :meth:`ResponseEmitter.close` at transport EOF.
"""
from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Iterable, Iterator, List, Optional

from ..errors import DecodeError
from ..logging import LogContext, get_logger
from ..models import AggregatedResponse, StreamSnapshot
from .aggregation import AggregationEngine
from .delta_decoder import decode
from .deltas import STREAM_END
from .sse_splitter import SplitterOutput, SSEFrameSplitter
from .streaming_finalize import finalize_stream
from .streaming_metrics import StreamMetrics, apply_token_usage


class ResponseEmitter:
    """Push-driven streaming decoder for one chat completion."""

    def __init__(
        self,
        *,
        model: Optional[str] = None,
        ctx: Optional[LogContext] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._logger = logger or get_logger("streaming.emitter")
        self._ctx = ctx
        self._splitter = SSEFrameSplitter()
        self._engine = AggregationEngine(model=model, ctx=ctx, logger=self._logger)
        self.metrics = StreamMetrics()
        self._t0: Optional[float] = None
        self._final: Optional[StreamSnapshot] = None

    @property
    def done(self) -> bool:
        return self._final is not None

    @property
    def response(self) -> Optional[AggregatedResponse]:
        """The aggregated response once the stream is done, else ``None``."""
        return self._final.response if self._final is not None else None

    def push(self, chunk: bytes) -> List[StreamSnapshot]:
        """Feed one transport chunk; return the snapshots it produced.

        The last element is the terminal snapshot when the chunk carried the
        ``[DONE]`` marker. Chunks pushed after that are ignored.

        Raises:
            DecodeError: the first frame of the stream is not a chunk object.
        """
        if self._final is not None:
            return []
        if self._t0 is None:
            self._t0 = time.perf_counter()
        out: List[StreamSnapshot] = []
        for item in self._splitter.feed(chunk):
            snapshots = self._handle(item)
            self._count(snapshots)
            out.extend(snapshots)
            if self._final is not None:
                self._log_final()
                break
        return out

    def close(self) -> StreamSnapshot:
        """Signal transport EOF and return the terminal snapshot.

        A frame left unterminated by the server is still folded; its text and
        finalized calls are merged into the returned snapshot.
        """
        if self._final is not None:
            return self._final
        if self._t0 is None:
            self._t0 = time.perf_counter()
        flushed: List[StreamSnapshot] = []
        for item in self._splitter.close():
            flushed.extend(self._handle(item))
        if self._final is None:
            self._finish(self._engine.transport_closed())
        if flushed and flushed[-1].done:
            flushed.pop()
        terminal = self._final
        if flushed:
            terminal = replace(
                terminal,
                text_delta="".join(s.text_delta for s in flushed),
                new_tool_calls=tuple(c for s in flushed for c in s.new_tool_calls),
            )
            self._final = terminal
        self._count([terminal])
        self._log_final()
        return terminal

    def iter_snapshots(self, chunks: Iterable[bytes]) -> Iterator[StreamSnapshot]:
        """Lazily turn a chunk iterable into snapshots.

        The sequence is finite and ends with exactly one ``done`` snapshot;
        ``chunks`` is not consumed past the ``[DONE]`` marker.
        """
        for chunk in chunks:
            yield from self.push(chunk)
            if self._final is not None:
                return
        yield self.close()

    # ------------------------------------------------------------------
    def _handle(self, item: SplitterOutput) -> List[StreamSnapshot]:
        if item is STREAM_END:
            return [self._finish(self._engine.end_stream())]
        self.metrics.frames += 1
        try:
            deltas = decode(item.data)
        except DecodeError as err:
            self._engine.record_decode_error(err)
            return []
        return self._engine.fold_frame(deltas)

    def _finish(self, terminal: StreamSnapshot) -> StreamSnapshot:
        self._final = terminal
        self.metrics.total_duration_ms = (time.perf_counter() - (self._t0 or 0.0)) * 1000.0
        usage = terminal.response.usage if terminal.response is not None else None
        if usage is not None:
            apply_token_usage(
                self.metrics,
                prompt=usage.get("prompt"),
                completion=usage.get("completion"),
                total=usage.get("total"),
            )
        return terminal

    def _log_final(self) -> None:
        if self._final is None or self._final.response is None:
            return
        finalize_stream(
            logger=self._logger,
            ctx=self._ctx,
            metrics=self.metrics,
            response=self._final.response,
        )

    def _count(self, snapshots: List[StreamSnapshot]) -> None:
        if not snapshots:
            return
        if self.metrics.time_to_first_token_ms is None and self._t0 is not None:
            if any(s.text_delta or s.new_tool_calls for s in snapshots):
                self.metrics.time_to_first_token_ms = (time.perf_counter() - self._t0) * 1000.0
        self.metrics.emitted += len(snapshots)


__all__ = ["ResponseEmitter"]

"""Aggregation engine: a sequential fold over typed stream deltas.

Each step returns a :class:`StreamSnapshot` so the host can observe progress
(new text, newly finalized tool calls) without waiting for the whole stream.
The engine owns all per-response state: accumulated text, the tool-call
accumulator, the finish reason, token usage and recoverable errors.

Terminal transitions:

- :meth:`AggregationEngine.end_stream` on the ``[DONE]`` marker;
- :meth:`AggregationEngine.transport_closed` when the byte stream ended
  without it, which always marks the response incomplete while keeping the
  partial text and tool calls.

Both return the terminal snapshot (``done=True``) carrying the
:class:`AggregatedResponse`; calling either again returns the same snapshot.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from ..errors import DecodeError, ErrorCode, IncompleteStreamError, ProviderError
from ..logging import LogContext, get_logger, log_event
from ..models import AggregatedResponse, FinishReason, StreamSnapshot, ToolCall
from .deltas import ContentDelta, Delta, FinishDelta, StreamEnd, ToolCallDelta, UsageDelta
from .streaming_metrics import build_token_usage
from .tool_call_accumulator import ToolCallAccumulator

_FINALIZING_REASONS = frozenset({FinishReason.STOP, FinishReason.TOOL_CALLS})


class AggregationEngine:
    """Fold deltas of one streamed completion into an AggregatedResponse."""

    def __init__(
        self,
        *,
        model: Optional[str] = None,
        ctx: Optional[LogContext] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._model = model
        self._ctx = ctx
        self._logger = logger or get_logger("streaming.aggregation")
        self._text = ""
        self._accumulator = ToolCallAccumulator()
        self._tool_calls: Tuple[ToolCall, ...] = ()
        self._finalized = False
        self._finish: Optional[FinishReason] = None
        self._usage: Optional[Dict[str, Optional[int]]] = None
        self._errors: List[ProviderError] = []
        self._started = False
        self._terminal: Optional[StreamSnapshot] = None

    # -- observable state -------------------------------------------------
    @property
    def text(self) -> str:
        return self._text

    @property
    def finish_reason(self) -> Optional[FinishReason]:
        return self._finish

    @property
    def errors(self) -> Tuple[ProviderError, ...]:
        return tuple(self._errors)

    @property
    def done(self) -> bool:
        return self._terminal is not None

    # -- fold ---------------------------------------------------------------
    def fold(self, delta: Delta) -> StreamSnapshot:
        """Apply one delta and return the resulting snapshot."""
        self._started = True
        if self._terminal is not None:
            self._ignored(delta, "after_end")
            return self._snapshot()
        if isinstance(delta, StreamEnd):
            return self.end_stream()
        if isinstance(delta, UsageDelta):
            self._usage = build_token_usage(delta.prompt_tokens, delta.completion_tokens, delta.total_tokens)
            return self._snapshot()
        if self._finish is not None:
            self._ignored(delta, "after_finish")
            return self._snapshot()
        if isinstance(delta, ContentDelta):
            self._text += delta.text
            return self._snapshot(text_delta=delta.text)
        if isinstance(delta, ToolCallDelta):
            self._accumulator.add(delta)
            return self._snapshot()
        if isinstance(delta, FinishDelta):
            return self._on_finish(delta)
        raise TypeError(f"unsupported delta type: {type(delta).__name__}")

    def fold_frame(self, deltas: Sequence[Delta]) -> List[StreamSnapshot]:
        """Fold every delta decoded from one frame, in order.

        A frame without deltas (role-only chunk) still counts as the first
        frame of the stream.
        """
        self._started = True
        return [self.fold(delta) for delta in deltas]

    def record_decode_error(self, error: DecodeError) -> None:
        """Record a frame that failed to decode.

        Raises:
            DecodeError: when no frame was folded before; a stream whose very
                first frame is garbage is not an OpenAI stream at all.
        """
        fatal = not self._started
        log_event(
            self._logger,
            "stream.frame.decode_error",
            self._ctx,
            level=logging.ERROR if fatal else logging.WARNING,
            error_code=error.code.value,
            error=error.message,
            fatal=fatal,
            payload_bytes=len(error.payload),
        )
        if fatal:
            raise error
        self._errors.append(error)

    def end_stream(self) -> StreamSnapshot:
        """Handle the ``[DONE]`` marker."""
        if self._terminal is not None:
            return self._terminal
        self._started = True
        if self._finish is None:
            if self._text and not len(self._accumulator):
                self._finish = FinishReason.STOP
            else:
                self._errors.append(
                    IncompleteStreamError(
                        message="stream ended without a finish_reason",
                        model=self._model,
                    )
                )
        return self._terminate()

    def transport_closed(self) -> StreamSnapshot:
        """Handle EOF of the byte stream without a ``[DONE]`` marker."""
        if self._terminal is not None:
            return self._terminal
        self._errors.append(
            IncompleteStreamError(
                message="transport closed before the [DONE] marker",
                model=self._model,
            )
        )
        return self._terminate()

    def response(self) -> AggregatedResponse:
        """Build the consolidated response from the current state."""
        return AggregatedResponse(
            text=self._text,
            tool_calls=self._tool_calls,
            finish_reason=self._finish,
            pending_tool_calls=() if self._finalized else self._accumulator.pending(),
            errors=tuple(self._errors),
            usage=self._usage,
            model=self._model,
        )

    # -- internals ------------------------------------------------------------
    def _on_finish(self, delta: FinishDelta) -> StreamSnapshot:
        self._finish = delta.reason
        if delta.reason is FinishReason.ERROR:
            self._errors.append(
                ProviderError(
                    code=ErrorCode.SERVER_ERROR,
                    message=delta.message or "server reported an error mid-stream",
                    model=self._model,
                )
            )
        if delta.reason not in _FINALIZING_REASONS:
            return self._snapshot()
        self._tool_calls = self._accumulator.finalize()
        self._finalized = True
        for call in self._tool_calls:
            if call.error is not None:
                self._errors.append(call.error)
        return self._snapshot(new_tool_calls=self._tool_calls)

    def _terminate(self) -> StreamSnapshot:
        self._terminal = StreamSnapshot(
            text=self._text,
            finish_reason=self._finish,
            done=True,
            response=self.response(),
        )
        return self._terminal

    def _snapshot(self, *, text_delta: str = "", new_tool_calls: Tuple[ToolCall, ...] = ()) -> StreamSnapshot:
        return StreamSnapshot(
            text_delta=text_delta,
            text=self._text,
            new_tool_calls=new_tool_calls,
            finish_reason=self._finish,
        )

    def _ignored(self, delta: Delta, reason: str) -> None:
        log_event(
            self._logger,
            "stream.fold.after_finish",
            self._ctx,
            level=logging.WARNING,
            delta=type(delta).__name__,
            reason=reason,
            finish_reason=self._finish.value if self._finish else None,
        )


__all__ = ["AggregationEngine"]

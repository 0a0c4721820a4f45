"""OpenAI-compatible provider facade.

``OpenAIUnofficialProvider`` is the host-facing surface of the adapter. It
ties together:
- the request assembler (exact headers, compact body),
- a byte transport (host-supplied or the pooled ``httpx`` default),
- the batch decoder for ``chat`` and the streaming pipeline
  (splitter -> decoder -> aggregation engine) for ``stream_chat``,
- structured ``chat.start`` / ``chat.end`` / ``chat.error`` logging.

It works against any endpoint implementing the Chat Completions protocol and
sends only ``Authorization``, ``Content-Type`` and, when streaming,
``Accept`` headers.

Errors: configuration and validation problems raise before anything is sent;
transport failures, including plain exceptions from a host transport, raise
a classified ``ProviderError``; decode problems inside a stream
are attached to the final ``AggregatedResponse``.
"""

from __future__ import annotations

import json
import time
from dataclasses import replace
from typing import Any, Dict, Iterator, List, Optional

from ..base.constants import (
    EXTENSION_API_VERSION,
    PROVIDER_CAPABILITIES,
    PROVIDER_DESCRIPTION,
    PROVIDER_NAME,
    PROVIDER_VERSION,
)
from ..base.errors import ProviderError, to_provider_error
from ..base.http import HttpxTransport, Transport
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import AggregatedResponse, ChatRequest, EndpointConfig, StreamSnapshot
from ..base.openai_style_parts.nonstream_helpers import decode_batch_response, log_chat_end, log_chat_error
from ..base.openai_style_parts.request_assembler import PreparedRequest, build, resolve_model
from ..base.streaming import ResponseEmitter
from ..config import get_endpoint_config
from ..config.defaults import OPENAI_UNOFFICIAL_DEFAULT_MODEL

__all__ = ["OpenAIUnofficialProvider"]

class OpenAIUnofficialProvider:
    """Chat Completions adapter for any OpenAI-compatible endpoint.

    Parameters:
        config: Endpoint settings; loaded via ``get_endpoint_config`` when
            omitted.
        transport: Byte transport; a shared :class:`HttpxTransport` when
            omitted.
    """

    def __init__(self, config: Optional[EndpointConfig] = None, transport: Optional[Transport] = None) -> None:
        self._config = config if config is not None else get_endpoint_config()
        self._transport = transport
        self._logger = get_logger("provider")

    @property
    def provider_name(self) -> str:
        """Return the canonical provider name."""
        return PROVIDER_NAME

    @property
    def config(self) -> EndpointConfig:
        return self._config

    @property
    def transport(self) -> Transport:
        if self._transport is None:
            self._transport = HttpxTransport()
        return self._transport

    def default_model(self) -> Optional[str]:
        """Return the model used when a request does not name one."""
        return self._config.default_model

    def supports_streaming(self, model: Optional[str] = None) -> bool:  # noqa: ARG002 - uniform signature
        """Every Chat Completions model can stream."""
        return True

    def get_api_url(self, base_url: Optional[str] = None) -> str:
        """Return ``{base_url}/chat/completions`` (configured base URL by default)."""
        base = base_url if base_url is not None else (self._config.base_url or "")
        return f"{base.rstrip('/')}/chat/completions"

    # -------------------- Wire helpers --------------------

    def format_request(self, request: ChatRequest) -> str:
        """Return the JSON body that would be sent for ``request``."""
        return build(request, self._config).body.decode("utf-8")

    def parse_response(self, body: bytes | str, model: Optional[str] = None) -> AggregatedResponse:
        """Decode a complete non-streaming response body."""
        return decode_batch_response(body, model=model)

    # -------------------- Invocation --------------------

    def chat(self, request: ChatRequest) -> AggregatedResponse:
        """Send a non-streaming request and return the decoded response.

        Raises:
            ConfigError / ValidationError: before anything is sent.
            ProviderError: transport failure or an error response.
            DecodeError: malformed response body.
        """
        if request.stream:
            request = replace(request, stream=False)
        prepared = build(request, self._config)
        model = resolve_model(request, self._config)
        ctx = LogContext(provider=PROVIDER_NAME, model=model, stream=False)
        self._log_start(ctx, prepared)
        t0 = time.perf_counter()
        try:
            body = self.transport.send(prepared.url, prepared.headers, prepared.body)
            response = decode_batch_response(body, model=model)
        except ProviderError as exc:
            log_chat_error(logger=self._logger, ctx=ctx, exc=exc)
            raise
        except Exception as exc:
            err = to_provider_error(exc, model=model)
            log_chat_error(logger=self._logger, ctx=ctx, exc=err)
            raise err from exc
        log_chat_end(
            logger=self._logger,
            ctx=ctx,
            response=response,
            latency_ms=(time.perf_counter() - t0) * 1000.0,
        )
        return response

    def stream_chat(self, request: ChatRequest) -> Iterator[StreamSnapshot]:
        """Send a streaming request and return a lazy snapshot iterator.

        The request is built eagerly, so configuration and validation errors
        raise here rather than on the first ``next()``. The iterator ends with
        exactly one snapshot whose ``done`` flag is set and which carries the
        :class:`AggregatedResponse`.
        """
        if not request.stream:
            request = replace(request, stream=True)
        prepared = build(request, self._config)
        model = resolve_model(request, self._config)
        ctx = LogContext(provider=PROVIDER_NAME, model=model, stream=True)
        return self._stream(prepared, model, ctx)

    def _stream(self, prepared: PreparedRequest, model: str, ctx: LogContext) -> Iterator[StreamSnapshot]:
        self._log_start(ctx, prepared)
        emitter = ResponseEmitter(model=model, ctx=ctx, logger=self._logger)
        chunks = None
        try:
            chunks = self.transport.stream(prepared.url, prepared.headers, prepared.body)
            yield from emitter.iter_snapshots(chunks)
        except ProviderError as exc:
            log_chat_error(logger=self._logger, ctx=ctx, exc=exc)
            raise
        except Exception as exc:
            err = to_provider_error(exc, model=model)
            log_chat_error(logger=self._logger, ctx=ctx, exc=err)
            raise err from exc
        finally:
            close = getattr(chunks, "close", None)
            if close is not None:
                close()

    def _log_start(self, ctx: LogContext, prepared: PreparedRequest) -> None:
        normalized_log_event(
            self._logger,
            "chat.start",
            ctx,
            phase="start",
            attempt=None,
            emitted=None,
            tokens=None,
            url=prepared.url,
            body_bytes=len(prepared.body),
        )

    # -------------------- Metadata --------------------

    def get_metadata(self) -> Dict[str, Any]:
        """Return the extension identity block."""
        return {
            "id": PROVIDER_NAME,
            "name": "OpenAI Unofficial Provider",
            "version": PROVIDER_VERSION,
            "api_version": EXTENSION_API_VERSION,
            "description": "OpenAI-compatible API provider with streaming and function calling",
        }

    def get_provider_metadata(self) -> str:
        """Return provider metadata as a JSON string."""
        metadata = {
            "name": PROVIDER_NAME,
            "version": PROVIDER_VERSION,
            "description": PROVIDER_DESCRIPTION,
            "supported_models": "any",
            "features": {
                "streaming": True,
                "function_calling": True,
                "vision": False,
            },
            "default_model": self.default_model() or OPENAI_UNOFFICIAL_DEFAULT_MODEL,
        }
        return json.dumps(metadata)

    def list_capabilities(self) -> List[str]:
        return list(PROVIDER_CAPABILITIES)

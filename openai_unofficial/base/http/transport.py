"""Transport boundary and the default httpx implementation.

The core never performs I/O itself: the provider facade hands a prepared
request (URL, headers, body) to a transport and gets bytes back, either the
whole body or a sequence of chunks. Hosts may supply any object satisfying
:class:`Transport`; :class:`HttpxTransport` is used otherwise.

Failure modes:
    Network errors and non-2xx responses are raised as ``ProviderError`` with
    an ``ErrorCode`` from :func:`classify_exception` (auth, rate_limit,
    timeout, server_error, ...). The response body, when available, is kept in
    the message for diagnostics.
"""

from __future__ import annotations

from typing import Iterator, Mapping, Optional, Protocol, runtime_checkable

import httpx

from ..errors import to_provider_error
from .client import CHAT_PURPOSE, STREAM_PURPOSE, get_httpx_client

# Cap on the error body excerpt kept in error messages
_ERROR_BODY_LIMIT = 2048

# Framing headers httpx derives from the request itself
_FRAMING_HEADERS = frozenset({"host", "content-length"})


@runtime_checkable
class Transport(Protocol):
    """Blocking byte transport used by the provider facade."""

    def send(self, url: str, headers: Mapping[str, str], body: bytes) -> bytes:
        """POST ``body`` and return the complete response body."""
        ...

    def stream(self, url: str, headers: Mapping[str, str], body: bytes) -> Iterator[bytes]:
        """POST ``body`` and yield response body chunks as they arrive."""
        ...


def _status_error(response: httpx.Response) -> httpx.HTTPStatusError:
    excerpt = response.text[:_ERROR_BODY_LIMIT] if response.content else ""
    message = f"HTTP {response.status_code} from {response.request.url}"
    if excerpt:
        message = f"{message}: {excerpt}"
    return httpx.HTTPStatusError(message, request=response.request, response=response)


def _build_request(client: httpx.Client, url: str, headers: Mapping[str, str], body: bytes) -> httpx.Request:
    """Build a POST carrying only ``headers`` plus HTTP framing.

    Client-level defaults and cookies merged in by ``build_request`` are
    dropped from this request; the client itself is left untouched.
    """
    request = client.build_request("POST", url, headers=dict(headers), content=body)
    keep = {name.lower() for name in headers} | _FRAMING_HEADERS
    for name in list(request.headers.keys()):
        if name.lower() not in keep:
            del request.headers[name]
    return request


class HttpxTransport:
    """Default transport over the shared pooled ``httpx.Client``.

    Parameters:
        client: Client used for non-streaming requests; the pooled ``chat``
            client when omitted.
        stream_client: Client used for streaming requests; the pooled
            ``stream`` client when omitted (or ``client`` when only that one
            is given).

    Supplied clients are not modified: their default headers are simply left
    out of the requests this transport sends.
    """

    def __init__(self, client: Optional[httpx.Client] = None, stream_client: Optional[httpx.Client] = None) -> None:
        self._client = client
        self._stream_client = stream_client or client

    def _get(self, purpose: str) -> httpx.Client:
        if purpose == STREAM_PURPOSE:
            return self._stream_client or get_httpx_client(None, STREAM_PURPOSE)
        return self._client or get_httpx_client(None, CHAT_PURPOSE)

    def send(self, url: str, headers: Mapping[str, str], body: bytes) -> bytes:
        client = self._get(CHAT_PURPOSE)
        try:
            response = client.send(_build_request(client, url, headers, body))
            if not response.is_success:
                raise _status_error(response)
        except httpx.HTTPError as exc:
            raise to_provider_error(exc) from exc
        return response.content

    def stream(self, url: str, headers: Mapping[str, str], body: bytes) -> Iterator[bytes]:
        """Yield raw body chunks; closing the generator closes the response."""
        client = self._get(STREAM_PURPOSE)
        try:
            response = client.send(_build_request(client, url, headers, body), stream=True)
            try:
                if not response.is_success:
                    response.read()
                    raise _status_error(response)
                yield from response.iter_bytes()
            finally:
                response.close()
        except httpx.HTTPError as exc:
            raise to_provider_error(exc) from exc


__all__ = ["Transport", "HttpxTransport"]

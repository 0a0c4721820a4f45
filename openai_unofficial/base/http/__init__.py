"""HTTP utilities package.

Exposes pooled httpx clients and the transport boundary.
"""

from .client import get_httpx_client, close_all_clients
from .transport import Transport, HttpxTransport

__all__ = ["get_httpx_client", "close_all_clients", "Transport", "HttpxTransport"]

"""Service layer exports."""

from .ring_client import AsyncRingClient, RingClient
from .transport import AsyncHttpTransport, ClientConfig, HttpTransport, RawResponse

__all__ = [
    "AsyncHttpTransport",
    "AsyncRingClient",
    "ClientConfig",
    "HttpTransport",
    "RawResponse",
    "RingClient",
]

"""HTTP transport for the RING web service, built on httpx.

One call to :meth:`HttpTransport.send` performs exactly one HTTP request.
There is no retry and no caching; failures are translated into the
package's error types and raised immediately.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx
from pydantic import Field, field_validator

from ring_api.core.errors import HttpStatusError, NetworkError
from ring_api.core.settings import DEFAULT_BASE_URL, Settings
from ring_api.models.base import RequestModel
from ring_api.models.wire import SerializedRequest
from ring_api.utils.logger import get_logger

logger = get_logger(__name__)

STRUCTURE_CONTENT_TYPE = "chemical/x-pdb"


class ClientConfig(RequestModel):
    """Immutable client options: where the service lives and how long to wait."""

    base_url: str = Field(default=DEFAULT_BASE_URL)
    timeout_seconds: float = Field(default=30.0, gt=0)

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value.startswith(("http://", "https://")):
            raise ValueError("base_url must be an http(s) URL")
        return value

    @classmethod
    def from_settings(cls, settings: Settings) -> "ClientConfig":
        ring = settings.services.ring
        return cls(base_url=ring.base_url, timeout_seconds=ring.timeout_seconds)


@dataclass(frozen=True)
class RawResponse:
    status_code: int
    body: bytes
    url: str


def _request_kwargs(serialized: SerializedRequest) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = {"headers": serialized.header_map()}
    if serialized.params:
        kwargs["params"] = list(serialized.params)
    if serialized.json_body is not None:
        kwargs["content"] = serialized.json_body.encode("utf-8")
    if serialized.is_multipart:
        kwargs["data"] = dict(serialized.form_fields)
        kwargs["files"] = [
            (part.field_name, (part.file_name, part.contents, STRUCTURE_CONTENT_TYPE))
            for part in serialized.files
        ]
    return kwargs


def _network_error(exc: httpx.RequestError, url: str, timeout: float) -> NetworkError:
    if isinstance(exc, httpx.TimeoutException):
        return NetworkError(f"request to {url} timed out after {timeout}s", url=url)
    return NetworkError(f"request to {url} failed: {exc}", url=url)


def _check_status(response: httpx.Response, url: str) -> RawResponse:
    if not response.is_success:
        logger.warning(
            "ring.transport.http_error",
            url=url,
            status_code=response.status_code,
        )
        raise HttpStatusError(response.status_code, response.content, url=url)
    logger.info(
        "ring.transport.response",
        url=url,
        status_code=response.status_code,
        size=len(response.content),
    )
    return RawResponse(status_code=response.status_code, body=response.content, url=url)


class HttpTransport:
    """Blocking transport; ``transport`` swaps in a custom httpx transport (e.g. for tests)."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._transport = transport

    @property
    def config(self) -> ClientConfig:
        return self._config

    def send(self, serialized: SerializedRequest) -> RawResponse:
        url = serialized.url(self._config.base_url)
        timeout = self._config.timeout_seconds
        logger.info("ring.transport.request", method=serialized.method, url=url)

        try:
            with httpx.Client(timeout=timeout, transport=self._transport) as client:
                response = client.request(serialized.method, url, **_request_kwargs(serialized))
        except httpx.RequestError as exc:
            logger.warning("ring.transport.network_error", url=url, error=str(exc))
            raise _network_error(exc, url, timeout) from exc

        return _check_status(response, url)


class AsyncHttpTransport:
    """Awaitable twin of :class:`HttpTransport`."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._transport = transport

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def send(self, serialized: SerializedRequest) -> RawResponse:
        url = serialized.url(self._config.base_url)
        timeout = self._config.timeout_seconds
        logger.info("ring.transport.request", method=serialized.method, url=url)

        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                response = await client.request(
                    serialized.method, url, **_request_kwargs(serialized)
                )
        except httpx.RequestError as exc:
            logger.warning("ring.transport.network_error", url=url, error=str(exc))
            raise _network_error(exc, url, timeout) from exc

        return _check_status(response, url)


__all__ = ["AsyncHttpTransport", "ClientConfig", "HttpTransport", "RawResponse"]

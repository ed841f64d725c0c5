"""Clients for the RING residue interaction network web service."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union, cast

import httpx

from ring_api.core.errors import RingError
from ring_api.models.base import ResponseModel
from ring_api.models.parameters import RingParameters
from ring_api.models.requests import RetrieveResult, RingRequest, Status, SubmitId, SubmitStructure
from ring_api.models.responses import ResultResponse, StatusResponse, SubmitResponse
from ring_api.services.transport import AsyncHttpTransport, ClientConfig, HttpTransport
from ring_api.utils.logger import get_logger

logger = get_logger(__name__)


def _parse(request: RingRequest, body: bytes) -> ResponseModel:
    try:
        return request.parse_response(body)
    except RingError as exc:
        logger.warning(
            "ring.client.submit.malformed",
            request=type(request).__name__,
            error=str(exc),
        )
        raise


class RingClient:
    """Blocking client. Holds only immutable configuration, so one instance may be shared."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._http = HttpTransport(config, transport=transport)

    @property
    def config(self) -> ClientConfig:
        return self._http.config

    def submit(self, request: RingRequest) -> ResponseModel:
        """Send ``request`` and return the typed response it maps to.

        Raises ``NetworkError``, ``HttpStatusError`` or ``MalformedResponse``;
        request validation already happened when ``request`` was built.
        """
        serialized = request.serialize()
        logger.info(
            "ring.client.submit.start",
            request=type(request).__name__,
            endpoint=serialized.path,
        )
        raw = self._http.send(serialized)
        response = _parse(request, raw.body)
        logger.info("ring.client.submit.success", request=type(request).__name__)
        return response

    def submit_pdb_id(self, pdb_id: str, parameters: Optional[RingParameters] = None) -> SubmitResponse:
        request = SubmitId(pdb_id=pdb_id, parameters=parameters or RingParameters())
        return cast(SubmitResponse, self.submit(request))

    def submit_pdb_file(
        self, path: Union[str, Path], parameters: Optional[RingParameters] = None
    ) -> SubmitResponse:
        request = SubmitStructure.from_pdb_file(path, parameters)
        return cast(SubmitResponse, self.submit(request))

    def status(self, job_id: str) -> StatusResponse:
        return cast(StatusResponse, self.submit(Status(job_id=job_id)))

    def result(self, job_id: str) -> ResultResponse:
        return cast(ResultResponse, self.submit(RetrieveResult(job_id=job_id)))


class AsyncRingClient:
    """Awaitable counterpart of :class:`RingClient`."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._http = AsyncHttpTransport(config, transport=transport)

    @property
    def config(self) -> ClientConfig:
        return self._http.config

    async def submit(self, request: RingRequest) -> ResponseModel:
        serialized = request.serialize()
        logger.info(
            "ring.client.submit.start",
            request=type(request).__name__,
            endpoint=serialized.path,
        )
        raw = await self._http.send(serialized)
        response = _parse(request, raw.body)
        logger.info("ring.client.submit.success", request=type(request).__name__)
        return response

    async def submit_pdb_id(
        self, pdb_id: str, parameters: Optional[RingParameters] = None
    ) -> SubmitResponse:
        request = SubmitId(pdb_id=pdb_id, parameters=parameters or RingParameters())
        return cast(SubmitResponse, await self.submit(request))

    async def submit_pdb_file(
        self, path: Union[str, Path], parameters: Optional[RingParameters] = None
    ) -> SubmitResponse:
        request = SubmitStructure.from_pdb_file(path, parameters)
        return cast(SubmitResponse, await self.submit(request))

    async def status(self, job_id: str) -> StatusResponse:
        return cast(StatusResponse, await self.submit(Status(job_id=job_id)))

    async def result(self, job_id: str) -> ResultResponse:
        return cast(ResultResponse, await self.submit(RetrieveResult(job_id=job_id)))


__all__ = ["AsyncRingClient", "RingClient"]

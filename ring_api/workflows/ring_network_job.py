"""Submit a structure to RING, wait for the job, and fetch its network."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Awaitable, Callable, Optional, Union

from ring_api.core.errors import InvalidParameter, JobFailedError, JobTimeoutError
from ring_api.core.settings import Settings
from ring_api.models.job import JobStatus
from ring_api.models.parameters import RingParameters
from ring_api.models.responses import ResultResponse, StatusResponse, SubmitResponse
from ring_api.services.ring_client import AsyncRingClient
from ring_api.services.transport import ClientConfig
from ring_api.utils.logger import get_logger

logger = get_logger(__name__)

Sleeper = Callable[[float], Awaitable[None]]


class RingNetworkJobWorkflow:
    def __init__(
        self,
        client: Optional[AsyncRingClient] = None,
        *,
        poll_interval_seconds: float = 5.0,
        max_polls: int = 120,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        if poll_interval_seconds < 0:
            raise InvalidParameter("poll_interval_seconds", "must not be negative")
        if max_polls < 1:
            raise InvalidParameter("max_polls", "must be at least 1")
        self._client = client or AsyncRingClient()
        self._poll_interval = poll_interval_seconds
        self._max_polls = max_polls
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings) -> "RingNetworkJobWorkflow":
        client = AsyncRingClient(ClientConfig.from_settings(settings))
        return cls(
            client,
            poll_interval_seconds=settings.workflows.poll_interval_seconds,
            max_polls=settings.workflows.max_polls,
        )

    async def run(
        self,
        *,
        pdb_id: Optional[str] = None,
        pdb_file: Union[str, Path, None] = None,
        parameters: Optional[RingParameters] = None,
    ) -> ResultResponse:
        if pdb_id is not None and pdb_file is None:
            submitted = await self._client.submit_pdb_id(pdb_id, parameters)
        elif pdb_file is not None and pdb_id is None:
            submitted = await self._client.submit_pdb_file(pdb_file, parameters)
        else:
            raise InvalidParameter("pdb_id", "provide exactly one of pdb_id or pdb_file")

        logger.info(
            "ring.workflow.start",
            job_id=submitted.job_id,
            pdb_id=pdb_id,
            pdb_file=str(pdb_file) if pdb_file else None,
        )
        await self.wait_for_completion(submitted)
        result = await self._client.result(submitted.job_id)
        logger.info(
            "ring.workflow.complete",
            job_id=submitted.job_id,
            nodes=len(result.nodes),
            edges=len(result.edges),
        )
        return result

    async def wait_for_completion(self, submitted: SubmitResponse) -> StatusResponse:
        """Poll the status endpoint until the job completes or fails."""
        job_id = submitted.job_id
        for poll in range(1, self._max_polls + 1):
            status = await self._client.status(job_id)
            logger.info(
                "ring.workflow.poll",
                job_id=job_id,
                poll=poll,
                status=status.status.label,
            )
            if status.status is JobStatus.FAILED:
                raise JobFailedError(job_id)
            if status.status is JobStatus.COMPLETE:
                return status
            if poll < self._max_polls:
                await self._sleep(self._poll_interval)
        raise JobTimeoutError(job_id, self._max_polls)


__all__ = ["RingNetworkJobWorkflow"]

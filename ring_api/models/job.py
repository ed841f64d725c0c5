"""Job identifiers and lifecycle states reported by the RING server."""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import StringConstraints

# Job ids end up in URL paths, so only plain token characters are accepted.
JobId = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, pattern=r"^[A-Za-z0-9_-]+$")]


class JobStatus(str, Enum):
    IN_PROGRESS = "db"
    # Some results are available; typically the MSA/PSIBLAST step is still running.
    PARTIAL = "partial"
    COMPLETE = "complete"
    FAILED = "error"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def is_finished(self) -> bool:
        return self in (JobStatus.COMPLETE, JobStatus.FAILED)


_LABELS = {
    JobStatus.IN_PROGRESS: "in progress",
    JobStatus.PARTIAL: "partial",
    JobStatus.COMPLETE: "complete",
    JobStatus.FAILED: "failed",
}


__all__ = ["JobId", "JobStatus"]

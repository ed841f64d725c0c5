"""Typed client for the RING residue interaction network web service."""

from ring_api.core.errors import (
    ConfigurationError,
    HttpStatusError,
    InvalidParameter,
    JobFailedError,
    JobTimeoutError,
    MalformedResponse,
    NetworkError,
    RingError,
)
from ring_api.models import (
    Edge,
    InteractionKind,
    InteractionType,
    JobStatus,
    NetworkPolicy,
    Node,
    ResultResponse,
    RetrieveResult,
    RingParameters,
    Status,
    StatusResponse,
    SubmitId,
    SubmitResponse,
    SubmitStructure,
    Thresholds,
)
from ring_api.services import AsyncRingClient, ClientConfig, RingClient

__version__ = "0.1.0"

__all__ = [
    "AsyncRingClient",
    "ClientConfig",
    "ConfigurationError",
    "Edge",
    "HttpStatusError",
    "InteractionKind",
    "InteractionType",
    "InvalidParameter",
    "JobFailedError",
    "JobStatus",
    "JobTimeoutError",
    "MalformedResponse",
    "NetworkError",
    "NetworkPolicy",
    "Node",
    "ResultResponse",
    "RetrieveResult",
    "RingClient",
    "RingError",
    "RingParameters",
    "Status",
    "StatusResponse",
    "SubmitId",
    "SubmitResponse",
    "SubmitStructure",
    "Thresholds",
]

"""Request and response models for the RING API."""

from .job import JobId, JobStatus
from .parameters import ALL_CHAINS, InteractionType, NetworkPolicy, RingParameters, Thresholds
from .requests import RetrieveResult, RingRequest, Status, SubmitId, SubmitStructure
from .responses import Edge, InteractionKind, Node, ResultResponse, StatusResponse, SubmitResponse
from .wire import FormFile, SerializedRequest

__all__ = [
    "ALL_CHAINS",
    "Edge",
    "FormFile",
    "InteractionKind",
    "InteractionType",
    "JobId",
    "JobStatus",
    "NetworkPolicy",
    "Node",
    "ResultResponse",
    "RetrieveResult",
    "RingParameters",
    "RingRequest",
    "SerializedRequest",
    "Status",
    "StatusResponse",
    "SubmitId",
    "SubmitResponse",
    "SubmitStructure",
    "Thresholds",
]

"""Requests for the endpoints of the RING HTTP API.

Each request knows its HTTP method, its endpoint, the response model the
service answers with, and how to render itself into a
:class:`~ring_api.models.wire.SerializedRequest`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any, ClassVar, Dict, Optional, Type, Union

from pydantic import Field, StringConstraints, field_validator

from ring_api.core.errors import InvalidParameter
from ring_api.models.base import RequestModel, ResponseModel
from ring_api.models.job import JobId
from ring_api.models.parameters import RingParameters
from ring_api.models.responses import ResultResponse, StatusResponse, SubmitResponse
from ring_api.models.wire import FormFile, SerializedRequest

# Classic four character codes ("1ABC") and the extended "pdb_00001abc" form.
PDB_ID_PATTERN = r"^(?:[0-9][A-Za-z0-9]{3}|[Pp][Dd][Bb]_[0-9A-Za-z]{8})$"
STRUCTURE_FIELD = "file"
JSON_HEADERS = (("Accept", "application/json"), ("Content-Type", "application/json"))
ACCEPT_HEADERS = (("Accept", "application/json"),)

PdbId = Annotated[str, StringConstraints(strip_whitespace=True, pattern=PDB_ID_PATTERN)]


def _render_json(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, sort_keys=True, separators=(",", ":"))


class RingRequest(RequestModel):
    method: ClassVar[str] = "GET"
    response_model: ClassVar[Type[ResponseModel]]

    def endpoint(self) -> str:
        raise NotImplementedError

    def serialize(self) -> SerializedRequest:
        return SerializedRequest(method=self.method, path=self.endpoint(), headers=ACCEPT_HEADERS)

    def parse_response(self, body: Union[bytes, str]) -> ResponseModel:
        return self.response_model.from_body(body)


class SubmitId(RingRequest):
    """Start a job for a structure already deposited in the PDB."""

    method: ClassVar[str] = "POST"
    response_model: ClassVar[Type[ResponseModel]] = SubmitResponse

    pdb_id: PdbId
    parameters: RingParameters = Field(default_factory=RingParameters)

    def endpoint(self) -> str:
        return "/submit"

    def serialize(self) -> SerializedRequest:
        payload = {"pdbName": self.pdb_id, **self.parameters.to_wire()}
        return SerializedRequest(
            method=self.method,
            path=self.endpoint(),
            json_body=_render_json(payload),
            headers=JSON_HEADERS,
        )


class SubmitStructure(RingRequest):
    """Start a job for an uploaded PDB file."""

    method: ClassVar[str] = "POST"
    response_model: ClassVar[Type[ResponseModel]] = SubmitResponse

    contents: str = Field(min_length=1)
    file_name: str = Field(min_length=1)
    parameters: RingParameters = Field(default_factory=RingParameters)

    @field_validator("contents")
    @classmethod
    def _check_contents(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("structure file is empty")
        return value

    @field_validator("file_name")
    @classmethod
    def _check_file_name(cls, value: str) -> str:
        if "/" in value or "\\" in value:
            raise ValueError("expected a bare file name without directories")
        return value

    @classmethod
    def from_pdb_file(
        cls, path: Union[str, Path], parameters: Optional[RingParameters] = None
    ) -> "SubmitStructure":
        path = Path(path)
        if not path.is_file():
            raise InvalidParameter("pdb_file", f"no such file: {path}")
        try:
            contents = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidParameter("pdb_file", f"{path} is not a UTF-8 text file") from exc
        return cls(
            contents=contents,
            file_name=path.name,
            parameters=parameters or RingParameters(),
        )

    def endpoint(self) -> str:
        return "/submit"

    def serialize(self) -> SerializedRequest:
        form = self.parameters.to_form()
        return SerializedRequest(
            method=self.method,
            path=self.endpoint(),
            form_fields=tuple(sorted(form.items())),
            files=(FormFile(STRUCTURE_FIELD, self.file_name, self.contents.encode("utf-8")),),
            headers=ACCEPT_HEADERS,
        )


class Status(RingRequest):
    """Ask which phase a job is in."""

    response_model: ClassVar[Type[ResponseModel]] = StatusResponse

    job_id: JobId

    def endpoint(self) -> str:
        return f"/status/{self.job_id}"


class RetrieveResult(RingRequest):
    """Fetch the interaction network of a finished job."""

    response_model: ClassVar[Type[ResponseModel]] = ResultResponse

    job_id: JobId

    def endpoint(self) -> str:
        return f"/results/{self.job_id}"

    def serialize(self) -> SerializedRequest:
        return SerializedRequest(
            method=self.method,
            path=self.endpoint(),
            params=(("engine", "d3"),),
            headers=ACCEPT_HEADERS,
        )


__all__ = [
    "PDB_ID_PATTERN",
    "RetrieveResult",
    "RingRequest",
    "Status",
    "SubmitId",
    "SubmitStructure",
]

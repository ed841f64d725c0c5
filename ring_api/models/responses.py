"""Typed views of the JSON documents returned by the RING service."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import Field, field_validator, model_validator

from ring_api.core.errors import InvalidParameter
from ring_api.models.base import PayloadError, ResponseModel, RingModel
from ring_api.models.job import JobId, JobStatus
from ring_api.models.parameters import RingParameters, wire_key


class InteractionKind(str, Enum):
    HBOND = "HBOND"
    VDW = "VDW"
    SSBOND = "SSBOND"
    IONIC = "IONIC"
    PIPISTACK = "PIPISTACK"
    PICATION = "PICATION"
    IAC = "IAC"  # generic contact


class SubmitResponse(ResponseModel):
    job_id: JobId = Field(alias="jobid")
    # Usually "in progress" right after submission.
    status: JobStatus


class StatusResponse(ResponseModel):
    job_id: JobId = Field(alias="_id")
    status: JobStatus
    pdb_id: Optional[str] = Field(default=None, alias="pdbName")
    file_name: Optional[str] = Field(default=None, alias="fileName")
    # The service echoes the job parameters as flat top-level keys.
    parameters: RingParameters = Field(default_factory=RingParameters)

    @model_validator(mode="before")
    @classmethod
    def _collect_parameters(cls, data: Any) -> Any:
        if isinstance(data, dict) and "parameters" not in data:
            data = dict(data)
            try:
                data["parameters"] = RingParameters.from_wire(data)
            except InvalidParameter as exc:
                raise PayloadError(wire_key(exc.field), exc.reason) from exc
        return data

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload.pop("parameters", None)
        payload.update(self.parameters.to_wire())
        return payload


class Node(RingModel):
    """A residue of the interaction graph."""

    node_id: str = Field(alias="NodeId", min_length=1)
    residue: str = Field(alias="Residue")
    # PDB numbering; can be zero or negative.
    position: int = Field(alias="Position")
    chain_id: str = Field(alias="Chain")
    bfactor_ca: Optional[float] = Field(default=None, alias="Bfactor_CA")
    tap_energy: Optional[float] = Field(default=None, alias="Tap")
    degree: Optional[int] = Field(default=None, alias="Degree", ge=0)
    accessibility: Optional[float] = Field(default=None, alias="Accessibility")
    rapdf_energy: Optional[float] = Field(default=None, alias="Rapdf")
    pdb_file_name: Optional[str] = Field(default=None, alias="pdbFileName")
    x: Optional[float] = None
    y: Optional[float] = None
    z: Optional[float] = None
    dssp_structure: Optional[str] = Field(default=None, alias="Dssp")
    entropy: Optional[float] = Field(default=None, alias="Entropy")
    # Spelled "comulative" by the service.
    cumul_mutual_entropy: Optional[float] = Field(default=None, alias="MIcomulative")

    @property
    def coordinates(self) -> Optional[Tuple[float, float, float]]:
        if self.x is None or self.y is None or self.z is None:
            return None
        return (self.x, self.y, self.z)


class Edge(RingModel):
    """An interaction between two residues, e.g. ``HBOND:SC_MC``."""

    source: str = Field(alias="NodeId1", min_length=1)
    target: str = Field(alias="NodeId2", min_length=1)
    interaction: str = Field(alias="Interaction")
    distance: Optional[float] = Field(default=None, alias="Distance", ge=0)
    angle: Optional[float] = Field(default=None, alias="Angle")
    energy: Optional[float] = Field(default=None, alias="Energy")
    atom1: Optional[str] = Field(default=None, alias="Atom1")
    atom2: Optional[str] = Field(default=None, alias="Atom2")
    donor: Optional[str] = Field(default=None, alias="Donor")
    positive: Optional[str] = Field(default=None, alias="Positive")
    cation: Optional[str] = Field(default=None, alias="Cation")
    orientation: Optional[str] = Field(default=None, alias="Orientation")

    @field_validator("interaction")
    @classmethod
    def _check_interaction(cls, value: str) -> str:
        kind = value.split(":", 1)[0]
        if kind not in InteractionKind.__members__:
            raise ValueError(f"unknown interaction kind {kind!r}")
        return value

    @property
    def kind(self) -> InteractionKind:
        return InteractionKind(self.interaction.split(":", 1)[0])

    @property
    def contact(self) -> Optional[str]:
        """Which parts of the residues touch (``MC_SC`` etc.), when reported."""
        _, _, contact = self.interaction.partition(":")
        return contact or None

    @property
    def endpoints(self) -> Tuple[str, str]:
        return (self.source, self.target)


class ResultResponse(StatusResponse):
    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...]

    @model_validator(mode="after")
    def _check_graph(self) -> "ResultResponse":
        known = set()
        for index, node in enumerate(self.nodes):
            if node.node_id in known:
                raise PayloadError(f"nodes.{index}.NodeId", f"duplicate node id {node.node_id!r}")
            known.add(node.node_id)
        for index, edge in enumerate(self.edges):
            for alias, node_id in (("NodeId1", edge.source), ("NodeId2", edge.target)):
                if node_id not in known:
                    raise PayloadError(
                        f"edges.{index}.{alias}",
                        f"edge endpoint {node_id!r} is not a node of this network",
                    )
        return self

    def node(self, node_id: str) -> Node:
        for candidate in self.nodes:
            if candidate.node_id == node_id:
                return candidate
        raise KeyError(node_id)

    def edges_of(self, node_id: str) -> List[Edge]:
        return [edge for edge in self.edges if node_id in edge.endpoints]


__all__ = [
    "Edge",
    "InteractionKind",
    "Node",
    "ResultResponse",
    "StatusResponse",
    "SubmitResponse",
]

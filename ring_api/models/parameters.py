"""Job parameters accepted by the RING service.

See http://protein.bio.unipd.it/ring/help#params for what each option does.
The client speaks a flat set of wire keys; :meth:`RingParameters.to_wire`
and :meth:`RingParameters.from_wire` convert between the two shapes.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping

from pydantic import Field, field_validator

from ring_api.models.base import RequestModel

ALL_CHAINS = "all"


class NetworkPolicy(str, Enum):
    """Which atoms are measured when deciding whether two residues touch."""

    CLOSEST = "closest"  # any pair of atoms
    LOLLIPOP = "lollipop"  # centres of mass
    CALPHA = "ca"
    CBETA = "cb"


class InteractionType(str, Enum):
    """How many interactions are reported per pair of residues."""

    ALL = "all"
    MULTIPLE = "multiple"  # one per interaction type
    MOST_ENERGETIC = "most_energetic"
    NO_SPECIFIC = "no_specific"  # generic IAC contacts only


class Thresholds(RequestModel):
    """Maximum distances (angstrom) for each interaction type."""

    hydrogen: float = Field(default=3.5, ge=0)
    van_der_waals: float = Field(default=0.5, ge=0)
    ionic: float = Field(default=4.0, ge=0)
    pi_pi: float = Field(default=6.5, ge=0)
    pi_cation: float = Field(default=5.0, ge=0)
    disulphide: float = Field(default=2.5, ge=0)

    @classmethod
    def strict(cls) -> "Thresholds":
        """Thresholds for a reliable network."""
        return cls()

    @classmethod
    def relaxed(cls) -> "Thresholds":
        """Thresholds for an inclusive network."""
        return cls(
            hydrogen=5.5,
            van_der_waals=0.8,
            ionic=5.0,
            pi_pi=7.0,
            pi_cation=7.0,
            disulphide=3.0,
        )


_THRESHOLD_KEYS = {
    "hydrogen": "hbond",
    "van_der_waals": "vdw",
    "ionic": "ionic",
    "pi_pi": "pipi",
    "pi_cation": "pication",
    "disulphide": "disulphide",
}

_PARAMETER_KEYS = {
    "chain": "chain",
    "network_policy": "networkPolicy",
    "interactions": "interactions",
    "sequence_separation": "seqSeparation",
    "skip_hetero": "skipHetero",
    "skip_water": "skipWater",
    "skip_energy": "skipEnergy",
    "perform_msa": "msa",
}

WIRE_KEYS = frozenset(_PARAMETER_KEYS.values()) | frozenset(_THRESHOLD_KEYS.values())


class RingParameters(RequestModel):
    chain: str = ALL_CHAINS
    network_policy: NetworkPolicy = NetworkPolicy.CLOSEST
    interactions: InteractionType = InteractionType.MULTIPLE
    thresholds: Thresholds = Field(default_factory=Thresholds.strict)
    sequence_separation: int = Field(default=3, ge=0)
    skip_hetero: bool = False
    skip_water: bool = True
    skip_energy: bool = True
    # Mutual information from a BLAST multiple alignment; slow.
    perform_msa: bool = False

    @field_validator("chain")
    @classmethod
    def _check_chain(cls, value: str) -> str:
        value = value.strip()
        if value.lower() == ALL_CHAINS:
            return ALL_CHAINS
        if len(value) != 1 or not value.isalnum():
            raise ValueError("expected 'all' or a single alphanumeric chain identifier")
        return value

    def to_wire(self) -> Dict[str, Any]:
        """Flatten into the service's parameter keys, JSON-compatible values only."""
        wire: Dict[str, Any] = {}
        for name, key in _PARAMETER_KEYS.items():
            value = getattr(self, name)
            wire[key] = value.value if isinstance(value, Enum) else value
        for name, key in _THRESHOLD_KEYS.items():
            wire[key] = getattr(self.thresholds, name)
        return wire

    def to_form(self) -> Dict[str, str]:
        """Wire keys with values rendered as multipart text fields."""
        return {key: _form_value(value) for key, value in self.to_wire().items()}

    @classmethod
    def from_wire(cls, payload: Mapping[str, Any]) -> "RingParameters":
        return cls(**parameters_from_wire(payload))


def wire_key(field: str) -> str:
    """Map a dotted field path (``thresholds.hydrogen``) to its wire key (``hbond``)."""
    head, _, rest = field.partition(".")
    if head == "thresholds" and rest:
        return _THRESHOLD_KEYS.get(rest, field)
    return _PARAMETER_KEYS.get(head, field)


def parameters_from_wire(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Pick the parameter keys out of a flat payload, renamed to field names.

    Absent keys are left out so that the defaults apply.
    """
    fields: Dict[str, Any] = {
        name: payload[key] for name, key in _PARAMETER_KEYS.items() if key in payload
    }
    thresholds = {
        name: payload[key] for name, key in _THRESHOLD_KEYS.items() if key in payload
    }
    if thresholds:
        fields["thresholds"] = thresholds
    return fields


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


__all__ = [
    "ALL_CHAINS",
    "InteractionType",
    "NetworkPolicy",
    "RingParameters",
    "Thresholds",
    "WIRE_KEYS",
    "parameters_from_wire",
    "wire_key",
]

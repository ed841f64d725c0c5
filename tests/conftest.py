import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List

import httpx
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ring_api.services.transport import ClientConfig

BASE_URL = "http://ring.test/ringws"
JOB_ID = "5cefd030b265bd294b0f6b2c"


def json_response(status_code: int, payload: Any) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture()
def config() -> ClientConfig:
    return ClientConfig(base_url=BASE_URL, timeout_seconds=2.0)


@pytest.fixture()
def node_payloads() -> List[Dict[str, Any]]:
    return [
        {
            "NodeId": "A:10:_:SER",
            "Residue": "SER",
            "Position": 10,
            "Chain": "A",
            "Degree": 1,
            "Bfactor_CA": 12.5,
            "Accessibility": 0.31,
            "pdbFileName": "1ABC#10.A",
            "x": 1.0,
            "y": 2.0,
            "z": 3.0,
            "Dssp": "H",
        },
        {
            "NodeId": "A:14:_:GLU",
            "Residue": "GLU",
            "Position": 14,
            "Chain": "A",
            "Degree": 1,
            "Bfactor_CA": 15.0,
            "Accessibility": 0.52,
            "pdbFileName": "1ABC#14.A",
            "x": 4.0,
            "y": 5.5,
            "z": -1.0,
            "Dssp": "H",
        },
    ]


@pytest.fixture()
def result_payload(node_payloads: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "_id": JOB_ID,
        "status": "complete",
        "pdbName": "1ABC",
        "chain": "all",
        "networkPolicy": "closest",
        "hbond": 3.5,
        "nodes": node_payloads,
        "edges": [
            {
                "NodeId1": "A:10:_:SER",
                "NodeId2": "A:14:_:GLU",
                "Interaction": "HBOND:SC_MC",
                "Distance": 2.87,
                "Angle": 154.2,
                "Energy": 17.0,
                "Atom1": "OG",
                "Atom2": "O",
                "Donor": "A:10:_:SER",
            }
        ],
    }

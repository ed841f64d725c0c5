import asyncio
import json

import httpx
import pytest

from ring_api.core.errors import HttpStatusError, InvalidParameter, NetworkError
from ring_api.models import RetrieveResult, RingParameters, SubmitId, SubmitStructure
from ring_api.services.transport import AsyncHttpTransport, ClientConfig, HttpTransport

from conftest import BASE_URL, JOB_ID, RecordingTransport, json_response


def test_json_submission_reaches_submit_endpoint(config: ClientConfig) -> None:
    mock = RecordingTransport(lambda request: json_response(200, {"jobid": JOB_ID, "status": "db"}))
    transport = HttpTransport(config, transport=mock)

    raw = transport.send(SubmitId(pdb_id="1ABC").serialize())

    assert raw.status_code == 200
    assert json.loads(raw.body)["jobid"] == JOB_ID
    (sent,) = mock.requests
    assert sent.method == "POST"
    assert str(sent.url) == f"{BASE_URL}/submit"
    assert sent.headers["content-type"] == "application/json"
    assert json.loads(sent.content)["pdbName"] == "1ABC"


def test_query_parameters_are_sent(config: ClientConfig) -> None:
    mock = RecordingTransport(lambda request: json_response(200, {}))
    HttpTransport(config, transport=mock).send(RetrieveResult(job_id=JOB_ID).serialize())

    (sent,) = mock.requests
    assert sent.method == "GET"
    assert sent.url.path == f"/ringws/results/{JOB_ID}"
    assert sent.url.params["engine"] == "d3"


def test_structure_upload_is_sent_as_multipart(config: ClientConfig) -> None:
    mock = RecordingTransport(lambda request: json_response(200, {"jobid": JOB_ID, "status": "db"}))
    request = SubmitStructure(
        contents="ATOM      1  N   SER A  10\nEND\n",
        file_name="3s6a.pdb",
        parameters=RingParameters(chain="A"),
    )

    HttpTransport(config, transport=mock).send(request.serialize())

    (sent,) = mock.requests
    sent.read()
    assert sent.headers["content-type"].startswith("multipart/form-data")
    assert b'filename="3s6a.pdb"' in sent.content
    assert b'name="chain"' in sent.content


def test_error_status_carries_code_and_body(config: ClientConfig) -> None:
    mock = RecordingTransport(lambda request: httpx.Response(500, content=b"internal failure"))

    with pytest.raises(HttpStatusError) as excinfo:
        HttpTransport(config, transport=mock).send(SubmitId(pdb_id="1ABC").serialize())

    assert excinfo.value.status_code == 500
    assert excinfo.value.body == "internal failure"
    assert excinfo.value.url == f"{BASE_URL}/submit"


def test_long_error_bodies_are_truncated(config: ClientConfig) -> None:
    mock = RecordingTransport(lambda request: httpx.Response(503, content=b"x" * 5000))
    with pytest.raises(HttpStatusError) as excinfo:
        HttpTransport(config, transport=mock).send(SubmitId(pdb_id="1ABC").serialize())
    assert len(excinfo.value.body) < 600


def test_connection_failure_is_network_error(config: ClientConfig) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError) as excinfo:
        HttpTransport(config, transport=httpx.MockTransport(refuse)).send(
            SubmitId(pdb_id="1ABC").serialize()
        )

    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)
    assert excinfo.value.url == f"{BASE_URL}/submit"


def test_timeout_is_network_error(config: ClientConfig) -> None:
    def stall(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    with pytest.raises(NetworkError, match="timed out"):
        HttpTransport(config, transport=httpx.MockTransport(stall)).send(
            RetrieveResult(job_id=JOB_ID).serialize()
        )


def test_async_transport_mirrors_sync_behaviour(config: ClientConfig) -> None:
    mock = RecordingTransport(lambda request: httpx.Response(404, content=b"no such job"))
    transport = AsyncHttpTransport(config, transport=mock)

    with pytest.raises(HttpStatusError) as excinfo:
        asyncio.run(transport.send(RetrieveResult(job_id=JOB_ID).serialize()))

    assert excinfo.value.status_code == 404
    assert mock.requests[0].url.path.endswith(f"/results/{JOB_ID}")


def test_config_rejects_bad_options() -> None:
    with pytest.raises(InvalidParameter) as excinfo:
        ClientConfig(base_url="ftp://ring.test")
    assert excinfo.value.field == "base_url"

    with pytest.raises(InvalidParameter) as excinfo:
        ClientConfig(timeout_seconds=0)
    assert excinfo.value.field == "timeout_seconds"


def _corrupt_gzip(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip at all")


def test_undecodable_body_is_network_error(config: ClientConfig) -> None:
    with pytest.raises(NetworkError) as excinfo:
        HttpTransport(config, transport=httpx.MockTransport(_corrupt_gzip)).send(
            RetrieveResult(job_id=JOB_ID).serialize()
        )

    assert isinstance(excinfo.value.__cause__, httpx.DecodingError)


def test_async_undecodable_body_is_network_error(config: ClientConfig) -> None:
    transport = AsyncHttpTransport(config, transport=httpx.MockTransport(_corrupt_gzip))

    with pytest.raises(NetworkError):
        asyncio.run(transport.send(RetrieveResult(job_id=JOB_ID).serialize()))

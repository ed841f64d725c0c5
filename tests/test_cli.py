from pathlib import Path
from typing import Any, Dict, Optional

import httpx
import pytest

from ring_api.core.settings import get_settings
from ring_api.interfaces import cli
from ring_api.services.ring_client import RingClient
from ring_api.services.transport import ClientConfig

from conftest import JOB_ID, RecordingTransport, json_response


@pytest.fixture()
def service(monkeypatch: pytest.MonkeyPatch, result_payload: Dict[str, Any]) -> RecordingTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.endswith("/submit"):
            return json_response(200, {"jobid": JOB_ID, "status": "db"})
        if "/status/" in path:
            return json_response(200, {"_id": JOB_ID, "status": "complete"})
        if path.endswith(f"/results/{JOB_ID}"):
            return json_response(200, result_payload)
        return httpx.Response(404, content=b"unknown job")

    transport = RecordingTransport(handler)

    def client_factory(config: Optional[ClientConfig] = None) -> RingClient:
        return RingClient(config, transport=transport)

    monkeypatch.setattr(cli, "RingClient", client_factory)
    return transport


def test_submit_prints_job_id(service: RecordingTransport, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = cli.main(["--base-url", "http://ring.test/ringws", "submit", "1ABC", "--chain", "A"])

    assert exit_code == 0
    assert JOB_ID in capsys.readouterr().out
    assert str(service.requests[0].url) == "http://ring.test/ringws/submit"


def test_result_renders_interactions(service: RecordingTransport, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = cli.main(["result", JOB_ID])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "2 residues" in out
    assert "HBOND:SC_MC" in out


def test_json_output(service: RecordingTransport, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = cli.main(["--json", "status", JOB_ID])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert '"complete"' in out


def test_invalid_chain_fails_without_network(service: RecordingTransport, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = cli.main(["submit", "1ABC", "--chain", "AB"])

    assert exit_code == 1
    assert "chain" in capsys.readouterr().out
    assert service.requests == []


def test_http_errors_are_reported(service: RecordingTransport, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = cli.main(["result", "missing-job"])

    assert exit_code == 1
    assert "404" in capsys.readouterr().out


def test_bad_setting_is_reported(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config_file = tmp_path / "settings.yaml"
    config_file.write_text("services:\n  ring:\n    timeout_seconds: ${RING_TIMEOUT_SECONDS:-30}\n")
    monkeypatch.setenv("RING_SETTINGS_FILE", str(config_file))
    monkeypatch.setenv("RING_TIMEOUT_SECONDS", "abc")
    get_settings.cache_clear()
    try:
        exit_code = cli.main(["status", JOB_ID])
    finally:
        get_settings.cache_clear()

    assert exit_code == 1
    assert "services.ring.timeout_seconds" in capsys.readouterr().out

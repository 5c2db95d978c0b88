"""Tests for the HTTP validation endpoints."""

from __future__ import annotations

import inspect
import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from actval.api.validate import validate_action_endpoint, validate_workflow_endpoint
from actval.binding import validate_workflow
from actval.config import ServiceOptions, build_glob_resolver, load_options
from actval.main import app
from actval.validator.path_globs import FilesystemGlobResolver, SandboxGlobResolver

GLOB_WORKFLOW = (
    "on:\n  push:\n    paths: ['no/such/file/*.txt']\n"
    "jobs:\n  build:\n    runs-on: ubuntu-latest\n    steps:\n      - run: make\n"
)


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> TestClient:
    monkeypatch.setenv("ACTVAL_OPTIONS_PATH", str(tmp_path / "missing.json"))
    monkeypatch.delenv("ACTVAL_GLOB_MODE", raising=False)
    with TestClient(app) as c:
        yield c


class TestValidateEndpoints:
    def test_valid_action(self, client: TestClient, valid_action_yaml: str) -> None:
        resp = client.post("/api/validate/action", json={"source": valid_action_yaml})
        assert resp.status_code == 200
        assert resp.json() == {"actionType": "action", "errors": []}

    def test_invalid_workflow_is_200(self, client: TestClient) -> None:
        resp = client.post("/api/validate/workflow", json={"source": "on: push\n"})
        assert resp.status_code == 200
        codes = [e["meta"]["code"] for e in resp.json()["errors"]]
        assert codes == ["required"]

    def test_matches_binding(self, client: TestClient) -> None:
        src = "on: push\njobs:\n  a: {}\n  c:\n    needs: [a, z]\n"
        resp = client.post("/api/validate/workflow", json={"source": src})
        assert resp.json() == validate_workflow(src)

    def test_sandbox_by_default(self, client: TestClient) -> None:
        resp = client.post("/api/validate/workflow", json={"source": GLOB_WORKFLOW})
        assert resp.json()["errors"] == []

    def test_missing_source_rejected(self, client: TestClient) -> None:
        resp = client.post("/api/validate/workflow", json={})
        assert resp.status_code == 422

    def test_health(self, client: TestClient) -> None:
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "error_vocabulary": "1"}


class TestOptions:
    def test_env_fallback(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("ACTVAL_OPTIONS_PATH", str(tmp_path / "missing.json"))
        monkeypatch.setenv("ACTVAL_GLOB_MODE", "filesystem")
        monkeypatch.setenv("ACTVAL_GLOB_ROOT", str(tmp_path))
        options = load_options()
        assert options.glob_mode == "filesystem"
        assert options.glob_root == str(tmp_path)

    def test_options_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        opts = tmp_path / "options.json"
        opts.write_text(json.dumps({"glob_mode": "filesystem"}))
        monkeypatch.setenv("ACTVAL_OPTIONS_PATH", str(opts))
        assert load_options().glob_mode == "filesystem"

    def test_build_resolver(self, tmp_path: Path) -> None:
        assert isinstance(build_glob_resolver(ServiceOptions()), SandboxGlobResolver)
        resolver = build_glob_resolver(
            ServiceOptions(glob_mode="filesystem", glob_root=str(tmp_path))
        )
        assert isinstance(resolver, FilesystemGlobResolver)
        assert resolver.root == tmp_path

    def test_filesystem_mode_endpoint(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path,
    ) -> None:
        monkeypatch.setenv("ACTVAL_OPTIONS_PATH", str(tmp_path / "missing.json"))
        monkeypatch.setenv("ACTVAL_GLOB_MODE", "filesystem")
        monkeypatch.setenv("ACTVAL_GLOB_ROOT", str(tmp_path))
        with TestClient(app) as c:
            resp = c.post("/api/validate/workflow", json={"source": GLOB_WORKFLOW})
        codes = [e["meta"]["code"] for e in resp.json()["errors"]]
        assert codes == ["no_files_matching_glob"]


class TestBlockingWork:
    def test_validate_routes_run_off_the_event_loop(self) -> None:
        assert not inspect.iscoroutinefunction(validate_action_endpoint)
        assert not inspect.iscoroutinefunction(validate_workflow_endpoint)

"""Tests for AgentClient over mock and in-process WSGI transports."""
from __future__ import annotations

import json

import httpx
import pytest

from csssync.client import AgentClient
from csssync.errors import AgentError, AgentTimeoutError, AgentUnavailableError
from csssync.model.change import ChangeEvent, PropertyChange
from csssync.service import SyncService
from csssync.web.app import create_app


def _mock(handler) -> AgentClient:
    return AgentClient("http://agent.test", transport=httpx.MockTransport(handler))


class TestErrorMapping:
    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(AgentTimeoutError, match="Request timeout - server not responding"):
            _mock(handler).status()

    def test_connection_refused(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(AgentUnavailableError, match="is server running"):
            _mock(handler).status()

    def test_non_json_response(self):
        client = _mock(lambda request: httpx.Response(502, text="<html>gateway</html>"))
        with pytest.raises(AgentError, match="Server responded with 502: Bad Gateway") as excinfo:
            client.status()
        assert excinfo.value.status_code == 502

    def test_server_error_body(self):
        client = _mock(lambda request: httpx.Response(500, json={"error": "disk on fire"}))
        with pytest.raises(AgentError, match="disk on fire"):
            client.status()

    def test_failed_patch_is_returned(self):
        body = {"success": False, "error": "Failed to write /p/a.css"}
        client = _mock(lambda request: httpx.Response(200, json=body))
        assert client.apply_change({"selector": ".a", "changes": {"color": "red"}}) == body


class TestRequests:
    def test_apply_change_serializes_event(self):
        captured = {}

        def handler(request):
            captured["path"] = request.url.path
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json={"success": True})

        event = ChangeEvent(
            selector=".btn",
            changes={"color": PropertyChange("blue", from_="red")},
            class_list=("btn",),
        )
        _mock(handler).apply_change(event)

        assert captured["path"] == "/apply-css-change"
        assert captured["body"] == {
            "selector": ".btn",
            "classList": ["btn"],
            "changes": {"color": {"from": "red", "to": "blue"}},
        }


class TestAgainstApp:
    @pytest.fixture
    def agent(self):
        app = create_app(service=SyncService(), config={"TESTING": True, "APPLY_TIMEOUT": 5.0})
        client = AgentClient("http://agent.test", transport=httpx.WSGITransport(app=app))
        yield client
        client.close()
        app.extensions["change_queue"].stop(timeout=2)

    def test_configure_and_apply(self, agent, project, write_css):
        path = write_css(project, "a.css", ".card { padding: 0; }")

        configured = agent.set_project_configuration(str(project))
        result = agent.apply_change(
            {"selector": "div.card", "classList": ["card"], "changes": {"padding": "8px"}}
        )

        assert configured["filesLoaded"] == 1
        assert result["success"] is True
        assert result["file"] == "a.css"
        assert path.read_text(encoding="utf-8") == ".card {\n  padding: 8px;\n}"
        assert agent.status()["filesIndexed"] == 1

    def test_bad_configuration_body(self, agent, tmp_path):
        data = agent.set_project_configuration(str(tmp_path / "missing"))
        assert data["success"] is False

"""HTTP client for a running csssync agent, built on httpx."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from csssync.errors import AgentError, AgentTimeoutError, AgentUnavailableError
from csssync.model.change import ChangeEvent

DEFAULT_AGENT_URL = "http://localhost:3001"


class AgentClient:
    """Thin wrapper around :class:`httpx.Client` speaking the agent's JSON API.

    Transport failures are mapped to :class:`AgentError` subclasses. Failed
    patches are not errors here: the agent answers them with
    ``{"success": false, "error": ...}`` and that body is returned as is.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_AGENT_URL,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url,
            timeout=httpx.Timeout(timeout, connect=min(timeout, 5.0)),
            transport=transport,
        )

    def status(self) -> dict[str, Any]:
        return self._request("GET", "/status")

    def set_project_configuration(
        self, root_path: str, domain_mappings: Mapping[str, str] | None = None
    ) -> dict[str, Any]:
        return self._request(
            "POST",
            "/set-project-configuration",
            json={"projectPath": root_path, "domainMappings": dict(domain_mappings or {})},
        )

    def apply_change(self, event: ChangeEvent | Mapping[str, Any]) -> dict[str, Any]:
        payload = event.to_dict() if isinstance(event, ChangeEvent) else dict(event)
        return self._request("POST", "/apply-css-change", json=payload)

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            resp = self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as exc:
            raise AgentTimeoutError("Request timeout - server not responding", cause=exc) from exc
        except httpx.TransportError as exc:
            raise AgentUnavailableError(
                "Server connection failed - is server running?", cause=exc
            ) from exc

        try:
            body = resp.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            raise AgentError(
                f"Server responded with {resp.status_code}: {resp.reason_phrase}",
                status_code=resp.status_code,
            )
        if resp.status_code >= 500 and "success" not in body:
            raise AgentError(str(body.get("error", resp.text)), status_code=resp.status_code)
        return body

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> AgentClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from csssync.errors import ConfigurationError
from csssync.matching.scorer import MatchWeights


@dataclass(frozen=True)
class SyncConfig:
    host: str = "127.0.0.1"
    port: int = 3001
    root_path: str = ""
    domain_mappings: dict[str, str] = field(default_factory=dict, hash=False, compare=False)
    queue_delay: float = 0.1  # seconds between queued changes
    scan_workers: int = 4
    weights: MatchWeights = field(default_factory=MatchWeights)

    @classmethod
    def from_file(cls, path: str | Path) -> SyncConfig:
        """Load a JSON config file (``rootPath``, ``domainMappings``, ``port``...)."""
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise ConfigurationError(f"Cannot read config {path}: {exc}", cause=exc) from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config {path} must contain a JSON object")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SyncConfig:
        config = cls()
        weights = config.weights
        if "matchThreshold" in data:
            weights = replace(weights, threshold=int(data["matchThreshold"]))
        mappings = data.get("domainMappings") or {}
        if not isinstance(mappings, dict):
            raise ConfigurationError("'domainMappings' must be an object")
        return replace(
            config,
            host=str(data.get("host", config.host)),
            port=int(data.get("port", config.port)),
            root_path=str(data.get("rootPath") or data.get("projectPath") or ""),
            domain_mappings={str(k): str(v) for k, v in mappings.items()},
            queue_delay=float(data.get("queueDelay", config.queue_delay)),
            scan_workers=int(data.get("scanWorkers", config.scan_workers)),
            weights=weights,
        )

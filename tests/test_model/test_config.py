"""Tests for SyncConfig."""
from __future__ import annotations

import json

import pytest

from csssync.config import SyncConfig
from csssync.errors import ConfigurationError


class TestSyncConfig:
    def test_defaults(self):
        config = SyncConfig()
        assert (config.host, config.port) == ("127.0.0.1", 3001)
        assert config.root_path == ""
        assert config.weights.threshold == 50
        assert config.queue_delay == 0.1

    def test_from_file(self, tmp_path):
        path = tmp_path / "csssync.json"
        path.write_text(
            json.dumps(
                {
                    "projectPath": "/srv/site",
                    "domainMappings": {"shop.local": "/srv/shop"},
                    "port": 4000,
                    "matchThreshold": 60,
                    "queueDelay": 0,
                }
            ),
            encoding="utf-8",
        )

        config = SyncConfig.from_file(path)

        assert config.root_path == "/srv/site"
        assert config.domain_mappings == {"shop.local": "/srv/shop"}
        assert config.port == 4000
        assert config.weights.threshold == 60
        assert config.weights.exact == 100
        assert config.queue_delay == 0.0

    def test_root_path_preferred_over_project_path(self):
        config = SyncConfig.from_dict({"rootPath": "/a", "projectPath": "/b"})
        assert config.root_path == "/a"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Cannot read config"):
            SyncConfig.from_file(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            SyncConfig.from_file(path)

    def test_mappings_must_be_object(self):
        with pytest.raises(ConfigurationError):
            SyncConfig.from_dict({"domainMappings": ["x"]})

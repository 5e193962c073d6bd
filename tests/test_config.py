"""
Tests for configuration management

Tests cover:
- Configuration loading and defaults
- Dot-path access and updates
- Validation of new values
- Persistence and corrupt files
"""
import json

import pytest

from courier.utils.config import ConfigManager
from courier.utils.errors import InvalidConfigError, MissingConfigError


class TestConfigurationDefaults:
    """Tests for default configuration values"""

    def test_compose_defaults(self, isolated_config):
        compose = isolated_config.config.compose
        assert compose.autosave_enabled is True
        assert compose.autosave_interval == 30.0
        assert compose.save_timeout == 30.0
        assert compose.send_timeout == 30.0
        assert compose.cleanup_timeout == 10.0

    def test_api_defaults(self, isolated_config):
        assert isolated_config.config.api.requests_per_second == 2.0

    def test_default_file_created(self, isolated_config):
        assert isolated_config.path.exists()
        data = json.loads(isolated_config.path.read_text(encoding="utf-8"))
        assert data["compose"]["autosave_interval"] == 30.0

    def test_singleton(self, isolated_config):
        assert ConfigManager() is isolated_config


class TestConfigAccess:
    """Tests for get_config and set_config"""

    def test_get_config(self, isolated_config):
        assert isolated_config.get_config("compose.send_timeout") == 30.0
        assert isolated_config.get_config("compose.nope", "fallback") == "fallback"

    def test_set_and_reload(self, isolated_config):
        """Test a persisted value survives a reload"""
        isolated_config.set_config("compose.autosave_interval", 12.5)
        path = isolated_config.path

        ConfigManager.reset()
        reloaded = ConfigManager(path)
        assert reloaded.config.compose.autosave_interval == 12.5

    def test_set_invalid_value(self, isolated_config):
        with pytest.raises(InvalidConfigError):
            isolated_config.set_config("compose.autosave_interval", -1)
        assert isolated_config.config.compose.autosave_interval == 30.0

    def test_set_missing_key(self, isolated_config):
        with pytest.raises(MissingConfigError):
            isolated_config.set_config("compose.colour", "blue")
        with pytest.raises(MissingConfigError):
            isolated_config.set_config("display.theme", "dark")


class TestCorruptConfig:
    """Tests for unreadable configuration files"""

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        ConfigManager.reset()
        with pytest.raises(InvalidConfigError):
            ConfigManager(path)

    def test_schema_mismatch(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"compose": {"autosave_interval": "soon"}}), encoding="utf-8")
        ConfigManager.reset()
        with pytest.raises(InvalidConfigError):
            ConfigManager(path)

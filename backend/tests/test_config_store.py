"""Tests for the config store (env < config file, reloadable)."""
import json

import pytest
from pydantic import ValidationError

from kosaquest.config_store import ConfigStore, read_config_file
from kosaquest.settings import Settings


class TestReadConfigFile:
    def test_missing_file(self, tmp_path):
        assert read_config_file(tmp_path / "absent.yaml") == {}

    def test_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("badge_mint_timeout_s: 3.5\nadmin_api_key: from-file\n")
        assert read_config_file(path) == {"badge_mint_timeout_s": 3.5, "admin_api_key": "from-file"}

    def test_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"log_level": "DEBUG"}))
        assert read_config_file(path) == {"log_level": "DEBUG"}

    def test_non_mapping_ignored(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        assert read_config_file(path) == {}

    def test_unsupported_suffix_ignored(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("a = 1")
        assert read_config_file(path) == {}


class TestConfigStore:
    def test_file_overrides_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("BADGE_MINTER_BACKEND", "simulated")
        path = tmp_path / "config.yaml"
        path.write_text("badge_minter_backend: http\nbadge_minter_url: https://mint.test\n")
        store = ConfigStore(Settings, str(path))
        store.load_initial()
        assert store.get_settings().badge_minter_backend == "http"
        assert store.get_settings().badge_minter_url == "https://mint.test"

    def test_reload_picks_up_file_changes(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("app_name: First\n")
        store = ConfigStore(Settings, str(path))
        store.load_initial()
        path.write_text("app_name: Second\n")
        store.reload_from_file()
        assert store.get_settings().app_name == "Second"

    def test_invalid_reload_keeps_previous_settings(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("badge_mint_timeout_s: 3.0\n")
        store = ConfigStore(Settings, str(path))
        store.load_initial()

        path.write_text("badge_mint_timeout_s: not-a-number\n")
        with pytest.raises(ValidationError):
            store.reload_from_file()
        assert store.get_settings().badge_mint_timeout_s == 3.0

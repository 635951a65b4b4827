"""Tests for the JSON config file layer.

Covers:
- Missing file → defaults written with the human-readable keys
- Round trip of every field
- Outdated version → upgraded, empty color/format restored, file rewritten
- Invalid JSON / invalid values / bad template → regenerated (or ConfigError)
- Non-file fields (log_level) come from the base config
"""

import sys
import os
import json
import logging

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from heli_leash.config import CONFIG_VERSION, DEFAULT_CHAT_COLOR, DEFAULT_MESSAGE_FORMAT, LeashConfig
from heli_leash.config_store import ConfigError, load_config, save_config


def _write(path, payload) -> None:
    path.write_text(json.dumps(payload) if not isinstance(payload, str) else payload, encoding="utf-8")


def _read(path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


class TestDefaults:

    def test_missing_file_created(self, tmp_path):
        path = tmp_path / "HeliLeashControl.json"
        cfg = load_config(path)

        assert cfg == LeashConfig()
        data = _read(path)
        assert data["Config Version"] == CONFIG_VERSION
        assert data["Enable leash behavior"] is True
        assert data["Health threshold to enable leash (e.g. 400)"] == 400.0
        assert data["Max allowed distance from attacker"] == 150.0
        assert data["Enable debug messages in console"] is False
        assert data["Send global chat message when heli is leashed"] is True
        assert data["Chat message color (hex)"] == DEFAULT_CHAT_COLOR
        assert data["Global chat message format"] == DEFAULT_MESSAGE_FORMAT

    def test_emoji_survives_on_disk(self, tmp_path):
        path = tmp_path / "cfg.json"
        save_config(LeashConfig(), path)
        assert "🚁" in path.read_text(encoding="utf-8")


class TestRoundTrip:

    def test_all_fields(self, tmp_path):
        path = tmp_path / "cfg.json"
        original = LeashConfig(
            enable_leash=False, health_threshold=250.0, max_distance=90.0,
            enable_debug=True, send_chat_message=False,
            chat_message_color="#123456", global_message_format="{0} near {1}",
        )
        save_config(original, path)
        assert load_config(path) == original

    def test_base_supplies_non_file_fields(self, tmp_path):
        path = tmp_path / "cfg.json"
        save_config(LeashConfig(max_distance=99.0), path)
        cfg = load_config(path, base=LeashConfig(log_level="DEBUG"))
        assert cfg.log_level == "DEBUG"
        assert cfg.max_distance == 99.0

    def test_partial_file_uses_defaults(self, tmp_path):
        path = tmp_path / "cfg.json"
        _write(path, {"Config Version": CONFIG_VERSION, "Max allowed distance from attacker": 300})
        cfg = load_config(path)
        assert cfg.max_distance == 300.0
        assert cfg.health_threshold == 400.0


class TestMigration:

    def test_outdated_version_upgraded(self, tmp_path, caplog):
        path = tmp_path / "cfg.json"
        _write(path, {
            "Config Version": "1.0.10",
            "Max allowed distance from attacker": 200,
            "Chat message color (hex)": "",
            "Global chat message format": "",
        })
        with caplog.at_level(logging.WARNING, logger="heli_leash.config_store"):
            cfg = load_config(path)

        assert "outdated" in caplog.text
        assert cfg.version == CONFIG_VERSION
        assert cfg.max_distance == 200.0
        assert cfg.chat_message_color == DEFAULT_CHAT_COLOR
        assert cfg.global_message_format == DEFAULT_MESSAGE_FORMAT
        assert _read(path)["Config Version"] == CONFIG_VERSION

    def test_current_version_not_rewritten(self, tmp_path):
        path = tmp_path / "cfg.json"
        _write(path, {"Config Version": CONFIG_VERSION})
        load_config(path)
        assert _read(path) == {"Config Version": CONFIG_VERSION}


class TestInvalidFile:

    @pytest.mark.parametrize("payload", [
        "{not json",
        [1, 2, 3],
        {"Max allowed distance from attacker": -5},
        {"Health threshold to enable leash (e.g. 400)": "lots"},
        {"Global chat message format": "{0} {1} {2}"},
        {"Global chat message format": "{player}"},
        {"Global chat message format": "{0} at {1.real}"},
        {"Global chat message format": "{0[x]} at {1}"},
    ])
    def test_regenerated(self, tmp_path, caplog, payload):
        path = tmp_path / "cfg.json"
        _write(path, payload)
        with caplog.at_level(logging.WARNING, logger="heli_leash.config_store"):
            cfg = load_config(path)

        assert cfg == LeashConfig()
        assert "regenerated" in caplog.text
        assert _read(path)["Config Version"] == CONFIG_VERSION

    def test_regenerate_disabled_raises(self, tmp_path):
        path = tmp_path / "cfg.json"
        _write(path, "{not json")
        with pytest.raises(ConfigError):
            load_config(path, regenerate=False)
        assert path.read_text(encoding="utf-8") == "{not json"

"""JSON config file: load, validate, migrate, save.

The on-disk keys are the human-readable labels server owners already edit
("Enable leash behavior", ...). Loading never fails the service: an invalid
file is replaced with defaults and the replacement is logged.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from heli_leash.config import (
    CONFIG_VERSION,
    DEFAULT_CHAT_COLOR,
    DEFAULT_MESSAGE_FORMAT,
    LeashConfig,
)

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """The config file could not be read and regeneration was not allowed."""


class ConfigFile(BaseModel):
    """On-disk schema of the leash config."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    version: str = Field(CONFIG_VERSION, alias="Config Version")
    enable_leash: bool = Field(True, alias="Enable leash behavior")
    health_threshold: float = Field(400.0, ge=0.0, alias="Health threshold to enable leash (e.g. 400)")
    max_distance: float = Field(150.0, gt=0.0, alias="Max allowed distance from attacker")
    enable_debug: bool = Field(False, alias="Enable debug messages in console")
    send_chat_message: bool = Field(True, alias="Send global chat message when heli is leashed")
    chat_message_color: str = Field(DEFAULT_CHAT_COLOR, alias="Chat message color (hex)")
    global_message_format: str = Field(DEFAULT_MESSAGE_FORMAT, alias="Global chat message format")

    @field_validator("global_message_format")
    @classmethod
    def _template_accepts_two_args(cls, value: str) -> str:
        if not value:
            return value  # restored by migration
        try:
            value.format("player", "A0", color=DEFAULT_CHAT_COLOR)
        except (IndexError, KeyError, ValueError, AttributeError, TypeError) as exc:
            raise ValueError(f"message format must take {{0}} and {{1}}: {exc}") from exc
        return value

    @classmethod
    def from_config(cls, config: LeashConfig) -> ConfigFile:
        return cls(
            version=config.version,
            enable_leash=config.enable_leash,
            health_threshold=config.health_threshold,
            max_distance=config.max_distance,
            enable_debug=config.enable_debug,
            send_chat_message=config.send_chat_message,
            chat_message_color=config.chat_message_color,
            global_message_format=config.global_message_format,
        )

    def to_config(self, base: LeashConfig | None = None) -> LeashConfig:
        """Apply the file values on top of *base* (keeps non-file fields like log_level)."""
        return replace(
            base or LeashConfig(),
            version=self.version,
            enable_leash=self.enable_leash,
            health_threshold=self.health_threshold,
            max_distance=self.max_distance,
            enable_debug=self.enable_debug,
            send_chat_message=self.send_chat_message,
            chat_message_color=self.chat_message_color,
            global_message_format=self.global_message_format,
        )


def save_config(config: LeashConfig, path: str | Path) -> None:
    """Write *config* as pretty-printed JSON."""
    path = Path(path)
    payload = ConfigFile.from_config(config).model_dump(by_alias=True)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.debug("Config saved to %s", path)


def _migrate(data: ConfigFile) -> bool:
    """Upgrade an older config in place. Returns True if anything changed."""
    changed = False
    if data.version != CONFIG_VERSION:
        logger.warning("Config version %s is outdated; upgrading to %s", data.version or "<none>", CONFIG_VERSION)
        data.version = CONFIG_VERSION
        changed = True
    if not data.chat_message_color:
        data.chat_message_color = DEFAULT_CHAT_COLOR
        changed = True
    if not data.global_message_format:
        data.global_message_format = DEFAULT_MESSAGE_FORMAT
        changed = True
    return changed


def load_config(path: str | Path, base: LeashConfig | None = None, regenerate: bool = True) -> LeashConfig:
    """Load the config at *path*, creating or repairing the file as needed.

    A missing file is created with defaults. An unreadable or invalid file is
    replaced with defaults unless *regenerate* is False, in which case
    ConfigError is raised.
    """
    path = Path(path)
    defaults = base or LeashConfig()

    if not path.exists():
        logger.info("No config at %s, creating default.", path)
        save_config(defaults, path)
        return defaults

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        data = ConfigFile.model_validate(raw)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        if not regenerate:
            raise ConfigError(f"invalid config file {path}: {exc}") from exc
        logger.error("Failed to load config, creating default. (%s)", exc)
        save_config(defaults, path)
        logger.warning("Configuration file was invalid and has been regenerated.")
        return defaults

    if _migrate(data):
        config = data.to_config(defaults)
        save_config(config, path)
    else:
        config = data.to_config(defaults)
    logger.info("Configuration loaded successfully.")
    return config

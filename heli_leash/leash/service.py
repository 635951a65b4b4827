"""LeashService — owns all leash state for one server lifetime.

Created at service start, torn down at stop. Nothing here is module-global:
the tracker, the active config and the event feed all live on the instance.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from heli_leash.config import LeashConfig
from heli_leash.leash.broadcaster import NotificationBroadcaster
from heli_leash.leash.enforcer import LeashEnforcer
from heli_leash.leash.router import EventRouter
from heli_leash.leash.tracker import AttackerTracker
from heli_leash.utils.event_log import EventLog

if TYPE_CHECKING:
    from heli_leash.core.host import HostRuntime
    from heli_leash.core.models import EntityId, LeashDecision, PlayerId

logger = logging.getLogger(__name__)

_PACKAGE_LOGGER = "heli_leash"


class LeashService:
    """Context struct wiring the host runtime to the leash components."""

    __slots__ = (
        "_host", "_config", "_config_lock", "_started", "_saved_level",
        "tracker", "broadcaster", "enforcer", "router", "events",
    )

    def __init__(self, host: HostRuntime, config: LeashConfig | None = None) -> None:
        self._host = host
        self._config = config or LeashConfig()
        self._config_lock = threading.Lock()
        self._started = False
        self._saved_level = logging.NOTSET

        self.events = EventLog()
        self.tracker = AttackerTracker(host, host)
        self.broadcaster = NotificationBroadcaster(host, host)
        self.enforcer = LeashEnforcer(host, host, host, self.broadcaster)
        self.router = EventRouter(host, self.tracker, self.enforcer, self.events)

    # -- properties --

    @property
    def host(self) -> HostRuntime:
        return self._host

    @property
    def config(self) -> LeashConfig:
        with self._config_lock:
            return self._config

    @property
    def started(self) -> bool:
        return self._started

    # -- lifecycle --

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        self._saved_level = logging.getLogger(_PACKAGE_LOGGER).level
        self._apply_debug_level(self.config)
        cfg = self.config
        if cfg.enable_leash:
            logger.info(
                "HeliLeashControl initialized. Leash active below %s HP, Max distance: %sm.",
                cfg.health_threshold, cfg.max_distance,
            )
        else:
            logger.info("HeliLeashControl is disabled in config.")

    def stop(self) -> None:
        if not self._started:
            return
        self._started = False
        dropped = len(self.tracker)
        self.tracker.clear()
        logging.getLogger(_PACKAGE_LOGGER).setLevel(self._saved_level)
        logger.info("HeliLeashControl stopped (%d associations dropped).", dropped)

    def update_config(self, config: LeashConfig) -> None:
        """Swap the active config; in-flight evaluations keep the old one."""
        with self._config_lock:
            self._config = config
        self._apply_debug_level(config)
        logger.info("Configuration updated (leash=%s, threshold=%s, max_distance=%s)",
                    config.enable_leash, config.health_threshold, config.max_distance)

    # -- host hooks --

    def on_entity_damaged(self, entity: EntityId, attacker: PlayerId | None) -> LeashDecision | None:
        return self.router.on_damage(entity, attacker, self.config)

    def on_entity_destroyed(self, entity: EntityId) -> bool:
        return self.router.on_destroyed(entity)

    # -- internals --

    def _apply_debug_level(self, config: LeashConfig) -> None:
        """The package logger is process-wide; stop() restores the level seen at start()."""
        pkg_logger = logging.getLogger(_PACKAGE_LOGGER)
        pkg_logger.setLevel(logging.DEBUG if config.enable_debug else self._saved_level)

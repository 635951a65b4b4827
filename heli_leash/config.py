"""Leash configuration with the plugin's shipped defaults."""

from __future__ import annotations

from dataclasses import dataclass

CONFIG_VERSION = "1.0.15"

DEFAULT_CHAT_COLOR = "#ff4d4d"
DEFAULT_MESSAGE_FORMAT = (
    "🚁 <color=#ff4d4d>Helicopter is staying close to {0} at "
    "[<color=#ffd700>{1}</color>]</color>"
)


@dataclass(frozen=True)
class LeashConfig:
    """Immutable configuration handed to every leash evaluation."""

    version: str = CONFIG_VERSION

    # Leash
    enable_leash: bool = True
    health_threshold: float = 400.0
    max_distance: float = 150.0

    # Debug
    enable_debug: bool = False

    # Messaging
    send_chat_message: bool = True
    chat_message_color: str = DEFAULT_CHAT_COLOR   # Opaque, only passed to str.format
    global_message_format: str = DEFAULT_MESSAGE_FORMAT

    # Logging
    log_level: str = "INFO"

    @property
    def pull_depth(self) -> float:
        """Distance from the attacker at which a leashed heli is parked."""
        return self.max_distance * 0.5


@dataclass(frozen=True)
class SimulationConfig:
    """Settings for the built-in patrol simulator (demo and tests)."""

    seed: int = 42
    max_ticks: int = 600

    # Map
    map_extent: float = 2000.0          # players and waypoints stay within ±extent on x/z
    patrol_altitude: float = 120.0
    num_waypoints: int = 6

    # Helicopter
    heli_health: float = 1500.0
    heli_speed: float = 25.0

    # Players
    num_players: int = 4
    player_step: float = 6.0            # max wander per tick on each axis
    shot_range: float = 320.0
    shot_chance: float = 0.35
    damage_min: float = 15.0
    damage_max: float = 45.0

    # Background loop
    tick_rate: float = 0.1              # seconds between ticks

"""Enumerations used throughout the service."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class LeashOutcome(IntEnum):
    """Result of a single leash evaluation."""

    RETARGETED = 0
    WITHIN_LEASH = 1
    DISABLED = 2
    ABOVE_THRESHOLD = 3
    INVALID_ENTITY = 4
    INVALID_ATTACKER = 5
    DEGENERATE_GEOMETRY = 6

    @property
    def acted(self) -> bool:
        return self is LeashOutcome.RETARGETED


@unique
class EventCategory(IntEnum):
    """Categories for the service event feed."""

    DAMAGE = 0
    LEASH = 1
    BROADCAST = 2
    DESTROYED = 3
    HOST = 4


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    MOVEMENT = 0
    SHOT = 1
    DAMAGE = 2
    SPAWN = 3

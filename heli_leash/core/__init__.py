"""Core data models, host interfaces and grid labels."""

from heli_leash.core.enums import Domain, EventCategory, LeashOutcome
from heli_leash.core.grid_label import grid_label
from heli_leash.core.host import ChatChannel, DeliveryError, EntityQuery, HostRuntime, MotionControl, PlayerQuery
from heli_leash.core.models import Attacker, LeashDecision, TrackedEntity, Vector3

__all__ = [
    "Attacker",
    "ChatChannel",
    "DeliveryError",
    "Domain",
    "EntityQuery",
    "EventCategory",
    "HostRuntime",
    "LeashDecision",
    "LeashOutcome",
    "MotionControl",
    "PlayerQuery",
    "TrackedEntity",
    "Vector3",
    "grid_label",
]

"""Core data models: Vector3, entity/attacker snapshots, LeashDecision."""

from __future__ import annotations

import math
from dataclasses import dataclass

from heli_leash.core.enums import LeashOutcome

# Below this magnitude a vector has no usable direction.
EPSILON = 1e-5

EntityId = int
PlayerId = int


@dataclass(frozen=True, slots=True)
class Vector3:
    """Immutable 3D world coordinate. ``y`` is up, the map plane is x/z."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> Vector3 | None:
        """Unit vector in the same direction, or None for a zero-length vector."""
        mag = self.magnitude
        if mag < EPSILON:
            return None
        return Vector3(self.x / mag, self.y / mag, self.z / mag)

    def distance(self, other: Vector3) -> float:
        return (self - other).magnitude

    def __repr__(self) -> str:
        return f"({self.x:.1f}, {self.y:.1f}, {self.z:.1f})"


@dataclass(frozen=True, slots=True)
class TrackedEntity:
    """Snapshot of the monitored entity, valid for a single evaluation."""

    id: EntityId
    short_type_name: str
    position: Vector3
    health: float
    alive: bool


@dataclass(frozen=True, slots=True)
class Attacker:
    """Snapshot of a participant, valid for a single evaluation."""

    id: PlayerId
    display_name: str
    position: Vector3
    alive: bool
    connected: bool


@dataclass(frozen=True, slots=True)
class LeashDecision:
    """What a leash evaluation decided and did."""

    outcome: LeashOutcome
    entity_id: EntityId
    attacker_id: PlayerId | None = None
    distance: float | None = None
    target: Vector3 | None = None
    recipients: int = 0

    @property
    def retargeted(self) -> bool:
        return self.outcome.acted

    def __repr__(self) -> str:
        dist = f"{self.distance:.1f}" if self.distance is not None else "-"
        return (
            f"Decision(entity={self.entity_id}, attacker={self.attacker_id}, "
            f"{self.outcome.name}, distance={dist}, target={self.target})"
        )

"""In-memory host runtime — the world the leash service plugs into.

Used by the CLI simulator, the HTTP API and the tests. Mutated from a single
writer at a time (the ServiceManager lock or the test itself).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from heli_leash.core.host import DeliveryError, HostRuntime
from heli_leash.core.models import EntityId, PlayerId, Vector3

logger = logging.getLogger(__name__)

HELI_TYPE = "patrolhelicopter"
HELI_MAX_HEALTH = 10000.0
HELI_SPEED = 25.0  # world units per tick


@dataclass(slots=True)
class HostEntity:
    """A host-side entity (mutable, owned by the host)."""

    id: EntityId
    type_name: str
    pos: Vector3
    health: float
    max_health: float
    speed: float = HELI_SPEED
    nav_target: Vector3 | None = None
    retarget_count: int = 0

    @property
    def alive(self) -> bool:
        return self.health > 0


@dataclass(slots=True)
class HostPlayer:
    """A connected (or formerly connected) participant."""

    id: PlayerId
    name: str
    pos: Vector3
    health: float = 100.0
    connected: bool = True
    inbox: list[str] = field(default_factory=list)
    reject_messages: bool = False  # simulate a client that drops mid-broadcast

    @property
    def alive(self) -> bool:
        return self.health > 0


class SimulatedHost(HostRuntime):
    """Authoritative in-memory world implementing every host collaborator."""

    __slots__ = ("entities", "players", "_next_entity_id", "_next_player_id")

    def __init__(self) -> None:
        self.entities: dict[EntityId, HostEntity] = {}
        self.players: dict[PlayerId, HostPlayer] = {}
        self._next_entity_id: int = 1
        self._next_player_id: int = 1

    # -- world mutation --

    def spawn_entity(
        self,
        pos: Vector3,
        type_name: str = HELI_TYPE,
        health: float = HELI_MAX_HEALTH,
        max_health: float | None = None,
    ) -> HostEntity:
        eid = self._next_entity_id
        self._next_entity_id += 1
        entity = HostEntity(
            id=eid, type_name=type_name, pos=pos,
            health=health, max_health=max_health if max_health is not None else max(health, HELI_MAX_HEALTH),
        )
        self.entities[eid] = entity
        logger.debug("Spawned %s #%d at %s", type_name, eid, pos)
        return entity

    def destroy_entity(self, entity: EntityId) -> HostEntity | None:
        removed = self.entities.pop(entity, None)
        if removed is not None:
            logger.debug("Destroyed %s #%d", removed.type_name, entity)
        return removed

    def add_player(self, name: str, pos: Vector3, connected: bool = True) -> HostPlayer:
        pid = self._next_player_id
        self._next_player_id += 1
        player = HostPlayer(id=pid, name=name, pos=pos, connected=connected)
        self.players[pid] = player
        return player

    def disconnect(self, player: PlayerId) -> None:
        p = self.players.get(player)
        if p is not None:
            p.connected = False

    def apply_damage(self, entity: EntityId, amount: float) -> float:
        """Subtract *amount* health; returns the remaining health."""
        e = self.entities[entity]
        e.health = max(0.0, e.health - amount)
        return e.health

    def move_towards(self, entity: EntityId, goal: Vector3) -> bool:
        """Advance *entity* one step toward *goal*. True once it arrives."""
        e = self.entities[entity]
        delta = goal - e.pos
        dist = delta.magnitude
        if dist <= e.speed:
            e.pos = goal
            return True
        e.pos = e.pos + delta * (e.speed / dist)
        return False

    # -- EntityQuery --

    def entity_exists(self, entity: EntityId) -> bool:
        return entity in self.entities

    def health(self, entity: EntityId) -> float:
        return self.entities[entity].health

    def entity_position(self, entity: EntityId) -> Vector3:
        return self.entities[entity].pos

    def entity_alive(self, entity: EntityId) -> bool:
        return self.entities[entity].alive

    def short_type_name(self, entity: EntityId) -> str:
        return self.entities[entity].type_name

    # -- PlayerQuery --

    def player_exists(self, player: PlayerId) -> bool:
        return player in self.players

    def player_position(self, player: PlayerId) -> Vector3:
        return self.players[player].pos

    def player_alive(self, player: PlayerId) -> bool:
        return self.players[player].alive

    def player_connected(self, player: PlayerId) -> bool:
        return self.players[player].connected

    def display_name(self, player: PlayerId) -> str:
        return self.players[player].name

    # -- MotionControl --

    def set_navigation_target(self, entity: EntityId, target: Vector3) -> None:
        e = self.entities.get(entity)
        if e is None:
            return
        e.nav_target = target
        e.retarget_count += 1

    # -- ChatChannel --

    def connected_recipients(self) -> list[PlayerId]:
        return [pid for pid, p in self.players.items() if p.connected]

    def send(self, recipient: PlayerId, message: str) -> None:
        p = self.players.get(recipient)
        if p is None or not p.connected:
            raise DeliveryError(recipient, "not connected")
        if p.reject_messages:
            raise DeliveryError(recipient, "client dropped message")
        p.inbox.append(message)

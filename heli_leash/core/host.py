"""Host runtime collaborators consumed by the leash core.

The leash logic never owns entities, players, chat or navigation; it reads
and commands them through these interfaces. To plug in a new host:
  1. Subclass ``HostRuntime`` (or the individual interfaces).
  2. Hand the instance to ``LeashService``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from heli_leash.core.models import Attacker, EntityId, PlayerId, TrackedEntity, Vector3

logger = logging.getLogger(__name__)


class DeliveryError(Exception):
    """A chat message could not be delivered to one recipient."""

    def __init__(self, recipient: PlayerId, reason: str = "") -> None:
        super().__init__(f"delivery to player {recipient} failed: {reason}" if reason
                         else f"delivery to player {recipient} failed")
        self.recipient = recipient
        self.reason = reason


# ---------------------------------------------------------------------------
# Entity query
# ---------------------------------------------------------------------------

class EntityQuery(ABC):
    """Read access to host entities."""

    @abstractmethod
    def entity_exists(self, entity: EntityId) -> bool:
        """True while the host still knows the handle."""

    @abstractmethod
    def health(self, entity: EntityId) -> float: ...

    @abstractmethod
    def entity_position(self, entity: EntityId) -> Vector3: ...

    @abstractmethod
    def entity_alive(self, entity: EntityId) -> bool: ...

    @abstractmethod
    def short_type_name(self, entity: EntityId) -> str: ...

    def tracked_entity(self, entity: EntityId) -> TrackedEntity | None:
        """Snapshot *entity*, or None if the handle is no longer valid."""
        from heli_leash.core.models import TrackedEntity

        if not self.entity_exists(entity):
            return None
        return TrackedEntity(
            id=entity,
            short_type_name=self.short_type_name(entity),
            position=self.entity_position(entity),
            health=self.health(entity),
            alive=self.entity_alive(entity),
        )


# ---------------------------------------------------------------------------
# Player (attacker) query
# ---------------------------------------------------------------------------

class PlayerQuery(ABC):
    """Read access to participants."""

    @abstractmethod
    def player_exists(self, player: PlayerId) -> bool: ...

    @abstractmethod
    def player_position(self, player: PlayerId) -> Vector3: ...

    @abstractmethod
    def player_alive(self, player: PlayerId) -> bool: ...

    @abstractmethod
    def player_connected(self, player: PlayerId) -> bool: ...

    @abstractmethod
    def display_name(self, player: PlayerId) -> str: ...

    def attacker(self, player: PlayerId) -> Attacker | None:
        """Snapshot *player*, or None if the handle is unknown."""
        from heli_leash.core.models import Attacker

        if not self.player_exists(player):
            return None
        return Attacker(
            id=player,
            display_name=self.display_name(player),
            position=self.player_position(player),
            alive=self.player_alive(player),
            connected=self.player_connected(player),
        )


# ---------------------------------------------------------------------------
# Motion control
# ---------------------------------------------------------------------------

class MotionControl(ABC):
    """Fire-and-forget navigation commands."""

    @abstractmethod
    def set_navigation_target(self, entity: EntityId, target: Vector3) -> None: ...


# ---------------------------------------------------------------------------
# Chat
# ---------------------------------------------------------------------------

class ChatChannel(ABC):
    """Server chat delivery."""

    @abstractmethod
    def connected_recipients(self) -> list[PlayerId]:
        """Players connected at the moment of the call."""

    @abstractmethod
    def send(self, recipient: PlayerId, message: str) -> None:
        """Deliver *message* to one player; raise DeliveryError on failure."""

    def send_to_all_connected(self, message: str) -> int:
        """Broadcast *message*; a failed recipient does not stop the rest.

        Returns the number of players the message reached.
        """
        delivered = 0
        for recipient in self.connected_recipients():
            try:
                self.send(recipient, message)
            except DeliveryError as exc:
                logger.warning("Chat broadcast skipped player %d: %s", recipient, exc.reason or exc)
                continue
            delivered += 1
        return delivered


class HostRuntime(EntityQuery, PlayerQuery, MotionControl, ChatChannel, ABC):
    """Everything the leash service needs from the hosting server."""

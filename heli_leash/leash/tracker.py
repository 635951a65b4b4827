"""AttackerTracker — who hit each tracked entity last."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from heli_leash.core.host import EntityQuery, PlayerQuery
    from heli_leash.core.models import EntityId, PlayerId

logger = logging.getLogger(__name__)


class AttackerTracker:
    """Maps entity handles to the handle of their most recent attacker.

    Keys are the host's stable integer handles, never live objects. One
    attacker per entity; every accepted ``record`` overwrites the previous
    one. Thread-safe via a simple lock, last writer wins.
    """

    __slots__ = ("_entities", "_players", "_attackers", "_lock")

    def __init__(self, entities: EntityQuery, players: PlayerQuery) -> None:
        self._entities = entities
        self._players = players
        self._attackers: dict[EntityId, PlayerId] = {}
        self._lock = threading.Lock()

    def record(self, entity: EntityId, attacker: PlayerId | None) -> bool:
        """Remember *attacker* as the last to damage *entity*.

        Ignored (returns False) when the attacker is missing or unknown, or
        when the host no longer knows the entity.
        """
        if attacker is None or not self._players.player_exists(attacker):
            return False
        with self._lock:
            # Checked under the lock so a concurrent forget cannot be undone.
            if not self._entities.entity_exists(entity):
                logger.debug("Ignoring damage on stale entity handle %d", entity)
                return False
            self._attackers[entity] = attacker
        return True

    def forget(self, entity: EntityId) -> bool:
        with self._lock:
            return self._attackers.pop(entity, None) is not None

    def current_attacker(self, entity: EntityId) -> PlayerId | None:
        with self._lock:
            return self._attackers.get(entity)

    def associations(self) -> dict[EntityId, PlayerId]:
        """Copy of the full map."""
        with self._lock:
            return dict(self._attackers)

    def clear(self) -> None:
        with self._lock:
            self._attackers.clear()

    def __contains__(self, entity: EntityId) -> bool:
        with self._lock:
            return entity in self._attackers

    def __len__(self) -> int:
        with self._lock:
            return len(self._attackers)

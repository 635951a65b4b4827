"""EventRouter — host damage/destroy hooks → tracker and enforcer."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from heli_leash.core.enums import EventCategory, LeashOutcome

if TYPE_CHECKING:
    from heli_leash.config import LeashConfig
    from heli_leash.core.host import EntityQuery
    from heli_leash.core.models import EntityId, LeashDecision, PlayerId
    from heli_leash.leash.enforcer import LeashEnforcer
    from heli_leash.leash.tracker import AttackerTracker
    from heli_leash.utils.event_log import EventLog

logger = logging.getLogger(__name__)

TRACKED_TYPES = frozenset({"patrolhelicopter"})


class EventRouter:
    """Thin glue between host events and the leash components."""

    __slots__ = ("_entities", "_tracker", "_enforcer", "_events")

    def __init__(
        self,
        entities: EntityQuery,
        tracker: AttackerTracker,
        enforcer: LeashEnforcer,
        events: EventLog,
    ) -> None:
        self._entities = entities
        self._tracker = tracker
        self._enforcer = enforcer
        self._events = events

    def on_damage(self, entity: EntityId, attacker: PlayerId | None, config: LeashConfig) -> LeashDecision | None:
        """Handle a combat-damage event. None when the event is ignored."""
        if not self._entities.entity_exists(entity):
            logger.debug("Damage event for unknown entity %d rejected", entity)
            return None
        if self._entities.short_type_name(entity) not in TRACKED_TYPES:
            return None

        # Environmental damage or an unknown shooter changes nothing.
        if not self._tracker.record(entity, attacker):
            return None
        self._events.append(
            EventCategory.DAMAGE,
            f"Heli {entity} damaged by player {attacker} "
            f"({self._entities.health(entity):.0f} HP left)",
            (entity, attacker),
        )

        current = self._tracker.current_attacker(entity)
        decision = self._enforcer.evaluate(entity, current, config)
        if decision.outcome == LeashOutcome.RETARGETED:
            self._events.append(
                EventCategory.LEASH,
                f"Heli {entity} leashed to player {current} "
                f"(distance {decision.distance:.1f}m → {decision.target})",
                (entity, current),
            )
            if decision.recipients:
                self._events.append(
                    EventCategory.BROADCAST,
                    f"Leash announcement sent to {decision.recipients} players",
                    (current,),
                )
        return decision

    def on_destroyed(self, entity: EntityId) -> bool:
        """Handle entity destruction: drop its association."""
        forgotten = self._tracker.forget(entity)
        if forgotten:
            self._events.append(EventCategory.DESTROYED, f"Heli {entity} destroyed", (entity,))
        return forgotten

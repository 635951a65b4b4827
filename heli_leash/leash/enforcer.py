"""LeashEnforcer — pulls a badly damaged heli back toward its attacker.

Every guard returns a no-op LeashDecision instead of raising: a stale handle
or a disconnected attacker only means this damage event is irrelevant, and
the next one will be evaluated afresh.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from heli_leash.core.enums import LeashOutcome
from heli_leash.core.models import LeashDecision

if TYPE_CHECKING:
    from heli_leash.config import LeashConfig
    from heli_leash.core.host import EntityQuery, MotionControl, PlayerQuery
    from heli_leash.core.models import EntityId, PlayerId, Vector3
    from heli_leash.leash.broadcaster import NotificationBroadcaster

logger = logging.getLogger(__name__)


def leash_target(entity_pos: Vector3, attacker_pos: Vector3, depth: float) -> Vector3 | None:
    """Point *depth* units from the attacker on the segment toward the entity.

    None when both positions coincide and no direction exists.
    """
    direction = (attacker_pos - entity_pos).normalized()
    if direction is None:
        return None
    return attacker_pos - direction * depth


class LeashEnforcer:
    """Stateless per-event leash decision."""

    __slots__ = ("_entities", "_players", "_motion", "_broadcaster")

    def __init__(
        self,
        entities: EntityQuery,
        players: PlayerQuery,
        motion: MotionControl,
        broadcaster: NotificationBroadcaster,
    ) -> None:
        self._entities = entities
        self._players = players
        self._motion = motion
        self._broadcaster = broadcaster

    def evaluate(self, entity: EntityId, attacker: PlayerId | None, config: LeashConfig) -> LeashDecision:
        if not config.enable_leash:
            return LeashDecision(LeashOutcome.DISABLED, entity, attacker)

        heli = self._entities.tracked_entity(entity)
        if heli is None or not heli.alive:
            return LeashDecision(LeashOutcome.INVALID_ENTITY, entity, attacker)

        player = self._players.attacker(attacker) if attacker is not None else None
        if player is None or not player.alive or not player.connected:
            return LeashDecision(LeashOutcome.INVALID_ATTACKER, entity, attacker)

        if heli.health > config.health_threshold:
            return LeashDecision(LeashOutcome.ABOVE_THRESHOLD, entity, attacker)

        distance = heli.position.distance(player.position)
        if distance <= config.max_distance:
            return LeashDecision(LeashOutcome.WITHIN_LEASH, entity, attacker, distance=distance)

        target = leash_target(heli.position, player.position, config.pull_depth)
        if target is None:
            return LeashDecision(LeashOutcome.DEGENERATE_GEOMETRY, entity, attacker, distance=distance)

        self._motion.set_navigation_target(entity, target)

        if config.enable_debug:
            logger.debug("Pulled heli back to %s, distance was %.1fm.", player.display_name, distance)

        recipients = self._broadcaster.announce(player.id, config)
        return LeashDecision(
            LeashOutcome.RETARGETED, entity, attacker,
            distance=distance, target=target, recipients=recipients,
        )

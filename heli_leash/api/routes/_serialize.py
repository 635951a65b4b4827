"""Host model → response schema helpers shared by the route modules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from heli_leash.api.schemas import (
    DecisionResponse,
    EntitySchema,
    EventSchema,
    PlayerSchema,
    VectorSchema,
)
from heli_leash.core.grid_label import grid_label

if TYPE_CHECKING:
    from heli_leash.core.models import LeashDecision, Vector3
    from heli_leash.systems.host_sim import HostEntity, HostPlayer
    from heli_leash.utils.event_log import LeashEvent


def vector(v: Vector3) -> VectorSchema:
    return VectorSchema(x=v.x, y=v.y, z=v.z)


def entity(e: HostEntity) -> EntitySchema:
    return EntitySchema(
        id=e.id,
        type_name=e.type_name,
        position=vector(e.pos),
        health=e.health,
        max_health=e.max_health,
        alive=e.alive,
        grid=grid_label(e.pos),
        nav_target=vector(e.nav_target) if e.nav_target is not None else None,
        retarget_count=e.retarget_count,
    )


def player(p: HostPlayer) -> PlayerSchema:
    return PlayerSchema(
        id=p.id,
        name=p.name,
        position=vector(p.pos),
        alive=p.alive,
        connected=p.connected,
        grid=grid_label(p.pos),
        inbox_count=len(p.inbox),
        last_message=p.inbox[-1] if p.inbox else None,
    )


def event(ev: LeashEvent) -> EventSchema:
    return EventSchema(
        seq=ev.seq,
        category=ev.category.name.lower(),
        message=ev.message,
        entity_ids=list(ev.entity_ids),
    )


def decision(d: LeashDecision) -> DecisionResponse:
    return DecisionResponse(
        handled=True,
        outcome=d.outcome.name.lower(),
        entity_id=d.entity_id,
        attacker_id=d.attacker_id,
        distance=d.distance,
        target=vector(d.target) if d.target is not None else None,
        recipients=d.recipients,
    )

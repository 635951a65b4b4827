"""GET /api/v1/state, /api/v1/events — live world, associations and event feed."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from heli_leash.api.dependencies import get_service_manager
from heli_leash.api.routes import _serialize
from heli_leash.api.schemas import AssociationSchema, EventsResponse, ServiceStateResponse
from heli_leash.api.service_manager import ServiceManager

router = APIRouter()


@router.get("/state", response_model=ServiceStateResponse)
def get_state(
    event_limit: int = Query(50, ge=0, le=1000, description="Most recent events to include"),
    manager: ServiceManager = Depends(get_service_manager),
) -> ServiceStateResponse:
    with manager.lock:
        host = manager.host
        entities = [_serialize.entity(e) for e in host.entities.values()]
        players = [_serialize.player(p) for p in host.players.values()]
        associations = [
            AssociationSchema(
                entity_id=eid,
                attacker_id=pid,
                attacker_name=host.players[pid].name if pid in host.players else None,
            )
            for eid, pid in sorted(manager.service.tracker.associations().items())
        ]
        tick = manager.tick

    events = manager.service.events.latest(event_limit) if event_limit else []
    return ServiceStateResponse(
        tick=tick,
        running=manager.running,
        paused=manager.paused,
        entities=entities,
        players=players,
        associations=associations,
        events=[_serialize.event(ev) for ev in events],
    )


@router.get("/events", response_model=EventsResponse)
def get_events(
    since: int = Query(0, ge=0, description="Return events with seq >= since"),
    manager: ServiceManager = Depends(get_service_manager),
) -> EventsResponse:
    events = manager.service.events.since(since)
    next_seq = events[-1].seq + 1 if events else since
    return EventsResponse(events=[_serialize.event(ev) for ev in events], next_seq=next_seq)

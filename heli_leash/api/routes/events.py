"""POST /api/v1/events/* — feed host damage/destroy hooks into the leash service."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from heli_leash.api.dependencies import get_service_manager
from heli_leash.api.routes import _serialize
from heli_leash.api.schemas import (
    DamageEventRequest,
    DecisionResponse,
    DestroyedEventRequest,
    DestroyedResponse,
)
from heli_leash.api.service_manager import ServiceManager

router = APIRouter()


@router.post("/events/damage", response_model=DecisionResponse)
def post_damage(
    body: DamageEventRequest,
    manager: ServiceManager = Depends(get_service_manager),
) -> DecisionResponse:
    with manager.lock:
        if body.amount > 0 and manager.host.entity_exists(body.entity_id):
            manager.host.apply_damage(body.entity_id, body.amount)
        decision = manager.service.on_entity_damaged(body.entity_id, body.attacker_id)

    if decision is None:
        return DecisionResponse(handled=False, entity_id=body.entity_id, attacker_id=body.attacker_id)
    return _serialize.decision(decision)


@router.post("/events/destroyed", response_model=DestroyedResponse)
def post_destroyed(
    body: DestroyedEventRequest,
    manager: ServiceManager = Depends(get_service_manager),
) -> DestroyedResponse:
    with manager.lock:
        manager.host.destroy_entity(body.entity_id)
        forgotten = manager.service.on_entity_destroyed(body.entity_id)
    return DestroyedResponse(entity_id=body.entity_id, forgotten=forgotten)

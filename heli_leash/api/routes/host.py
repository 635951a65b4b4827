"""POST/DELETE /api/v1/host/* — shape the simulated host world."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from heli_leash.api.dependencies import get_service_manager
from heli_leash.api.routes import _serialize
from heli_leash.api.schemas import AddPlayerRequest, EntitySchema, PlayerSchema, SpawnEntityRequest
from heli_leash.api.service_manager import ServiceManager
from heli_leash.core.enums import EventCategory
from heli_leash.core.models import Vector3

router = APIRouter()


@router.post("/host/entities", response_model=EntitySchema, status_code=201)
def spawn_entity(
    body: SpawnEntityRequest,
    manager: ServiceManager = Depends(get_service_manager),
) -> EntitySchema:
    pos = Vector3(body.position.x, body.position.y, body.position.z)
    with manager.lock:
        e = manager.host.spawn_entity(pos, body.type_name, health=body.health)
        manager.service.events.append(EventCategory.HOST, f"Spawned {e.type_name} #{e.id} at {pos}", (e.id,))
        return _serialize.entity(e)


@router.post("/host/players", response_model=PlayerSchema, status_code=201)
def add_player(
    body: AddPlayerRequest,
    manager: ServiceManager = Depends(get_service_manager),
) -> PlayerSchema:
    pos = Vector3(body.position.x, body.position.y, body.position.z)
    with manager.lock:
        p = manager.host.add_player(body.name, pos, connected=body.connected)
        manager.service.events.append(EventCategory.HOST, f"Player {p.name} #{p.id} joined", (p.id,))
        return _serialize.player(p)


@router.delete("/host/players/{player_id}", response_model=PlayerSchema)
def disconnect_player(
    player_id: int,
    manager: ServiceManager = Depends(get_service_manager),
) -> PlayerSchema:
    with manager.lock:
        p = manager.host.players.get(player_id)
        if p is None:
            raise HTTPException(status_code=404, detail=f"Player {player_id} not found.")
        manager.host.disconnect(player_id)
        manager.service.events.append(EventCategory.HOST, f"Player {p.name} #{p.id} disconnected", (p.id,))
        return _serialize.player(p)

"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Geometry ---

class VectorSchema(BaseModel):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


# --- Host world ---

class EntitySchema(BaseModel):
    id: int
    type_name: str
    position: VectorSchema
    health: float
    max_health: float
    alive: bool
    grid: str
    nav_target: VectorSchema | None = None
    retarget_count: int = 0


class PlayerSchema(BaseModel):
    id: int
    name: str
    position: VectorSchema
    alive: bool
    connected: bool
    grid: str
    inbox_count: int = 0
    last_message: str | None = None


class AssociationSchema(BaseModel):
    entity_id: int
    attacker_id: int
    attacker_name: str | None = None


class EventSchema(BaseModel):
    seq: int
    category: str
    message: str
    entity_ids: list[int] = Field(default_factory=list)


class ServiceStateResponse(BaseModel):
    tick: int
    running: bool
    paused: bool
    entities: list[EntitySchema]
    players: list[PlayerSchema]
    associations: list[AssociationSchema]
    events: list[EventSchema] = Field(default_factory=list)


class EventsResponse(BaseModel):
    events: list[EventSchema]
    next_seq: int


# --- Host events ---

class DamageEventRequest(BaseModel):
    entity_id: int
    attacker_id: int | None = None
    amount: float = Field(0.0, ge=0.0, description="Health removed before the hook fires")


class DestroyedEventRequest(BaseModel):
    entity_id: int


class DecisionResponse(BaseModel):
    handled: bool
    outcome: str | None = None
    entity_id: int
    attacker_id: int | None = None
    distance: float | None = None
    target: VectorSchema | None = None
    recipients: int = 0


class DestroyedResponse(BaseModel):
    entity_id: int
    forgotten: bool


class SpawnEntityRequest(BaseModel):
    position: VectorSchema
    type_name: str = "patrolhelicopter"
    health: float = Field(10000.0, gt=0.0)


class AddPlayerRequest(BaseModel):
    name: str = Field(..., min_length=1)
    position: VectorSchema
    connected: bool = True


# --- Grid ---

class GridLabelResponse(BaseModel):
    x: float
    z: float
    label: str


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    tick: int = 0


# --- Config ---

class LeashConfigResponse(BaseModel):
    version: str
    enable_leash: bool
    health_threshold: float
    max_distance: float
    enable_debug: bool
    send_chat_message: bool
    chat_message_color: str
    global_message_format: str
    tick_rate: float
    persisted: bool


class LeashConfigUpdate(BaseModel):
    """Partial update; omitted fields keep their current value."""

    enable_leash: bool | None = None
    health_threshold: float | None = Field(None, ge=0.0)
    max_distance: float | None = Field(None, gt=0.0)
    enable_debug: bool | None = None
    send_chat_message: bool | None = None
    chat_message_color: str | None = Field(None, min_length=1)
    global_message_format: str | None = Field(None, min_length=1)

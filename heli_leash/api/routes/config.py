"""GET/PUT /api/v1/config — leash configuration."""

from __future__ import annotations

from dataclasses import replace

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from heli_leash.api.dependencies import get_service_manager
from heli_leash.api.schemas import LeashConfigResponse, LeashConfigUpdate
from heli_leash.api.service_manager import ServiceManager
from heli_leash.config_store import ConfigFile

router = APIRouter()


def _serialize(manager: ServiceManager) -> LeashConfigResponse:
    cfg = manager.config
    return LeashConfigResponse(
        version=cfg.version,
        enable_leash=cfg.enable_leash,
        health_threshold=cfg.health_threshold,
        max_distance=cfg.max_distance,
        enable_debug=cfg.enable_debug,
        send_chat_message=cfg.send_chat_message,
        chat_message_color=cfg.chat_message_color,
        global_message_format=cfg.global_message_format,
        tick_rate=manager.tick_rate,
        persisted=manager.config_path is not None,
    )


@router.get("/config", response_model=LeashConfigResponse)
def get_config(
    manager: ServiceManager = Depends(get_service_manager),
) -> LeashConfigResponse:
    return _serialize(manager)


@router.put("/config", response_model=LeashConfigResponse)
def update_config(
    update: LeashConfigUpdate,
    manager: ServiceManager = Depends(get_service_manager),
) -> LeashConfigResponse:
    changes = update.model_dump(exclude_none=True)
    new_config = replace(manager.config, **changes)
    try:
        ConfigFile.from_config(new_config)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    manager.update_config(new_config)
    return _serialize(manager)

"""POST /api/v1/control/{action} — simulator lifecycle controls."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, Query

from heli_leash.api.dependencies import get_service_manager
from heli_leash.api.schemas import ControlResponse
from heli_leash.api.service_manager import ServiceManager

router = APIRouter()


class ControlAction(str, Enum):
    start = "start"
    pause = "pause"
    resume = "resume"
    step = "step"
    reset = "reset"


@router.post("/control/{action}", response_model=ControlResponse)
def control(
    action: ControlAction,
    manager: ServiceManager = Depends(get_service_manager),
) -> ControlResponse:
    tick = manager.tick

    match action:
        case ControlAction.start:
            if manager.running:
                return ControlResponse(status="noop", message="Already running.", tick=tick)
            manager.start()
            return ControlResponse(status="ok", message="Simulation started.", tick=tick)

        case ControlAction.pause:
            if not manager.running:
                return ControlResponse(status="error", message="Not running.", tick=tick)
            manager.pause()
            return ControlResponse(status="ok", message="Simulation paused.", tick=tick)

        case ControlAction.resume:
            if not manager.running:
                return ControlResponse(status="error", message="Not running.", tick=tick)
            manager.resume()
            return ControlResponse(status="ok", message="Simulation resumed.", tick=tick)

        case ControlAction.step:
            if not manager.step():
                return ControlResponse(status="noop", message="Simulation finished.", tick=manager.tick)
            return ControlResponse(status="ok", message="Single tick executed.", tick=manager.tick)

        case ControlAction.reset:
            manager.reset()
            return ControlResponse(status="ok", message="Simulation reset.", tick=manager.tick)


@router.post("/speed", response_model=ControlResponse)
def set_speed(
    tps: float = Query(10.0, gt=0.5, le=100.0, description="Ticks per second"),
    manager: ServiceManager = Depends(get_service_manager),
) -> ControlResponse:
    manager.tick_rate = 1.0 / tps
    return ControlResponse(status="ok", message=f"Speed set to {tps:.1f} tps.", tick=manager.tick)

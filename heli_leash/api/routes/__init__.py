"""Versioned API route modules."""

from fastapi import APIRouter

from heli_leash.api.routes.config import router as config_router
from heli_leash.api.routes.control import router as control_router
from heli_leash.api.routes.events import router as events_router
from heli_leash.api.routes.grid import router as grid_router
from heli_leash.api.routes.host import router as host_router
from heli_leash.api.routes.state import router as state_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(state_router, tags=["State"])
api_router.include_router(events_router, tags=["Events"])
api_router.include_router(host_router, tags=["Host"])
api_router.include_router(grid_router, tags=["Grid"])
api_router.include_router(control_router, tags=["Control"])
api_router.include_router(config_router, tags=["Config"])

__all__ = ["api_router"]

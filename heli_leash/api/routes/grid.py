"""GET /api/v1/grid — world coordinate to map grid label."""

from __future__ import annotations

from fastapi import APIRouter, Query

from heli_leash.api.schemas import GridLabelResponse
from heli_leash.core.grid_label import grid_label
from heli_leash.core.models import Vector3

router = APIRouter()


@router.get("/grid", response_model=GridLabelResponse)
def get_grid_label(
    x: float = Query(..., description="World X"),
    z: float = Query(..., description="World Z"),
) -> GridLabelResponse:
    return GridLabelResponse(x=x, z=z, label=grid_label(Vector3(x, 0.0, z)))

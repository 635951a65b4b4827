"""World position → map grid label ("M12") for player-facing messages."""

from __future__ import annotations

import math

from heli_leash.core.models import Vector3

GRID_SIZE = 146.3
GRID_OFFSET = 3000.0
MAX_ROW = 25  # A..Z


def grid_cell(x: float, z: float) -> tuple[int, int]:
    """Return ``(column, row)`` for a map-plane coordinate.

    The row is clamped to the 26 lettered rows; the column is not clamped.
    """
    col = math.floor((x + GRID_OFFSET) / GRID_SIZE)
    row = math.floor((z + GRID_OFFSET) / GRID_SIZE)
    row = max(0, min(row, MAX_ROW))
    return col, row


def grid_label(position: Vector3) -> str:
    col, row = grid_cell(position.x, position.z)
    return f"{chr(ord('A') + row)}{col}"

"""Tests for map grid labels used in chat announcements.

Covers:
- Known coordinates → label
- Row clamping to A..Z
- Unclamped column for out-of-band coordinates
- Height (y) never affects the label
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from heli_leash.core.grid_label import GRID_OFFSET, GRID_SIZE, grid_cell, grid_label
from heli_leash.core.models import Vector3


class TestGridLabel:

    def test_documented_example(self):
        # floor(3150 / 146.3) = 21, floor(3000 / 146.3) = 20 → "U"
        assert grid_label(Vector3(150.0, 0.0, 0.0)) == "U21"

    def test_map_origin_corner(self):
        assert grid_label(Vector3(-GRID_OFFSET, 0.0, -GRID_OFFSET)) == "A0"

    def test_cell_boundary_rounds_down(self):
        just_below = -GRID_OFFSET + GRID_SIZE - 0.01
        assert grid_label(Vector3(just_below, 0.0, just_below)) == "A0"
        just_above = -GRID_OFFSET + GRID_SIZE + 0.01
        assert grid_label(Vector3(just_above, 0.0, just_above)) == "B1"

    def test_height_is_ignored(self):
        assert grid_label(Vector3(150.0, 500.0, 0.0)) == grid_label(Vector3(150.0, -20.0, 0.0))

    def test_deterministic(self):
        pos = Vector3(-1234.5, 80.0, 987.6)
        assert grid_label(pos) == grid_label(pos)
        assert grid_label(pos) == grid_label(Vector3(-1234.5, 80.0, 987.6))


class TestGridClamping:

    def test_row_clamped_high(self):
        col, row = grid_cell(0.0, 100000.0)
        assert row == 25
        assert grid_label(Vector3(0.0, 0.0, 100000.0)).startswith("Z")

    def test_row_clamped_low(self):
        col, row = grid_cell(0.0, -100000.0)
        assert row == 0
        assert grid_label(Vector3(0.0, 0.0, -100000.0)).startswith("A")

    @pytest.mark.parametrize("x, expected_col", [
        (-3500.0, -4),   # floor(-500 / 146.3) = -4
        (10000.0, 88),   # floor(13000 / 146.3) = 88
    ])
    def test_column_not_clamped(self, x, expected_col):
        col, _row = grid_cell(x, 0.0)
        assert col == expected_col
        assert grid_label(Vector3(x, 0.0, 0.0)) == f"U{expected_col}"

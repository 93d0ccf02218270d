from __future__ import annotations

from typing import Dict, List, Tuple

from hexprey.sim.core.cell import Cell
from hexprey.sim.core.hexgrid import Grid, new_grid


class ScriptedRng:
    """Stand-in for DeterministicRng that hands out a fixed sequence of picks."""

    def __init__(self, *values: int) -> None:
        self._values = list(values)
        self.requests: List[int] = []

    def next_int(self, max_value: int) -> int:
        self.requests.append(max_value)
        value = self._values.pop(0) if self._values else 0
        assert 0 <= value < max_value, f"scripted pick {value} outside range({max_value})"
        return value

    def reset(self) -> None:
        self.requests.clear()


def build_grid(rows: int, cols: int, cells: Dict[Tuple[int, int], Cell]) -> Grid:
    grid = new_grid(rows, cols)
    for (row, col), cell in cells.items():
        grid[row][col] = cell
    return grid


def occupied(grid: Grid) -> Dict[Tuple[int, int], Cell]:
    return {
        (row_index, col_index): cell
        for row_index, row in enumerate(grid)
        for col_index, cell in enumerate(row)
        if not cell.is_dead
    }

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .cell import DEAD, Cell, CellStatus

Coord = Tuple[int, int]
Grid = List[List[Cell]]

# Odd rows sit half a cell to the right of even rows ("odd-r" offset layout).
_EVEN_ROW_OFFSETS: Tuple[Coord, ...] = ((-1, -1), (-1, 0), (0, -1), (0, 1), (1, -1), (1, 0))
_ODD_ROW_OFFSETS: Tuple[Coord, ...] = ((-1, 0), (-1, 1), (0, -1), (0, 1), (1, 0), (1, 1))


@dataclass(slots=True)
class Neighborhood:
    prey: List[Coord] = field(default_factory=list)
    empty: List[Coord] = field(default_factory=list)
    predators: List[Coord] = field(default_factory=list)


def new_grid(rows: int, cols: int) -> Grid:
    return [[DEAD] * cols for _ in range(rows)]


def copy_grid(grid: Sequence[Sequence[Cell]]) -> Grid:
    # Cells are immutable, so copying the rows is enough for an independent buffer.
    return [list(row) for row in grid]


def grid_shape(grid: Sequence[Sequence[Cell]]) -> Tuple[int, int]:
    """Return ``(rows, cols)``, rejecting empty or ragged grids."""
    rows = len(grid)
    if rows == 0 or len(grid[0]) == 0:
        raise ValueError("grid must have at least one row and one column")
    cols = len(grid[0])
    for index, row in enumerate(grid):
        if len(row) != cols:
            raise ValueError(f"grid row {index} has {len(row)} cells, expected {cols}")
    return rows, cols


def neighbor_offsets(row: int) -> Tuple[Coord, ...]:
    return _ODD_ROW_OFFSETS if row % 2 else _EVEN_ROW_OFFSETS


def neighbors(row: int, col: int, grid: Sequence[Sequence[Cell]]) -> List[Coord]:
    """
    Coordinates adjacent to ``(row, col)`` on the hex lattice, in offset-table order.

    Offsets that leave the grid are dropped, so edge and corner cells get fewer than six.
    The order is stable and is what callers sample from when picking a random neighbor.
    """

    rows = len(grid)
    cols = len(grid[0]) if rows else 0
    result: List[Coord] = []
    for d_row, d_col in neighbor_offsets(row):
        n_row = row + d_row
        n_col = col + d_col
        if 0 <= n_row < rows and 0 <= n_col < cols:
            result.append((n_row, n_col))
    return result


def survey(row: int, col: int, grid: Sequence[Sequence[Cell]]) -> Neighborhood:
    found = Neighborhood()
    for n_row, n_col in neighbors(row, col, grid):
        status = grid[n_row][n_col].status
        if status is CellStatus.PREY:
            found.prey.append((n_row, n_col))
        elif status is CellStatus.DEAD:
            found.empty.append((n_row, n_col))
        else:
            found.predators.append((n_row, n_col))
    return found


def count_cells(grid: Sequence[Sequence[Cell]]) -> Tuple[int, int, int]:
    """Return ``(prey, predators, dead)`` totals."""
    prey = 0
    predators = 0
    dead = 0
    for row in grid:
        for cell in row:
            if cell.status is CellStatus.PREY:
                prey += 1
            elif cell.status is CellStatus.PREDATOR:
                predators += 1
            else:
                dead += 1
    return prey, predators, dead

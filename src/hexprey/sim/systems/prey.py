from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.cell import DEAD, Cell, CellStatus
from ..core.hexgrid import Grid, survey
from ..types.ledger import StepLedger

if TYPE_CHECKING:
    from ..core.config import SimulationConfig
    from ..core.rng import DeterministicRng


def apply_prey(
    grid: Grid,
    next_grid: Grid,
    row: int,
    col: int,
    rng: DeterministicRng,
    config: SimulationConfig,
    ledger: StepLedger,
) -> None:
    cell = grid[row][col]
    if cell.status is not CellStatus.PREY:
        return

    nearby = survey(row, col, grid)
    empty = nearby.empty
    cooldown = max(0, cell.reproduction_cooldown - 1)

    if nearby.prey and cell.reproduction_cooldown == 0 and empty:
        nursery = empty[rng.next_int(len(empty))]
        next_grid[nursery[0]][nursery[1]] = Cell.prey()
        ledger.prey_births += 1
        cooldown = config.prey.reproduction_cooldown
        # The parent never walks onto its own offspring.
        empty = [coord for coord in empty if coord != nursery]

    destination = (row, col)
    if empty:
        destination = empty[rng.next_int(len(empty))]

    next_grid[destination[0]][destination[1]] = Cell.prey(cooldown)
    if destination != (row, col):
        next_grid[row][col] = DEAD

from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.cell import DEAD, Cell, CellStatus
from ..core.hexgrid import Coord, Grid, survey
from ..types.ledger import StepLedger

if TYPE_CHECKING:
    from ..core.config import SimulationConfig
    from ..core.rng import DeterministicRng


def apply_predator(
    grid: Grid,
    next_grid: Grid,
    row: int,
    col: int,
    rng: DeterministicRng,
    config: SimulationConfig,
    ledger: StepLedger,
) -> None:
    """
    Advance the predator at ``(row, col)`` by one step.

    Neighborhood and partner energy are read from ``grid`` (the pre-step snapshot); every write
    goes to ``next_grid``. Reproduction charges against a partner that has not acted yet are
    parked in ``ledger.pending_charges`` and settled when that partner runs.
    """

    cell = grid[row][col]
    if cell.status is not CellStatus.PREDATOR:
        return
    origin = (row, col)
    rules = config.predator

    if cell.energy <= 0:
        next_grid[row][col] = DEAD
        ledger.starvations += 1
        ledger.pending_charges.pop(origin, None)
        return

    nearby = survey(row, col, grid)
    destination = origin
    ate = False
    if nearby.prey:
        destination = nearby.prey[rng.next_int(len(nearby.prey))]
        ate = True
    elif nearby.empty:
        destination = nearby.empty[rng.next_int(len(nearby.empty))]

    energy = cell.energy - rules.move_cost + (rules.prey_energy if ate else 0)
    # Charges booked by an earlier partner lower the stored energy but not the breeding check.
    stored = energy - ledger.pending_charges.pop(origin, 0)
    next_grid[destination[0]][destination[1]] = Cell.predator(stored)
    if destination != origin:
        next_grid[row][col] = DEAD
    ledger.moves[origin] = destination
    if ate:
        ledger.kills += 1

    if energy < rules.reproduction_threshold:
        return

    for partner in nearby.predators:
        if grid[partner[0]][partner[1]].energy < rules.reproduction_threshold:
            continue
        # Only the first willing partner is considered, even when there is no room for a litter.
        claimed = set(ledger.moves.values())
        nursery = next((coord for coord in nearby.empty if coord not in claimed), None)
        if nursery is None:
            return
        next_grid[nursery[0]][nursery[1]] = Cell.predator(rules.offspring_energy)
        next_grid[destination[0]][destination[1]] = Cell.predator(stored - rules.reproduction_cost)
        _charge_partner(next_grid, ledger, partner, rules.reproduction_cost)
        ledger.predator_births += 1
        return


def _charge_partner(next_grid: Grid, ledger: StepLedger, partner: Coord, cost: int) -> None:
    moved_to = ledger.moves.get(partner)
    if moved_to is None:
        ledger.pending_charges[partner] = ledger.pending_charges.get(partner, 0) + cost
        return
    occupant = next_grid[moved_to[0]][moved_to[1]]
    if occupant.status is CellStatus.PREDATOR:
        next_grid[moved_to[0]][moved_to[1]] = Cell.predator(occupant.energy - cost)

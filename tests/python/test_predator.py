from __future__ import annotations

from hexprey.sim.core.cell import DEAD, Cell
from hexprey.sim.core.config import PredatorConfig, SimulationConfig
from hexprey.sim.core.hexgrid import copy_grid
from hexprey.sim.systems.predator import apply_predator
from hexprey.sim.types.ledger import StepLedger

from _helpers import ScriptedRng, build_grid, occupied


def _apply(grid, row, col, rng, next_grid=None, ledger=None, config=None):
    next_grid = copy_grid(grid) if next_grid is None else next_grid
    ledger = StepLedger() if ledger is None else ledger
    apply_predator(grid, next_grid, row, col, rng, config or SimulationConfig(), ledger)
    return next_grid, ledger


def test_non_predator_cells_are_left_alone():
    grid = build_grid(2, 2, {(0, 0): Cell.prey()})
    next_grid, ledger = _apply(grid, 0, 0, ScriptedRng())
    assert next_grid == grid
    assert ledger.moves == {}


def test_starving_predator_dies_in_place_without_acting():
    for energy in (0, -2):
        grid = build_grid(3, 3, {(1, 1): Cell.predator(energy), (0, 1): Cell.prey()})
        rng = ScriptedRng()
        next_grid, ledger = _apply(grid, 1, 1, rng)

        assert next_grid[1][1] == DEAD
        assert next_grid[0][1] == Cell.prey()
        assert ledger.starvations == 1
        assert ledger.kills == 0
        assert rng.requests == []


def test_hunting_moves_onto_prey_and_gains_energy():
    grid = build_grid(3, 3, {(1, 1): Cell.predator(3), (0, 1): Cell.prey(), (2, 2): Cell.prey()})
    rng = ScriptedRng(1)
    next_grid, ledger = _apply(grid, 1, 1, rng)

    assert rng.requests == [2]
    assert next_grid[2][2] == Cell.predator(3 - 1 + 5)
    assert next_grid[1][1] == DEAD
    assert ledger.kills == 1
    assert ledger.moves == {(1, 1): (2, 2)}


def test_wandering_costs_one_energy():
    grid = build_grid(3, 3, {(1, 1): Cell.predator(3)})
    next_grid, ledger = _apply(grid, 1, 1, ScriptedRng(3))

    assert occupied(next_grid) == {(1, 2): Cell.predator(2)}
    assert ledger.kills == 0


def test_surrounded_predator_stays_and_still_pays():
    grid = build_grid(1, 3, {(0, 0): Cell.predator(2), (0, 1): Cell.predator(1), (0, 2): Cell.predator(9)})
    rng = ScriptedRng()
    next_grid, ledger = _apply(grid, 0, 1, rng)

    assert rng.requests == []
    assert next_grid[0][1] == Cell.predator(0)
    assert ledger.moves == {(0, 1): (0, 1)}


def test_paired_reproduction_with_partner_still_to_act():
    # A at (1, 1) eats the prey at (0, 1); B at (1, 2) is the partner.
    grid = build_grid(
        3,
        3,
        {
            (1, 1): Cell.predator(5),
            (1, 2): Cell.predator(5),
            (0, 1): Cell.prey(),
        },
    )
    next_grid, ledger = _apply(grid, 1, 1, ScriptedRng(0))

    assert next_grid[0][1] == Cell.predator(5 - 1 + 5 - 3)
    assert next_grid[1][1] == DEAD
    # First empty neighbor of (1, 1) in offset order.
    assert next_grid[0][2] == Cell.predator(5)
    assert ledger.predator_births == 1
    assert ledger.pending_charges == {(1, 2): 3}

    # When B acts its own post-move energy carries the charge.
    _apply(grid, 1, 2, ScriptedRng(1), next_grid=next_grid, ledger=ledger)
    assert next_grid[2][2] == Cell.predator(5 - 1 - 3)
    assert next_grid[1][2] == DEAD
    assert ledger.pending_charges == {}
    assert ledger.predator_births == 1


def test_paired_reproduction_charges_partner_that_already_moved():
    grid = build_grid(3, 3, {(1, 0): Cell.predator(5), (1, 1): Cell.predator(6)})
    next_grid, ledger = _apply(grid, 1, 0, ScriptedRng(3))
    # Energy 4 after moving: too weak to start a litter of its own.
    assert next_grid[2][1] == Cell.predator(4)
    assert ledger.predator_births == 0

    _apply(grid, 1, 1, ScriptedRng(2), next_grid=next_grid, ledger=ledger)

    assert ledger.predator_births == 1
    assert occupied(next_grid) == {
        (2, 1): Cell.predator(4 - 3),
        (1, 2): Cell.predator(5 - 3),
        (0, 1): Cell.predator(5),
    }


def test_weak_partner_prevents_reproduction():
    grid = build_grid(3, 3, {(1, 1): Cell.predator(8), (1, 2): Cell.predator(4)})
    next_grid, ledger = _apply(grid, 1, 1, ScriptedRng(0))

    assert ledger.predator_births == 0
    assert ledger.pending_charges == {}
    assert occupied(next_grid) == {(0, 1): Cell.predator(7), (1, 2): Cell.predator(4)}


def test_low_energy_after_move_prevents_reproduction():
    grid = build_grid(3, 3, {(1, 1): Cell.predator(5), (1, 2): Cell.predator(9)})
    _, ledger = _apply(grid, 1, 1, ScriptedRng(0))
    assert ledger.predator_births == 0


def test_offspring_never_replaces_the_parent():
    # The only free cell is where the parent moves, so there is no room for a litter.
    grid = build_grid(2, 2, {(0, 0): Cell.predator(6), (0, 1): Cell.predator(6), (1, 1): Cell.predator(1)})
    next_grid, ledger = _apply(grid, 0, 0, ScriptedRng(0))

    assert ledger.predator_births == 0
    assert ledger.pending_charges == {}
    assert next_grid[1][0] == Cell.predator(5)
    assert next_grid[0][0] == DEAD


def test_only_first_willing_partner_is_considered():
    grid = build_grid(
        3,
        3,
        {
            (1, 1): Cell.predator(9),
            (0, 1): Cell.predator(2),
            (0, 2): Cell.predator(7),
            (1, 0): Cell.predator(7),
        },
    )
    next_grid, ledger = _apply(grid, 1, 1, ScriptedRng(0))

    assert ledger.predator_births == 1
    assert ledger.pending_charges == {(0, 2): 3}
    assert next_grid[1][2] == Cell.predator(9 - 1 - 3)
    assert next_grid[2][1] == Cell.predator(5)


def test_rule_constants_come_from_config():
    config = SimulationConfig(
        predator=PredatorConfig(move_cost=2, prey_energy=10, reproduction_threshold=100)
    )
    grid = build_grid(3, 3, {(1, 1): Cell.predator(4), (0, 1): Cell.prey()})
    next_grid, _ = _apply(grid, 1, 1, ScriptedRng(0), config=config)
    assert next_grid[0][1] == Cell.predator(4 - 2 + 10)

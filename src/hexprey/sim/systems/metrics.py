from __future__ import annotations

from typing import Sequence

from ..core.cell import Cell, CellStatus
from ..core.hexgrid import count_cells
from ..types.ledger import StepLedger
from ..types.metrics import TickMetrics


def create_metrics(
    tick: int,
    grid: Sequence[Sequence[Cell]],
    ledger: StepLedger,
    duration_ms: float,
) -> TickMetrics:
    prey, predators, empty = count_cells(grid)
    energy_sum = sum(cell.energy for row in grid for cell in row if cell.status is CellStatus.PREDATOR)
    return TickMetrics(
        tick=tick,
        prey=prey,
        predators=predators,
        empty=empty,
        prey_births=ledger.prey_births,
        predator_births=ledger.predator_births,
        starvations=ledger.starvations,
        kills=ledger.kills,
        average_predator_energy=energy_sum / predators if predators else 0.0,
        tick_duration_ms=duration_ms,
    )

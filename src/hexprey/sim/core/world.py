from __future__ import annotations

import logging
from time import perf_counter
from typing import List, Optional, Sequence

from .cell import Cell, CellStatus
from .config import SimulationConfig
from .hexgrid import Grid, copy_grid, count_cells, grid_shape, new_grid
from .rng import DeterministicRng
from ..systems import metrics as metrics_system
from ..systems.predator import apply_predator
from ..systems.prey import apply_prey
from ..types.ledger import StepLedger
from ..types.metrics import TickMetrics
from ..types.snapshot import Snapshot, SnapshotGrid, SnapshotMetadata

logger = logging.getLogger(__name__)


class World:
    def __init__(
        self,
        config: SimulationConfig,
        grid: Optional[Sequence[Sequence[Cell]]] = None,
        rng: Optional[DeterministicRng] = None,
    ):
        self._config = config
        self._rng = DeterministicRng(config.seed) if rng is None else rng
        self._ledger = StepLedger()
        self._metrics: TickMetrics | None = None
        self._initial_grid = None if grid is None else self._adopt_grid(grid)
        self._grid = self._starting_grid()
        self._extinct = self._extinct_species(*count_cells(self._grid)[:2])

    @property
    def grid(self) -> Grid:
        """The committed grid. It is replaced wholesale by every step."""
        return self._grid

    @property
    def rows(self) -> int:
        return self._config.rows

    @property
    def cols(self) -> int:
        return self._config.cols

    @property
    def metrics(self) -> TickMetrics | None:
        return self._metrics

    def reset(self) -> None:
        self._rng.reset()
        self._ledger.clear()
        self._metrics = None
        self._grid = self._starting_grid()
        self._extinct = self._extinct_species(*count_cells(self._grid)[:2])

    def step(self, tick: int) -> TickMetrics:
        """
        Advance the whole grid by one tick.

        Prey act first, then predators. Both phases look only at the grid as it was when the
        step began and write into a shared next buffer seeded from it; cells are visited in
        row-major order, so when two writes land on the same cell the later one wins. The
        buffer becomes the committed grid once both phases are done.
        """

        start = perf_counter()
        rng = self._rng
        config = self._config
        grid = self._grid
        next_grid = copy_grid(grid)
        ledger = self._ledger
        ledger.clear()

        for row_index, row in enumerate(grid):
            for col_index, cell in enumerate(row):
                if cell.status is CellStatus.PREY:
                    apply_prey(grid, next_grid, row_index, col_index, rng, config, ledger)

        for row_index, row in enumerate(grid):
            for col_index, cell in enumerate(row):
                if cell.status is CellStatus.PREDATOR:
                    apply_predator(grid, next_grid, row_index, col_index, rng, config, ledger)

        self._grid = next_grid

        elapsed_ms = (perf_counter() - start) * 1000.0
        metrics = metrics_system.create_metrics(tick, next_grid, ledger, elapsed_ms)
        self._metrics = metrics
        logger.debug(
            "tick %d: prey=%d predators=%d births=%d/%d starved=%d",
            tick,
            metrics.prey,
            metrics.predators,
            metrics.prey_births,
            metrics.predator_births,
            metrics.starvations,
        )
        self._report_extinctions(tick, metrics.prey, metrics.predators)
        return metrics

    def snapshot(self, tick: int) -> Snapshot:
        metrics = self._metrics if self._metrics is not None else self._metrics_from_state(tick)
        config = self._config
        grid = SnapshotGrid(
            rows=config.rows,
            cols=config.cols,
            cells=["".join(cell.symbol for cell in row) for row in self._grid],
            energy=[
                [cell.energy if cell.status is CellStatus.PREDATOR else 0 for cell in row]
                for row in self._grid
            ],
        )
        metadata = SnapshotMetadata(
            rows=config.rows,
            cols=config.cols,
            seed=config.seed,
            time_step=config.time_step,
            config_version=config.config_version,
        )
        return Snapshot(tick=tick, metrics=metrics, grid=grid, metadata=metadata)

    def _starting_grid(self) -> Grid:
        if self._initial_grid is not None:
            return copy_grid(self._initial_grid)
        return self._bootstrap_population()

    def _bootstrap_population(self) -> Grid:
        config = self._config
        grid = new_grid(config.rows, config.cols)
        # Independent draws: a later placement simply replaces whatever was there.
        for _ in range(config.initial_prey):
            row = self._rng.next_int(config.rows)
            col = self._rng.next_int(config.cols)
            grid[row][col] = Cell.prey()
        for _ in range(config.initial_predators):
            row = self._rng.next_int(config.rows)
            col = self._rng.next_int(config.cols)
            grid[row][col] = Cell.predator(config.predator.initial_energy)
        return grid

    def _adopt_grid(self, grid: Sequence[Sequence[Cell]]) -> Grid:
        shape = grid_shape(grid)
        expected = (self._config.rows, self._config.cols)
        if shape != expected:
            raise ValueError(f"grid is {shape[0]}x{shape[1]}, config expects {expected[0]}x{expected[1]}")
        return copy_grid(grid)

    def _metrics_from_state(self, tick: int) -> TickMetrics:
        return metrics_system.create_metrics(tick, self._grid, StepLedger(), 0.0)

    def _extinct_species(self, prey: int, predators: int) -> List[CellStatus]:
        extinct = []
        if prey == 0:
            extinct.append(CellStatus.PREY)
        if predators == 0:
            extinct.append(CellStatus.PREDATOR)
        return extinct

    def _report_extinctions(self, tick: int, prey: int, predators: int) -> None:
        extinct = self._extinct_species(prey, predators)
        for status in extinct:
            if status not in self._extinct:
                logger.info("%s population died out at tick %d", status.value, tick)
        self._extinct = extinct

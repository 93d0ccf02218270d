from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pygame
from pygame.math import Vector2

from ..sim.core.cell import Cell, CellStatus
from ..sim.core.config import SimulationConfig
from ..sim.core.hexgrid import count_cells
from ..sim.core.world import World

logger = logging.getLogger(__name__)

BACKGROUND = (24, 24, 24)
CELL_COLORS = {
    CellStatus.DEAD: (58, 58, 58),
    CellStatus.PREY: (95, 191, 95),
    CellStatus.PREDATOR: (217, 83, 79),
}
_SQRT3 = math.sqrt(3.0)


def _polar(length: float, degrees: float) -> Vector2:
    vector = Vector2()
    vector.from_polar((length, degrees))
    return vector


class HexLayout:
    """Pointy-top hexes with odd rows pushed half a cell right, matching the neighbor tables."""

    def __init__(self, radius: float, gap: float = 1.0) -> None:
        self.radius = radius
        self.gap = gap
        self._corner_offsets = [_polar(radius - gap, 60 * i - 30) for i in range(6)]

    @property
    def column_width(self) -> float:
        return _SQRT3 * self.radius

    @property
    def row_height(self) -> float:
        return 1.5 * self.radius

    def center(self, row: int, col: int) -> Vector2:
        x = self.column_width * (col + 0.5 * (row % 2)) + self.column_width / 2
        y = self.row_height * row + self.radius
        return Vector2(x, y)

    def corners(self, row: int, col: int) -> List[Tuple[float, float]]:
        center = self.center(row, col)
        return [(center.x + offset.x, center.y + offset.y) for offset in self._corner_offsets]

    def surface_size(self, rows: int, cols: int) -> Tuple[int, int]:
        width = self.column_width * (cols + 0.5)
        height = self.row_height * (rows - 1) + 2 * self.radius
        return int(math.ceil(width)), int(math.ceil(height))


def draw_grid(surface: pygame.Surface, grid: Sequence[Sequence[Cell]], layout: HexLayout) -> None:
    surface.fill(BACKGROUND)
    for row_index, row in enumerate(grid):
        for col_index, cell in enumerate(row):
            pygame.draw.polygon(surface, CELL_COLORS[cell.status], layout.corners(row_index, col_index))


def _caption(world: World, tick: int, paused: bool) -> str:
    prey, predators, _ = count_cells(world.grid)
    state = " (paused)" if paused else ""
    return f"Hex predator-prey | tick {tick} | prey {prey} | predators {predators}{state}"


def run_viewer(config: SimulationConfig, radius: float = 18.0, max_steps: Optional[int] = None) -> None:
    world = World(config)
    layout = HexLayout(radius)
    tick = 0
    pygame.init()
    try:
        screen = pygame.display.set_mode(layout.surface_size(world.rows, world.cols))
        clock = pygame.time.Clock()
        paused = False
        accumulator = 0.0
        running = True
        while running:
            dt = clock.tick(60) / 1000.0
            single_step = False
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_SPACE:
                        paused = not paused
                    elif event.key == pygame.K_s:
                        single_step = True
                    elif event.key == pygame.K_r:
                        world.reset()
                        tick = 0
                        accumulator = 0.0
                    elif event.key == pygame.K_ESCAPE:
                        running = False

            if not paused:
                accumulator += dt
            if single_step or accumulator >= config.time_step:
                accumulator = 0.0
                if max_steps is None or tick < max_steps:
                    world.step(tick)
                    tick += 1

            draw_grid(screen, world.grid, layout)
            pygame.display.set_caption(_caption(world, tick, paused))
            pygame.display.flip()
    finally:
        pygame.quit()
    logger.info("viewer closed after %d ticks", tick)


def main() -> None:
    parser = argparse.ArgumentParser(description="Interactive hex grid viewer")
    parser.add_argument("--config", type=Path, default=None, help="YAML configuration file")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--radius", type=float, default=18.0, help="Hex radius in pixels")
    parser.add_argument("--steps", type=int, default=None, help="Stop advancing after this many steps")
    args = parser.parse_args()
    config = SimulationConfig.from_yaml(args.config) if args.config else SimulationConfig()
    if args.seed is not None:
        config.seed = args.seed
    run_viewer(config, radius=args.radius, max_steps=args.steps)


if __name__ == "__main__":
    main()

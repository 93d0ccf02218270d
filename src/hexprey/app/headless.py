from __future__ import annotations

import argparse
import csv
import json
import logging
import math
import sys
from pathlib import Path
from typing import Optional, TextIO

from ..sim.core.config import SimulationConfig
from ..sim.core.world import World
from ..sim.systems.render import render_text
from ..sim.types.metrics import TickMetrics

logger = logging.getLogger(__name__)


_BASIC_HEADER = [
    "tick",
    "prey",
    "predators",
    "prey_births",
    "predator_births",
    "starvations",
    "tick_ms",
]

_DETAILED_HEADER = [
    "tick",
    "prey",
    "predators",
    "empty",
    "prey_births",
    "predator_births",
    "starvations",
    "kills",
    "avg_predator_energy",
    "tick_ms",
    "occupancy",
    "prey_ratio",
    "prey_birth_rate",
    "predator_birth_rate",
    "starvation_rate",
    "kills_per_predator",
]


def _format_basic_row(metrics: TickMetrics, tick_ms: float) -> list[object]:
    return [
        metrics.tick,
        metrics.prey,
        metrics.predators,
        metrics.prey_births,
        metrics.predator_births,
        metrics.starvations,
        f"{tick_ms:.3f}",
    ]


def _format_detailed_row(metrics: TickMetrics, tick_ms: float) -> list[object]:
    population = metrics.population
    cells = population + metrics.empty
    occupancy = population / cells if cells > 0 else 0.0
    if population <= 0:
        prey_ratio = 0.0
    else:
        prey_ratio = metrics.prey / population
    prey_birth_rate = metrics.prey_births / metrics.prey if metrics.prey > 0 else 0.0
    if metrics.predators > 0:
        predator_birth_rate = metrics.predator_births / metrics.predators
        starvation_rate = metrics.starvations / metrics.predators
        kills_per_predator = metrics.kills / metrics.predators
    else:
        predator_birth_rate = 0.0
        starvation_rate = 0.0
        kills_per_predator = 0.0

    return [
        metrics.tick,
        metrics.prey,
        metrics.predators,
        metrics.empty,
        metrics.prey_births,
        metrics.predator_births,
        metrics.starvations,
        metrics.kills,
        f"{metrics.average_predator_energy:.4f}",
        f"{tick_ms:.3f}",
        f"{occupancy:.4f}",
        f"{prey_ratio:.4f}",
        f"{prey_birth_rate:.4f}",
        f"{predator_birth_rate:.4f}",
        f"{starvation_rate:.4f}",
        f"{kills_per_predator:.4f}",
    ]


def _percentile(sorted_values: list[float], percentile: float) -> float:
    if not sorted_values:
        return 0.0
    if len(sorted_values) == 1:
        return float(sorted_values[0])
    pos = (len(sorted_values) - 1) * percentile
    low = int(math.floor(pos))
    high = int(math.ceil(pos))
    if low == high:
        return float(sorted_values[low])
    weight = pos - low
    return float(sorted_values[low] + (sorted_values[high] - sorted_values[low]) * weight)


def _summary_stats(values: list[float]) -> dict[str, float]:
    if not values:
        return {"min": 0.0, "max": 0.0, "avg": 0.0, "p50": 0.0, "p90": 0.0}
    sorted_values = sorted(values)
    return {
        "min": float(sorted_values[0]),
        "max": float(sorted_values[-1]),
        "avg": float(sum(values) / len(values)),
        "p50": _percentile(sorted_values, 0.50),
        "p90": _percentile(sorted_values, 0.90),
    }


def _correlation(xs: list[float], ys: list[float]) -> float:
    if len(xs) != len(ys) or len(xs) < 2:
        return 0.0
    mean_x = sum(xs) / len(xs)
    mean_y = sum(ys) / len(ys)
    num = 0.0
    denom_x = 0.0
    denom_y = 0.0
    for x, y in zip(xs, ys):
        dx = x - mean_x
        dy = y - mean_y
        num += dx * dy
        denom_x += dx * dx
        denom_y += dy * dy
    denom = math.sqrt(denom_x * denom_y)
    if denom == 0.0:
        return 0.0
    return float(num / denom)


def _first_tick(series: list[int], ticks: list[int]) -> Optional[int]:
    for value, tick in zip(series, ticks):
        if value == 0:
            return tick
    return None


def run_headless(
    steps: Optional[int],
    seed: Optional[int],
    log_path: Optional[Path],
    deterministic_log: bool = False,
    log_format: str = "detailed",
    summary_path: Optional[Path] = None,
    summary_window: int = 50,
    config_path: Optional[Path] = None,
    render: bool = False,
    out: Optional[TextIO] = None,
) -> World:
    config = SimulationConfig.from_yaml(config_path) if config_path else SimulationConfig()
    if seed is not None:
        config.seed = seed
    if steps is None:
        steps = config.steps
    world = World(config)

    log_mode = log_format.lower().strip()
    if log_mode not in {"basic", "detailed"}:
        raise ValueError(f"Unknown log format: {log_format}")

    stream = sys.stdout if out is None else out
    writer = None
    csv_file = None
    if log_path:
        csv_file = Path(log_path).open("w", newline="")
        writer = csv.writer(csv_file)
        writer.writerow(_DETAILED_HEADER if log_mode == "detailed" else _BASIC_HEADER)

    logger.info("running %d steps on a %dx%d grid (seed %d)", steps, config.rows, config.cols, config.seed)
    ticks: list[int] = []
    tick_ms_series: list[float] = []
    prey_series: list[int] = []
    predator_series: list[int] = []
    peak_prey = (-1, -1)
    peak_predators = (-1, -1)

    try:
        for tick in range(steps):
            if render:
                stream.write(f"Step {tick + 1}:\n")
                stream.write(render_text(world.grid))
                stream.write("\n")
            metrics = world.step(tick)
            tick_ms = 0.0 if deterministic_log else metrics.tick_duration_ms

            if summary_path:
                ticks.append(tick)
                tick_ms_series.append(tick_ms)
                prey_series.append(metrics.prey)
                predator_series.append(metrics.predators)
                if metrics.prey > peak_prey[0]:
                    peak_prey = (metrics.prey, tick)
                if metrics.predators > peak_predators[0]:
                    peak_predators = (metrics.predators, tick)

            if writer:
                if log_mode == "detailed":
                    writer.writerow(_format_detailed_row(metrics, tick_ms))
                else:
                    writer.writerow(_format_basic_row(metrics, tick_ms))
    finally:
        if csv_file:
            csv_file.close()

    if summary_path:
        window = max(1, int(summary_window))
        tail_slice = slice(max(0, len(ticks) - window), len(ticks))
        summary = {
            "steps": steps,
            "seed": config.seed,
            "rows": config.rows,
            "cols": config.cols,
            "log_format": log_mode,
            "deterministic_log": deterministic_log,
            "tick_ms": _summary_stats(tick_ms_series),
            "prey": _summary_stats([float(v) for v in prey_series]),
            "predators": _summary_stats([float(v) for v in predator_series]),
            "correlations": {
                "prey_vs_predators": _correlation(
                    [float(v) for v in prey_series], [float(v) for v in predator_series]
                ),
            },
            "peaks": {
                "prey": {"value": peak_prey[0], "tick": peak_prey[1]},
                "predators": {"value": peak_predators[0], "tick": peak_predators[1]},
            },
            "extinction": {
                "prey": _first_tick(prey_series, ticks),
                "predators": _first_tick(predator_series, ticks),
            },
            "tail_window": {
                "window": window,
                "prey": _summary_stats([float(v) for v in prey_series[tail_slice]]),
                "predators": _summary_stats([float(v) for v in predator_series[tail_slice]]),
            },
        }
        Path(summary_path).write_text(json.dumps(summary, indent=2))
    return world


def main() -> None:
    parser = argparse.ArgumentParser(description="Headless predator-prey hex grid simulation")
    parser.add_argument("--steps", type=int, default=None, help="Number of steps (defaults to the config value).")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--config", type=Path, default=None, help="YAML configuration file")
    parser.add_argument("--log", type=Path, default=None, help="CSV file to write metrics")
    parser.add_argument(
        "--log-format",
        choices=["basic", "detailed"],
        default="detailed",
        help="CSV format to write when --log is provided.",
    )
    parser.add_argument(
        "--summary",
        type=Path,
        default=None,
        help="Optional JSON file to write summary stats for the run.",
    )
    parser.add_argument(
        "--summary-window",
        type=int,
        default=50,
        help="Tail window size (ticks) for summary stats.",
    )
    parser.add_argument(
        "--deterministic-log",
        action="store_true",
        help="Write deterministic CSV (tick_ms is forced to 0.000 so identical seeds match).",
    )
    parser.add_argument("--render", action="store_true", help="Print the grid before every step.")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level (DEBUG, INFO, ...).")
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    run_headless(
        args.steps,
        args.seed,
        args.log,
        deterministic_log=args.deterministic_log,
        log_format=args.log_format,
        summary_path=args.summary,
        summary_window=args.summary_window,
        config_path=args.config,
        render=args.render,
    )


if __name__ == "__main__":
    main()

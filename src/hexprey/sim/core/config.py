from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path

import yaml


@dataclass
class PreyConfig:
    reproduction_cooldown: int = 2

    def __post_init__(self) -> None:
        if self.reproduction_cooldown < 0:
            raise ValueError(f"prey.reproduction_cooldown must be >= 0, got {self.reproduction_cooldown}")


@dataclass
class PredatorConfig:
    initial_energy: int = 5
    move_cost: int = 1
    prey_energy: int = 5
    reproduction_threshold: int = 5
    reproduction_cost: int = 3
    offspring_energy: int = 5

    def __post_init__(self) -> None:
        for name in ("initial_energy", "move_cost", "prey_energy", "reproduction_cost", "offspring_energy"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"predator.{name} must be >= 0, got {value}")


@dataclass
class SimulationConfig:
    rows: int = 10
    cols: int = 10
    initial_prey: int = 10
    initial_predators: int = 6
    steps: int = 20
    seed: int = 42
    # Seconds between steps for the server loop and the viewer.
    time_step: float = 0.25
    config_version: str = "v1"
    prey: PreyConfig = field(default_factory=PreyConfig)
    predator: PredatorConfig = field(default_factory=PredatorConfig)

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise ValueError(f"grid must be at least 1x1, got {self.rows}x{self.cols}")
        if self.initial_prey < 0 or self.initial_predators < 0:
            raise ValueError("initial populations must be >= 0")
        if self.steps < 0:
            raise ValueError(f"steps must be >= 0, got {self.steps}")
        if self.time_step <= 0:
            raise ValueError(f"time_step must be > 0, got {self.time_step}")

    @staticmethod
    def from_yaml(path: Path) -> "SimulationConfig":
        data = yaml.safe_load(Path(path).read_text())
        return load_config(data or {})


def load_config(raw: dict) -> SimulationConfig:
    prey = PreyConfig(**raw.get("prey", {}))
    predator = PredatorConfig(**raw.get("predator", {}))
    sim_values = {k: v for k, v in raw.items() if k not in {"prey", "predator"}}
    return SimulationConfig(prey=prey, predator=predator, **sim_values)


def dump_config(config: SimulationConfig) -> str:
    return yaml.safe_dump(asdict(config), sort_keys=False)

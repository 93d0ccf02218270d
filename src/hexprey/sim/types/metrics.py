from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class TickMetrics:
    tick: int
    prey: int
    predators: int
    empty: int
    prey_births: int
    predator_births: int
    starvations: int
    kills: int
    average_predator_energy: float
    tick_duration_ms: float = 0.0

    @property
    def population(self) -> int:
        return self.prey + self.predators

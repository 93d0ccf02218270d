from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

Coord = Tuple[int, int]


@dataclass(slots=True)
class StepLedger:
    """Scratch record for one step, shared by both rule phases."""

    prey_births: int = 0
    predator_births: int = 0
    starvations: int = 0
    kills: int = 0
    # Predator origin -> destination for every predator that has acted this step.
    moves: Dict[Coord, Coord] = field(default_factory=dict)
    # Reproduction energy owed by predators that have not acted yet, keyed by origin.
    pending_charges: Dict[Coord, int] = field(default_factory=dict)

    def clear(self) -> None:
        self.prey_births = 0
        self.predator_births = 0
        self.starvations = 0
        self.kills = 0
        self.moves.clear()
        self.pending_charges.clear()

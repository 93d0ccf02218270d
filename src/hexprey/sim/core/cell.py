from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CellStatus(str, Enum):
    DEAD = "Dead"
    PREY = "Prey"
    PREDATOR = "Predator"


_SYMBOLS = {
    CellStatus.DEAD: "-",
    CellStatus.PREY: "P",
    CellStatus.PREDATOR: "X",
}


@dataclass(frozen=True, slots=True)
class Cell:
    """One grid slot. ``energy`` only matters for predators and
    ``reproduction_cooldown`` only for prey; both stay zero otherwise."""

    status: CellStatus = CellStatus.DEAD
    energy: int = 0
    reproduction_cooldown: int = 0

    @classmethod
    def prey(cls, cooldown: int = 0) -> "Cell":
        return cls(CellStatus.PREY, 0, cooldown)

    @classmethod
    def predator(cls, energy: int) -> "Cell":
        return cls(CellStatus.PREDATOR, energy, 0)

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self.status]

    @property
    def is_dead(self) -> bool:
        return self.status is CellStatus.DEAD


DEAD = Cell()

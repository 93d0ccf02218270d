from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .metrics import TickMetrics


@dataclass(slots=True)
class Snapshot:
    tick: int
    metrics: TickMetrics
    grid: "SnapshotGrid"
    metadata: "SnapshotMetadata"


@dataclass(slots=True)
class SnapshotGrid:
    rows: int
    cols: int
    # One string of cell symbols per row, no separators.
    cells: List[str]
    # Predator energy per cell, 0 elsewhere.
    energy: List[List[int]]


@dataclass(slots=True)
class SnapshotMetadata:
    rows: int
    cols: int
    seed: int
    time_step: float
    config_version: str

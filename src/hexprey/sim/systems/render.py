from __future__ import annotations

from typing import Sequence

from ..core.cell import Cell


def render_rows(grid: Sequence[Sequence[Cell]]) -> list[str]:
    """One line per grid row; odd rows are shifted right by one space to show the hex offset."""
    lines = []
    for index, row in enumerate(grid):
        line = " ".join(cell.symbol for cell in row)
        lines.append(" " + line if index % 2 else line)
    return lines


def render_text(grid: Sequence[Sequence[Cell]]) -> str:
    return "\n".join(render_rows(grid)) + "\n"

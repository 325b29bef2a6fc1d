"""Column-major grid layout and rich text composition for frames."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from rich.text import Text

from .interfaces import CandidateView

FOCUS_MARKER = "➤ "
ROW_INDENT = "   "
MATCH_STYLE = "green"
MISMATCH_STYLE = "red"
LABEL_STYLE = "bold cyan"
SUMMARY_STYLE = "bold yellow"


@dataclass(frozen=True)
class GridLayout:
    population_size: int
    columns: int
    column_width: int

    @property
    def rows(self) -> int:
        return math.ceil(self.population_size / self.columns)

    @property
    def total_width(self) -> int:
        return self.column_width * self.columns

    def grid(self) -> List[List[Optional[int]]]:
        """Population indices per display row; the first column walks indices at stride ``rows``."""

        rows = self.rows
        grid: List[List[Optional[int]]] = []
        for row in range(rows):
            cells: List[Optional[int]] = []
            for column in range(self.columns):
                idx = column * rows + row
                cells.append(idx if idx < self.population_size else None)
            grid.append(cells)
        return grid


def cell_text(view: CandidateView, target: str, column_width: int) -> Text:
    text = Text(FOCUS_MARKER if view.focus else "  ")
    if not view.visible:
        text.append(" " * len(view.genome))
    elif view.reveal_fitness:
        for char, wanted in zip(view.genome, target):
            text.append(char, style=MATCH_STYLE if char == wanted else MISMATCH_STYLE)
    else:
        text.append(view.genome)
    padding = column_width - text.cell_len
    if padding > 0:
        text.append(" " * padding)
    return text


def frame_text(snapshot: Sequence[CandidateView], label: str, layout: GridLayout, target: str) -> Text:
    text = Text("\n\n")
    text.append(label.center(layout.total_width), style=LABEL_STYLE)
    text.append("\n\n")
    for row in layout.grid():
        text.append(ROW_INDENT)
        for idx in row:
            if idx is None or idx >= len(snapshot):
                text.append(" " * layout.column_width)
            else:
                text.append_text(cell_text(snapshot[idx], target, layout.column_width))
        text.append("\n")
    return text


def summary_text(best_genome: str, iteration_count: int, layout: GridLayout) -> Text:
    line = Text("Result: ", style=SUMMARY_STYLE)
    line.append(best_genome, style="bold green")
    line.append("   Iterations: ", style=SUMMARY_STYLE)
    line.append(str(iteration_count), style="bold white")
    pad = max(0, (layout.total_width - line.cell_len) // 2)
    text = Text("\n")
    text.append(" " * pad)
    text.append_text(line)
    text.append("\n")
    return text


__all__ = ["GridLayout", "cell_text", "frame_text", "summary_text"]

from __future__ import annotations

import time
from typing import Optional, Sequence

from rich.console import Console

from ..config import SimulationConfig
from .interfaces import CandidateView, RenderPortProtocol
from .layout import GridLayout, frame_text, summary_text


class TerminalRenderer(RenderPortProtocol):
    """Draws each frame on a cleared terminal screen."""

    def __init__(self, config: SimulationConfig, console: Optional[Console] = None) -> None:
        self.console = console or Console(highlight=False)
        self.target = config.target
        self.layout = GridLayout(config.population_size, config.display_columns, config.column_width)

    def render_frame(self, snapshot: Sequence[CandidateView], label: str) -> None:
        self.console.clear()
        self.console.print(frame_text(snapshot, label, self.layout, self.target), end="")

    def render_summary(self, best_genome: str, iteration_count: int) -> None:
        self.console.print(summary_text(best_genome, iteration_count, self.layout))

    def delay(self, seconds: float) -> None:
        time.sleep(seconds)


__all__ = ["TerminalRenderer"]

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from rich.console import Console

from ..config import SimulationConfig
from .interfaces import CandidateView, RenderPortProtocol
from .layout import GridLayout, summary_text


class HeadlessRenderer(RenderPortProtocol):
    """Counts frames without drawing them and never sleeps; prints only the summary."""

    def __init__(self, config: SimulationConfig, console: Optional[Console] = None) -> None:
        self.console = console
        self.layout = GridLayout(config.population_size, config.display_columns, config.column_width)
        self.frame_count = 0
        self.requested_delay = 0.0

    def render_frame(self, snapshot: Sequence[CandidateView], label: str) -> None:
        self.frame_count += 1

    def render_summary(self, best_genome: str, iteration_count: int) -> None:
        if self.console is not None:
            self.console.print(summary_text(best_genome, iteration_count, self.layout))

    def delay(self, seconds: float) -> None:
        self.requested_delay += seconds


@dataclass(frozen=True)
class RecordedFrame:
    snapshot: Tuple[CandidateView, ...]
    label: str


class RecordingRenderer(HeadlessRenderer):
    """Keeps every call for later inspection."""

    def __init__(self, config: SimulationConfig, console: Optional[Console] = None) -> None:
        super().__init__(config, console)
        self.frames: List[RecordedFrame] = []
        self.summaries: List[Tuple[str, int]] = []
        self.delays: List[float] = []

    def render_frame(self, snapshot: Sequence[CandidateView], label: str) -> None:
        super().render_frame(snapshot, label)
        self.frames.append(RecordedFrame(tuple(snapshot), label))

    def render_summary(self, best_genome: str, iteration_count: int) -> None:
        super().render_summary(best_genome, iteration_count)
        self.summaries.append((best_genome, iteration_count))

    def delay(self, seconds: float) -> None:
        super().delay(seconds)
        self.delays.append(seconds)

    def labels(self) -> List[str]:
        return [frame.label for frame in self.frames]


__all__ = ["HeadlessRenderer", "RecordedFrame", "RecordingRenderer"]

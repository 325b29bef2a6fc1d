from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence


@dataclass(frozen=True)
class CandidateView:
    """What a renderer sees of one candidate: domain state plus presentation flags."""

    genome: str
    fitness: int
    focus: bool = False
    visible: bool = False
    reveal_fitness: bool = False


class RenderPortProtocol(Protocol):
    def render_frame(self, snapshot: Sequence[CandidateView], label: str) -> None:
        """Draw one frame of the population under a phase label."""

    def render_summary(self, best_genome: str, iteration_count: int) -> None:
        """Draw the closing summary once the target has been reached."""

    def delay(self, seconds: float) -> None:
        """Block for ``seconds`` to pace the animation."""


__all__ = ["CandidateView", "RenderPortProtocol"]

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..ga.population import Population
from ..render.interfaces import CandidateView


@dataclass
class PresentationFlags:
    focus: bool = False
    visible: bool = False
    reveal_fitness: bool = False


class PresentationState:
    """Per-slot presentation flags, kept apart from the genetic state.

    Slots are addressed by population index; when the population swaps two
    candidates the caller swaps their flags too so they travel with the
    candidate.
    """

    def __init__(self, size: int = 0) -> None:
        self._flags: List[PresentationFlags] = [PresentationFlags() for _ in range(size)]

    def __len__(self) -> int:
        return len(self._flags)

    def __getitem__(self, index: int) -> PresentationFlags:
        return self._flags[index]

    def resize(self, size: int) -> None:
        while len(self._flags) < size:
            self._flags.append(PresentationFlags())
        del self._flags[size:]

    def focus(self, *indices: int) -> None:
        for idx in indices:
            self._flags[idx].focus = True

    def unfocus(self, *indices: int) -> None:
        for idx in indices:
            self._flags[idx].focus = False

    def clear_focus(self) -> None:
        for flags in self._flags:
            flags.focus = False

    def show(self, index: int) -> None:
        self._flags[index].visible = True

    def hide(self, index: int) -> None:
        self._flags[index].visible = False

    def reveal(self, index: int) -> None:
        self._flags[index].reveal_fitness = True

    def reset(self, index: int, *, visible: bool = False, focus: bool = False) -> None:
        self._flags[index] = PresentationFlags(focus=focus, visible=visible)

    def swap(self, i: int, j: int) -> None:
        self._flags[i], self._flags[j] = self._flags[j], self._flags[i]


def compose_snapshot(population: Population, presentation: PresentationState) -> tuple[CandidateView, ...]:
    """Join genetic and presentation state at the render boundary."""

    views = []
    for idx, candidate in enumerate(population):
        flags = presentation[idx]
        views.append(
            CandidateView(
                genome=candidate.genome,
                fitness=candidate.fitness,
                focus=flags.focus,
                visible=flags.visible,
                reveal_fitness=flags.reveal_fitness and candidate.is_scored,
            )
        )
    return tuple(views)


__all__ = ["PresentationFlags", "PresentationState", "compose_snapshot"]

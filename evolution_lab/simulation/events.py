from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from ..render.interfaces import CandidateView


class DelayKind(Enum):
    ACTION = "action"
    PHASE = "phase"


@dataclass(frozen=True)
class FrameEvent:
    snapshot: Tuple[CandidateView, ...]
    label: str


@dataclass(frozen=True)
class DelayEvent:
    kind: DelayKind


@dataclass(frozen=True)
class SummaryEvent:
    best_genome: str
    iteration_count: int


RenderEvent = Union[FrameEvent, DelayEvent, SummaryEvent]


__all__ = ["DelayEvent", "DelayKind", "FrameEvent", "RenderEvent", "SummaryEvent"]

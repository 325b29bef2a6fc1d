"""Phase state machine, presentation state and the event runner."""

from .events import DelayEvent, DelayKind, FrameEvent, RenderEvent, SummaryEvent
from .machine import PhaseMachine, PhaseStep, SimulationState, transition
from .phases import Phase
from .presentation import PresentationFlags, PresentationState, compose_snapshot
from .runner import RunResult, SimulationRunner

__all__ = [
    "DelayEvent",
    "DelayKind",
    "FrameEvent",
    "Phase",
    "PhaseMachine",
    "PhaseStep",
    "PresentationFlags",
    "PresentationState",
    "RenderEvent",
    "RunResult",
    "SimulationRunner",
    "SimulationState",
    "SummaryEvent",
    "compose_snapshot",
    "transition",
]

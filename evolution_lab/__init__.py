from __future__ import annotations

"""Animated genetic-algorithm demonstrator evolving random strings toward a target."""

from importlib import import_module
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - type checking helper
    from .config import SimulationConfig, load_config
    from .simulation import PhaseMachine, SimulationRunner

__version__ = "0.1.0"

__all__ = ["PhaseMachine", "SimulationConfig", "SimulationRunner", "load_config"]


def __getattr__(name: str) -> Any:  # pragma: no cover - dispatch helper
    if name in {"SimulationConfig", "load_config"}:
        module = import_module(".config", __name__)
    elif name in {"PhaseMachine", "SimulationRunner"}:
        module = import_module(".simulation", __name__)
    else:
        raise AttributeError(name)

    value = getattr(module, name)
    globals()[name] = value
    return value

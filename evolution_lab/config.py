from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigurationError

LOGGER = logging.getLogger("evolution.config")

DEFAULT_ALPHABET = "abcdefghijklmnopqrstuvwxyz "
COLUMN_MARGIN = 8
_LOG_LEVELS = {"DEBUG", "INFO", "WARN", "ERROR"}


@dataclass(frozen=True)
class TimingConfig:
    """Animation pacing. Zero delays give a headless run."""

    action_delay: float = 0.01
    phase_delay: float = 0.1
    swap_frame_stride: int = 5

    def __post_init__(self) -> None:
        if self.action_delay < 0 or self.phase_delay < 0:
            raise ConfigurationError("delays must be non-negative")
        if self.swap_frame_stride < 1:
            raise ConfigurationError("swap_frame_stride must be at least 1")

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> "TimingConfig":
        if not raw:
            return cls()
        if not isinstance(raw, Mapping):
            raise ConfigurationError("timing must be a mapping")
        return cls(
            action_delay=float(raw.get("action_delay", 0.01)),
            phase_delay=float(raw.get("phase_delay", 0.1)),
            swap_frame_stride=int(raw.get("swap_frame_stride", 5)),
        )

    @classmethod
    def instant(cls) -> "TimingConfig":
        return cls(action_delay=0.0, phase_delay=0.0)


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "WARN"
    logfile: Optional[Path] = None

    def __post_init__(self) -> None:
        level = str(self.level).upper().strip()
        if level == "WARNING":
            level = "WARN"
        if level not in _LOG_LEVELS:
            raise ConfigurationError(f"unknown log level {self.level!r}")
        object.__setattr__(self, "level", level)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> "LoggingConfig":
        if not raw:
            return cls()
        if not isinstance(raw, Mapping):
            raise ConfigurationError("logging must be a mapping")
        logfile = raw.get("logfile")
        return cls(
            level=str(raw.get("level", "WARN")),
            logfile=Path(str(logfile)) if logfile not in (None, "", False) else None,
        )


@dataclass(frozen=True)
class SimulationConfig:
    """The run parameters of one simulation.

    ``target``, ``population_size``, ``survivors_kept``, ``display_columns`` and
    ``mutation_probability`` shape the evolution itself; the remaining fields
    control the random source, pacing and logging.
    """

    target: str = "hey"
    population_size: int = 60
    survivors_kept: int = 8
    display_columns: int = 5
    mutation_probability: float = 0.20
    alphabet: str = DEFAULT_ALPHABET
    seed: Optional[int] = None
    timing: TimingConfig = field(default_factory=TimingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self) -> None:
        if not self.target:
            raise ConfigurationError("target must be a non-empty string")
        if not self.alphabet:
            raise ConfigurationError("alphabet must not be empty")
        if len(set(self.alphabet)) != len(self.alphabet):
            raise ConfigurationError("alphabet must not repeat symbols")
        missing = sorted(set(self.target) - set(self.alphabet))
        if missing:
            raise ConfigurationError(
                f"target uses symbols outside the alphabet: {''.join(missing)!r}"
            )
        if self.population_size <= 0:
            raise ConfigurationError("population_size must be positive")
        if not 0 < self.survivors_kept < self.population_size:
            raise ConfigurationError(
                f"survivors_kept must be in (0, {self.population_size}), got {self.survivors_kept}"
            )
        if self.display_columns <= 0:
            raise ConfigurationError("display_columns must be positive")
        if not 0.0 <= self.mutation_probability <= 1.0:
            raise ConfigurationError(
                f"mutation_probability must be in [0, 1], got {self.mutation_probability}"
            )
        if self.population_size % self.display_columns:
            LOGGER.warning(
                "display_columns=%d does not divide population_size=%d; last column will be short",
                self.display_columns,
                self.population_size,
            )

    @property
    def column_width(self) -> int:
        return len(self.target) + COLUMN_MARGIN

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "SimulationConfig":
        sim = _mapping_merge(raw, raw.get("simulation"))
        seed = sim.get("seed")
        try:
            return cls(
                target=str(sim.get("target", "hey")),
                population_size=int(sim.get("population_size", sim.get("population", 60))),
                survivors_kept=int(sim.get("survivors_kept", sim.get("keep", 8))),
                display_columns=int(sim.get("display_columns", sim.get("columns", 5))),
                mutation_probability=float(
                    sim.get("mutation_probability", sim.get("mutation", 0.20))
                ),
                alphabet=str(sim.get("alphabet", DEFAULT_ALPHABET)),
                seed=int(seed) if seed is not None else None,
                timing=TimingConfig.from_mapping(raw.get("timing")),
                logging=LoggingConfig.from_mapping(raw.get("logging")),
            )
        except ConfigurationError:
            raise
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"invalid configuration value: {exc}") from exc

    def apply_overrides(
        self,
        *,
        target: Optional[str] = None,
        population_size: Optional[int] = None,
        survivors_kept: Optional[int] = None,
        display_columns: Optional[int] = None,
        mutation_probability: Optional[float] = None,
        seed: Optional[int] = None,
        action_delay: Optional[float] = None,
        phase_delay: Optional[float] = None,
        log_level: Optional[str] = None,
        logfile: Optional[Path] = None,
    ) -> "SimulationConfig":
        changes: Dict[str, Any] = {}
        if target is not None:
            changes["target"] = target
        if population_size is not None:
            changes["population_size"] = int(population_size)
        if survivors_kept is not None:
            changes["survivors_kept"] = int(survivors_kept)
        if display_columns is not None:
            changes["display_columns"] = int(display_columns)
        if mutation_probability is not None:
            changes["mutation_probability"] = float(mutation_probability)
        if seed is not None:
            changes["seed"] = int(seed)
        timing_changes: Dict[str, Any] = {}
        if action_delay is not None:
            timing_changes["action_delay"] = float(action_delay)
        if phase_delay is not None:
            timing_changes["phase_delay"] = float(phase_delay)
        if timing_changes:
            changes["timing"] = replace(self.timing, **timing_changes)
        logging_changes: Dict[str, Any] = {}
        if log_level is not None:
            logging_changes["level"] = log_level
        if logfile is not None:
            logging_changes["logfile"] = logfile
        if logging_changes:
            changes["logging"] = replace(self.logging, **logging_changes)
        return replace(self, **changes) if changes else self


def load_config(path: Path) -> SimulationConfig:
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (ValueError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"cannot parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must contain a mapping at the top level")
    return SimulationConfig.from_dict(data)


def _mapping_merge(parent: Mapping[str, Any], child: Any) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    if isinstance(parent, Mapping):
        result.update(parent)
    if isinstance(child, Mapping):
        result.update(child)
    return result


__all__ = [
    "COLUMN_MARGIN",
    "DEFAULT_ALPHABET",
    "LoggingConfig",
    "SimulationConfig",
    "TimingConfig",
    "load_config",
]

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional, TextIO, TypeVar, Union

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

T = TypeVar("T")

_LOG_LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}
_STYLES = {
    "DEBUG": "dim",
    "INFO": "white",
    "WARN": "yellow",
    "ERROR": "red",
}


def _normalize_level(level: str) -> str:
    level = level.upper().strip()
    return "WARN" if level == "WARNING" else level


def _should_emit(configured: str, requested: str) -> bool:
    return _LOG_LEVELS.get(requested, 100) >= _LOG_LEVELS.get(configured, 20)


def _format_fields(fields: Dict[str, Any]) -> str:
    return "".join(f" {key}={value}" for key, value in fields.items() if value is not None)


@dataclass(slots=True)
class RunLogger:
    """Run-level log lines: rich console output plus an optional plain logfile.

    Fields bound with :meth:`bind` (the current phase and iteration while a run
    is replayed) are appended as ``key=value`` pairs to every line until they
    are unbound.
    """

    console: Optional[Console]
    level: str = "INFO"
    logfile: Optional[Path] = None
    context: Dict[str, Any] = field(default_factory=dict)
    _plain_file: Optional[TextIO] = field(init=False, repr=False, default=None)

    def __post_init__(self) -> None:
        self.level = _normalize_level(self.level)
        if self.logfile:
            self.logfile.parent.mkdir(parents=True, exist_ok=True)
            self._plain_file = self.logfile.open("a", encoding="utf-8")

    def close(self) -> None:
        if self._plain_file:
            self._plain_file.close()
            self._plain_file = None

    def bind(self, **fields: Any) -> None:
        self.context.update(fields)

    def unbind(self, *keys: str) -> None:
        for key in keys:
            self.context.pop(key, None)

    def log(
        self,
        step: str,
        message: str,
        level: str = "INFO",
        elapsed_ms: Optional[float] = None,
        **fields: Any,
    ) -> None:
        level = _normalize_level(level)
        if not _should_emit(self.level, level):
            return
        now = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        suffix = f" (ms={elapsed_ms:.0f})" if elapsed_ms is not None else ""
        extra = _format_fields({**self.context, **fields})
        line = f"[{now}] [{level.ljust(5)}] [{step.upper().ljust(7)}] {message}{extra}{suffix}"
        if self.console is not None:
            self.console.print(line, style=_STYLES.get(level, "white"), markup=False, highlight=False, soft_wrap=True)
        if self._plain_file:
            self._plain_file.write(line + "\n")
            self._plain_file.flush()

    def timed(
        self,
        step: str,
        message: Union[str, Callable[[T], str]],
        func: Callable[..., T],
        *args,
        level: str = "INFO",
        **kwargs,
    ) -> T:
        start = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            elapsed = (time.perf_counter() - start) * 1000.0
            self.log(step, f"error: {exc}", level="ERROR", elapsed_ms=elapsed)
            raise
        elapsed = (time.perf_counter() - start) * 1000.0
        msg = message(result) if callable(message) else message
        self.log(step, msg, level=level, elapsed_ms=elapsed)
        return result


def create_logger(level: str, logfile: Optional[Path], console: Optional[Console] = None) -> RunLogger:
    if console is None:
        console = Console(stderr=True, theme=Theme({"repr.number": "cyan"}))
    return RunLogger(console=console, level=level, logfile=logfile)


def configure_logging(level: str, console: Optional[Console] = None) -> None:
    """Route the ``evolution.*`` module loggers through rich on stderr."""

    level = _normalize_level(level)
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        log_time_format="%H:%M:%S",
    )
    logging.basicConfig(
        level=_LOG_LEVELS.get(level, logging.WARNING),
        format="%(name)s - %(message)s",
        handlers=[handler],
        force=True,
    )


__all__ = ["RunLogger", "configure_logging", "create_logger"]

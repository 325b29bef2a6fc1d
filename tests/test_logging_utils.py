from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from evolution_lab.logging_utils import RunLogger, create_logger


def test_log_lines_are_filtered_by_level(tmp_path: Path) -> None:
    buffer = io.StringIO()
    console = Console(file=buffer, force_terminal=False, width=200)
    logfile = tmp_path / "logs" / "run.log"
    logger = RunLogger(console=console, level="warn", logfile=logfile)
    try:
        logger.log("boot", "hidden")
        logger.log("phase", "shown", level="WARN")
        logger.log("abort", "broken", level="ERROR")
    finally:
        logger.close()

    output = buffer.getvalue()
    assert "hidden" not in output
    assert "[WARN ] [PHASE  ] shown" in output
    lines = logfile.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert lines[1].endswith("[ERROR] [ABORT  ] broken")


def test_timed_logs_elapsed_time_and_returns_result(tmp_path: Path) -> None:
    logfile = tmp_path / "run.log"
    logger = create_logger("INFO", logfile, Console(file=io.StringIO()))
    try:
        result = logger.timed("phase", lambda value: f"value={value}", lambda: 42)
    finally:
        logger.close()
    assert result == 42
    line = logfile.read_text(encoding="utf-8").strip()
    assert "value=42" in line
    assert "(ms=" in line


def test_timed_reports_and_reraises_errors(tmp_path: Path) -> None:
    logfile = tmp_path / "run.log"
    logger = RunLogger(console=None, level="INFO", logfile=logfile)

    def explode() -> None:
        raise RuntimeError("boom")

    try:
        with pytest.raises(RuntimeError):
            logger.timed("phase", "never", explode)
    finally:
        logger.close()
    line = logfile.read_text(encoding="utf-8").strip()
    assert "[ERROR]" in line
    assert "error: boom" in line


def test_bound_fields_are_appended_until_unbound(tmp_path: Path) -> None:
    logfile = tmp_path / "run.log"
    logger = RunLogger(console=None, level="INFO", logfile=logfile)
    try:
        logger.bind(phase="compute_fitness", iteration=3)
        logger.log("phase", "frames=4", elapsed_ms=2.0)
        logger.log("done", "best='hey'", iterations=3, note=None)
        logger.unbind("phase", "iteration")
        logger.log("done", "plain")
    finally:
        logger.close()
    lines = logfile.read_text(encoding="utf-8").splitlines()
    assert lines[0].endswith("frames=4 phase=compute_fitness iteration=3 (ms=2)")
    assert lines[1].endswith("best='hey' phase=compute_fitness iteration=3 iterations=3")
    assert lines[2].endswith("[DONE   ] plain")

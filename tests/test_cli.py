from __future__ import annotations

import json
from pathlib import Path

import pytest

from evolution_lab import cli


def test_headless_run_prints_the_result(capsys: pytest.CaptureFixture[str]) -> None:
    code = cli.main(
        ["--headless", "--seed", "3", "--target", "hi", "--pop", "20", "--keep", "4", "--columns", "4", "--mut", "0.2"]
    )
    captured = capsys.readouterr()
    assert code == 0
    assert "Result: hi" in captured.out
    assert "Iterations:" in captured.out


def test_invalid_parameters_exit_with_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["--headless", "--keep", "100"]) == 1
    assert "configuration error" in capsys.readouterr().err


def test_config_file_and_overrides_are_merged(tmp_path: Path) -> None:
    path = tmp_path / "run.json"
    path.write_text(json.dumps({"simulation": {"target": "abc", "population_size": 12, "survivors_kept": 3}}))
    args = cli._parse_args(["--config", str(path), "--keep", "4", "--headless"])
    config = cli.build_config(args)
    assert config.target == "abc"
    assert config.population_size == 12
    assert config.survivors_kept == 4
    assert config.timing.action_delay == 0.0
    assert config.timing.phase_delay == 0.0


def test_logfile_records_the_run(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    logfile = tmp_path / "run.log"
    code = cli.main(
        ["--headless", "--seed", "1", "--target", "ok", "--pop", "10", "--keep", "3", "--columns", "2",
         "--log-level", "INFO", "--logfile", str(logfile)]
    )
    capsys.readouterr()
    assert code == 0
    text = logfile.read_text(encoding="utf-8")
    assert "[BOOT   ]" in text
    assert "seed=1" in text
    assert "[DONE   ] best='ok'" in text


@pytest.mark.parametrize(
    "body",
    ["simulation: [unclosed\n", "simulation:\n  population_size: lots\n"],
)
def test_unreadable_config_file_exits_with_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], body: str
) -> None:
    pytest.importorskip("yaml")
    path = tmp_path / "bad.yaml"
    path.write_text(body, encoding="utf-8")
    assert cli.main(["--config", str(path), "--headless"]) == 1
    assert "configuration error" in capsys.readouterr().err

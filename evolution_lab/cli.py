from __future__ import annotations

import argparse
import sys
import threading
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape

from .config import SimulationConfig, load_config
from .errors import EvolutionLabError
from .logging_utils import configure_logging, create_logger
from .randomization import SimulationRNG, resolve_seed
from .render import HeadlessRenderer, TerminalRenderer
from .simulation import PhaseMachine, SimulationRunner


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Watch a population of random strings evolve toward a target.")
    parser.add_argument("--config", type=Path, default=None, help="YAML or JSON run configuration")
    parser.add_argument("--target", default=None, help="Target string to evolve toward")
    parser.add_argument("--pop", type=int, default=None, help="Population size")
    parser.add_argument("--keep", type=int, default=None, help="Survivors kept each generation")
    parser.add_argument("--columns", type=int, default=None, help="Display columns")
    parser.add_argument("--mut", type=float, default=None, help="Per-symbol mutation probability [0..1]")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible run")
    parser.add_argument("--action-delay", type=float, default=None, help="Seconds between sub-steps")
    parser.add_argument("--phase-delay", type=float, default=None, help="Seconds after each phase")
    parser.add_argument("--headless", action="store_true", help="Skip the animation and print only the result")
    parser.add_argument("--log-level", default=None, choices=["DEBUG", "INFO", "WARN", "ERROR"])
    parser.add_argument("--logfile", type=Path, default=None, help="Append run log lines to this file")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> SimulationConfig:
    config = load_config(args.config) if args.config else SimulationConfig()
    if args.headless:
        config = config.apply_overrides(action_delay=0.0, phase_delay=0.0)
    return config.apply_overrides(
        target=args.target,
        population_size=args.pop,
        survivors_kept=args.keep,
        display_columns=args.columns,
        mutation_probability=args.mut,
        seed=args.seed,
        action_delay=args.action_delay,
        phase_delay=args.phase_delay,
        log_level=args.log_level,
        logfile=args.logfile,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    err_console = Console(stderr=True)
    try:
        config = build_config(args)
    except (EvolutionLabError, OSError) as exc:
        err_console.print(f"[red]configuration error:[/] {escape(str(exc))}")
        return 1

    configure_logging(config.logging.level, err_console)
    logger = create_logger(config.logging.level, config.logging.logfile, err_console)
    seed = resolve_seed(config.seed)
    cancel = threading.Event()
    try:
        logger.log(
            "BOOT",
            f"target={config.target!r} pop={config.population_size} keep={config.survivors_kept} "
            f"mut={config.mutation_probability} seed={seed}",
        )
        machine = PhaseMachine.from_config(config, SimulationRNG(seed))
        console = Console(highlight=False)
        port = HeadlessRenderer(config, console) if args.headless else TerminalRenderer(config, console)
        runner = SimulationRunner(machine, port, config.timing, logger)
        try:
            result = runner.run(cancel)
        except KeyboardInterrupt:
            cancel.set()
            logger.log("DONE", "interrupted", level="WARN")
            return 130
        except EvolutionLabError as exc:
            logger.log("ABORT", str(exc), level="ERROR")
            return 1

        if args.headless:
            for stats in result.history:
                logger.log("STATS", stats.describe(), level="DEBUG")
        logger.log(
            "DONE",
            f"best={result.best_genome!r}",
            iterations=result.iteration_count,
            frames=result.frames,
        )
        return 0
    finally:
        logger.close()


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

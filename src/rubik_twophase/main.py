"""
main.py — command line entry point for the two-phase solver
===========================================================

    rubik-twophase INPUT OUTPUT [options]

Reads a nine-line cube net from INPUT, solves it and writes the move
sequence to OUTPUT.

Behavior:
 - Transition tables are built at startup; pruning tables are loaded from
   `--tables-dir` or generated (and saved there) when missing or damaged.
 - The time budget starts once the tables are ready.
 - Progress and timing are logged to stdout; `--debug` adds per-bound detail.
 - Exit codes: 0 solved, 1 no solution within the budget or depth ceilings
   (nothing is written), 2 unreadable or invalid cube.

------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. MIT License.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional, Sequence

from .config import CYCLE_CHECK_CHOICES, SolverSettings
from .cube_io import CubeFormatError, read_cube_file, write_solution
from .cube_solver import CubeSolver
from .facelets import CubeDecodeError
from .moves import expand_to_quarter_turns

logger = logging.getLogger("main")


def create_arg_parser() -> argparse.ArgumentParser:
    """
    Build and return the CLI argument parser.
    """
    p = argparse.ArgumentParser(
        prog="rubik-twophase",
        description="Two-phase IDA* Rubik's Cube Solver",
        allow_abbrev=False,
    )

    p.add_argument("input", type=Path, help="Nine-line cube net to solve.")
    p.add_argument("output", type=Path, help="File the move sequence is written to.")

    p.add_argument("--tables-dir", type=Path, default=None,
                   help="Directory holding the pruning tables (default: current directory).")
    p.add_argument("--time-limit", type=float, default=None, help="Time budget in seconds for both phases.")
    p.add_argument("--phase1-depth", type=int, default=None, help="Depth ceiling for phase 1.")
    p.add_argument("--phase2-depth", type=int, default=None, help="Depth ceiling for phase 2.")
    p.add_argument("--cycle-check", choices=CYCLE_CHECK_CHOICES, default=None,
                   help="Visited-state policy: per bound iteration (tree) or current path only (path).")
    p.add_argument("--quarter-turns", action="store_true",
                   help="Write every move as clockwise quarter turns (U' -> U U U).")
    p.add_argument("--debug", action="store_true", help="Enable debug logging.")

    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point.

    Supports direct CLI invocation or programmatic use via:
        main(["cube.txt", "solution.txt"])

    Returns integer exit code.
    """
    args = create_arg_parser().parse_args(argv)

    logging.basicConfig(stream=sys.stdout, level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Debug mode enabled.")

    try:
        settings = SolverSettings().with_overrides(
            tables_dir=args.tables_dir,
            time_limit=args.time_limit,
            phase1_max_depth=args.phase1_depth,
            phase2_max_depth=args.phase2_depth,
            cycle_check=args.cycle_check,
        )
    except ValueError as e:
        logger.error("Invalid settings: %s", e)
        return 2

    t0 = time.perf_counter()
    solver = CubeSolver.from_settings(settings)
    logger.info("Tables ready in %.2fs", time.perf_counter() - t0)

    try:
        grid = read_cube_file(args.input)
        result = solver.solve(grid)
    except (CubeFormatError, CubeDecodeError) as e:
        logger.error("Invalid cube: %s", e)
        return 2

    if not result.ok:
        logger.warning("No solution found (%s in phase %s) after %.2fs",
                       result.status.value, result.failed_phase, result.elapsed)
        return 1

    if args.quarter_turns:
        solution = " ".join(expand_to_quarter_turns(result.moves))
    else:
        solution = result.solution

    try:
        write_solution(args.output, solution)
    except OSError as e:
        logger.error("Error writing solution to %s: %s", args.output, e)
        return 2

    logger.info("Solved in %.2fs", result.elapsed)
    logger.info("Solution (%d moves): %s", result.move_count, solution)
    return 0


if __name__ == "__main__":
    sys.exit(main())

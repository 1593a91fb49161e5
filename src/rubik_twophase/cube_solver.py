"""
cube_solver.py — two-phase solver facade
========================================

This module ties the cube model, the tables and the phase searches together.

### Core Classes

* **SolveResult**: status of one solve, the move sequences of both phases,
  the merged final sequence and timing. `solution` renders the final
  sequence as space-separated move names ("" for an already solved cube).

* **CubeSolver**: holds the read-only transition and pruning tables plus the
  runtime settings. `solve(grid)` decodes and validates a facelet grid, runs
  phase 1 (reach the subgroup where orientations are solved and the slice
  edges sit in the slice), applies its moves, then runs phase 2 (restricted
  moves, down to the identity).

### Behavior

1.  **Shared time budget**: both phases draw from one `Deadline`, started when
    the solve starts. Phase 2 only gets what phase 1 left over.

2.  **Boundary merge**: the last phase-1 move and the first phase-2 move may
    turn the same face; they are merged (R + R2 -> R') so the final sequence
    never turns one face twice in a row.

3.  **Caching**: successful results are cached by grid and handed out as
    copies; `clear_cache()` resets it.

--------------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. Licensed under MIT License.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple

from .config import SolverSettings
from .cubie import CubieCube
from .facelets import CubeDecodeError, build_color_net_text
from .moves import PHASE1_MOVES, PHASE2_MOVES, format_sequence, merge_sequence
from .persistence import load_or_generate
from .pruning import PruningTables
from .search import Deadline, PhaseSearch, SearchStatus
from .transitions import TransitionTables, build_transition_tables

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

VERIFY_MESSAGES: Dict[int, str] = {
    0: "Cube OK",
    -2: "Not all 12 edges exist exactly once",
    -3: "Flip error: One edge has to be flipped",
    -4: "Not all corners exist exactly once",
    -5: "Twist error: One corner has to be twisted",
    -6: "Parity error: Two corners or two edges have to be exchanged",
}


@dataclass
class SolveResult:
    status: SearchStatus
    phase1: List[int] = field(default_factory=list)
    phase2: List[int] = field(default_factory=list)
    moves: List[int] = field(default_factory=list)
    failed_phase: Optional[int] = None
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return self.status is SearchStatus.SOLVED

    @property
    def solution(self) -> str:
        return format_sequence(self.moves)

    @property
    def move_count(self) -> int:
        return len(self.moves)

    def copy(self) -> "SolveResult":
        return replace(self, phase1=list(self.phase1), phase2=list(self.phase2), moves=list(self.moves))


class CubeSolver:
    def __init__(self, transitions: TransitionTables, pruning: PruningTables,
                 settings: Optional[SolverSettings] = None):
        self.transitions = transitions
        self.pruning = pruning
        self.settings = settings or SolverSettings()
        self._solve_cache: Dict[str, SolveResult] = {}

    @classmethod
    def from_settings(cls, settings: Optional[SolverSettings] = None) -> "CubeSolver":
        """Build transition tables, then load (or generate and save) the pruning tables."""
        settings = settings or SolverSettings()
        transitions = build_transition_tables()
        pruning = load_or_generate(transitions, settings.tables_dir)
        return cls(transitions, pruning, settings)

    def validate_facelet(self, grid: str) -> Tuple[bool, str]:
        """
        Validate a 54-symbol grid.
        Returns (ok:bool, message:str)
        """
        try:
            status = CubieCube.from_facelets(grid).verify()
        except CubeDecodeError as e:
            return False, str(e)
        if status == 0:
            return True, VERIFY_MESSAGES[0]
        return False, VERIFY_MESSAGES.get(status, f"Verify returned status {status}")

    def solve(self, grid: str, deadline: Optional[Deadline] = None) -> SolveResult:
        """
        Solve a facelet grid. Raises CubeDecodeError when the grid does not
        describe a solvable cube; running out of time or depth is reported in
        the result, not raised.
        """
        cached = self._solve_cache.get(grid)
        if cached is not None:
            logger.debug("Solver cache hit for grid")
            return cached.copy()

        cube = CubieCube.from_facelets(grid)
        status = cube.verify()
        if status != 0:
            raise CubeDecodeError(f"Facelets invalid: {VERIFY_MESSAGES.get(status, status)}")
        logger.debug("Solving grid:%s", build_color_net_text(grid))

        result = self.solve_cube(cube, deadline)
        if result.ok:
            self._solve_cache[grid] = result.copy()
        return result

    def solve_cube(self, cube: CubieCube, deadline: Optional[Deadline] = None) -> SolveResult:
        """Run both phases on an already validated cube. `cube` is not modified."""
        if deadline is None:
            deadline = Deadline(self.settings.time_limit)
        s = self.settings

        phase1 = PhaseSearch(
            self.transitions,
            lambda c: c.phase1_heuristic(self.pruning),
            PHASE1_MOVES,
            s.phase1_max_depth,
            deadline,
            s.cycle_check,
            name="phase 1",
        ).run(cube)
        if not phase1.ok:
            return SolveResult(status=phase1.status, failed_phase=1, elapsed=deadline.elapsed())

        mid = cube.copy()
        mid.apply_sequence(phase1.moves, self.transitions)

        phase2 = PhaseSearch(
            self.transitions,
            lambda c: c.phase2_heuristic(self.pruning),
            PHASE2_MOVES,
            s.phase2_max_depth,
            deadline,
            s.cycle_check,
            name="phase 2",
        ).run(mid)
        if not phase2.ok:
            return SolveResult(status=phase2.status, phase1=phase1.moves,
                               failed_phase=2, elapsed=deadline.elapsed())

        moves = merge_sequence(phase1.moves + phase2.moves)
        logger.info("Solved in %d moves (%d + %d before merging) in %.2fs",
                    len(moves), len(phase1.moves), len(phase2.moves), deadline.elapsed())
        return SolveResult(status=SearchStatus.SOLVED, phase1=phase1.moves, phase2=phase2.moves,
                           moves=moves, elapsed=deadline.elapsed())

    def clear_cache(self) -> None:
        """Clear the internal solve cache."""
        self._solve_cache.clear()

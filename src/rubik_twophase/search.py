"""
search.py — iterative-deepening A* for one solver phase
=======================================================

`PhaseSearch.run(start)` raises the bound from h(start) up to the phase's
depth ceiling and runs a depth-first search per bound:

* a node with g + h > bound is cut (admissible heuristic);
* a node with h == 0 is the goal, and the first one found is returned;
* a move on the same face as the previous one is never tried;
* states already expanded are skipped. With ``cycle_check="tree"`` the set
  of expanded states (the start included) lives for a whole bound iteration,
  so a state first expanded through a long branch is not expanded again from
  a shorter one later in that iteration; with ``"path"`` only the states on
  the current path are skipped.

Time-boxing is cooperative: the shared `Deadline` is checked at the top of
every bound and at every node expansion. A start state already at the goal
is returned without consulting it. Running out of time is reported as
TIMEOUT, distinct from EXHAUSTED (ceiling reached without a goal).

------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. MIT License.
"""

import enum
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Set

from .config import CYCLE_CHECK, CYCLE_CHECK_CHOICES
from .cubie import CubieCube
from .moves import NO_MOVE, format_sequence, is_redundant
from .transitions import TransitionTables

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

Heuristic = Callable[[CubieCube], int]


class SearchStatus(str, enum.Enum):
    SOLVED = "solved"
    TIMEOUT = "timeout"
    EXHAUSTED = "exhausted"


class SearchTimeout(Exception):
    """Raised inside the depth-first search once the deadline has passed."""


class Deadline:
    """Wall-clock budget shared by every phase of one solve."""

    def __init__(self, limit: float, clock: Callable[[], float] = time.monotonic,
                 started_at: Optional[float] = None):
        self.limit = limit
        self._clock = clock
        self.started_at = clock() if started_at is None else started_at

    def elapsed(self) -> float:
        return self._clock() - self.started_at

    def expired(self) -> bool:
        return self.elapsed() > self.limit


@dataclass
class SearchResult:
    status: SearchStatus
    moves: List[int] = field(default_factory=list)
    bound: int = 0
    nodes: int = 0
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return self.status is SearchStatus.SOLVED


class PhaseSearch:
    def __init__(self, transitions: TransitionTables, heuristic: Heuristic, moves: Sequence[int],
                 max_depth: int, deadline: Deadline, cycle_check: str = CYCLE_CHECK, name: str = "phase"):
        if cycle_check not in CYCLE_CHECK_CHOICES:
            raise ValueError(f"cycle_check must be one of {CYCLE_CHECK_CHOICES}, got {cycle_check!r}")
        self._transitions = transitions
        self._heuristic = heuristic
        self._moves = tuple(moves)
        self._max_depth = max_depth
        self._deadline = deadline
        self._path_only = cycle_check == "path"
        self.name = name
        self.nodes = 0

    def run(self, start: CubieCube) -> SearchResult:
        t0 = self._deadline.elapsed()
        self.nodes = 0
        bound = self._heuristic(start)
        logger.info("%s: initial bound %d", self.name, bound)
        if bound == 0:
            return self._result(SearchStatus.SOLVED, 0, t0)

        try:
            while bound <= self._max_depth:
                if self._deadline.expired():
                    raise SearchTimeout()
                path: List[int] = []
                visited: Set[tuple] = {start.key()}
                if self._dfs(start, 0, bound, NO_MOVE, path, visited):
                    logger.info("%s: found %d moves at bound %d (%d nodes): %s",
                                self.name, len(path), bound, self.nodes, format_sequence(path))
                    return self._result(SearchStatus.SOLVED, bound, t0, path)
                logger.debug("%s: bound %d exhausted (%d nodes so far)", self.name, bound, self.nodes)
                bound += 1
        except SearchTimeout:
            logger.warning("%s: timeout after %.2fs at bound %d", self.name, self._deadline.elapsed(), bound)
            return self._result(SearchStatus.TIMEOUT, bound, t0)

        logger.warning("%s: max depth %d reached without a solution", self.name, self._max_depth)
        return self._result(SearchStatus.EXHAUSTED, self._max_depth, t0)

    def _result(self, status: SearchStatus, bound: int, t0: float, moves: Optional[List[int]] = None) -> SearchResult:
        return SearchResult(status=status, moves=list(moves or []), bound=bound,
                            nodes=self.nodes, elapsed=self._deadline.elapsed() - t0)

    def _dfs(self, state: CubieCube, g: int, bound: int, last_move: int,
             path: List[int], visited: Set[tuple]) -> bool:
        h = self._heuristic(state)
        if g + h > bound:
            return False
        if h == 0:
            return True
        if self._deadline.expired():
            raise SearchTimeout()
        self.nodes += 1

        # marked on expansion; a cut state stays reachable from a shorter branch
        key = state.key()
        visited.add(key)

        for move in self._moves:
            if is_redundant(last_move, move):
                continue

            child = state.copy()
            child.apply_move(move, self._transitions)
            if child.key() in visited:
                continue

            path.append(move)
            if self._dfs(child, g + 1, bound, move, path, visited):
                return True
            path.pop()

        if self._path_only:
            visited.discard(key)
        return False

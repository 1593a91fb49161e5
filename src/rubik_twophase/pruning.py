"""
pruning.py — distance tables over reduced state spaces
======================================================

Four breadth-first explorations from the identity, each over a space small
enough to enumerate:

* corner twist (3^7 = 2187) and edge flip (2^11 = 2048) under the phase-1
  moves; the last digit of each is implied by the orientation parity;
* corner permutation (8! = 40320) and U/D edge permutation (8! = 40320)
  under the phase-2 moves, indexed by Lehmer code.

The value stored for an index is the exact minimum number of moves from the
identity of that space, which makes every table an admissible heuristic for
the full cube. Moves are applied in catalog order and states are dequeued in
discovery order, so the output is deterministic.

------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. MIT License.
"""

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Sequence, Tuple

import numpy as np

from . import lehmer
from .config import PRUNING_TABLE_FILES, PRUNING_TABLE_SIZES, UNVISITED
from .cubie import N_CORNERS, N_EDGES, N_UD_EDGES, flip_from_index, flip_index, twist_from_index, twist_index
from .moves import MOVE_NAMES, PHASE1_MOVES, PHASE2_MOVES
from .transitions import TransitionTables

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

TABLE_NAMES: Tuple[str, ...] = tuple(PRUNING_TABLE_FILES)


@dataclass(frozen=True)
class PruningTables:
    phase1_corner: np.ndarray
    phase1_edge: np.ndarray
    phase2_corner: np.ndarray
    phase2_edge: np.ndarray

    def __post_init__(self):
        # own a read-only copy of every table; sizes are part of the file layout
        for name in TABLE_NAMES:
            arr = np.array(getattr(self, name), dtype=np.uint8, copy=True).reshape(-1)
            expected = PRUNING_TABLE_SIZES[name]
            if arr.size != expected:
                raise ValueError(f"{name}: expected {expected} entries, got {arr.size}")
            arr.setflags(write=False)
            object.__setattr__(self, name, arr)

    def items(self) -> Iterator[Tuple[str, np.ndarray]]:
        for name in TABLE_NAMES:
            yield name, getattr(self, name)

    @classmethod
    def from_mapping(cls, tables: Dict[str, np.ndarray]) -> "PruningTables":
        return cls(**{name: tables[name] for name in TABLE_NAMES})


# ---------------- moves on reduced coordinates ----------------

def corner_twist_move(twist: int, move: int, t: TransitionTables) -> int:
    co = twist_from_index(twist)
    dest = t.corner_dest[move]
    delta = t.corner_twist[move]
    new_co = [0] * N_CORNERS
    for c in range(N_CORNERS):
        new_co[dest[c]] = (co[c] + delta[c]) % 3
    return twist_index(new_co)


def edge_flip_move(flip: int, move: int, t: TransitionTables) -> int:
    eo = flip_from_index(flip)
    dest = t.edge_dest[move]
    delta = t.edge_flip[move]
    new_eo = [0] * N_EDGES
    for e in range(N_EDGES):
        new_eo[dest[e]] = (eo[e] + delta[e]) % 2
    return flip_index(new_eo)


def corner_perm_move(index: int, move: int, t: TransitionTables) -> int:
    cp = lehmer.decode(index, N_CORNERS)
    dest = t.corner_dest[move]
    new_cp = [0] * N_CORNERS
    for c in range(N_CORNERS):
        new_cp[dest[c]] = cp[c]
    return lehmer.encode(new_cp)


def ud_edge_perm_move(index: int, move: int, t: TransitionTables) -> int:
    dest = t.ud_edge_dest[move]
    if dest is None:
        raise ValueError(f"Move {MOVE_NAMES[move]} does not keep the U/D edges in their layers")
    ep = lehmer.decode(index, N_UD_EDGES)
    new_ep = [0] * N_UD_EDGES
    for e in range(N_UD_EDGES):
        new_ep[dest[e]] = ep[e]
    return lehmer.encode(new_ep)


# ---------------- breadth-first generation ----------------

def _bfs(size: int, step: Callable[[int, int], int], moves: Sequence[int]) -> np.ndarray:
    table = bytearray([UNVISITED]) * size
    table[0] = 0
    queue = deque([0])

    while queue:
        state = queue.popleft()
        distance = table[state]
        for move in moves:
            nxt = step(state, move)
            if table[nxt] == UNVISITED:
                table[nxt] = distance + 1
                queue.append(nxt)

    unreached = size - sum(1 for v in table if v != UNVISITED)
    if unreached:
        logger.warning("%d of %d states unreachable with the given moves", unreached, size)
    return np.frombuffer(bytes(table), dtype=np.uint8).copy()


def generate_corner_orientation_table(t: TransitionTables, moves: Sequence[int] = PHASE1_MOVES) -> np.ndarray:
    return _bfs(PRUNING_TABLE_SIZES["phase1_corner"], lambda s, m: corner_twist_move(s, m, t), moves)


def generate_edge_orientation_table(t: TransitionTables, moves: Sequence[int] = PHASE1_MOVES) -> np.ndarray:
    return _bfs(PRUNING_TABLE_SIZES["phase1_edge"], lambda s, m: edge_flip_move(s, m, t), moves)


def generate_corner_permutation_table(t: TransitionTables, moves: Sequence[int] = PHASE2_MOVES) -> np.ndarray:
    return _bfs(PRUNING_TABLE_SIZES["phase2_corner"], lambda s, m: corner_perm_move(s, m, t), moves)


def generate_ud_edge_permutation_table(t: TransitionTables, moves: Sequence[int] = PHASE2_MOVES) -> np.ndarray:
    return _bfs(PRUNING_TABLE_SIZES["phase2_edge"], lambda s, m: ud_edge_perm_move(s, m, t), moves)


_GENERATORS = {
    "phase1_corner": generate_corner_orientation_table,
    "phase1_edge": generate_edge_orientation_table,
    "phase2_corner": generate_corner_permutation_table,
    "phase2_edge": generate_ud_edge_permutation_table,
}


def generate_pruning_tables(t: TransitionTables) -> PruningTables:
    tables = {}
    for name in TABLE_NAMES:
        t0 = time.perf_counter()
        logger.info("Generating %s table...", name)
        tables[name] = _GENERATORS[name](t)
        logger.info("Generated %s table (max depth %d) in %.2fs",
                    name, int(tables[name].max()), time.perf_counter() - t0)
    return PruningTables.from_mapping(tables)

"""
transitions.py — per-move cubie transition tables
=================================================

For each of the 18 moves a solved reference cube is turned once with the
facelet oracle and decoded again; comparing where every reference corner and
edge ended up (and with which twist/flip) gives the move's destination slot
and orientation increment per piece. Built once at startup, read-only after.

------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. MIT License.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional, Tuple

from .cubie import N_CORNERS, N_EDGES, N_UD_EDGES, CubieCube
from .facelets import solved_grid
from .moves import ALL_MOVES, MOVE_NAMES
from .rotation import rotate

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

Row = Tuple[int, ...]


@dataclass(frozen=True)
class TransitionTables:
    """
    corner_dest[m][p] — slot that the piece in slot p moves to under move m
    corner_twist[m][p] — twist added to that piece
    edge_dest / edge_flip — the same for edges
    ud_edge_dest[m] — edge_dest restricted to the 8 U/D edges, or None when
    move m carries one of them into the middle slice
    """
    corner_dest: Tuple[Row, ...]
    corner_twist: Tuple[Row, ...]
    edge_dest: Tuple[Row, ...]
    edge_flip: Tuple[Row, ...]
    ud_edge_dest: Tuple[Optional[Row], ...]


def _derive_move(move: int) -> Tuple[Row, Row, Row, Row]:
    cube = CubieCube.from_facelets(rotate(solved_grid(), move))

    corner_dest = [0] * N_CORNERS
    corner_twist = [0] * N_CORNERS
    for corner in range(N_CORNERS):
        target = cube.cp.index(corner)
        corner_dest[corner] = target
        corner_twist[corner] = cube.co[target]

    edge_dest = [0] * N_EDGES
    edge_flip = [0] * N_EDGES
    for edge in range(N_EDGES):
        target = cube.ep.index(edge)
        edge_dest[edge] = target
        edge_flip[edge] = cube.eo[target]

    return tuple(corner_dest), tuple(corner_twist), tuple(edge_dest), tuple(edge_flip)


def build_transition_tables() -> TransitionTables:
    t0 = time.perf_counter()
    rows = [_derive_move(m) for m in ALL_MOVES]

    ud_edge_dest = []
    for m, (_, _, edge_dest, _) in enumerate(rows):
        ud_row = edge_dest[:N_UD_EDGES]
        if all(d < N_UD_EDGES for d in ud_row):
            ud_edge_dest.append(ud_row)
        else:
            ud_edge_dest.append(None)
            logger.debug("Move %s leaves the U/D edge set; no reduced row", MOVE_NAMES[m])

    tables = TransitionTables(
        corner_dest=tuple(r[0] for r in rows),
        corner_twist=tuple(r[1] for r in rows),
        edge_dest=tuple(r[2] for r in rows),
        edge_flip=tuple(r[3] for r in rows),
        ud_edge_dest=tuple(ud_edge_dest),
    )
    logger.debug("Transition tables built in %.3fs", time.perf_counter() - t0)
    return tables

"""
cubie.py — cube on the cubie level
==================================

`CubieCube` tracks the 8 corners and 12 edges by permutation and orientation:

* ``cp[i]`` is the reference corner sitting in corner slot ``i``,
  ``co[i]`` its clockwise twist (0..2) relative to that slot;
* ``ep[i]`` / ``eo[i]`` the same for edges, with flips 0..1.

Orientation follows the classic two-phase convention: a corner's twist is
the position of its U/D sticker among the slot's facelets, an edge is flipped
when its U/D (or, for slice edges, F/B) sticker is not on the slot's first
facelet. With that convention U, D and the half turns of R, F, L, B never
change any orientation.

The coordinate helpers (twist, flip, Lehmer indices) are what the pruning
tables are indexed with.

------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. MIT License.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from . import lehmer
from .config import FACE_ORDER, FACES_INIT_STATE
from .facelets import (
    CORNER_COLORS,
    CORNER_FACELETS,
    CORNER_NAMES,
    EDGE_COLORS,
    EDGE_FACELETS,
    EDGE_NAMES,
    FR,
    CubeDecodeError,
    face_identities,
)
from .moves import parse_sequence

if TYPE_CHECKING:
    from .pruning import PruningTables
    from .transitions import TransitionTables

N_CORNERS = 8
N_EDGES = 12
N_UD_EDGES = 8

SOLVED_CP = tuple(range(N_CORNERS))
SOLVED_EP = tuple(range(N_EDGES))
SOLVED_SLICE = tuple(range(FR, N_EDGES))


def _corner_lookup() -> Dict[Tuple[int, int, int], Tuple[int, int]]:
    # observed face triple -> (corner, twist) with observed[(n + r) % 3] == reference[n]
    table = {}
    for j, ref in enumerate(CORNER_COLORS):
        for r in range(3):
            table[tuple(ref[(k - r) % 3] for k in range(3))] = (j, r)
    return table


def _edge_lookup() -> Dict[Tuple[int, int], Tuple[int, int]]:
    table = {}
    for j, ref in enumerate(EDGE_COLORS):
        table[ref] = (j, 0)
        table[(ref[1], ref[0])] = (j, 1)
    return table


_CORNER_LOOKUP = _corner_lookup()
_EDGE_LOOKUP = _edge_lookup()


# ********************* Coordinates ***************************

def twist_index(co: Sequence[int]) -> int:
    """return the twist of the 8 corners. 0 <= twist < 3^7"""
    ret = 0
    for i in range(N_CORNERS - 1):
        ret = 3 * ret + co[i]
    return ret


def twist_from_index(twist: int) -> List[int]:
    co = [0] * N_CORNERS
    twist_parity = 0
    for i in range(N_CORNERS - 2, -1, -1):
        co[i] = twist % 3
        twist_parity += co[i]
        twist //= 3
    co[N_CORNERS - 1] = (3 - twist_parity % 3) % 3
    return co


def flip_index(eo: Sequence[int]) -> int:
    """return the flip of the 12 edges. 0 <= flip < 2^11"""
    ret = 0
    for i in range(N_EDGES - 1):
        ret = 2 * ret + eo[i]
    return ret


def flip_from_index(flip: int) -> List[int]:
    eo = [0] * N_EDGES
    flip_parity = 0
    for i in range(N_EDGES - 2, -1, -1):
        eo[i] = flip % 2
        flip_parity += eo[i]
        flip //= 2
    eo[N_EDGES - 1] = (2 - flip_parity % 2) % 2
    return eo


def permutation_parity(perm: Sequence[int]) -> int:
    s = 0
    for i in range(len(perm) - 1, 0, -1):
        for j in range(i - 1, -1, -1):
            if perm[j] > perm[i]:
                s += 1
    return s % 2


class CubieCube(object):
    """Cube on the cubie level"""

    # initialize to Id-Cube
    def __init__(self, cp: Optional[Sequence[int]] = None, co: Optional[Sequence[int]] = None,
                 ep: Optional[Sequence[int]] = None, eo: Optional[Sequence[int]] = None):
        self.cp = list(cp) if cp is not None else list(SOLVED_CP)
        self.co = list(co) if co is not None else [0] * N_CORNERS
        self.ep = list(ep) if ep is not None else list(SOLVED_EP)
        self.eo = list(eo) if eo is not None else [0] * N_EDGES

    # ---------------- facelet conversion ----------------

    @classmethod
    def from_facelets(cls, grid: str) -> "CubieCube":
        """
        Decode a 54-symbol color grid. Each slot's stickers are matched
        against the reference pieces regardless of rotation; the matched piece
        gives the permutation entry and the rotation offset the orientation.
        """
        f = face_identities(grid)
        cube = cls()
        for i, slots in enumerate(CORNER_FACELETS):
            observed = (f[slots[0]], f[slots[1]], f[slots[2]])
            try:
                cube.cp[i], cube.co[i] = _CORNER_LOOKUP[observed]
            except KeyError:
                raise CubeDecodeError(
                    f"Corner slot {CORNER_NAMES[i]} shows faces "
                    f"{''.join(FACE_ORDER[x] for x in observed)}, which match no corner"
                ) from None
        for i, slots in enumerate(EDGE_FACELETS):
            observed = (f[slots[0]], f[slots[1]])
            try:
                cube.ep[i], cube.eo[i] = _EDGE_LOOKUP[observed]
            except KeyError:
                raise CubeDecodeError(
                    f"Edge slot {EDGE_NAMES[i]} shows faces "
                    f"{''.join(FACE_ORDER[x] for x in observed)}, which match no edge"
                ) from None
        return cube

    def to_facelets(self) -> str:
        """return cube in facelet representation (face letters)"""
        f = list(FACES_INIT_STATE)
        for i in range(N_CORNERS):
            j = self.cp[i]     # corner cubie j is at corner position i
            ori = self.co[i]
            for n in range(3):
                f[CORNER_FACELETS[i][(n + ori) % 3]] = FACE_ORDER[CORNER_COLORS[j][n]]
        for i in range(N_EDGES):
            ori = self.eo[i]
            for n in range(2):
                f[EDGE_FACELETS[i][(n + ori) % 2]] = FACE_ORDER[EDGE_COLORS[self.ep[i]][n]]
        return ''.join(f)

    # ---------------- moves ----------------

    def apply_move(self, move: int, tables: "TransitionTables") -> None:
        """Apply one move; all four arrays are replaced together."""
        c_dest = tables.corner_dest[move]
        c_twist = tables.corner_twist[move]
        e_dest = tables.edge_dest[move]
        e_flip = tables.edge_flip[move]

        cp = [0] * N_CORNERS
        co = [0] * N_CORNERS
        for i in range(N_CORNERS):
            d = c_dest[i]
            cp[d] = self.cp[i]
            co[d] = (self.co[i] + c_twist[i]) % 3

        ep = [0] * N_EDGES
        eo = [0] * N_EDGES
        for i in range(N_EDGES):
            d = e_dest[i]
            ep[d] = self.ep[i]
            eo[d] = (self.eo[i] + e_flip[i]) % 2

        self.cp, self.co, self.ep, self.eo = cp, co, ep, eo

    def apply_sequence(self, seq: Union[str, Iterable[Union[int, str]]], tables: "TransitionTables") -> List[int]:
        moves = parse_sequence(seq)
        for m in moves:
            self.apply_move(m, tables)
        return moves

    def copy(self) -> "CubieCube":
        return CubieCube(self.cp, self.co, self.ep, self.eo)

    # ---------------- coordinates & heuristics ----------------

    def twist(self) -> int:
        return twist_index(self.co)

    def set_twist(self, twist: int) -> None:
        self.co = twist_from_index(twist)

    def flip(self) -> int:
        return flip_index(self.eo)

    def set_flip(self, flip: int) -> None:
        self.eo = flip_from_index(flip)

    def corner_perm_index(self) -> int:
        return lehmer.encode(self.cp)

    def ud_edge_perm_index(self) -> int:
        return lehmer.encode(self.ep[:N_UD_EDGES])

    def slice_edges_outside(self) -> int:
        """Number of FR/FL/BL/BR edges not sitting in a slice position."""
        return sum(1 for e in self.ep[N_UD_EDGES:] if e < N_UD_EDGES)

    def phase1_heuristic(self, pruning: "PruningTables") -> int:
        """
        Lower bound on the moves needed to reach the phase-2 subgroup. One move
        brings at most two slice edges back into the slice, hence the halving.
        """
        return max(
            int(pruning.phase1_corner[self.twist()]),
            int(pruning.phase1_edge[self.flip()]),
            (self.slice_edges_outside() + 1) // 2,
        )

    def phase2_heuristic(self, pruning: "PruningTables") -> int:
        """Lower bound inside the subgroup; meaningful once phase 1 is done."""
        slice_unsolved = 0 if tuple(self.ep[N_UD_EDGES:]) == SOLVED_SLICE else 1
        return max(
            int(pruning.phase2_corner[self.corner_perm_index()]),
            int(pruning.phase2_edge[self.ud_edge_perm_index()]),
            slice_unsolved,
        )

    # ---------------- validation ----------------

    def corner_parity(self) -> int:
        """Parity of the corner permutation"""
        return permutation_parity(self.cp)

    def edge_parity(self) -> int:
        """Parity of the edges permutation. Parity of corners and edges are the same if the cube is solvable."""
        return permutation_parity(self.ep)

    def verify(self) -> int:
        """
        Check a cubiecube for solvability. Return the error code.
        0: Cube is solvable
        -2: Not all 12 edges exist exactly once
        -3: Flip error: One edge has to be flipped
        -4: Not all corners exist exactly once
        -5: Twist error: One corner has to be twisted
        -6: Parity error: Two corners or two edges have to be exchanged
        """
        if sorted(self.ep) != list(SOLVED_EP):
            return -2
        if sum(self.eo) % 2 != 0:
            return -3
        if sorted(self.cp) != list(SOLVED_CP):
            return -4   # missing corners
        if sum(self.co) % 3 != 0:
            return -5   # twisted corner
        if self.edge_parity() != self.corner_parity():
            return -6   # parity error
        return 0    # cube ok

    def is_solved(self) -> bool:
        return (tuple(self.cp) == SOLVED_CP and tuple(self.ep) == SOLVED_EP
                and not any(self.co) and not any(self.eo))

    # ---------------- identity ----------------

    def key(self) -> Tuple[Tuple[int, ...], Tuple[int, ...], Tuple[int, ...], Tuple[int, ...]]:
        return tuple(self.cp), tuple(self.co), tuple(self.ep), tuple(self.eo)

    def __eq__(self, other):
        if not isinstance(other, CubieCube):
            return NotImplemented
        return (self.cp == other.cp and self.co == other.co
                and self.ep == other.ep and self.eo == other.eo)

    def __hash__(self):
        return hash(self.key())

    def __repr__(self):
        return f"CubieCube(cp={self.cp}, co={self.co}, ep={self.ep}, eo={self.eo})"

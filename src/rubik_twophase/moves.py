"""
Move catalog shared by the oracle, the cube model and the search.

A move is an integer 0..17: ``face * 3 + turn`` where faces follow
FACE_ORDER (U, R, F, D, L, B) and turn is 0 = clockwise quarter turn,
1 = counter-clockwise quarter turn, 2 = half turn.
"""

import random
from typing import Iterable, List, Optional, Sequence, Union

from .config import FACE_ORDER, MOVE_INDEX, TURN_SUFFIXES

MOVE_COUNT = 18

CW, CCW, HALF = 0, 1, 2

# number of clockwise quarter turns each turn type amounts to
QUARTER_TURNS = (1, 3, 2)
_TURN_FOR_QUARTERS = {1: CW, 2: HALF, 3: CCW}

MOVE_NAMES = tuple(face + suffix for face in FACE_ORDER for suffix in TURN_SUFFIXES)
_NAME_TO_MOVE = {name: i for i, name in enumerate(MOVE_NAMES)}

ALL_MOVES = tuple(range(MOVE_COUNT))

# Phase 1 may use every move. Phase 2 is restricted to the moves that keep
# orientations solved and the slice edges in the slice.
PHASE1_MOVES = ALL_MOVES
PHASE2_MOVES = tuple(
    m for m in ALL_MOVES
    if FACE_ORDER[m // 3] in ('U', 'D') or m % 3 == HALF
)

NO_MOVE = -1


def face_of(move: int) -> int:
    return move // 3


def turn_of(move: int) -> int:
    return move % 3


def is_redundant(last_move: int, move: int) -> bool:
    """Two consecutive turns of the same face always compose into one."""
    if last_move < 0 or move < 0:
        return False
    return face_of(last_move) == face_of(move)


def inverse(move: int) -> int:
    turn = turn_of(move)
    if turn == HALF:
        return move
    return move - turn + (CCW if turn == CW else CW)


def parse_move(token: str) -> int:
    """'R' -> 3, "U'" -> 1, 'F2' -> 8."""
    tok = token.strip()
    if tok in _NAME_TO_MOVE:
        return _NAME_TO_MOVE[tok]
    base = tok[:1].upper()
    if base not in MOVE_INDEX:
        raise ValueError(f"Unknown move token: {token!r}")
    suffix = tok[1:]
    if suffix == "2":
        turn = HALF
    elif suffix in ("'", "’"):
        turn = CCW
    elif suffix == "":
        turn = CW
    else:
        raise ValueError(f"Unknown move token: {token!r}")
    return MOVE_INDEX[base] * 3 + turn


def parse_sequence(seq: Union[str, Iterable[Union[str, int]]]) -> List[int]:
    if isinstance(seq, str):
        return [parse_move(tok) for tok in seq.split() if tok]
    return [m if isinstance(m, int) else parse_move(m) for m in seq]


def format_sequence(moves: Sequence[int]) -> str:
    return ' '.join(MOVE_NAMES[m] for m in moves)


def invert_sequence(moves: Sequence[int]) -> List[int]:
    return [inverse(m) for m in reversed(moves)]


def merge_sequence(moves: Iterable[int]) -> List[int]:
    """
    Collapse consecutive same-face moves: R R2 -> R', U U' -> (nothing).
    The result never holds two consecutive moves on the same face.
    """
    out: List[int] = []
    for m in moves:
        if out and face_of(out[-1]) == face_of(m):
            quarters = (QUARTER_TURNS[turn_of(out.pop())] + QUARTER_TURNS[turn_of(m)]) % 4
            if quarters:
                out.append(face_of(m) * 3 + _TURN_FOR_QUARTERS[quarters])
        else:
            out.append(m)
    return out


def expand_to_quarter_turns(moves: Sequence[int]) -> List[str]:
    """Rewrite every move as clockwise quarter turns: U' -> U U U, U2 -> U U."""
    out: List[str] = []
    for m in moves:
        out.extend([FACE_ORDER[face_of(m)]] * QUARTER_TURNS[turn_of(m)])
    return out


def random_scramble(length: int = 25, rng: Optional[random.Random] = None,
                    avoid_cancel: bool = True) -> List[int]:
    """
    Random move sequence; with avoid_cancel the same face never repeats
    consecutively.
    """
    rng = rng or random.Random()
    moves: List[int] = []
    prev_face = None
    for _ in range(length):
        face = rng.randrange(len(FACE_ORDER))
        while avoid_cancel and face == prev_face:
            face = rng.randrange(len(FACE_ORDER))
        moves.append(face * 3 + rng.randrange(3))
        prev_face = face
    return moves

"""
rotation.py — facelet-level turn oracle
=======================================

Applies one of the 18 moves to a full 54-sticker grid. It is purely
geometric: every sticker gets a 3D position (x right, y up, z front, cubie
coordinates in {-1, 0, 1}) and an outward normal, and the clockwise quarter
turn of a face is obtained by rotating all stickers of that layer by -90
degrees around the face normal. That permutes the face's own nine stickers and
cycles the four adjacent border strips.

The resulting 54-index maps are computed once at import. The oracle is only
used to derive the cubie transition tables and to check results in tests;
the search never touches it.

------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. MIT License.
"""

from typing import Dict, Iterable, List, Tuple, Union

from .config import FACE_ORDER
from .moves import QUARTER_TURNS, parse_move

Vec = Tuple[int, int, int]

# Outward normal of each face.
_FACE_NORMALS: Dict[str, Vec] = {
    'U': (0, 1, 0),
    'D': (0, -1, 0),
    'F': (0, 0, 1),
    'B': (0, 0, -1),
    'R': (1, 0, 0),
    'L': (-1, 0, 0),
}

# For each face the "right" and "down" vectors such that the 3x3 order is
# row-major as seen in the unfolded net (see facelets.py).
_FACE_AXES: Dict[str, Tuple[Vec, Vec]] = {
    'U': ((1, 0, 0), (0, 0, 1)),     # right = +x, down = +z
    'D': ((1, 0, 0), (0, 0, -1)),    # right = +x, down = -z
    'F': ((1, 0, 0), (0, -1, 0)),    # right = +x, down = -y
    'B': ((-1, 0, 0), (0, -1, 0)),   # right = -x, down = -y
    'R': ((0, 0, -1), (0, -1, 0)),   # looking from +x: right = -z, down = -y
    'L': ((0, 0, 1), (0, -1, 0)),    # looking from -x: right = +z, down = -y
}


def _dot(a: Vec, b: Vec) -> int:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a: Vec, b: Vec) -> Vec:
    return (a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0])


def _turn_cw(v: Vec, axis: Vec) -> Vec:
    """Rotate v by -90 degrees around the unit axis (clockwise seen from outside)."""
    c = _cross(axis, v)
    k = _dot(axis, v)
    return (axis[0] * k - c[0], axis[1] * k - c[1], axis[2] * k - c[2])


def _sticker_frames() -> List[Tuple[Vec, Vec]]:
    """(cubie position, outward normal) for every sticker index 0..53."""
    frames = []
    for face in FACE_ORDER:
        n = _FACE_NORMALS[face]
        right, down = _FACE_AXES[face]
        for r in range(3):
            for c in range(3):
                pos = tuple(n[i] + (c - 1) * right[i] + (r - 1) * down[i] for i in range(3))
                frames.append((pos, n))
    return frames


_STICKERS = _sticker_frames()
_STICKER_AT = {frame: i for i, frame in enumerate(_STICKERS)}


def _quarter_turn_map(face: str) -> Tuple[int, ...]:
    """mapping[dest] = source index for a clockwise quarter turn of `face`."""
    axis = _FACE_NORMALS[face]
    mapping = list(range(len(_STICKERS)))
    for src, (pos, normal) in enumerate(_STICKERS):
        if _dot(pos, axis) != 1:
            continue
        dest = _STICKER_AT[(_turn_cw(pos, axis), _turn_cw(normal, axis))]
        mapping[dest] = src
    return tuple(mapping)


_QUARTER_TURN_MAPS: Tuple[Tuple[int, ...], ...] = tuple(_quarter_turn_map(f) for f in FACE_ORDER)


def rotate(grid: str, move: Union[int, str]) -> str:
    """
    Return a new grid with `move` applied. Inverse quarter turns and half
    turns are the clockwise quarter turn composed three or two times.
    """
    if isinstance(move, str):
        move = parse_move(move)
    mapping = _QUARTER_TURN_MAPS[move // 3]
    chars = list(grid)
    for _ in range(QUARTER_TURNS[move % 3]):
        chars = [chars[src] for src in mapping]
    return ''.join(chars)


def apply_sequence(grid: str, moves: Iterable[Union[int, str]]) -> str:
    if isinstance(moves, str):
        moves = moves.split()
    for mv in moves:
        grid = rotate(grid, mv)
    return grid

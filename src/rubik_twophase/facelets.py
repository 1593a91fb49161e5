"""
 * <pre>
 * The names of the facelet positions of the cube
 *             |************|
 *             |*U1**U2**U3*|
 *             |************|
 *             |*U4**U5**U6*|
 *             |************|
 *             |*U7**U8**U9*|
 *             |************|
 * ************|************|************|************|
 * *L1**L2**L3*|*F1**F2**F3*|*R1**R2**R3*|*B1**B2**B3*|
 * ************|************|************|************|
 * *L4**L5**L6*|*F4**F5**F6*|*R4**R5**R6*|*B4**B5**B6*|
 * ************|************|************|************|
 * *L7**L8**L9*|*F7**F8**F9*|*R7**R8**R9*|*B7**B8**B9*|
 * ************|************|************|************|
 *             |************|
 *             |*D1**D2**D3*|
 *             |************|
 *             |*D4**D5**D6*|
 *             |************|
 *             |*D7**D8**D9*|
 *             |************|
 * </pre>
 *
 * A facelet grid is a 54-symbol string in the order U1..U9, R1..R9, F1..F9,
 * D1..D9, L1..L9, B1..B9. Symbols are arbitrary colors; a color's face is the
 * face whose center (U5, R5, ...) shows it.
"""

import logging
from collections import Counter
from typing import Dict, List, Tuple

from .config import CENTER_INDICES, FACE_ORDER, FACE_TO_COLOR, FACES_INIT_STATE

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

FACELET_COUNT = 54


class CubeDecodeError(ValueError):
    """A facelet grid does not describe a physically valid cube."""


def facelet_index(label: str) -> int:
    """'U9' -> flat index in the URFDLB facelet order."""
    return FACE_ORDER.index(label[0]) * 9 + int(label[1]) - 1


# ++++++++++++++++++++++++++++++ Names the colors of the cube facelets ++++++++++++++++++++++++++++++++++++++++++++++++

U, R, F, D, L, B = range(6)

# +++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++
# The names of the corner positions of the cube. Corner URF e.g., has an U(p), a R(ight) and a F(ront) facelet

URF, UFL, ULB, UBR, DFR, DLF, DBL, DRB = range(8)
CORNER_NAMES: Tuple[str, ...] = ('URF', 'UFL', 'ULB', 'UBR', 'DFR', 'DLF', 'DBL', 'DRB')

# The names of the edge positions of the cube. Edge UR e.g., has an U(p) and R(ight) facelet.
# UR..DB are the U/D-layer edges, FR..BR the middle-slice edges.

UR, UF, UL, UB, DR, DF, DL, DB, FR, FL, BL, BR = range(12)
EDGE_NAMES: Tuple[str, ...] = ('UR', 'UF', 'UL', 'UB', 'DR', 'DF', 'DL', 'DB', 'FR', 'FL', 'BL', 'BR')
SLICE_EDGES: Tuple[int, ...] = (FR, FL, BL, BR)

# Map the corner positions to facelet positions. CORNER_FACELETS[URF][0] e.g. gives the position of the
# facelet in the URF corner position, which defines the orientation.
# CORNER_FACELETS[URF][1] and CORNER_FACELETS[URF][2] give the other two facelets (clockwise).
CORNER_FACELETS: Tuple[Tuple[int, int, int], ...] = tuple(
    tuple(facelet_index(label) for label in labels) for labels in (
        ('U9', 'R1', 'F3'), ('U7', 'F1', 'L3'), ('U1', 'L1', 'B3'), ('U3', 'B1', 'R3'),
        ('D3', 'F9', 'R7'), ('D1', 'L9', 'F7'), ('D7', 'B9', 'L7'), ('D9', 'R9', 'B7'),
    )
)

# Map the edge positions to facelet positions. EDGE_FACELETS[UR][0] e.g. gives the facelet in the UR
# edge position which defines the orientation; EDGE_FACELETS[UR][1] the other one.
EDGE_FACELETS: Tuple[Tuple[int, int], ...] = tuple(
    tuple(facelet_index(label) for label in labels) for labels in (
        ('U6', 'R2'), ('U8', 'F2'), ('U4', 'L2'), ('U2', 'B2'), ('D6', 'R8'), ('D2', 'F8'),
        ('D4', 'L8'), ('D8', 'B8'), ('F6', 'R4'), ('F4', 'L6'), ('B6', 'L4'), ('B4', 'R6'),
    )
)

# Map the corner positions to facelet colors (face identities).
CORNER_COLORS: Tuple[Tuple[int, int, int], ...] = (
    (U, R, F), (U, F, L), (U, L, B), (U, B, R),
    (D, F, R), (D, L, F), (D, B, L), (D, R, B),
)

# Map the edge positions to facelet colors (face identities).
EDGE_COLORS: Tuple[Tuple[int, int], ...] = (
    (U, R), (U, F), (U, L), (U, B),
    (D, R), (D, F), (D, L), (D, B),
    (F, R), (F, L), (B, L), (B, R),
)


def solved_grid(face_to_color: Dict[str, str] = None) -> str:
    """Solved grid, using face letters or the given palette."""
    if face_to_color is None:
        return FACES_INIT_STATE
    return ''.join(face_to_color[f] for f in FACES_INIT_STATE)


def color_grid(face_grid: str, face_to_color: Dict[str, str] = FACE_TO_COLOR) -> str:
    """Translate a face-letter grid into color symbols."""
    return ''.join(face_to_color[f] for f in face_grid)


def face_identities(grid: str) -> List[int]:
    """
    Map every sticker color to the index of the face whose center carries it.
    Raises CubeDecodeError on a wrong length, duplicated centers or a color
    that is not a center color.
    """
    if not isinstance(grid, str) or len(grid) != FACELET_COUNT:
        raise CubeDecodeError(f"facelet grid must be a {FACELET_COUNT}-character string")

    color_to_face: Dict[str, int] = {}
    for face_letter, idx in CENTER_INDICES.items():
        c = grid[idx]
        if c in color_to_face:
            raise CubeDecodeError(
                f"Duplicate center color {c!r} between {FACE_ORDER[color_to_face[c]]!r} and {face_letter!r}"
            )
        color_to_face[c] = FACE_ORDER.index(face_letter)

    ctr = Counter(grid)
    if any(ctr.get(c, 0) != 9 for c in color_to_face):
        logger.warning("Not all colors have 9 occurrences: %s", dict(ctr))

    try:
        return [color_to_face[c] for c in grid]
    except KeyError as e:
        raise CubeDecodeError(f"Color {e.args[0]!r} does not match any center color") from e


def build_color_net_text(grid: str) -> str:
    """Readable per-face dump of a grid, for debug logging."""
    out = []
    for fi, face in enumerate(FACE_ORDER):
        out.append(f"\n{face}:")
        block = grid[fi * 9:(fi + 1) * 9]
        for r in range(3):
            out.append(' '.join(block[r * 3:(r + 1) * 3]))
    return '\n'.join(out)

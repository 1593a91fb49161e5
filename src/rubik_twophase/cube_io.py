"""
cube_io.py — cube net text files
================================

Input is the unfolded net, nine lines, one letter per sticker (any other
characters are ignored):

    lines 1-3   U rows              (the first 3 letters of each line)
    lines 4-6   L F R B rows        (exactly 12 letters per line)
    lines 7-9   D rows              (the first 3 letters of each line)

The letters are arbitrary color symbols; faces are identified by their
centers when the grid is decoded. Output is a single line of space-separated
move names.

------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. MIT License.
"""

import logging
import re
from pathlib import Path
from typing import List, Union

from .config import FACE_ORDER, INPUT_LINES, MIDDLE_ROW_FACES, MIDDLE_ROW_LETTERS
from .facelets import FACELET_COUNT

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

PathLike = Union[str, Path]

_NON_LETTERS = re.compile(r"[^A-Za-z]")


class CubeFormatError(ValueError):
    """The input text is not a nine-line cube net."""


def _face_offset(face: str) -> int:
    return FACE_ORDER.index(face) * 9


def parse_cube_text(text: str) -> str:
    """Turn the nine-line net into a 54-symbol grid in URFDLB order."""
    raw = text.splitlines()
    if len(raw) < INPUT_LINES:
        raise CubeFormatError(f"File must have {INPUT_LINES} lines, got {len(raw)}")
    lines = [_NON_LETTERS.sub("", line) for line in raw[:INPUT_LINES]]

    grid: List[str] = [""] * FACELET_COUNT

    for outer, face in ((0, 'U'), (6, 'D')):
        base = _face_offset(face)
        for r in range(3):
            row = lines[outer + r]
            if len(row) < 3:
                raise CubeFormatError(f"{face} row {r + 1} must have 3 letters: {row!r}")
            grid[base + r * 3:base + r * 3 + 3] = row[:3]

    for r in range(3):
        row = lines[3 + r]
        if len(row) != MIDDLE_ROW_LETTERS:
            raise CubeFormatError(f"Middle row must have {MIDDLE_ROW_LETTERS} letters: {row!r}")
        for k, face in enumerate(MIDDLE_ROW_FACES):
            base = _face_offset(face)
            grid[base + r * 3:base + r * 3 + 3] = row[k * 3:k * 3 + 3]

    return "".join(grid)


def read_cube_file(path: PathLike) -> str:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CubeFormatError(f"Cannot read {path}: {e}") from e
    grid = parse_cube_text(text)
    logger.debug("Read cube from %s: %s", path, grid)
    return grid


def write_solution(path: PathLike, solution: str) -> None:
    Path(path).write_text(solution.strip(), encoding="utf-8")
    logger.debug("Solution written to %s", path)


def format_net(grid: str) -> str:
    """Render a 54-symbol grid back into the nine-line net."""
    def row(face: str, r: int) -> str:
        base = _face_offset(face) + r * 3
        return grid[base:base + 3]

    lines = ["   " + row('U', r) for r in range(3)]
    lines += ["".join(row(face, r) for face in MIDDLE_ROW_FACES) for r in range(3)]
    lines += ["   " + row('D', r) for r in range(3)]
    return "\n".join(lines) + "\n"

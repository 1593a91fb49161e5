"""config.py — solver configuration
----------------------------------

This file centralizes default runtime constants for the two-phase solver.
These are *defaults*; the command line builds a `SolverSettings` from them and
overrides what the user passes.

Notes / warnings
- `TABLES_DIR` is built using `Path.cwd()` which is evaluated at import time.
  Pass `--tables-dir` (or `SolverSettings.tables_dir`) when running from a
  different working directory.
- Depth ceilings and the time budget are trade-offs between solution rate and
  wall-clock time. Phase 1 never needs more than 12 moves and phase 2 never
  more than 18, so raising them only costs time.

-------------------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. Licensed under MIT License.
"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, List, Tuple

# ---------------- Rubik cube configurations ----------------

# Canonical face ordering of the flattened 54-facelet grid (9 stickers each).
FACE_ORDER: List[str] = ['U', 'R', 'F', 'D', 'L', 'B']

# Solved grid expressed with face letters (each face "colored" by its own name).
FACES_INIT_STATE: str = "UUUUUUUUURRRRRRRRRFFFFFFFFFDDDDDDDDDLLLLLLLLLBBBBBBBBB"

# CENTER_INDICES maps face letter -> index of that face's center sticker
# in the flattened grid. Centers never move, so they name the faces.
CENTER_INDICES: Dict[str, int] = {'U': 4, 'R': 13, 'F': 22, 'D': 31, 'L': 40, 'B': 49}

# Default palette used when rendering a grid as colors (white top, green front).
FACE_TO_COLOR: Dict[str, str] = {'U': 'W', 'R': 'R', 'F': 'G', 'D': 'Y', 'L': 'O', 'B': 'B'}

# Move index = face index * 3 + turn type; turn types are CW, CCW, half.
MOVE_INDEX: Dict[str, int] = {face: i for i, face in enumerate(FACE_ORDER)}
TURN_SUFFIXES: Tuple[str, ...] = ("", "'", "2")

# ---------------- Input file layout ----------------
# Rows 1-3: U face. Rows 4-6: L, F, R, B rows side by side. Rows 7-9: D face.
INPUT_LINES: int = 9
MIDDLE_ROW_FACES: List[str] = ['L', 'F', 'R', 'B']
MIDDLE_ROW_LETTERS: int = 12

# ---------------- Search ----------------
# Global wall-clock budget shared by both phases (seconds).
TIME_LIMIT_SECONDS: float = 20.0
PHASE1_MAX_DEPTH: int = 12
PHASE2_MAX_DEPTH: int = 18

# "tree": one visited set per bound iteration, never reset inside it.
# "path": only states on the current path are skipped.
CYCLE_CHECK: str = "tree"
CYCLE_CHECK_CHOICES: Tuple[str, ...] = ("tree", "path")

# ---------------- Pruning tables ----------------
# Marks entries not yet reached while a table is being built.
UNVISITED: int = 0xFF

# Fixed persisted layout: name -> (file name, byte count).
PRUNING_TABLE_FILES: Dict[str, str] = {
    "phase1_corner": "phase1_corner.dat",
    "phase1_edge": "phase1_edge.dat",
    "phase2_corner": "phase2_corner.dat",
    "phase2_edge": "phase2_edge.dat",
}
PRUNING_TABLE_SIZES: Dict[str, int] = {
    "phase1_corner": 2187,   # 3^7 corner twists
    "phase1_edge": 2048,     # 2^11 edge flips
    "phase2_corner": 40320,  # 8! corner permutations
    "phase2_edge": 40320,    # 8! U/D edge permutations
}

# ---------------- Filesystem paths ----------------
TABLES_DIR: Path = Path.cwd()


@dataclass(frozen=True)
class SolverSettings:
    """Runtime overrides for the module defaults above."""
    time_limit: float = TIME_LIMIT_SECONDS
    phase1_max_depth: int = PHASE1_MAX_DEPTH
    phase2_max_depth: int = PHASE2_MAX_DEPTH
    cycle_check: str = CYCLE_CHECK
    tables_dir: Path = field(default=TABLES_DIR)

    def __post_init__(self):
        if self.cycle_check not in CYCLE_CHECK_CHOICES:
            raise ValueError(f"cycle_check must be one of {CYCLE_CHECK_CHOICES}, got {self.cycle_check!r}")
        if self.time_limit < 0:
            raise ValueError("time_limit must be >= 0")
        if self.phase1_max_depth < 0 or self.phase2_max_depth < 0:
            raise ValueError("depth ceilings must be >= 0")

    def with_overrides(self, **overrides) -> "SolverSettings":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

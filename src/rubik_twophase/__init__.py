"""Two-phase IDA* Rubik's cube solver."""

from .config import SolverSettings
from .cube_io import CubeFormatError, format_net, parse_cube_text, read_cube_file, write_solution
from .cube_solver import CubeSolver, SolveResult
from .cubie import CubieCube
from .facelets import CubeDecodeError, solved_grid
from .moves import format_sequence, parse_sequence
from .persistence import load_or_generate, load_pruning_tables, save_pruning_tables
from .pruning import PruningTables, generate_pruning_tables
from .rotation import apply_sequence, rotate
from .search import Deadline, PhaseSearch, SearchResult, SearchStatus
from .transitions import TransitionTables, build_transition_tables

__version__ = "1.0.0"

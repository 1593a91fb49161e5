import pytest

from rubik_twophase.config import SolverSettings
from rubik_twophase.cube_solver import CubeSolver
from rubik_twophase.persistence import save_pruning_tables
from rubik_twophase.pruning import generate_pruning_tables
from rubik_twophase.transitions import build_transition_tables


@pytest.fixture(scope="session")
def transitions():
    return build_transition_tables()


@pytest.fixture(scope="session")
def pruning(transitions):
    return generate_pruning_tables(transitions)


@pytest.fixture(scope="session")
def tables_dir(pruning, tmp_path_factory):
    """A directory holding a valid persisted copy of the session tables."""
    directory = tmp_path_factory.mktemp("tables")
    assert save_pruning_tables(pruning, directory)
    return directory


@pytest.fixture
def solver(transitions, pruning, tables_dir):
    return CubeSolver(transitions, pruning, SolverSettings(tables_dir=tables_dir))

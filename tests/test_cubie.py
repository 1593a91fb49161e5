import random

import pytest

from rubik_twophase.config import FACES_INIT_STATE
from rubik_twophase.cubie import (
    CubieCube,
    flip_from_index,
    flip_index,
    twist_from_index,
    twist_index,
)
from rubik_twophase.facelets import (
    URF,
    UFL,
    UR,
    UF,
    CubeDecodeError,
    color_grid,
    facelet_index,
    solved_grid,
)
from rubik_twophase.moves import random_scramble
from rubik_twophase.rotation import apply_sequence


def test_solved_grid_decodes_to_identity():
    cube = CubieCube.from_facelets(solved_grid())
    assert cube == CubieCube()
    assert cube.is_solved()
    assert cube.verify() == 0


def test_color_symbols_are_matched_through_centers():
    grid = color_grid(FACES_INIT_STATE)
    assert CubieCube.from_facelets(grid).is_solved()


def test_to_facelets_round_trip(transitions):
    rng = random.Random(3)
    for _ in range(25):
        cube = CubieCube()
        cube.apply_sequence(random_scramble(20, rng), transitions)
        assert CubieCube.from_facelets(cube.to_facelets()) == cube


def test_bad_length_is_rejected():
    with pytest.raises(CubeDecodeError):
        CubieCube.from_facelets("U" * 53)


def test_duplicate_centers_are_rejected():
    grid = list(FACES_INIT_STATE)
    grid[13] = "U"
    with pytest.raises(CubeDecodeError):
        CubieCube.from_facelets("".join(grid))


def test_unknown_color_is_rejected():
    grid = list(FACES_INIT_STATE)
    grid[0] = "X"
    with pytest.raises(CubeDecodeError):
        CubieCube.from_facelets("".join(grid))


def test_impossible_corner_is_rejected():
    # a corner showing U twice cannot exist
    grid = list(FACES_INIT_STATE)
    grid[facelet_index("R1")] = "U"
    with pytest.raises(CubeDecodeError, match="URF"):
        CubieCube.from_facelets("".join(grid))


def test_verify_codes():
    cube = CubieCube()
    cube.eo[UR] = 1
    assert cube.verify() == -3

    cube = CubieCube()
    cube.co[URF] = 1
    assert cube.verify() == -5

    cube = CubieCube()
    cube.cp[URF], cube.cp[UFL] = cube.cp[UFL], cube.cp[URF]
    assert cube.verify() == -6

    cube = CubieCube()
    cube.ep[UF] = UR
    assert cube.verify() == -2

    cube = CubieCube()
    cube.cp[UFL] = URF
    assert cube.verify() == -4


def test_single_flipped_edge_on_grid_fails_verify():
    grid = list(FACES_INIT_STATE)
    a, b = facelet_index("U8"), facelet_index("F2")
    grid[a], grid[b] = grid[b], grid[a]
    assert CubieCube.from_facelets("".join(grid)).verify() == -3


def test_invariants_hold_after_random_sequences(transitions):
    rng = random.Random(11)
    for _ in range(50):
        cube = CubieCube()
        cube.apply_sequence(random_scramble(rng.randrange(1, 40), rng), transitions)
        assert sum(cube.co) % 3 == 0
        assert sum(cube.eo) % 2 == 0
        assert cube.corner_parity() == cube.edge_parity()
        assert sorted(cube.cp) == list(range(8))
        assert sorted(cube.ep) == list(range(12))
        assert cube.verify() == 0


def test_model_agrees_with_facelet_oracle(transitions):
    rng = random.Random(5)
    for _ in range(25):
        moves = random_scramble(15, rng)
        cube = CubieCube()
        cube.apply_sequence(moves, transitions)
        assert cube.to_facelets() == apply_sequence(solved_grid(), moves)


def test_orientation_coordinates_round_trip():
    for twist in range(0, 2187, 7):
        co = twist_from_index(twist)
        assert sum(co) % 3 == 0
        assert twist_index(co) == twist
    for flip in range(2048):
        eo = flip_from_index(flip)
        assert sum(eo) % 2 == 0
        assert flip_index(eo) == flip


def test_identity_coordinates_and_heuristics(pruning):
    cube = CubieCube()
    assert cube.twist() == 0
    assert cube.flip() == 0
    assert cube.corner_perm_index() == 0
    assert cube.ud_edge_perm_index() == 0
    assert cube.phase1_heuristic(pruning) == 0
    assert cube.phase2_heuristic(pruning) == 0


def test_copy_is_independent(transitions):
    cube = CubieCube()
    other = cube.copy()
    other.apply_move(3, transitions)
    assert cube.is_solved()
    assert not other.is_solved()
    assert hash(cube) == hash(CubieCube())


def test_set_twist_and_flip(transitions):
    cube = CubieCube()
    cube.apply_sequence("R F", transitions)
    other = CubieCube()
    other.set_twist(cube.twist())
    other.set_flip(cube.flip())
    assert other.co == cube.co
    assert other.eo == cube.eo

import random

import pytest

from rubik_twophase.config import FACE_ORDER
from rubik_twophase.facelets import facelet_index, solved_grid
from rubik_twophase.moves import MOVE_NAMES, format_sequence, invert_sequence, random_scramble
from rubik_twophase.rotation import apply_sequence, rotate

# Every sticker distinct, so any misplaced sticker shows.
LABELS = "".join(chr(ord("0") + i) for i in range(54))


@pytest.mark.parametrize("face", FACE_ORDER)
def test_four_quarter_turns_are_identity(face):
    grid = LABELS
    for _ in range(4):
        grid = rotate(grid, face)
    assert grid == LABELS


@pytest.mark.parametrize("name", MOVE_NAMES)
def test_move_is_a_permutation_keeping_centers(name):
    grid = rotate(LABELS, name)
    assert sorted(grid) == sorted(LABELS)
    for center in (4, 13, 22, 31, 40, 49):
        assert grid[center] == LABELS[center]


@pytest.mark.parametrize("face", FACE_ORDER)
def test_inverse_and_half_turns_compose(face):
    assert rotate(rotate(LABELS, face), face + "'") == LABELS
    assert rotate(rotate(LABELS, face), face) == rotate(LABELS, face + "2")
    assert rotate(LABELS, face + "'") == apply_sequence(LABELS, [face] * 3)


def test_u_turn_cycles_top_rows():
    grid = rotate(solved_grid(), "U")
    # the F top row now shows R, R shows B, B shows L, L shows F
    assert grid[18:21] == "RRR"
    assert grid[9:12] == "BBB"
    assert grid[45:48] == "LLL"
    assert grid[36:39] == "FFF"
    assert grid[0:9] == "U" * 9
    assert grid[27:36] == "D" * 9


def test_r_turn_moves_front_column_up():
    grid = rotate(solved_grid(), "R")
    for label in ("U3", "U6", "U9"):
        assert grid[facelet_index(label)] == "F"
    for label in ("B1", "B4", "B7"):
        assert grid[facelet_index(label)] == "U"
    for label in ("D3", "D6", "D9"):
        assert grid[facelet_index(label)] == "B"
    for label in ("F3", "F6", "F9"):
        assert grid[facelet_index(label)] == "D"


def test_scramble_then_inverse_restores():
    rng = random.Random(1)
    for _ in range(20):
        moves = random_scramble(30, rng)
        scrambled = apply_sequence(LABELS, format_sequence(moves))
        assert apply_sequence(scrambled, format_sequence(invert_sequence(moves))) == LABELS

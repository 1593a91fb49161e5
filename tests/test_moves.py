import random

import pytest

from rubik_twophase.moves import (
    MOVE_NAMES,
    PHASE1_MOVES,
    PHASE2_MOVES,
    expand_to_quarter_turns,
    face_of,
    format_sequence,
    inverse,
    invert_sequence,
    is_redundant,
    merge_sequence,
    parse_move,
    parse_sequence,
    random_scramble,
    turn_of,
)


def test_move_catalog_order():
    assert MOVE_NAMES[:3] == ("U", "U'", "U2")
    assert MOVE_NAMES[3:6] == ("R", "R'", "R2")
    assert len(MOVE_NAMES) == 18
    assert len(PHASE1_MOVES) == 18


def test_phase2_moves_are_ud_turns_and_half_turns():
    names = [MOVE_NAMES[m] for m in PHASE2_MOVES]
    assert names == ["U", "U'", "U2", "R2", "F2", "D", "D'", "D2", "L2", "B2"]


def test_parse_and_format():
    assert parse_move("R") == 3
    assert parse_move("U'") == 1
    assert parse_move("F2") == 8
    assert format_sequence(parse_sequence("R U2 F' D")) == "R U2 F' D"
    assert parse_sequence(["B2", 0]) == [17, 0]


@pytest.mark.parametrize("token", ["X", "R3", "", "U''"])
def test_parse_rejects_unknown_tokens(token):
    with pytest.raises(ValueError):
        parse_move(token)


def test_inverse():
    assert MOVE_NAMES[inverse(parse_move("R"))] == "R'"
    assert MOVE_NAMES[inverse(parse_move("R'"))] == "R"
    assert MOVE_NAMES[inverse(parse_move("R2"))] == "R2"
    assert format_sequence(invert_sequence(parse_sequence("R U F2"))) == "F2 U' R'"


def test_is_redundant_only_for_same_face():
    assert is_redundant(parse_move("R"), parse_move("R2"))
    assert not is_redundant(parse_move("R"), parse_move("L"))
    assert not is_redundant(-1, parse_move("R"))


def test_merge_sequence():
    assert format_sequence(merge_sequence(parse_sequence("R R2"))) == "R'"
    assert format_sequence(merge_sequence(parse_sequence("U U'"))) == ""
    assert format_sequence(merge_sequence(parse_sequence("F U U' F"))) == "F2"
    assert format_sequence(merge_sequence(parse_sequence("R2 R2 L"))) == "L"
    assert format_sequence(merge_sequence(parse_sequence("R U R'"))) == "R U R'"


def test_expand_to_quarter_turns():
    assert expand_to_quarter_turns(parse_sequence("U' R2 F")) == ["U", "U", "U", "R", "R", "F"]


def test_random_scramble_never_repeats_a_face():
    moves = random_scramble(200, random.Random(7))
    assert len(moves) == 200
    for a, b in zip(moves, moves[1:]):
        assert a // 3 != b // 3


def test_face_and_turn_of():
    move = parse_move("L2")
    assert face_of(move) == 4
    assert turn_of(move) == 2
    assert face_of(move) * 3 + turn_of(move) == move

import pytest

from rubik_twophase.config import FACES_INIT_STATE
from rubik_twophase.cube_io import CubeFormatError, format_net, parse_cube_text, read_cube_file, write_solution
from rubik_twophase.facelets import color_grid, facelet_index
from rubik_twophase.rotation import rotate

SOLVED_NET = """\
   WWW
   WWW
   WWW
OOOGGGRRRBBB
OOOGGGRRRBBB
OOOGGGRRRBBB
   YYY
   YYY
   YYY
"""


def test_parse_solved_net():
    assert parse_cube_text(SOLVED_NET) == color_grid(FACES_INIT_STATE)


def test_format_net_round_trip():
    grid = color_grid(rotate(FACES_INIT_STATE, "R"))
    assert parse_cube_text(format_net(grid)) == grid
    assert format_net(color_grid(FACES_INIT_STATE)) == SOLVED_NET


def test_rows_are_placed_by_face():
    net = SOLVED_NET.replace("OOOGGGRRRBBB\n", "abcdefghijkl\n", 1)
    grid = parse_cube_text(net)
    assert grid[facelet_index("L1"):facelet_index("L1") + 3] == "abc"
    assert grid[facelet_index("F1"):facelet_index("F1") + 3] == "def"
    assert grid[facelet_index("R1"):facelet_index("R1") + 3] == "ghi"
    assert grid[facelet_index("B1"):facelet_index("B1") + 3] == "jkl"


def test_separators_and_extra_letters_are_tolerated():
    net = SOLVED_NET.replace("   WWW", "W W W x", 1).replace("OOOGGGRRRBBB", "OOO|GGG|RRR|BBB")
    assert parse_cube_text(net)[:9] == "WWWWWWWWW"


def test_too_few_lines():
    with pytest.raises(CubeFormatError, match="9 lines"):
        parse_cube_text("\n".join(SOLVED_NET.splitlines()[:8]))


def test_short_middle_row():
    with pytest.raises(CubeFormatError, match="Middle row"):
        parse_cube_text(SOLVED_NET.replace("OOOGGGRRRBBB", "OOOGGGRRRBB", 1))


def test_short_outer_row():
    with pytest.raises(CubeFormatError):
        parse_cube_text(SOLVED_NET.replace("   YYY", "   YY", 1))


def test_unreadable_file(tmp_path):
    with pytest.raises(CubeFormatError):
        read_cube_file(tmp_path / "missing.txt")


def test_write_solution_strips(tmp_path):
    out = tmp_path / "out.txt"
    write_solution(out, " R U' \n")
    assert out.read_text() == "R U'"


def test_undecodable_file_is_a_format_error(tmp_path):
    cube = tmp_path / "cube.txt"
    cube.write_bytes(b"\xff\xfeWWW\n" * 9)
    with pytest.raises(CubeFormatError, match="Cannot read"):
        read_cube_file(cube)

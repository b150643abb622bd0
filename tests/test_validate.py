import pytest

from cubcaster.validate import (
    CubError,
    check_divisions,
    check_extension,
    check_player,
    check_size,
    check_top_bottom_walls,
    check_walls,
    scan_map,
    validate_map,
)


def rows(*lines):
    return [line + "\n" for line in lines]


GOOD = rows("111111", "100N01", "100001", "111111")


def raised(exc_info):
    return str(exc_info.value)


def test_validate_good_map():
    scan = validate_map(GOOD)
    assert (scan.player_x, scan.player_y) == (3, 1)
    assert scan.heading == "N"
    assert scan.player_count == 1
    assert scan.zero_count == 7


def test_scan_invalid_character():
    with pytest.raises(CubError) as exc:
        scan_map(rows("111", "1X1", "111"))
    assert raised(exc) == "INVALID MAP Error"


def test_two_players_rejected():
    with pytest.raises(CubError) as exc:
        validate_map(rows("11111", "1NS01", "11111"))
    assert raised(exc) == "INVALID PLAYER Error"


def test_too_few_rows():
    lines = rows("1N1", "111")
    scan = scan_map(lines)
    with pytest.raises(CubError) as exc:
        check_size(scan, len(lines))
    assert raised(exc) == "MAP SIZE Error"


def test_open_top_row():
    with pytest.raises(CubError) as exc:
        check_top_bottom_walls(rows("101111", "100N01", "111111"))
    assert raised(exc) == "WALL - 5 - Error"


def test_open_bottom_row():
    with pytest.raises(CubError) as exc:
        check_top_bottom_walls(rows("111111", "100N01", "110111"))
    assert raised(exc) == "WALL - 6 - Error"


def test_floor_next_to_void():
    with pytest.raises(CubError) as exc:
        check_walls(rows("111111", "10 N01", "111111"))
    assert raised(exc) == "WALL - 0 - Error"


def test_floor_under_short_row():
    with pytest.raises(CubError) as exc:
        check_walls(rows("1111", "1001", "11"))
    assert raised(exc) == "WALL - 0 - Error"


def test_player_on_edge_rows_and_column():
    lines = rows("1N1", "101", "111")
    with pytest.raises(CubError) as exc:
        check_player(lines, 1, 0)
    assert raised(exc) == "PLAYER - 1 - Error"
    with pytest.raises(CubError) as exc:
        check_player(rows("111", "N01", "111"), 0, 1)
    assert raised(exc) == "PLAYER - 2 - Error"


def test_player_next_to_void():
    with pytest.raises(CubError) as exc:
        check_player(rows("11111", "1 N01", "11111"), 2, 1)
    assert raised(exc) == "PLAYER - 3 - Error"


def test_map_divided_by_empty_row():
    with pytest.raises(CubError) as exc:
        check_divisions(["111\n", "\n", "111\n"])
    assert raised(exc) == "MAP DIVISION Error"


def test_map_with_all_space_row():
    with pytest.raises(CubError) as exc:
        check_divisions(["111\n", "   \n", "111\n"])
    assert raised(exc) == "MAP DIVISION2 Error"


@pytest.mark.parametrize("path", ["abc", "x.cu", "mapxxxx", "maps/level"])
def test_bad_extension(path):
    with pytest.raises(CubError) as exc:
        check_extension(path)
    assert raised(exc) == "MAP IS NOT .CUB Error"


def test_good_extension_and_valid_map_pass_through():
    check_extension("maps/level.cub")
    scan = validate_map(rows("1111", "1E01", "1111"))
    assert scan.heading == "E"
    assert (scan.player_x, scan.player_y) == (1, 1)
import pytest

from cubcaster.scene import Color, load_scene, parse_color, parse_scene, to_grid
from cubcaster.validate import CubError

HEADER = (
    "NO ./n.xpm\n"
    "SO ./s.xpm\n"
    "WE ./w.xpm\n"
    "EA ./e.xpm\n"
    "F 220,100,0\n"
    "C 225,30,0\n"
)
MAP = "1111\n10N1\n1111\n"
VALID = HEADER + "\n" + MAP


def _error(text):
    with pytest.raises(CubError) as excinfo:
        parse_scene(text)
    return excinfo.value.message


def test_parse_valid_scene_paths_and_colors():
    scene = parse_scene(VALID)
    assert scene.north == "./n.xpm"
    assert scene.south == "./s.xpm"
    assert scene.west == "./w.xpm"
    assert scene.east == "./e.xpm"
    assert scene.floor == Color(220, 100, 0)
    assert scene.ceiling == Color(225, 30, 0)


def test_parse_valid_scene_map():
    scene = parse_scene(VALID)
    assert scene.lines == ["1111\n", "10N1\n", "1111\n"]
    assert scene.grid == [[1, 1, 1, 1], [1, 0, 0, 1], [1, 1, 1, 1]]
    assert (scene.start.player_x, scene.start.player_y) == (2, 1)
    assert scene.start.heading == "N"
    assert scene.height == 3


def test_indented_entries_and_spaced_paths():
    text = HEADER.replace("NO ./n.xpm", "   NO    ./n.xpm") + MAP
    assert parse_scene(text).north == "./n.xpm"


def test_color_to_int_packs_rgb():
    assert Color(1, 2, 3).to_int() == 0x010203
    assert Color(255, 255, 255).to_int() == 0xFFFFFF


def test_parse_color_with_spaces():
    assert parse_color(" 1, 2, 3\n", "F") == Color(1, 2, 3)


def test_parse_color_leading_comma():
    with pytest.raises(CubError) as excinfo:
        parse_color(",1,2,3\n", "C")
    assert excinfo.value.message == "',' Error"


def test_parse_color_missing_component():
    with pytest.raises(CubError) as excinfo:
        parse_color("1,2\n", "F")
    assert excinfo.value.message == "RGB - 4 - Error"


@pytest.mark.parametrize(
    "text, key, message",
    [
        ("256,0,0\n", "F", "RGB - 1 - Error"),
        ("0,256,0\n", "F", "RGB - 2 -Error"),
        ("0,0,256\n", "F", "RGB - 3 - Error"),
        ("256,0,0\n", "C", "RGB - 5 - Error"),
        ("0,256,0\n", "C", "RGB - 6 - Error"),
        ("0,0,256\n", "C", "RGB - 7 - Error"),
    ],
)
def test_parse_color_range(text, key, message):
    with pytest.raises(CubError) as excinfo:
        parse_color(text, key)
    assert excinfo.value.message == message


def test_duplicate_texture():
    text = "NO ./a.xpm\n" + HEADER + MAP
    assert _error(text) == "2 time NO Error"


def test_duplicate_floor():
    text = "F 1,2,3\n" + HEADER + MAP
    assert _error(text) == "2 times f Error"


def test_duplicate_ceiling():
    text = "C 1,2,3\n" + HEADER + MAP
    assert _error(text) == "2 times C Error"


def test_path_must_start_with_dot():
    text = HEADER.replace("./n.xpm", "n.xpm") + MAP
    assert _error(text) == "Direction Error"


def test_path_needs_separating_space():
    text = HEADER.replace("NO ./n.xpm", "NO./n.xpm") + MAP
    assert _error(text) == "ARGUMANT - 0 - Error"


def test_unknown_identifier():
    text = "XX ./x.xpm\n" + HEADER + MAP
    assert _error(text) == "ARGUMANT - 0 - Error"


def test_missing_map():
    assert _error(HEADER + "\n\n") == "INVALID MAP Error"


def test_blank_line_inside_map():
    text = HEADER + "1111\n10N1\n\n1111\n"
    assert _error(text) == "Map division Error"


def test_trailing_blank_line_after_map():
    assert _error(VALID + "\n") == "Map division Error"


def test_map_errors_propagate():
    text = HEADER + "1111\n10N\n1111\n"
    assert _error(text) == "PLAYER - 3 - Error"


def test_to_grid_values():
    assert to_grid(["1 1\n", "0NE\n"]) == [[1, 2, 1], [0, 0, 0]]


def test_to_grid_rejects_unknown_cell():
    with pytest.raises(CubError):
        to_grid(["1X1\n"])


def test_load_scene_round_trip(tmp_path):
    path = tmp_path / "level.cub"
    path.write_text(VALID, encoding="utf-8")
    assert load_scene(path) == parse_scene(VALID)


def test_load_scene_missing_file(tmp_path):
    with pytest.raises(CubError) as excinfo:
        load_scene(tmp_path / "missing.cub")
    assert excinfo.value.message == "THERE IS NO SUCH FILE"


def test_load_scene_bad_extension(tmp_path):
    path = tmp_path / "scene_map"
    path.write_text(VALID, encoding="utf-8")
    with pytest.raises(CubError) as excinfo:
        load_scene(path)
    assert excinfo.value.message == "MAP IS NOT .CUB Error"
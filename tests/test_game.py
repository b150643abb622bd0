import math

import pytest

from cubcaster.game import Game, load_textures, main
from cubcaster.scene import Color, parse_scene
from cubcaster.validate import CubError
from cubcaster.xpm import XpmImage

RED = 0xFF0000
XPM_TEXT = '/* XPM */\nstatic char *t[] = {\n"2 2 1 1",\n"a c #FF0000",\n"aa",\n"aa"\n};\n'
MAP = [
    "1111111",
    "1000001",
    "1000001",
    "100N001",
    "1000001",
    "1000001",
    "1111111",
]


def scene_text(path="./wall.xpm"):
    header = "".join(f"{key} {path}\n" for key in ("NO", "SO", "WE", "EA"))
    return header + "F 10,20,30\nC 40,50,60\n\n" + "\n".join(MAP) + "\n"


def wall_textures():
    image = XpmImage(width=2, height=2, pixels=(RED,) * 4)
    return {name: image for name in ("north", "south", "west", "east")}


@pytest.fixture
def game():
    return Game(parse_scene(scene_text()), wall_textures(), width=16, height=40)


def test_tick_frame_has_sky_wall_and_floor(game):
    frame = game.tick()
    assert len(frame) == 16
    ceiling = Color(40, 50, 60).to_int()
    floor = Color(10, 20, 30).to_int()
    for column in frame:
        assert len(column) == 40
        assert column[0] == ceiling
        assert column[-1] == floor
        assert column[20] == RED


def test_held_rotation_turns_player(game):
    before = (game.player.dir_x, game.player.dir_y)
    game.controls.press(124)
    game.tick()
    after = (game.player.dir_x, game.player.dir_y)
    assert after != pytest.approx(before)
    assert math.hypot(*after) == pytest.approx(1.0)


def test_forward_stops_before_wall(game):
    game.controls.press(13)
    for _ in range(20):
        game.tick()
    assert 1.0 <= game.player.y < 3.5
    assert game.player.x == pytest.approx(3.5)


def test_release_stops_movement(game):
    game.controls.press(13)
    game.tick()
    game.controls.release(13)
    y = game.player.y
    game.tick()
    assert game.player.y == y
    assert y < 3.5


def _write_files(tmp_path, *names):
    for name in names:
        (tmp_path / name).write_text(XPM_TEXT)


def test_load_textures_reads_walls_and_gun(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_files(tmp_path, "wall.xpm", "gun.xpm")
    textures = load_textures(parse_scene(scene_text()), "./gun.xpm")
    assert set(textures) == {"north", "south", "west", "east", "gun"}
    assert textures["north"].pixel(0, 0) == RED
    assert textures["gun"].pixel(1, 1) == RED


def test_load_textures_missing_wall(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_files(tmp_path, "gun.xpm")
    with pytest.raises(CubError) as info:
        load_textures(parse_scene(scene_text()), "./gun.xpm")
    assert info.value.message == "Texture Error"


def test_load_textures_missing_gun(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_files(tmp_path, "wall.xpm")
    with pytest.raises(CubError) as info:
        load_textures(parse_scene(scene_text()), "./gun.xpm")
    assert info.value.message == "Texture gun Error"


@pytest.mark.parametrize("argv", [[], ["a.cub", "b.cub"]])
def test_main_wrong_argument_count(argv, capsys):
    assert main(argv) == 0
    assert capsys.readouterr().out == "ac error\n"


def test_main_rejects_extension(capsys):
    assert main(["scene_txt"]) == 0
    assert capsys.readouterr().out == "MAP IS NOT .CUB Error\n"


def test_main_missing_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["missing.cub"]) == 0
    assert capsys.readouterr().out == "THERE IS NO SUCH FILE\n"


def test_main_missing_textures(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "scene.cub").write_text(scene_text())
    assert main(["scene.cub"]) == 0
    assert capsys.readouterr().out == "Texture Error\n"
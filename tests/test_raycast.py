import pytest

from cubcaster.player import Player
from cubcaster.raycast import (
    TEXTURE_SIZE,
    RayHit,
    cast_ray,
    create_trgb,
    render_frame,
    texture_for_hit,
)
from cubcaster.scene import Color
from cubcaster.xpm import TRANSPARENT, XpmImage

ROOM = [
    [1, 1, 1, 1, 1],
    [1, 0, 0, 0, 1],
    [1, 0, 0, 0, 1],
    [1, 0, 0, 0, 1],
    [1, 1, 1, 1, 1],
]


def _uniform(color):
    return XpmImage(width=TEXTURE_SIZE, height=TEXTURE_SIZE, pixels=(color,) * TEXTURE_SIZE**2)


@pytest.mark.parametrize("rgb", [(0, 0, 0), (255, 255, 255), (12, 200, 7)])
def test_create_trgb_matches_color_packing(rgb):
    assert create_trgb(0, *rgb) == Color(*rgb).to_int()


def test_create_trgb_alpha_in_top_byte():
    assert create_trgb(255, 0, 0, 0) == TRANSPARENT


@pytest.mark.parametrize(
    "heading, side, name",
    [("N", 1, "south"), ("S", 1, "north"), ("E", 0, "west"), ("W", 0, "east")],
)
def test_center_ray_hits_wall_with_expected_texture(heading, side, name):
    player = Player.from_heading(heading, 2, 2)
    hit = cast_ray(ROOM, player, 50, 100, 60)
    assert ROOM[hit.map_y][hit.map_x] == 1
    assert hit.side == side
    assert texture_for_hit(hit) == name


def test_center_ray_distance_to_north_wall():
    player = Player.from_heading("N", 2, 2)
    hit = cast_ray(ROOM, player, 50, 100, 60)
    assert (hit.map_x, hit.map_y) == (2, 0)
    assert hit.perp_wall_dist == pytest.approx(1.5)


def test_every_column_stays_within_screen_and_texture():
    player = Player.from_heading("E", 1, 3)
    width, height = 40, 30
    for column in range(width):
        hit = cast_ray(ROOM, player, column, width, height)
        assert 0 <= hit.draw_start <= hit.draw_end <= height - 1
        assert 0.0 <= hit.wall_x < 1.0
        assert 0 <= hit.tex_x < TEXTURE_SIZE
        assert hit.column == column


def test_symmetric_columns_see_symmetric_distances():
    player = Player.from_heading("N", 2, 2)
    width = 40
    for column in range(1, width // 2):
        left = cast_ray(ROOM, player, column, width, 30)
        right = cast_ray(ROOM, player, width - column, width, 30)
        assert left.perp_wall_dist == pytest.approx(right.perp_wall_dist)
        assert left.side == right.side


def test_closer_wall_gives_taller_line():
    near = cast_ray(ROOM, Player.from_heading("W", 1, 2), 50, 100, 60)
    far = cast_ray(ROOM, Player.from_heading("W", 3, 2), 50, 100, 60)
    assert near.perp_wall_dist < far.perp_wall_dist
    assert near.line_height > far.line_height


def test_touching_wall_fills_whole_column():
    grid = [
        [1, 1, 1, 1, 1],
        [1, 1, 0, 0, 1],
        [1, 1, 0, 0, 1],
        [1, 1, 0, 0, 1],
        [1, 1, 1, 1, 1],
    ]
    player = Player(x=2.0, y=2.5, dir_x=-1.0, dir_y=0.0, plane_x=0.0, plane_y=-0.66)
    height = 30
    hit = cast_ray(grid, player, 50, 100, height)
    assert hit.perp_wall_dist == 0
    assert hit.draw_start == 0
    assert hit.draw_end == height - 1


def test_texture_for_hit_without_direction_is_none():
    hit = RayHit(
        column=0, map_x=0, map_y=0, side=0, ray_dir_x=0.0, ray_dir_y=1.0,
        perp_wall_dist=1.0, line_height=10, draw_start=0, draw_end=9,
        wall_x=0.0, tex_x=0, step=1.0, tex_pos=0.0,
    )
    assert texture_for_hit(hit) is None


def test_render_frame_layout_and_colours():
    wide = [[1] * 9] + [[1] + [0] * 7 + [1] for _ in range(7)] + [[1] * 9]
    player = Player.from_heading("N", 4, 4)
    textures = {
        "north": _uniform(0x111111),
        "south": _uniform(0x222222),
        "east": _uniform(0x333333),
        "west": _uniform(0x444444),
    }
    floor, ceiling = Color(1, 2, 3).to_int(), Color(4, 5, 6).to_int()
    width, height = 8, 6
    frame = render_frame(wide, player, textures, floor, ceiling, width, height)
    assert len(frame) == width
    for column, pixels in enumerate(frame):
        assert len(pixels) == height
        hit = cast_ray(wide, player, column, width, height)
        assert pixels[: hit.draw_start] == [ceiling] * hit.draw_start
        assert pixels[hit.draw_end + 1 :] == [floor] * (height - hit.draw_end - 1)
        wall = textures[texture_for_hit(hit)].pixel(0, 0)
        assert set(pixels[hit.draw_start : hit.draw_end + 1]) == {wall}
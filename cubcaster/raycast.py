"""Ray casting of the map into screen columns, and texture sampling."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from .player import Player
from .xpm import XpmImage

SCREEN_WIDTH = 1920
SCREEN_HEIGHT = 1080
TEXTURE_SIZE = 64

_FAR = 1e30
_INT_MAX = 2147483647


@dataclass(frozen=True)
class RayHit:
    """Where the ray for one screen column met a wall, and how to draw it."""

    column: int
    map_x: int
    map_y: int
    side: int
    ray_dir_x: float
    ray_dir_y: float
    perp_wall_dist: float
    line_height: int
    draw_start: int
    draw_end: int
    wall_x: float
    tex_x: int
    step: float
    tex_pos: float


def create_trgb(t: int, r: int, g: int, b: int) -> int:
    """Pack transparency and colour channels as 0xTTRRGGBB."""
    return (t << 24) | (r << 16) | (g << 8) | b


def _solid(grid: Sequence[Sequence[int]], x: int, y: int) -> bool:
    """A cell stops the ray if it is not floor; cells outside the map do too."""
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        return grid[y][x] > 0
    return True


def cast_ray(
    grid: Sequence[Sequence[int]],
    player: Player,
    column: int,
    width: int = SCREEN_WIDTH,
    height: int = SCREEN_HEIGHT,
) -> RayHit:
    """Cast the ray for ``column`` of a ``width`` x ``height`` view."""
    camera_x = 2 * column / float(width) - 1
    ray_x = player.dir_x + player.plane_x * camera_x
    ray_y = player.dir_y + player.plane_y * camera_x
    map_x, map_y = int(player.x), int(player.y)
    delta_x = _FAR if ray_x == 0 else abs(1 / ray_x)
    delta_y = _FAR if ray_y == 0 else abs(1 / ray_y)

    if ray_x < 0:
        step_x, side_x = -1, (player.x - map_x) * delta_x
    else:
        step_x, side_x = 1, (map_x + 1.0 - player.x) * delta_x
    if ray_y < 0:
        step_y, side_y = -1, (player.y - map_y) * delta_y
    else:
        step_y, side_y = 1, (map_y + 1.0 - player.y) * delta_y

    side = 0
    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        if _solid(grid, map_x, map_y):
            break

    perp = side_x - delta_x if side == 0 else side_y - delta_y
    line_height = int(height / perp) if perp > 0 else _INT_MAX

    half = height // 2
    draw_start = max(half - line_height // 2, 0)
    draw_end = min(line_height // 2 + half, height - 1)

    if side == 0:
        wall_x = player.y + perp * ray_y
    else:
        wall_x = player.x + perp * ray_x
    wall_x -= math.floor(wall_x)

    tex_x = int(wall_x * TEXTURE_SIZE)
    step = TEXTURE_SIZE / line_height if line_height > 0 else 0.0
    tex_pos = (draw_start - half + line_height // 2) * step
    return RayHit(
        column=column,
        map_x=map_x,
        map_y=map_y,
        side=side,
        ray_dir_x=ray_x,
        ray_dir_y=ray_y,
        perp_wall_dist=perp,
        line_height=line_height,
        draw_start=draw_start,
        draw_end=draw_end,
        wall_x=wall_x,
        tex_x=tex_x,
        step=step,
        tex_pos=tex_pos,
    )


def texture_for_hit(hit: RayHit) -> Optional[str]:
    """Name of the wall texture shown for ``hit``, or None when none applies."""
    if hit.side == 0:
        if hit.ray_dir_x > 0:
            return "west"
        if hit.ray_dir_x < 0:
            return "east"
    else:
        if hit.ray_dir_y > 0:
            return "north"
        if hit.ray_dir_y < 0:
            return "south"
    return None


def _sample(texture: Optional[XpmImage], x: int, y: int) -> int:
    if texture is None:
        return 0
    return texture.pixel(x % texture.width, y % texture.height)


def _column(
    hit: RayHit,
    texture: Optional[XpmImage],
    floor: int,
    ceiling: int,
    height: int,
) -> list[int]:
    pixels = [ceiling] * hit.draw_start
    tex_pos = hit.tex_pos
    for _ in range(hit.draw_start, hit.draw_end + 1):
        tex_y = int(tex_pos) & (TEXTURE_SIZE - 1)
        tex_pos += hit.step
        pixels.append(_sample(texture, hit.tex_x, tex_y))
    pixels.extend([floor] * (height - hit.draw_end - 1))
    return pixels


def render_frame(
    grid: Sequence[Sequence[int]],
    player: Player,
    textures: Mapping[str, XpmImage],
    floor: int,
    ceiling: int,
    width: int = SCREEN_WIDTH,
    height: int = SCREEN_HEIGHT,
) -> list[list[int]]:
    """Render the view: one list of pixel values per screen column, top to bottom."""
    columns = []
    for column in range(width):
        hit = cast_ray(grid, player, column, width, height)
        name = texture_for_hit(hit)
        texture = textures.get(name) if name is not None else None
        columns.append(_column(hit, texture, floor, ceiling, height))
    return columns
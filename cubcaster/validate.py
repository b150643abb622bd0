"""Checks applied to the map part of a scene file."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

PLAYER_HEADINGS = frozenset("NSEW")
_PLAIN_CELLS = frozenset(" 10\n")
_BLANK = frozenset(" \t\n\0")
_MAP_CONTENT = frozenset("1ONEWS \t")


class CubError(Exception):
    """Raised when a scene file or its map is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@dataclass
class MapScan:
    """What a pass over the map found: open cells and the player start."""

    zero_count: int = 0
    player_count: int = 0
    player_x: int = 0
    player_y: int = 0
    heading: Optional[str] = None


def _cell(lines: Sequence[str], y: int, x: int) -> str:
    """Character at (x, y), or NUL when outside the map."""
    if 0 <= y < len(lines) and 0 <= x < len(lines[y]):
        return lines[y][x]
    return "\0"


def _is_blank(ch: str) -> bool:
    return ch in _BLANK


def _open_neighbour(lines: Sequence[str], x: int, y: int) -> bool:
    return any(
        _is_blank(_cell(lines, y + dy, x + dx))
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1))
    )


def check_extension(path: str) -> None:
    """Reject file names that are too short or do not look like ``.cub``."""
    if len(path) < 5 or (
        path[-1] != "b" and path[-2] != "u" and path[-3] != "c" and path[-4] != "."
    ):
        raise CubError("MAP IS NOT .CUB Error")


def scan_map(lines: Sequence[str]) -> MapScan:
    """Check the map's characters and locate the player start."""
    scan = MapScan()
    for y, row in enumerate(lines):
        for x, ch in enumerate(row):
            if ch in _PLAIN_CELLS:
                if ch == "0":
                    scan.zero_count += 1
            elif ch in PLAYER_HEADINGS:
                scan.heading = ch
                scan.player_x = x
                scan.player_y = y
                scan.player_count += 1
            else:
                raise CubError("INVALID MAP Error")
    return scan


def check_size(scan: MapScan, height: int) -> None:
    """Require at least three rows and exactly one player."""
    if height < 3:
        raise CubError("MAP SIZE Error")
    if scan.player_count != 1:
        raise CubError("INVALID PLAYER Error")
    if scan.zero_count == 0 and scan.player_count == 0:
        raise CubError("MAP SIZE IS 0 Error")


def check_top_bottom_walls(lines: Sequence[str]) -> None:
    """The first and last rows may not hold open floor."""
    if "0" in lines[0].split("\n", 1)[0]:
        raise CubError("WALL - 5 - Error")
    if "0" in lines[-1]:
        raise CubError("WALL - 6 - Error")


def check_walls(lines: Sequence[str]) -> None:
    """Every open cell of an inner row must be enclosed on four sides."""
    for y in range(1, len(lines) - 1):
        for x, ch in enumerate(lines[y]):
            if ch == "0" and _open_neighbour(lines, x, y):
                raise CubError("WALL - 0 - Error")


def check_player(lines: Sequence[str], x: int, y: int) -> None:
    """The player may not start on an edge or next to the void."""
    if y == len(lines) - 1 or y == 0:
        raise CubError("PLAYER - 1 - Error")
    if x == 0:
        raise CubError("PLAYER - 2 - Error")
    if _open_neighbour(lines, x, y):
        raise CubError("PLAYER - 3 - Error")


def check_divisions(lines: Sequence[str]) -> None:
    """Reject maps split by empty or all-space rows."""
    seen_empty = False
    for row in lines:
        if row.startswith("\n"):
            seen_empty = True
        if seen_empty and any(ch in _MAP_CONTENT for ch in row):
            raise CubError("MAP DIVISION Error")
    for row in lines:
        body = row.split("\n", 1)[0]
        if len(row) == body.count(" ") + 1:
            raise CubError("MAP DIVISION2 Error")


def validate_map(lines: Sequence[str]) -> MapScan:
    """Run every map check in order and return the scan result."""
    scan = scan_map(lines)
    check_size(scan, len(lines))
    check_top_bottom_walls(lines)
    check_walls(lines)
    check_player(lines, scan.player_x, scan.player_y)
    check_divisions(lines)
    return scan
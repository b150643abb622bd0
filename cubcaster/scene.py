"""Reading of scene files: texture paths, floor and ceiling colours, and the map."""

from __future__ import annotations

import io
import itertools
import os
from dataclasses import dataclass
from typing import Sequence, Union

from .textutil import atoi, join_path, read_lines, split
from .validate import CubError, MapScan, check_extension, validate_map

FLOOR = 0
WALL = 1
VOID = 2

_DIGITS = frozenset("0123456789")
_TEXTURE_KEYS = {
    ("N", "O"): "north",
    ("S", "O"): "south",
    ("W", "E"): "west",
    ("E", "A"): "east",
}
_RANGE_ERRORS = {
    "F": ("RGB - 1 - Error", "RGB - 2 -Error", "RGB - 3 - Error"),
    "C": ("RGB - 5 - Error", "RGB - 6 - Error", "RGB - 7 - Error"),
}
_DUPLICATE_COLOR = {"F": "2 times f Error", "C": "2 times C Error"}
_CELL_VALUES = {
    "0": FLOOR,
    "1": WALL,
    "N": FLOOR,
    "S": FLOOR,
    "E": FLOOR,
    "W": FLOOR,
    " ": VOID,
}
_HEADER_ENTRIES = 6


@dataclass(frozen=True)
class Color:
    """An RGB colour with components in 0..255."""

    r: int
    g: int
    b: int

    def to_int(self) -> int:
        """Pack the colour as 0x00RRGGBB."""
        return (0 << 24) | (self.r << 16) | (self.g << 8) | self.b


@dataclass
class Scene:
    """Everything a scene file describes."""

    north: str
    south: str
    west: str
    east: str
    floor: Color
    ceiling: Color
    lines: list[str]
    grid: list[list[int]]
    start: MapScan

    @property
    def height(self) -> int:
        """Number of map rows."""
        return len(self.grid)


def _char(text: str, index: int) -> str:
    return text[index] if 0 <= index < len(text) else "\0"


def parse_color(text: str, key: str) -> Color:
    """Parse ``r,g,b`` from what follows an ``F`` or ``C`` identifier and its space."""
    if key not in _RANGE_ERRORS:
        raise ValueError(f"unknown colour key: {key!r}")
    start = len(text) - len(text.lstrip(" "))
    if _char(text, start) == ",":
        raise CubError("',' Error")
    commas = digits = 0
    size = len(text)
    i = start + 1
    while i < size:
        if text[i] == ",":
            commas += 1
            i += 1
            while i < size and text[i] in " \t":
                i += 1
            if i < size and text[i] in _DIGITS:
                digits += 1
        i += 1
    if commas != 2 or digits != 2:
        raise CubError("RGB - 4 - Error")
    values = [atoi(piece) for piece in split(text[start:], ",")[:3]]
    for value, message in zip(values, _RANGE_ERRORS[key]):
        if not 0 <= value <= 255:
            raise CubError(message)
    return Color(*values)


def _read_entry(line: str, paths: dict[str, str], colors: dict[str, Color]) -> None:
    start = len(line) - len(line.lstrip(" "))
    a, b = _char(line, start), _char(line, start + 1)
    if a in _DUPLICATE_COLOR and b == " ":
        if a in colors:
            raise CubError(_DUPLICATE_COLOR[a])
        colors[a] = parse_color(line[start + 2:], a)
        return
    i = start + 2
    stepped = False
    while i < len(line) and line[i] not in ".\n":
        if line[i] != " ":
            raise CubError("Direction Error")
        i += 1
        stepped = True
    name = _TEXTURE_KEYS.get((a, b))
    if name is None or not stepped:
        raise CubError("ARGUMANT - 0 - Error")
    if name in paths:
        raise CubError(f"2 time {a}{b} Error")
    paths[name] = join_path(None, line[i:])


def to_grid(lines: Sequence[str]) -> list[list[int]]:
    """Turn map rows into cells: 0 for floor and the start, 1 for wall, 2 for void."""
    grid = []
    for line in lines:
        row = []
        for ch in line.split("\n", 1)[0]:
            if ch not in _CELL_VALUES:
                raise CubError("INVALID MAP Error")
            row.append(_CELL_VALUES[ch])
        grid.append(row)
    return grid


def parse_scene(text: str) -> Scene:
    """Parse and validate the full text of a scene file."""
    remaining = read_lines(io.StringIO(text))
    paths: dict[str, str] = {}
    colors: dict[str, Color] = {}
    for line in itertools.islice(remaining, text.count("\n")):
        if len(line) >= 2 and line[0] != "\n":
            _read_entry(line, paths, colors)
        if len(paths) + len(colors) == _HEADER_ENTRIES:
            break

    for first in remaining:
        if not first.startswith("\n"):
            break
    else:
        raise CubError("INVALID MAP Error")
    rows = [first]
    for line in remaining:
        if line.startswith("\n"):
            raise CubError("Map division Error")
        rows.append(line)
    map_lines = [row + "\n" for row in split("".join(rows), "\n")]

    scan = validate_map(map_lines)
    grid = to_grid(map_lines)
    if len(paths) + len(colors) != _HEADER_ENTRIES:
        raise CubError("INVALID MAP Error")
    return Scene(
        north=paths["north"],
        south=paths["south"],
        west=paths["west"],
        east=paths["east"],
        floor=colors["F"],
        ceiling=colors["C"],
        lines=map_lines,
        grid=grid,
        start=scan,
    )


def load_scene(path: Union[str, "os.PathLike[str]"]) -> Scene:
    """Check the file name, read the file and parse it."""
    name = os.fspath(path)
    check_extension(name)
    try:
        with open(name, encoding="utf-8", errors="surrogateescape", newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise CubError("THERE IS NO SUCH FILE") from exc
    return parse_scene(text)
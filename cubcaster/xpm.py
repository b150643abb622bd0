"""Reading of XPM images used as wall and overlay textures."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from .colors import NONE_COLOR, lookup_color
from .textutil import atoi

TRANSPARENT = 0xFF000000
_NAME_LIMIT = 63
_HEX = re.compile(r"[ \t\n\v\f\r]*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")


@dataclass(frozen=True)
class XpmImage:
    """A decoded image: 32-bit pixel values stored row by row."""

    width: int
    height: int
    pixels: tuple[int, ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the 0xAARRGGBB value at column ``x`` of row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return self.pixels[y * self.width + x]


def split_words(text: str) -> list[str]:
    """Split on spaces and tabs, dropping empty words."""
    return [word for word in re.split(r"[ \t]+", text) if word]


def _find_outside_quotes(text: str, pattern: str) -> int:
    quoted = False
    for i, ch in enumerate(text):
        if ch == '"':
            quoted = not quoted
        if not quoted and text.startswith(pattern, i):
            return i
    return -1


def strip_comments(text: str) -> str:
    """Blank out C-style comments that lie outside quoted strings.

    Comments are replaced by spaces, so the text keeps its length. A ``//``
    comment is blanked together with the newline that ends it.
    """
    while (begin := _find_outside_quotes(text, "/*")) != -1:
        end = text.find("*/", begin + 2)
        stop = len(text) if end == -1 else end + 2
        text = text[:begin] + " " * (stop - begin) + text[stop:]
    while (begin := _find_outside_quotes(text, "//")) != -1:
        end = text.find("\n", begin + 2)
        stop = len(text) if end == -1 else end + 1
        text = text[:begin] + " " * (stop - begin) + text[stop:]
    return text


def _parse_hex(text: str) -> int:
    match = _HEX.match(text)
    sign, digits = match.group(1), match.group(2)
    value = int(digits, 16) if digits else 0
    if sign == "-":
        value = -value
    value &= 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


def text_to_rgb(name: str, end: Optional[str] = None) -> int:
    """Turn a colour specification into 0xRRGGBB.

    ``#RRGGBB`` is read as hexadecimal. Otherwise ``name`` (joined with
    ``end`` by a space when given) is looked up among the named colours;
    ``none`` gives -1 and an unknown name gives 0.
    """
    if name.startswith("#"):
        return _parse_hex(name[1:])
    if end is not None:
        name = f"{name} {end}"[:_NAME_LIMIT]
    value = lookup_color(name)
    return 0 if value is None else value


def _quoted_strings(text: str) -> Iterator[str]:
    pos = 0
    while True:
        opening = text.find('"', pos)
        if opening == -1:
            return
        closing = text.find('"', opening + 1)
        if closing == -1:
            return
        yield text[opening + 1:closing]
        pos = closing + 1


def _next_line(lines: Iterator[str], what: str) -> str:
    line = next(lines, None)
    if line is None:
        raise ValueError(f"XPM data ends before {what}")
    return line


def parse_xpm(text: str) -> XpmImage:
    """Decode the text of an XPM file; raises ValueError when it is malformed."""
    lines = _quoted_strings(strip_comments(text))
    words = split_words(_next_line(lines, "the header"))
    if len(words) < 4:
        raise ValueError("XPM header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (atoi(word) for word in words[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise ValueError("invalid XPM header")

    direct = cpp <= 2
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next_line(lines, "the colour table")
        fields = split_words(line[cpp:])
        try:
            key_index = fields.index("c")
        except ValueError:
            raise ValueError("XPM colour line without a 'c' key") from None
        if key_index + 1 >= len(fields):
            raise ValueError("XPM colour line without a colour value")
        end = fields[key_index + 2] if key_index + 2 < len(fields) else None
        value = text_to_rgb(fields[key_index + 1], end)
        code = line[:cpp]
        if direct:
            palette[code] = value
        else:
            palette.setdefault(code, value)

    pixels: list[int] = []
    for _ in range(height):
        line = _next_line(lines, "the last pixel row")
        for x in range(width):
            colour = palette.get(line[cpp * x:cpp * x + cpp], 0)
            if colour == NONE_COLOR:
                colour = TRANSPARENT
            pixels.append(colour & 0xFFFFFFFF)
    return XpmImage(width=width, height=height, pixels=tuple(pixels))


def load_xpm(path: Union[str, "os.PathLike[str]"]) -> XpmImage:
    """Read and decode an XPM file; OSError propagates if it cannot be read."""
    with open(path, encoding="latin-1", newline="") as handle:
        return parse_xpm(handle.read())
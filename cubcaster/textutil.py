"""Small text helpers used while reading scene files."""

from __future__ import annotations

import re
from typing import Iterator, Optional, TextIO

INT_MAX = 2147483647
INT_MIN = -2147483648

_NUMBER = re.compile(r"[ \t\n\v\f\r]*([+-]?)([0-9]*)")


def atoi(text: str) -> int:
    """Parse a leading integer the way the scene reader expects.

    Leading whitespace is skipped, an optional sign is accepted and parsing
    stops at the first non-digit. A value above the 32-bit signed range
    yields -1 and one below it yields 0.
    """
    match = _NUMBER.match(text)
    sign, digits = match.group(1), match.group(2)
    if not digits:
        return 0
    value = int(digits)
    if sign == "-":
        value = -value
    if value > INT_MAX:
        return -1
    if value < INT_MIN:
        return 0
    return value


def split(text: str, sep: str) -> list[str]:
    """Split ``text`` on ``sep``, dropping empty pieces."""
    return [piece for piece in text.split(sep) if piece]


def join_path(prefix: Optional[str], text: str) -> str:
    """Append ``text`` up to its first newline to ``prefix``."""
    head = text.split("\n", 1)[0]
    return (prefix or "") + head


def read_lines(stream: TextIO) -> Iterator[str]:
    """Yield lines from a text stream, each keeping its trailing newline."""
    while True:
        line = stream.readline()
        if not line:
            return
        yield line
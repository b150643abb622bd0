"""Player position, heading, movement and keyboard controls."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Sequence


class Action(Enum):
    """What a key does."""

    FORWARD = auto()
    BACK = auto()
    LEFT = auto()
    RIGHT = auto()
    ROTATE_LEFT = auto()
    ROTATE_RIGHT = auto()
    QUIT = auto()


_KEYMAP = {
    13: Action.FORWARD,
    1: Action.BACK,
    0: Action.LEFT,
    2: Action.RIGHT,
    123: Action.ROTATE_LEFT,
    124: Action.ROTATE_RIGHT,
    53: Action.QUIT,
}

# Heading letter -> (dir_x, dir_y, plane_x, plane_y)
_HEADINGS = {
    "N": (0.0, -1.0, 0.66, 0.0),
    "S": (0.0, 1.0, -0.66, 0.0),
    "W": (-1.0, 0.0, 0.0, -0.66),
    "E": (1.0, 0.0, 0.0, 0.66),
}


def action_for_key(keycode: int) -> Optional[Action]:
    """Map a key code to its action, or None for keys that do nothing."""
    return _KEYMAP.get(keycode)


@dataclass
class Controls:
    """The set of movement actions whose keys are held down."""

    held: set[Action] = field(default_factory=set)

    def press(self, keycode: int) -> Optional[Action]:
        """Record a key press and return its action."""
        action = action_for_key(keycode)
        if action is not None and action is not Action.QUIT:
            self.held.add(action)
        return action

    def release(self, keycode: int) -> Optional[Action]:
        """Record a key release and return its action."""
        action = action_for_key(keycode)
        if action is not None:
            self.held.discard(action)
        return action


def _is_floor(grid: Sequence[Sequence[int]], x: float, y: float) -> bool:
    row, col = int(y), int(x)
    if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
        return grid[row][col] == 0
    return False


@dataclass
class Player:
    """Position, facing direction and camera plane of the player."""

    x: float
    y: float
    dir_x: float
    dir_y: float
    plane_x: float
    plane_y: float
    move_speed: float = 0.25
    rot_speed: float = 0.1

    @classmethod
    def from_heading(cls, heading: str, x: int, y: int) -> "Player":
        """Place the player at the centre of cell (x, y) facing N, S, E or W."""
        try:
            dir_x, dir_y, plane_x, plane_y = _HEADINGS[heading]
        except KeyError:
            raise ValueError(f"unknown heading: {heading!r}") from None
        return cls(x + 0.5, y + 0.5, dir_x, dir_y, plane_x, plane_y)

    def _step(self, grid: Sequence[Sequence[int]], dx: float, dy: float) -> None:
        if _is_floor(grid, self.x + dx, self.y):
            self.x += dx
        if _is_floor(grid, self.x, self.y + dy):
            self.y += dy

    def move_forward(self, grid: Sequence[Sequence[int]]) -> None:
        """Step along the facing direction unless a wall is in the way."""
        self._step(grid, self.dir_x * self.move_speed, self.dir_y * self.move_speed)

    def move_back(self, grid: Sequence[Sequence[int]]) -> None:
        """Step against the facing direction unless a wall is in the way."""
        self._step(grid, -self.dir_x * self.move_speed, -self.dir_y * self.move_speed)

    def move_right(self, grid: Sequence[Sequence[int]]) -> None:
        """Strafe along the camera plane."""
        self._step(grid, self.plane_x * self.move_speed, self.plane_y * self.move_speed)

    def move_left(self, grid: Sequence[Sequence[int]]) -> None:
        """Strafe against the camera plane."""
        self._step(grid, -self.plane_x * self.move_speed, -self.plane_y * self.move_speed)

    def _rotate(self, angle: float) -> None:
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        self.dir_x, self.dir_y = (
            self.dir_x * cos_a - self.dir_y * sin_a,
            self.dir_x * sin_a + self.dir_y * cos_a,
        )
        self.plane_x, self.plane_y = (
            self.plane_x * cos_a - self.plane_y * sin_a,
            self.plane_x * sin_a + self.plane_y * cos_a,
        )

    def rotate_left(self) -> None:
        """Turn by the rotation speed counter-clockwise on screen."""
        self._rotate(-self.rot_speed)

    def rotate_right(self) -> None:
        """Turn by the rotation speed clockwise on screen."""
        self._rotate(self.rot_speed)

    def update(self, grid: Sequence[Sequence[int]], controls: Controls) -> None:
        """Apply one frame of movement for the keys held in ``controls``."""
        held = controls.held
        if Action.FORWARD in held:
            self.move_forward(grid)
        elif Action.BACK in held:
            self.move_back(grid)
        if Action.LEFT in held:
            self.move_left(grid)
        elif Action.RIGHT in held:
            self.move_right(grid)
        if Action.ROTATE_LEFT in held:
            self.rotate_left()
        elif Action.ROTATE_RIGHT in held:
            self.rotate_right()
"""The game window: loading textures, the frame loop and the command entry point."""

from __future__ import annotations

import sys
from array import array
from itertools import chain
from typing import Mapping, Optional, Sequence

from .player import Action, Controls, Player
from .raycast import SCREEN_HEIGHT, SCREEN_WIDTH, create_trgb, render_frame
from .scene import Scene, load_scene
from .validate import CubError
from .xpm import XpmImage, load_xpm

GUN_PATH = "./textures/gun.xpm"
GUN_POSITION = (900, 430)
WINDOW_TITLE = "Cub3d"
WALL_NAMES = ("north", "south", "west", "east")


def load_textures(scene: Scene, gun_path: str = GUN_PATH) -> dict[str, XpmImage]:
    """Load the four wall textures named by ``scene`` and the gun overlay."""
    try:
        textures = {name: load_xpm(getattr(scene, name)) for name in WALL_NAMES}
    except (OSError, ValueError) as exc:
        raise CubError("Texture Error") from exc
    try:
        textures["gun"] = load_xpm(gun_path)
    except (OSError, ValueError) as exc:
        raise CubError("Texture gun Error") from exc
    return textures


def _surface(pygame, pixels: Sequence[int], width: int, height: int):
    """Build a surface from 0xAARRGGBB values whose alpha byte means transparency."""
    data = array("I", (value ^ 0xFF000000 for value in pixels))
    if sys.byteorder == "little":
        data.byteswap()
    raw = data.tobytes()
    return pygame.image.frombuffer(raw, (width, height), "ARGB").convert_alpha()


class Game:
    """A running scene: the player, held keys and the rendered view."""

    def __init__(
        self,
        scene: Scene,
        textures: Mapping[str, XpmImage],
        width: int = SCREEN_WIDTH,
        height: int = SCREEN_HEIGHT,
    ) -> None:
        self.scene = scene
        self.textures = dict(textures)
        self.width = width
        self.height = height
        start = scene.start
        self.player = Player.from_heading(start.heading, start.player_x, start.player_y)
        self.controls = Controls()
        self.floor = create_trgb(0, scene.floor.r, scene.floor.g, scene.floor.b)
        self.ceiling = create_trgb(0, scene.ceiling.r, scene.ceiling.g, scene.ceiling.b)
        self.running = False

    def tick(self) -> list[list[int]]:
        """Move the player for the held keys and render one frame as columns."""
        self.player.update(self.scene.grid, self.controls)
        return render_frame(
            self.scene.grid,
            self.player,
            self.textures,
            self.floor,
            self.ceiling,
            self.width,
            self.height,
        )

    def run(self) -> None:
        """Open the window and run the frame loop until it is closed."""
        import pygame

        keycodes = {
            pygame.K_w: 13,
            pygame.K_s: 1,
            pygame.K_a: 0,
            pygame.K_d: 2,
            pygame.K_LEFT: 123,
            pygame.K_RIGHT: 124,
            pygame.K_ESCAPE: 53,
        }
        pygame.init()
        try:
            screen = pygame.display.set_mode((self.width, self.height))
            pygame.display.set_caption(WINDOW_TITLE)
            gun: Optional[XpmImage] = self.textures.get("gun")
            gun_surface = _surface(pygame, gun.pixels, gun.width, gun.height) if gun else None
            self.running = True
            while self.running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    elif event.type == pygame.KEYDOWN and event.key in keycodes:
                        if self.controls.press(keycodes[event.key]) is Action.QUIT:
                            self.running = False
                    elif event.type == pygame.KEYUP and event.key in keycodes:
                        self.controls.release(keycodes[event.key])
                if not self.running:
                    break
                frame = self.tick()
                rows = list(chain.from_iterable(zip(*frame)))
                screen.blit(_surface(pygame, rows, self.width, self.height), (0, 0))
                if gun_surface is not None:
                    screen.blit(gun_surface, GUN_POSITION)
                pygame.display.flip()
        finally:
            self.running = False
            pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Load the scene named on the command line and play it."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("ac error")
        return 0
    try:
        scene = load_scene(args[0])
        textures = load_textures(scene, GUN_PATH)
    except CubError as exc:
        print(exc.message)
        return 0
    Game(scene, textures).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
# cubcaster

cubcaster is a small first-person maze explorer. It reads a `.cub` scene file
that names four XPM wall textures, a floor colour and a ceiling colour, then
draws the maze with textured raycasting in a 1920x1080 pygame window.

## Installing

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Running

```
cubcaster path/to/level.cub
```

The program expects exactly one argument, the path to a scene file. With any
other number of arguments it prints `ac error`. A scene that breaks one of the
rules below is rejected: the program prints the error message and stops
without opening a window.

### Controls

| Key         | Action        |
|-------------|---------------|
| W           | move forward  |
| S           | move back     |
| A           | strafe left   |
| D           | strafe right  |
| Left arrow  | turn left     |
| Right arrow | turn right    |
| Escape      | quit          |

Closing the window also quits. Movement stops at walls.

## The scene file

A scene file begins with six settings, in any order, each on its own line.
Blank lines between them are allowed:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0
```

- `NO`, `SO`, `WE` and `EA` give the wall textures as XPM files. The
  identifier is followed by spaces, then the path, which must begin with `.`
  (for example `./textures/north.xpm`).
- `F` is the floor colour and `C` the ceiling colour, each followed by one
  space and three comma-separated values from 0 to 255.
- Each setting may appear only once.

After the settings, and any blank lines that follow them, comes the map:

```
111111
100101
101001
1100N1
111111
```

- `1` is a wall, `0` is open floor and a space is outside the map.
- Exactly one of `N`, `S`, `E` or `W` marks where the player starts and the
  way the player faces.
- The map needs at least three rows.
- Walls must close the map in: the first and last rows hold no floor, and no
  floor cell or the player may touch a space or the edge of the map.
- The map may not contain blank lines or rows made only of spaces.

Wall textures are sampled as 64x64 tiles. The gun overlay drawn over the view
is loaded from `./textures/gun.xpm`, relative to the directory the program is
started in; if it or any wall texture cannot be read, the program prints
`Texture gun Error` or `Texture Error`.

## Using the modules

The parsing and rendering parts can be used without opening a window:

```python
from cubcaster.scene import load_scene
from cubcaster.xpm import load_xpm

scene = load_scene("level.cub")
texture = load_xpm("textures/north.xpm")
print(texture.pixel(0, 0))
```

- `cubcaster.scene` parses scene text with `parse_scene` and files with
  `load_scene` into a `Scene` (texture paths, `floor` and `ceiling` `Color`s,
  map rows and an integer `grid`).
- `cubcaster.validate` holds the map checks (`validate_map` and the single
  checks it runs) and raises `CubError`.
- `cubcaster.xpm` decodes XPM images into an `XpmImage` with `parse_xpm` and
  `load_xpm`.
- `cubcaster.colors` maps X11 colour names to RGB values with `lookup_color`.
- `cubcaster.raycast` casts rays (`cast_ray`) and renders frames into lists of
  pixel columns (`render_frame`).
- `cubcaster.player` handles movement, turning and key state (`Player`,
  `Controls`, `Action`).
- `cubcaster.game` loads textures (`load_textures`), runs the window (`Game`)
  and provides the `main` entry point of the `cubcaster` command.
- `cubcaster.textutil` holds the small text helpers the readers use.
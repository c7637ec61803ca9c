# cubcaster

A small first-person raycaster. It reads a `.cub` scene file describing wall
textures, floor and ceiling colours and a grid map, then lets you walk
through the maze in a 1280×720 window drawn with pygame.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Running

```
cubcaster maps/example.cub
```

Exactly one argument is expected; otherwise a usage message is printed to
standard error. The file must end in `.cub` and be readable. If the scene,
its textures or the window cannot be set up, `Error` followed by the reason
is printed to standard error and the command exits with status 1.

While the game runs, a line such as `[timer] 59.98 FPS (avg 16.67 ms)` is
printed to standard output about once a second. The frame rate is capped at
60 frames per second.

### Controls

| Key          | Action                     |
|--------------|----------------------------|
| W / S        | move forward / back        |
| A / D        | strafe left / right        |
| Left / Right | turn                       |
| Esc          | quit (closing the window quits too) |

## Scene files

A scene starts with six identifiers, in any order:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0
```

- `NO`, `SO`, `WE`, `EA` give the wall texture paths. A relative path that
  cannot be opened as given is looked up next to the `.cub` file. Textures
  are read with Pillow, so any image format it can decode works, and may be
  at most 64×64 pixels.
- `F` and `C` give the floor and ceiling colour as `R,G,B`, each 0–255.
- The first valid line for each identifier counts. Until all six have been
  read, any other line is skipped.

The map follows the identifiers. Blank lines may separate the header from
the map and may follow it, but none may appear inside it:

```
111111
100101
101001
1100N1
111111
```

- `1` is a wall, `0` is floor and a space is empty space. No other
  characters are allowed; shorter rows are padded with spaces.
- `N`, `S`, `E` or `W` marks the one starting position and the direction
  the player faces.
- Every floor cell and the start cell must be enclosed: none may sit on the
  map's edge or next to empty space.

## Using it as a library

The parsing and simulation parts work without opening a window:

- `cubcaster.world.Game` holds the whole state of a scene; `GameMap`,
  `Player`, `Keys`, `Texture` and `Direction` are its parts.
- `cubcaster.scene.parse_scene(game, path)` fills a `Game` from a `.cub`
  file, and `parse_scene_lines(game, lines)` does the same from lines of
  text. Both raise `cubcaster.world.CubError` with a message when the scene
  is invalid.
- `cubcaster.colors`, `cubcaster.texture_spec`, `cubcaster.header` and
  `cubcaster.mapgrid` hold the individual parsing and map-checking steps.
- `cubcaster.textures.init_textures(game)` loads the four wall textures.
- `cubcaster.movement` places, turns and moves the player.
  `handle_move` and `handle_rotate` are what the game window uses: a move
  is refused only when the destination cell is a wall. `movement_update`
  instead treats the player as having a 0.2-cell radius and slides along
  walls.
- `cubcaster.render.raycaster(game, screen)` draws one frame of walls into
  a buffer of packed `0xRRGGBB` values made by
  `cubcaster.render.new_screen()`; `render_floor_ceiling(game, screen)`
  fills in the floor and ceiling.
- `cubcaster.timer.FrameTimer` measures frame time, caps the frame rate and
  reports frames per second; its clock and sleep function can be replaced.

## What it does not do

There is no mouse look, minimap, sprites, doors or sound, and no way to
change the window size or speed settings from the command line.
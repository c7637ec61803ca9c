"""Ray casting of the map into a frame buffer of packed 0xRRGGBB pixels."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from .world import EPS, HEIGHT, TEX_SIZE, WIDTH, Direction, Game, Texture, Vec2

_SHADE_MASK = 8355711


@dataclass
class Ray:
    """State of one screen column's ray while it walks the grid."""

    dir: Vec2 = field(default_factory=Vec2)
    delta: Vec2 = field(default_factory=Vec2)
    side: Vec2 = field(default_factory=Vec2)
    step_x: int = 0
    step_y: int = 0
    map_x: int = 0
    map_y: int = 0
    side_hit: int = 0
    dist: float = 0.0
    tex_id: int = Direction.NORTH
    tex_x: int = 0


def new_screen() -> np.ndarray:
    """Return a blank frame buffer of shape (HEIGHT, WIDTH)."""
    return np.zeros((HEIGHT, WIDTH), dtype=np.int64)


def _nudge(value: float) -> float:
    if abs(value) < EPS:
        return -EPS if value < 0.0 else EPS
    return value


def ray_init(game: Game, x: int) -> Ray:
    """Build the ray for screen column x, ready for the grid walk."""
    player = game.player
    camera_x = 2.0 * x / WIDTH - 1.0
    ray = Ray()
    ray.dir.x = _nudge(player.dir.x + player.plane.x * camera_x)
    ray.dir.y = _nudge(player.dir.y + player.plane.y * camera_x)
    ray.map_x = int(player.pos.x)
    ray.map_y = int(player.pos.y)
    ray.delta.x = abs(1.0 / ray.dir.x)
    ray.delta.y = abs(1.0 / ray.dir.y)
    if ray.dir.x < 0.0:
        ray.step_x = -1
        ray.side.x = (player.pos.x - ray.map_x) * ray.delta.x
    else:
        ray.step_x = 1
        ray.side.x = (ray.map_x + 1.0 - player.pos.x) * ray.delta.x
    if ray.dir.y < 0.0:
        ray.step_y = -1
        ray.side.y = (player.pos.y - ray.map_y) * ray.delta.y
    else:
        ray.step_y = 1
        ray.side.y = (ray.map_y + 1.0 - player.pos.y) * ray.delta.y
    return ray


def dda_step(game: Game, ray: Ray) -> bool:
    """Advance the ray by one grid cell; True when it enters a wall.

    Cells outside the grid count as walls.
    """
    if ray.side.x < ray.side.y:
        ray.side.x += ray.delta.x
        ray.map_x += ray.step_x
        ray.side_hit = 0
    else:
        ray.side.y += ray.delta.y
        ray.map_y += ray.step_y
        ray.side_hit = 1
    grid = game.map.grid
    if not 0 <= ray.map_y < len(grid) or not 0 <= ray.map_x < len(grid[ray.map_y]):
        return True
    return grid[ray.map_y][ray.map_x] == "1"


def dda_distance(game: Game, ray: Ray) -> float:
    """Set and return the perpendicular distance to the wall that was hit."""
    pos = game.player.pos
    if ray.side_hit == 0:
        dist = (ray.map_x - pos.x + (1 - ray.step_x) * 0.5) / ray.dir.x
    else:
        dist = (ray.map_y - pos.y + (1 - ray.step_y) * 0.5) / ray.dir.y
    ray.dist = max(abs(dist), EPS)
    return ray.dist


def set_tex_info(game: Game, ray: Ray) -> None:
    """Choose the wall texture and the texture column the ray hit."""
    pos = game.player.pos
    if ray.side_hit == 0:
        wall_x = pos.y + ray.dist * ray.dir.y
    else:
        wall_x = pos.x + ray.dist * ray.dir.x
    wall_x -= math.floor(wall_x)
    ray.tex_x = int(wall_x * TEX_SIZE)
    if ray.side_hit == 0:
        ray.tex_id = Direction.WEST if ray.dir.x > 0.0 else Direction.EAST
    else:
        ray.tex_id = Direction.NORTH if ray.dir.y > 0.0 else Direction.SOUTH


def _texture_for(game: Game, tex_id: int) -> Texture | None:
    if tex_id in (Direction.NORTH, Direction.SOUTH, Direction.WEST):
        return game.textures.get(Direction(tex_id))
    return game.textures.get(Direction.EAST)


def tex_sample(game: Game, tex_id: int, x: int, y: int) -> int:
    """Colour of texel (x, y) in the given texture, or 0 outside it."""
    texture = _texture_for(game, tex_id)
    if texture is None or not (0 <= x < texture.width and 0 <= y < texture.height):
        return 0
    return int(texture.pixels[y, x])


def _sample_column(game: Game, tex_id: int, tex_x: int, tex_y: np.ndarray) -> np.ndarray:
    colors = np.zeros(tex_y.shape, dtype=np.int64)
    texture = _texture_for(game, tex_id)
    if texture is None or not 0 <= tex_x < texture.width:
        return colors
    inside = (tex_y >= 0) & (tex_y < texture.height)
    colors[inside] = texture.pixels[tex_y[inside], tex_x]
    return colors


def render_floor_ceiling(game: Game, screen: np.ndarray) -> np.ndarray:
    """Fill the top half with the ceiling colour and the bottom half with the floor."""
    half = HEIGHT // 2
    screen[:half, :WIDTH] = game.ceiling_color
    screen[half:HEIGHT, :WIDTH] = game.floor_color
    return screen


def render_walls(game: Game, screen: np.ndarray, x: int, ray: Ray) -> None:
    """Draw the textured wall slice for column x."""
    line_h = max(1, int(HEIGHT / ray.dist))
    half = HEIGHT // 2
    start = max(0, -(line_h // 2) + half)
    end = min(HEIGHT - 1, line_h // 2 + half)
    count = end - start
    if count <= 0 or not 0 <= x < screen.shape[1]:
        return
    step = TEX_SIZE / line_h
    tex_pos = (start - half + line_h // 2) * step + step * np.arange(count)
    tex_y = tex_pos.astype(np.int64) & (TEX_SIZE - 1)
    colors = _sample_column(game, ray.tex_id, ray.tex_x, tex_y)
    if ray.side_hit == 1:
        colors = (colors >> 1) & _SHADE_MASK
    rows = np.arange(start, end)
    visible = rows < screen.shape[0]
    screen[rows[visible], x] = colors[visible]


def raycaster(game: Game, screen: np.ndarray) -> np.ndarray:
    """Cast one ray per screen column and draw the walls it hits."""
    for x in range(WIDTH):
        ray = ray_init(game, x)
        while not dda_step(game, ray):
            pass
        dda_distance(game, ray)
        set_tex_info(game, ray)
        render_walls(game, screen, x, ray)
    return screen
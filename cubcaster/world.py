"""Core game state: map grid, player, keys and scene settings."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable

import numpy as np

WIDTH = 1280
HEIGHT = 720

MOVE_SPEED = 0.05
ROT_SPEED = 0.05
EPS = 1e-6

TEX_SIZE = 64
TARGET_FPS = 60.0

COLLISION_RADIUS = 0.20
MAX_MOVE_STEP = 0.25
MIN_MOVE_DISTANCE = 1e-6

UNSET_COLOR = -1


class CubError(Exception):
    """Raised when a scene, map or resource cannot be used."""

    def report(self) -> str:
        """Return the message in the form shown to the user."""
        return f"Error\n{self}\n"


class Direction(enum.IntEnum):
    """Wall faces, numbered as texture slots."""

    NORTH = 0
    SOUTH = 1
    WEST = 2
    EAST = 3

    @property
    def identifier(self) -> str:
        """The two-letter scene-file identifier for this face."""
        return _IDENTIFIERS[self]

    @classmethod
    def from_identifier(cls, code: str) -> "Direction":
        """Look up a direction by its scene-file identifier (NO, SO, WE, EA)."""
        for direction, ident in _IDENTIFIERS.items():
            if ident == code:
                return direction
        raise ValueError(f"unknown texture identifier: {code!r}")


_IDENTIFIERS = {
    Direction.NORTH: "NO",
    Direction.SOUTH: "SO",
    Direction.WEST: "WE",
    Direction.EAST: "EA",
}


@dataclass
class Vec2:
    """A mutable two-dimensional vector."""

    x: float = 0.0
    y: float = 0.0


@dataclass
class GameMap:
    """A rectangular grid of map characters, indexed as tile(x, y)."""

    grid: list[list[str]] = field(default_factory=list)

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "GameMap":
        """Build a map from row strings."""
        return cls([list(row) for row in rows])

    @property
    def h(self) -> int:
        return len(self.grid)

    @property
    def w(self) -> int:
        return max((len(row) for row in self.grid), default=0)

    def rows(self) -> list[str]:
        """Return the grid as a list of strings."""
        return ["".join(row) for row in self.grid]

    def _check(self, x: int, y: int) -> None:
        if not (0 <= y < self.h and 0 <= x < len(self.grid[y])):
            raise IndexError(f"tile ({x}, {y}) is outside the map")

    def tile(self, x: int, y: int) -> str:
        """Return the character at column x, row y."""
        self._check(x, y)
        return self.grid[y][x]

    def set_tile(self, x: int, y: int, value: str) -> None:
        """Replace the character at column x, row y."""
        if len(value) != 1:
            raise ValueError("a tile is a single character")
        self._check(x, y)
        self.grid[y][x] = value


@dataclass
class Texture:
    """A decoded wall texture: pixels as packed 0xRRGGBB values, shape (height, width)."""

    pixels: np.ndarray

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])


@dataclass
class Player:
    """Player position, facing direction and camera plane."""

    pos: Vec2 = field(default_factory=Vec2)
    dir: Vec2 = field(default_factory=Vec2)
    plane: Vec2 = field(default_factory=Vec2)


@dataclass
class Keys:
    """Which movement and rotation keys are held down."""

    w: bool = False
    a: bool = False
    s: bool = False
    d: bool = False
    left: bool = False
    right: bool = False


@dataclass
class Game:
    """Everything parsed from the scene plus the live player state."""

    texture_paths: dict[Direction, str] = field(default_factory=dict)
    map_dir: str | None = None
    textures: dict[Direction, Texture] = field(default_factory=dict)
    floor_color: int = UNSET_COLOR
    ceiling_color: int = UNSET_COLOR
    map: GameMap = field(default_factory=GameMap)
    player_x: int = 0
    player_y: int = 0
    player_dir: str = ""
    player: Player = field(default_factory=Player)
    keys: Keys = field(default_factory=Keys)
    dt: float = 0.0
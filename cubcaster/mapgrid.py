"""Reading, squaring off and validating the map block of a scene."""

from __future__ import annotations

import itertools
from typing import Iterable

from .world import CubError, Game, GameMap

PLAYER_CHARS = "NSEW"
WALKABLE_CHARS = "0" + PLAYER_CHARS
VALID_CHARS = "01" + PLAYER_CHARS + " "
_OPEN_CHARS = " \t\r"


def is_empty_line(s: str | None) -> bool:
    """Whether s holds only spaces, tabs and carriage returns before its end."""
    if s is None:
        return True
    rest = s.lstrip(" \t\r")
    return rest == "" or rest[0] == "\n"


def _strip_line_end(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def read_map_lines(lines: Iterable[str], first: str | None = None) -> list[str]:
    """Collect map rows (without line endings), starting with first if given.

    Blank rows may only trail the map; a blank row followed by content is an error.
    """
    source = itertools.chain([] if first is None else [first], lines)
    rows: list[str] = []
    ended = False
    for raw in source:
        row = _strip_line_end(raw)
        if not row:
            ended = True
        elif ended:
            raise CubError("Empty line inside map (gaps not allowed)")
        rows.append(row)
    if not rows:
        raise CubError("Empty map")
    return rows


def build_map_rect(lines: list[str]) -> GameMap:
    """Pad every row with spaces to the width of the longest one."""
    rows = [line.split("\n", 1)[0] for line in lines]
    width = max((len(row) for row in rows), default=0)
    if width <= 0:
        raise CubError("Empty map")
    return GameMap.from_rows(row.ljust(width) for row in rows)


def is_valid_char(c: str) -> bool:
    """Whether c may appear in a map."""
    return len(c) == 1 and c in VALID_CHARS


def _player_cells(game_map: GameMap):
    for y, row in enumerate(game_map.grid):
        for x, c in enumerate(row):
            if c in PLAYER_CHARS:
                yield x, y, c


def count_players(game_map: GameMap) -> int:
    """Count spawn markers, stopping as soon as there is more than one."""
    count = 0
    for _ in _player_cells(game_map):
        count += 1
        if count > 1:
            break
    return count


def set_player(game: Game) -> None:
    """Record the first spawn marker's cell and facing in the game."""
    for x, y, c in _player_cells(game.map):
        game.player_x, game.player_y, game.player_dir = x, y, c
        return


def _is_surrounded(game_map: GameMap, x: int, y: int) -> bool:
    if y <= 0 or y >= game_map.h - 1 or x <= 0 or x >= game_map.w - 1:
        return False
    grid = game_map.grid
    neighbours = (grid[y - 1][x], grid[y + 1][x], grid[y][x - 1], grid[y][x + 1])
    return not any(n in _OPEN_CHARS for n in neighbours)


def validate_map_closed(game: Game) -> bool:
    """Whether every walkable cell is away from the border and next to no void."""
    return all(
        _is_surrounded(game.map, x, y)
        for y, row in enumerate(game.map.grid)
        for x, c in enumerate(row)
        if c in WALKABLE_CHARS
    )


def check_map(game: Game) -> bool:
    """Check characters, a single spawn and closure; record the spawn on success."""
    if not all(is_valid_char(c) for row in game.map.grid for c in row):
        return False
    if count_players(game.map) != 1:
        return False
    set_player(game)
    return validate_map_closed(game)


def extract_player_spawn(game: Game) -> None:
    """Record the spawn marker in the game and replace it with floor."""
    found = None
    for x, y, c in _player_cells(game.map):
        if found is not None:
            raise CubError("Multiple players")
        found = (x, y, c)
    if found is None:
        raise CubError("No player")
    x, y, c = found
    game.player_x, game.player_y, game.player_dir = x, y, c
    game.map.set_tile(x, y, "0")
"""Loading a whole .cub scene: header, map and player spawn."""

from __future__ import annotations

from typing import Iterable

from .header import scan_header
from .mapgrid import build_map_rect, check_map, extract_player_spawn, read_map_lines
from .texture_spec import set_map_directory
from .world import UNSET_COLOR, CubError, Game


def parse_scene_lines(game: Game, lines: Iterable[str]) -> Game:
    """Fill game from the lines of a scene file."""
    source = iter(lines)
    try:
        first = scan_header(source, game)
    except CubError as exc:
        raise CubError(f"Invalid header: {exc}") from exc
    try:
        rows = read_map_lines(source, first)
        game.map = build_map_rect(rows)
        if not check_map(game):
            raise CubError("Invalid map")
    except CubError as exc:
        raise CubError(f"Invalid map block: {exc}") from exc
    extract_player_spawn(game)
    return game


def parse_scene(game: Game, path: str) -> Game:
    """Read the scene file at path into game."""
    game.floor_color = UNSET_COLOR
    game.ceiling_color = UNSET_COLOR
    set_map_directory(game, path)
    try:
        handle = open(path, encoding="utf-8", errors="surrogateescape", newline="\n")
    except OSError as exc:
        raise CubError("Cannot open .cub file") from exc
    with handle:
        return parse_scene_lines(game, handle)
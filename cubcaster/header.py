"""Scanning the identifier header that precedes the map in a scene file."""

from __future__ import annotations

from typing import Iterable, Iterator

from .colors import parse_ceiling_color, parse_floor_color
from .mapgrid import is_empty_line
from .texture_spec import parse_texture
from .world import UNSET_COLOR, CubError, Direction, Game


def header_complete(game: Game) -> bool:
    """Whether all four textures and both colours have been given."""
    if any(direction not in game.texture_paths for direction in Direction):
        return False
    return game.floor_color != UNSET_COLOR and game.ceiling_color != UNSET_COLOR


def _next_map_line(lines: Iterator[str]) -> str:
    for line in lines:
        if not line.startswith(("\n", "\r")):
            return line
    raise CubError("Missing map")


def _parse_header_line(game: Game, line: str) -> bool:
    return (
        parse_texture(game, line)
        or parse_floor_color(game, line)
        or parse_ceiling_color(game, line)
    )


def scan_header(lines: Iterable[str], game: Game) -> str:
    """Read header lines into game and return the first map line.

    Lines that are not identifiers are ignored until the header is complete.
    When given an iterator, it is left positioned just after the returned line.
    """
    source = iter(lines)
    for line in source:
        if is_empty_line(line):
            continue
        if _parse_header_line(game, line):
            if header_complete(game):
                return _next_map_line(source)
            continue
        if header_complete(game):
            return line
    raise CubError("Missing identifiers (NO, SO, WE, EA, F, C)")
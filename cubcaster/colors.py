"""Parsing of floor and ceiling colour lines ("F r,g,b" and "C r,g,b")."""

from __future__ import annotations

from .world import UNSET_COLOR, CubError, Game

_BLANKS = " \t"
_DIGITS = "0123456789"


def _skip_blanks(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _BLANKS:
        pos += 1
    return pos


def _read_component(text: str, pos: int) -> tuple[int, int]:
    pos = _skip_blanks(text, pos)
    end = pos
    while end < len(text) and text[end] in _DIGITS:
        end += 1
    if end == pos:
        raise CubError("Invalid color component")
    value = int(text[pos:end])
    if value > 255:
        raise CubError("Color component out of range")
    return value, end


def _expect_comma(text: str, pos: int) -> int:
    pos = _skip_blanks(text, pos)
    if pos >= len(text) or text[pos] != ",":
        raise CubError("Expected ',' between color components")
    return pos + 1


def parse_rgb(line: str) -> tuple[int, int, int]:
    """Parse "r,g,b" with optional blanks; each component must be 0..255."""
    red, pos = _read_component(line, 0)
    pos = _expect_comma(line, pos)
    green, pos = _read_component(line, pos)
    pos = _expect_comma(line, pos)
    blue, pos = _read_component(line, pos)
    pos = _skip_blanks(line, pos)
    if pos < len(line) and line[pos] not in "\n\r":
        raise CubError("Unexpected characters after color")
    return red, green, blue


def _parse_color_line(line: str, ident: str, current: int) -> int | None:
    if len(line) < 2 or line[0] != ident or line[1] not in _BLANKS:
        return None
    if current != UNSET_COLOR:
        return None
    try:
        red, green, blue = parse_rgb(line[2:])
    except CubError:
        return None
    return (red << 16) | (green << 8) | blue


def parse_floor_color(game: Game, line: str) -> bool:
    """Set the floor colour from an "F" line; return whether the line was taken."""
    color = _parse_color_line(line, "F", game.floor_color)
    if color is None:
        return False
    game.floor_color = color
    return True


def parse_ceiling_color(game: Game, line: str) -> bool:
    """Set the ceiling colour from a "C" line; return whether the line was taken."""
    color = _parse_color_line(line, "C", game.ceiling_color)
    if color is None:
        return False
    game.ceiling_color = color
    return True
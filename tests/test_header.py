import pytest

from cubcaster.header import header_complete, scan_header
from cubcaster.world import CubError, Direction, Game

HEADER = [
    "NO ./n.xpm\n",
    "SO ./s.xpm\n",
    "WE ./w.xpm\n",
    "EA ./e.xpm\n",
    "F 10,20,30\n",
    "C 40,50,60\n",
]
MAP = ["1111\n", "1N01\n", "1111\n"]


def test_header_complete_transitions():
    game = Game()
    assert header_complete(game) is False
    scan_header(HEADER + MAP, game)
    assert header_complete(game) is True


def test_scan_header_returns_first_map_line():
    game = Game()
    assert scan_header(HEADER + MAP, game) == MAP[0]
    assert game.texture_paths[Direction.SOUTH] == "./s.xpm"
    assert game.floor_color >> 16 == 10
    assert game.ceiling_color & 0xFF == 60


def test_scan_header_skips_blank_lines_before_map():
    game = Game()
    lines = iter(HEADER + ["\n", "\r\n", "\n"] + MAP)
    assert scan_header(lines, game) == MAP[0]
    assert list(lines) == MAP[1:]


def test_scan_header_ignores_junk_before_completion():
    game = Game()
    lines = ["hello\n", "\n"] + HEADER[:3] + ["junk\n"] + HEADER[3:] + MAP
    assert scan_header(lines, game) == MAP[0]


def test_duplicate_identifier_keeps_first():
    game = Game()
    lines = ["NO ./first.xpm\n", "NO ./second.xpm\n"] + HEADER[1:] + MAP
    scan_header(lines, game)
    assert game.texture_paths[Direction.NORTH] == "./first.xpm"


def test_missing_identifier():
    with pytest.raises(CubError, match="Missing identifiers"):
        scan_header(HEADER[:-1] + MAP, Game())


def test_missing_map():
    with pytest.raises(CubError, match="Missing map"):
        scan_header(HEADER + ["\n", "\n"], Game())
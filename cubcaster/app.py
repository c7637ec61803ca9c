"""Command-line entry point, window, input handling and the frame loop."""

from __future__ import annotations

import os
import sys
from typing import Sequence

import numpy as np

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # noqa: E402

from .movement import handle_move, handle_rotate, init_player  # noqa: E402
from .render import new_screen, raycaster, render_floor_ceiling  # noqa: E402
from .scene import parse_scene  # noqa: E402
from .textures import init_textures  # noqa: E402
from .timer import FrameTimer  # noqa: E402
from .world import HEIGHT, TARGET_FPS, WIDTH, CubError, Game  # noqa: E402

WINDOW_TITLE = "Cub3D"

# The A and D flags are crossed on purpose: the movement code strafes
# right on the "a" flag and left on the "d" flag.
_KEY_FLAGS = {
    pygame.K_w: "w",
    pygame.K_d: "a",
    pygame.K_s: "s",
    pygame.K_a: "d",
    pygame.K_RIGHT: "right",
    pygame.K_LEFT: "left",
}


class ExitRequested(Exception):
    """Raised when the player asks to quit."""


def validate_cub_extension(path: str | None) -> bool:
    """Check that path ends in a ".cub" extension."""
    if not path:
        raise CubError("No map path")
    dot = path.rfind(".")
    if dot < 0 or path[dot:] != ".cub":
        raise CubError("Invalid file extension")
    return True


def check_file_openable(path: str) -> bool:
    """Check that the scene file can be opened for reading."""
    try:
        fd = os.open(path, os.O_RDONLY)
    except OSError as exc:
        raise CubError("Cannot open map file") from exc
    try:
        os.close(fd)
    except OSError as exc:
        raise CubError("Cannot close map file") from exc
    return True


def _set_key(game: Game, key: int, held: bool) -> None:
    if key == pygame.K_ESCAPE:
        raise ExitRequested
    flag = _KEY_FLAGS.get(key)
    if flag is not None:
        setattr(game.keys, flag, held)


def key_press(game: Game, key: int) -> None:
    """Mark a key as held; Escape requests exit."""
    _set_key(game, key, True)


def key_release(game: Game, key: int) -> None:
    """Mark a key as released; Escape requests exit."""
    _set_key(game, key, False)


def frame(game: Game, screen: np.ndarray | None, timer: FrameTimer) -> np.ndarray:
    """Advance the game one frame and render it into screen."""
    game.dt = timer.delta()
    if screen is None:
        screen = new_screen()
    handle_move(game)
    handle_rotate(game)
    render_floor_ceiling(game, screen)
    raycaster(game, screen)
    timer.sleep(TARGET_FPS)
    timer.log_fps()
    return screen


def _present(surface: pygame.Surface, screen: np.ndarray) -> None:
    rgb = np.stack(
        ((screen >> 16) & 0xFF, (screen >> 8) & 0xFF, screen & 0xFF), axis=-1
    ).astype(np.uint8)
    pygame.surfarray.blit_array(surface, rgb.transpose(1, 0, 2))
    pygame.display.flip()


def _report(*errors: CubError) -> None:
    for error in errors:
        sys.stderr.write(error.report())


def _open_window() -> pygame.Surface:
    try:
        pygame.display.init()
        surface = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
    except pygame.error as exc:
        raise CubError("Display init failed") from exc
    return surface


def _loop(game: Game, surface: pygame.Surface) -> None:
    timer = FrameTimer()
    screen = new_screen()
    try:
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    raise ExitRequested
                if event.type == pygame.KEYDOWN:
                    key_press(game, event.key)
                elif event.type == pygame.KEYUP:
                    key_release(game, event.key)
            frame(game, screen, timer)
            _present(surface, screen)
    except ExitRequested:
        pass


def run(path: str) -> int:
    """Load the scene at path and play it; return the process exit status."""
    game = Game()
    try:
        validate_cub_extension(path)
        check_file_openable(path)
    except CubError as exc:
        _report(exc)
        return 1
    stages = (
        (lambda: parse_scene(game, path), "Parse failed"),
        (_open_window, "MLX init failed"),
        (lambda: init_textures(game), "Textures init failed"),
        (lambda: init_player(game), "Player init failed"),
    )
    surface = None
    try:
        for action, failure in stages:
            try:
                result = action()
            except CubError as exc:
                _report(exc, CubError(failure))
                return 1
            if isinstance(result, pygame.Surface):
                surface = result
        _loop(game, surface)
    finally:
        pygame.quit()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point: cubcaster <map.cub>."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        _report(CubError("Usage: cubcaster <map.cub>"))
        return 0
    return 1 if run(args[0]) != 0 else 0


if __name__ == "__main__":
    sys.exit(main())
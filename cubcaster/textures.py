"""Locating and loading the four wall textures named in a scene."""

from __future__ import annotations

import numpy as np
from PIL import Image

from .texture_spec import can_open_readonly
from .world import TEX_SIZE, CubError, Direction, Game, Texture


def join_texture_path(directory: str, path: str) -> str:
    """Join a relative texture path onto the scene directory."""
    if path.startswith("/"):
        raise ValueError("an absolute path cannot be joined onto a directory")
    if not directory:
        return path
    if directory.endswith("/"):
        return directory + path
    return f"{directory}/{path}"


def _pack_rgb(image: Image.Image) -> np.ndarray:
    rgb = np.asarray(image.convert("RGB"), dtype=np.int64)
    return (rgb[..., 0] << 16) | (rgb[..., 1] << 8) | rgb[..., 2]


def load_texture(path: str | None) -> Texture:
    """Decode the image at path into a texture no larger than TEX_SIZE square."""
    if not path:
        raise CubError("Missing texture path")
    if not can_open_readonly(path):
        raise CubError("Cannot open texture file")
    try:
        with Image.open(path) as image:
            image.load()
            if image.width > TEX_SIZE or image.height > TEX_SIZE:
                raise CubError("Texture too large")
            pixels = _pack_rgb(image)
    except CubError:
        raise
    except (OSError, ValueError, SyntaxError) as exc:
        raise CubError("Failed to load texture") from exc
    return Texture(pixels)


def resolve_texture_path(game: Game, path: str) -> str | None:
    """Return path if it opens, else the path relative to the scene directory, else None."""
    if can_open_readonly(path):
        return path
    if not game.map_dir or not path or path.startswith("/"):
        return None
    candidate = join_texture_path(game.map_dir, path)
    if not can_open_readonly(candidate):
        return None
    return candidate


def load_texture_with_base(game: Game, path: str | None) -> Texture:
    """Load a texture, looking next to the scene file when path is relative."""
    if not path:
        raise CubError("Missing texture path")
    source = resolve_texture_path(game, path)
    if source is None:
        raise CubError("Cannot open texture file")
    return load_texture(source)


def init_textures(game: Game) -> dict[Direction, Texture]:
    """Load the north, south, west and east textures into the game, in that order."""
    for direction in Direction:
        game.textures[direction] = load_texture_with_base(
            game, game.texture_paths.get(direction)
        )
    return game.textures
"""Player spawning, rotation, collision and movement across the map."""

from __future__ import annotations

import math

from .world import (
    COLLISION_RADIUS,
    EPS,
    MAX_MOVE_STEP,
    MIN_MOVE_DISTANCE,
    MOVE_SPEED,
    ROT_SPEED,
    Game,
    Player,
    Vec2,
)

_FOV_PLANE = 0.66

# Facing -> (dir.x, dir.y, plane.x, plane.y)
_SPAWN_VECTORS = {
    "N": (0.0, -1.0, _FOV_PLANE, 0.0),
    "S": (0.0, 1.0, -_FOV_PLANE, 0.0),
    "E": (1.0, 0.0, 0.0, _FOV_PLANE),
    "W": (-1.0, 0.0, 0.0, -_FOV_PLANE),
}


def init_player(game: Game) -> Player:
    """Place the player at the centre of the spawn cell, facing the spawn direction."""
    player = game.player
    player.pos.x = float(game.player_x) + 0.5
    player.pos.y = float(game.player_y) + 0.5
    vectors = _SPAWN_VECTORS.get(game.player_dir)
    if vectors is not None:
        player.dir.x, player.dir.y, player.plane.x, player.plane.y = vectors
    return player


def rotate_player(player: Player, angle: float) -> None:
    """Rotate the facing direction and camera plane by angle radians."""
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    old_dir_x = player.dir.x
    old_plane_x = player.plane.x
    player.dir.x = old_dir_x * cos_a - player.dir.y * sin_a
    player.dir.y = old_dir_x * sin_a + player.dir.y * cos_a
    player.plane.x = old_plane_x * cos_a - player.plane.y * sin_a
    player.plane.y = old_plane_x * sin_a + player.plane.y * cos_a


def is_point_wall(game: Game, x: float, y: float) -> bool:
    """Whether the point lies outside the map or inside a wall cell."""
    game_map = game.map
    if y < 0 or y >= game_map.h or x < 0 or x >= game_map.w:
        return True
    row = game_map.grid[int(y)]
    col = int(x)
    if col >= len(row):
        return True
    return row[col] == "1"


def _check_collision_edges(game: Game, x: float, y: float, r: float) -> bool:
    return (
        is_point_wall(game, x, y - r)
        or is_point_wall(game, x, y + r)
        or is_point_wall(game, x - r, y)
        or is_point_wall(game, x + r, y)
    )


def check_collision_corners(game: Game, x: float, y: float, r: float) -> bool:
    """Whether any corner of the square of half-side r around (x, y) is a wall."""
    return (
        is_point_wall(game, x - r, y - r)
        or is_point_wall(game, x + r, y - r)
        or is_point_wall(game, x - r, y + r)
        or is_point_wall(game, x + r, y + r)
    )


def is_wall(game: Game, x: float, y: float) -> bool:
    """Whether a player of the collision radius standing at (x, y) would hit a wall."""
    r = COLLISION_RADIUS
    if x - r < 0 or x + r >= game.map.w or y - r < 0 or y + r >= game.map.h:
        return True
    return (
        is_point_wall(game, x, y)
        or _check_collision_edges(game, x, y, r)
        or check_collision_corners(game, x, y, r)
    )


def wall_slide_move(game: Game, dx: float, dy: float) -> None:
    """Move by (dx, dy), or along one axis only if the full move is blocked."""
    pos = game.player.pos
    nx = pos.x + dx
    ny = pos.y + dy
    if not is_wall(game, nx, ny):
        pos.x, pos.y = nx, ny
    elif not is_wall(game, nx, pos.y):
        pos.x = nx
    elif not is_wall(game, pos.x, ny):
        pos.y = ny


def try_smooth_move(game: Game, dx: float, dy: float) -> None:
    """Try the x component, then the y component, each on its own."""
    pos = game.player.pos
    if abs(dx) >= EPS:
        nx = pos.x + dx
        if not is_wall(game, nx, pos.y):
            pos.x = nx
    if abs(dy) >= EPS:
        ny = pos.y + dy
        if not is_wall(game, pos.x, ny):
            pos.y = ny


def _safe_fraction(game: Game, pos: Vec2, dx: float, dy: float) -> float:
    """Largest fraction of (dx, dy) found free of walls by bisection."""
    low, high, safe = 0.0, 1.0, 0.0
    while high - low > EPS:
        mid = 0.5 * (low + high)
        if not is_wall(game, pos.x + dx * mid, pos.y + dy * mid):
            safe = mid
            low = mid
        else:
            high = mid
    return safe


def apply_wall_sliding(game: Game, dx: float, dy: float) -> None:
    """Advance as far as is free, then slide the remainder along the wall."""
    pos = game.player.pos
    t = _safe_fraction(game, Vec2(pos.x, pos.y), dx, dy)
    if t > EPS:
        pos.x += dx * t
        pos.y += dy * t
        rx = dx * (1.0 - t)
        ry = dy * (1.0 - t)
        if abs(rx) > EPS or abs(ry) > EPS:
            try_smooth_move(game, rx, ry)
    else:
        try_smooth_move(game, dx, dy)


def subdiv_move(game: Game, total_dx: float, total_dy: float) -> None:
    """Move by the total delta, splitting long blocked moves into short steps."""
    if abs(total_dx) < EPS and abs(total_dy) < EPS:
        return
    pos = game.player.pos
    if not is_wall(game, pos.x + total_dx, pos.y + total_dy):
        pos.x += total_dx
        pos.y += total_dy
        return
    dist = math.hypot(total_dx, total_dy)
    if dist <= MAX_MOVE_STEP:
        apply_wall_sliding(game, total_dx, total_dy)
        return
    steps = max(1, math.ceil(dist / MAX_MOVE_STEP))
    step_dx = total_dx / steps
    step_dy = total_dy / steps
    for _ in range(steps):
        apply_wall_sliding(game, step_dx, step_dy)


def _wasd_delta(game: Game) -> tuple[float, float]:
    keys = game.keys
    direction = game.player.dir
    dx = dy = 0.0
    if keys.w:
        dx += direction.x * MOVE_SPEED
        dy += direction.y * MOVE_SPEED
    if keys.s:
        dx -= direction.x * MOVE_SPEED
        dy -= direction.y * MOVE_SPEED
    if keys.d:
        dx += direction.y * MOVE_SPEED
        dy -= direction.x * MOVE_SPEED
    if keys.a:
        dx -= direction.y * MOVE_SPEED
        dy += direction.x * MOVE_SPEED
    return dx, dy


def movement_update(game: Game) -> None:
    """Apply held movement keys with collision, then held rotation keys."""
    dx, dy = _wasd_delta(game)
    if abs(dx) > MIN_MOVE_DISTANCE or abs(dy) > MIN_MOVE_DISTANCE:
        subdiv_move(game, dx, dy)
    if game.keys.left:
        rotate_player(game.player, -ROT_SPEED)
    if game.keys.right:
        rotate_player(game.player, ROT_SPEED)


def update_position(game: Game, dx: float, dy: float) -> None:
    """Move by (dx, dy) unless the destination cell is a wall or off the map."""
    if dx == 0.0 and dy == 0.0:
        return
    pos = game.player.pos
    nx = int(pos.x + dx)
    ny = int(pos.y + dy)
    game_map = game.map
    if 0 <= ny < game_map.h and 0 <= nx < game_map.w and nx < len(game_map.grid[ny]):
        if game_map.grid[ny][nx] != "1":
            pos.x += dx
            pos.y += dy


def handle_move(game: Game) -> None:
    """Apply held movement keys with the simple cell-based check."""
    keys = game.keys
    direction = game.player.dir
    dx = dy = 0.0
    if keys.w:
        dx += direction.x * MOVE_SPEED
        dy += direction.y * MOVE_SPEED
    if keys.s:
        dx -= direction.x * MOVE_SPEED
        dy -= direction.y * MOVE_SPEED
    if keys.a:
        dx += -direction.y * MOVE_SPEED
        dy += direction.x * MOVE_SPEED
    if keys.d:
        dx += direction.y * MOVE_SPEED
        dy += -direction.x * MOVE_SPEED
    update_position(game, dx, dy)


def handle_rotate(game: Game) -> None:
    """Rotate once per frame; left wins when both rotation keys are held."""
    keys = game.keys
    if not keys.left and not keys.right:
        return
    rotate_player(game.player, -ROT_SPEED if keys.left else ROT_SPEED)
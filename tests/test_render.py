import numpy as np
import pytest

from cubcaster.movement import init_player
from cubcaster.render import (
    Ray,
    dda_distance,
    dda_step,
    new_screen,
    ray_init,
    raycaster,
    render_floor_ceiling,
    render_walls,
    set_tex_info,
    tex_sample,
)
from cubcaster.world import (
    EPS,
    HEIGHT,
    TEX_SIZE,
    WIDTH,
    Direction,
    Game,
    GameMap,
    Texture,
)

CEILING = 0x0000AA
FLOOR = 0x00AA00
COLORS = {
    Direction.NORTH: 0x808080,
    Direction.SOUTH: 0x111111,
    Direction.WEST: 0x222222,
    Direction.EAST: 0x333333,
}


def _game(rows, spawn_x, spawn_y, facing):
    game = Game()
    game.map = GameMap.from_rows(rows)
    game.player_x, game.player_y, game.player_dir = spawn_x, spawn_y, facing
    init_player(game)
    game.floor_color = FLOOR
    game.ceiling_color = CEILING
    for direction, color in COLORS.items():
        game.textures[direction] = Texture(
            np.full((TEX_SIZE, TEX_SIZE), color, dtype=np.int64)
        )
    return game


def _east_corridor():
    return _game(["11111", "10001", "11111"], 1, 1, "E")


def _south_corridor():
    return _game(["111", "101", "101", "111"], 1, 1, "S")


def _cast(game, x):
    ray = ray_init(game, x)
    while not dda_step(game, ray):
        pass
    dda_distance(game, ray)
    set_tex_info(game, ray)
    return ray


def test_new_screen_shape():
    screen = new_screen()
    assert screen.shape == (HEIGHT, WIDTH)
    assert not screen.any()


def test_floor_and_ceiling_halves():
    screen = render_floor_ceiling(_east_corridor(), new_screen())
    assert screen[0, 0] == CEILING
    assert screen[HEIGHT // 2 - 1, WIDTH - 1] == CEILING
    assert screen[HEIGHT // 2, 0] == FLOOR
    assert screen[HEIGHT - 1, WIDTH - 1] == FLOOR
    assert set(np.unique(screen[: HEIGHT // 2]).tolist()) == {CEILING}
    assert set(np.unique(screen[HEIGHT // 2 :]).tolist()) == {FLOOR}


def test_center_ray_follows_player_direction():
    game = _east_corridor()
    ray = ray_init(game, WIDTH // 2)
    assert ray.dir.x == pytest.approx(game.player.dir.x)
    assert ray.dir.y == EPS
    assert (ray.map_x, ray.map_y) == (1, 1)
    assert (ray.step_x, ray.step_y) == (1, 1)


def test_dda_hits_wall_and_distance():
    game = _east_corridor()
    ray = _cast(game, WIDTH // 2)
    assert game.map.tile(ray.map_x, ray.map_y) == "1"
    assert ray.side_hit == 0
    assert ray.dist == pytest.approx(2.5)


def test_tex_info_for_east_facing_hit():
    ray = _cast(_east_corridor(), WIDTH // 2)
    assert ray.tex_id == Direction.WEST
    assert 0 <= ray.tex_x < TEX_SIZE


def test_tex_info_for_south_facing_hit():
    ray = _cast(_south_corridor(), WIDTH // 2)
    assert ray.side_hit == 1
    assert ray.tex_id == Direction.NORTH


def test_distance_never_below_eps():
    game = _east_corridor()
    ray = Ray(map_x=1, map_y=1, step_x=1, side_hit=0)
    ray.dir.x = 1.0
    game.player.pos.x = 1.0
    assert dda_distance(game, ray) == EPS


def test_out_of_grid_counts_as_wall():
    game = _game(["000", "000"], 1, 0, "N")
    ray = ray_init(game, WIDTH // 2)
    hits = [dda_step(game, ray) for _ in range(3)]
    assert True in hits


def test_tex_sample_inside_and_outside():
    game = _east_corridor()
    assert tex_sample(game, Direction.SOUTH, 0, 0) == COLORS[Direction.SOUTH]
    assert tex_sample(game, Direction.SOUTH, TEX_SIZE, 0) == 0
    assert tex_sample(game, Direction.SOUTH, 0, -1) == 0


def test_tex_sample_unknown_id_uses_east():
    game = _east_corridor()
    assert tex_sample(game, 7, 1, 1) == COLORS[Direction.EAST]


def test_tex_sample_missing_texture_is_zero():
    game = _east_corridor()
    del game.textures[Direction.NORTH]
    assert tex_sample(game, Direction.NORTH, 0, 0) == 0


def test_render_walls_draws_centered_slice():
    game = _east_corridor()
    screen = render_floor_ceiling(game, new_screen())
    x = WIDTH // 2
    render_walls(game, screen, x, _cast(game, x))
    assert screen[HEIGHT // 2, x] == COLORS[Direction.WEST]
    assert screen[0, x] == CEILING
    assert screen[HEIGHT - 1, x] == FLOOR
    column = screen[:, x]
    wall_rows = np.flatnonzero(column == COLORS[Direction.WEST])
    assert wall_rows.min() + wall_rows.max() == pytest.approx(HEIGHT, abs=2)


def test_render_walls_shades_horizontal_walls():
    game = _south_corridor()
    screen = new_screen()
    x = WIDTH // 2
    render_walls(game, screen, x, _cast(game, x))
    assert screen[HEIGHT // 2, x] == (COLORS[Direction.NORTH] >> 1) & 8355711


def test_raycaster_fills_every_column():
    game = _east_corridor()
    screen = render_floor_ceiling(game, new_screen())
    raycaster(game, screen)
    middle = screen[HEIGHT // 2]
    assert not np.any(middle == FLOOR)
    assert set(np.unique(middle)) <= {
        COLORS[Direction.WEST],
        (COLORS[Direction.NORTH] >> 1) & 8355711,
        (COLORS[Direction.SOUTH] >> 1) & 8355711,
    }
    assert screen[HEIGHT // 2, WIDTH // 2] == COLORS[Direction.WEST]
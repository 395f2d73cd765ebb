import io
import itertools
import random
from unittest import mock

import pytest

from lifestag.game import (
    COLOR_RED,
    COLOR_RESET,
    MAX_COLLISIONS,
    MAX_OBSTACLES,
    MAX_REWARDS,
    OBST_H,
    OBST_W,
    PLAYER_H,
    PLAYER_SPRITE,
    PLAYER_W,
    REWARD_H,
    REWARD_W,
    START_ACTIVE_OBSTACLES,
    Entity,
    GameState,
    clear_sprite_area,
    collides,
    draw_sprite,
    format_hud,
    play_game,
)
from lifestag.screen import MAX_X, MAX_Y, Screen, gotoxy_sequence


def _screen():
    stream = io.StringIO()
    return Screen(stream), stream


class _IdleKeyboard:
    def keyhit(self):
        return False

    def readch(self):
        raise AssertionError("no key was pressed")


def test_collides_overlapping_boxes():
    assert collides(Entity(0, 0), Entity(2, 2), 3, 3, 3, 3) is True


def test_collides_touching_edges_do_not_collide():
    assert collides(Entity(0, 0), Entity(3, 0), 3, 3, 3, 3) is False
    assert collides(Entity(0, 0), Entity(0, 3), 3, 3, 3, 3) is False


def test_collides_is_symmetric():
    a, b = Entity(5, 5), Entity(7, 6)
    assert collides(a, b, 3, 3, 7, 4) == collides(b, a, 7, 4, 3, 3)


def test_format_hud_fixed_text():
    assert format_hud(3, 1, 12, "ana") == (
        "Pontos: 3  Colisões: 1/5  Tempo: 12s  Jogador: ana"
    )


def test_format_hud_cut_to_screen_width():
    hud = format_hud(1, 2, 3, "x" * 200)
    assert len(hud) == MAX_X
    assert hud.startswith("Pontos: 1")


def test_name_is_cut_to_nineteen_characters():
    state = GameState("abcdefghijklmnopqrstuvwxyz", random.Random(1))
    assert state.name == "abcdefghijklmnopqrs"


def test_player_stays_within_field():
    state = GameState("p", random.Random(1))
    for _ in range(200):
        state.move_player("a")
    assert state.player.x == 0
    for _ in range(200):
        state.move_player("d")
    assert state.player.x == MAX_X - PLAYER_W


def test_move_player_single_steps():
    state = GameState("p", random.Random(1))
    start = state.player.x
    state.move_player("d")
    assert state.player.x == start + 1
    state.move_player("x")
    assert state.player.x == start + 1
    state.move_player("a")
    assert state.player.x == start


def test_spawn_obstacle_position_and_limit():
    state = GameState("p", random.Random(3))
    spawned = [state.spawn_obstacle() for _ in range(30)]
    assert len(state.obstacles) == START_ACTIVE_OBSTACLES
    assert spawned[START_ACTIVE_OBSTACLES] is None
    for entity in state.obstacles:
        assert entity.y == MAX_Y - OBST_H - 1
        assert 0 <= entity.x < MAX_X - OBST_W


def test_spawn_reward_limit():
    state = GameState("p", random.Random(3))
    for _ in range(MAX_REWARDS + 5):
        state.spawn_reward()
    assert len(state.rewards) == MAX_REWARDS
    assert all(e.y == MAX_Y - REWARD_H - 1 for e in state.rewards)
    assert all(0 <= e.x < MAX_X - REWARD_W for e in state.rewards)


def test_advance_entities_moves_up_and_drops_at_top():
    state = GameState("p", random.Random(1))
    state.obstacles = [Entity(10, 0), Entity(10, 5)]
    state.rewards = [Entity(20, 0), Entity(20, 8)]
    state.advance_entities()
    assert state.obstacles == [Entity(10, 4)]
    assert state.rewards == [Entity(20, 7)]


def test_check_collisions_counts_hits_and_points():
    state = GameState("p", random.Random(1))
    px, py = state.player.x, state.player.y
    state.obstacles = [Entity(px, py), Entity(0, 15)]
    state.rewards = [Entity(px, py + 1), Entity(60, 15)]
    state.check_collisions()
    assert state.collisions == 1
    assert state.points == 1
    assert state.obstacles == [Entity(0, 15)]
    assert state.rewards == [Entity(60, 15)]


def test_is_over_after_five_collisions():
    state = GameState("p", random.Random(1))
    state.collisions = MAX_COLLISIONS - 1
    assert state.is_over() is False
    state.collisions = MAX_COLLISIONS
    assert state.is_over() is True


def test_raise_difficulty_once_per_ten_seconds():
    state = GameState("p", random.Random(1))
    assert state.raise_difficulty(0) is False
    assert state.raise_difficulty(7) is False
    assert state.max_active_obstacles == START_ACTIVE_OBSTACLES
    assert state.raise_difficulty(10) is True
    assert state.max_active_obstacles == START_ACTIVE_OBSTACLES + 2
    assert state.raise_difficulty(10) is False
    assert state.max_active_obstacles == START_ACTIVE_OBSTACLES + 2
    assert state.raise_difficulty(20) is True
    assert state.max_active_obstacles == START_ACTIVE_OBSTACLES + 4


def test_raise_difficulty_capped():
    state = GameState("p", random.Random(1))
    for seconds in range(10, 10000, 10):
        state.raise_difficulty(seconds)
    assert state.max_active_obstacles == MAX_OBSTACLES


def test_first_tick_spawns_obstacle_and_reward():
    state = GameState("p", random.Random(5))
    state.tick()
    assert state.frame == 1
    assert len(state.obstacles) == 1
    assert len(state.rewards) == 1


def test_reset_clears_game():
    state = GameState("p", random.Random(5))
    for _ in range(20):
        state.tick()
    state.points = 4
    state.collisions = 2
    state.max_active_obstacles = 30
    state.reset()
    assert (state.points, state.collisions, state.frame) == (0, 0, 0)
    assert state.obstacles == [] and state.rewards == []
    assert state.max_active_obstacles == START_ACTIVE_OBSTACLES


def test_draw_sprite_above_screen_writes_nothing():
    screen, stream = _screen()
    draw_sprite(screen, PLAYER_SPRITE, PLAYER_W, PLAYER_H, 5, -1, COLOR_RED)
    assert stream.getvalue() == ""


def test_draw_sprite_cut_at_right_edge():
    screen, stream = _screen()
    draw_sprite(screen, PLAYER_SPRITE, PLAYER_W, PLAYER_H, MAX_X - 2, 1, COLOR_RED)
    expected = (
        COLOR_RED
        + gotoxy_sequence(MAX_X - 1, 2) + " o"
        + gotoxy_sequence(MAX_X - 1, 3) + "/|"
        + gotoxy_sequence(MAX_X - 1, 4) + "/ "
        + COLOR_RESET
    )
    assert stream.getvalue() == expected


def test_clear_sprite_area_only_visible_cells():
    screen, stream = _screen()
    clear_sprite_area(screen, -2, MAX_Y - 1, 5, 3)
    assert stream.getvalue() == gotoxy_sequence(-1, MAX_Y) + "   "


def test_play_game_runs_to_game_over(tmp_path):
    screen, stream = _screen()
    ranking = tmp_path / "ranking.txt"
    random.seed(42)
    clock = itertools.count(0, 10_000_000)
    with mock.patch("time.monotonic_ns", new=lambda: next(clock)), mock.patch(
        "time.sleep"
    ):
        state = play_game(
            screen, _IdleKeyboard(), "tester", ranking, io.StringIO("xq")
        )
    assert state.collisions >= MAX_COLLISIONS
    assert ranking.read_text(encoding="utf-8") == f"tester {state.points}\n"
    output = stream.getvalue()
    assert f"Game Over, tester! Pontos: {state.points}" in output
    assert output.endswith("Pressione 'q' para sair.")


@pytest.mark.parametrize("key", ["Q", ""])
def test_play_game_stops_on_upper_q_or_end_of_input(tmp_path, key):
    screen, _ = _screen()
    ranking = tmp_path / "ranking.txt"
    random.seed(7)
    clock = itertools.count(0, 10_000_000)
    with mock.patch("time.monotonic_ns", new=lambda: next(clock)), mock.patch(
        "time.sleep"
    ):
        state = play_game(screen, _IdleKeyboard(), "ana", ranking, io.StringIO(key))
    assert state.is_over() is True
    assert ranking.read_text(encoding="utf-8").startswith("ana ")
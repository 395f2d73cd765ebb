"""The dodging game: entities, collisions, difficulty and the main loop."""

from __future__ import annotations

import random
import sys
import time
from dataclasses import dataclass
from typing import Any, Protocol, Sequence, TextIO

from lifestag.ranking import PathType, save_score, show_ranking
from lifestag.screen import MAX_X, MAX_Y, Screen
from lifestag.timer import Timer

MAX_OBSTACLES = 100
MAX_REWARDS = 10
START_ACTIVE_OBSTACLES = 10
MAX_COLLISIONS = 5
MAX_NAME_LENGTH = 19

PLAYER_W = 3
PLAYER_H = 3
OBST_W = 7
OBST_H = 4
REWARD_W = 5
REWARD_H = 3

FRAME_INTERVAL_MS = 80
OBSTACLE_EVERY = 5
REWARD_EVERY = 15
DIFFICULTY_STEP_SECONDS = 10
DIFFICULTY_STEP = 2

COLOR_YELLOW = "\x1b[33m"
COLOR_RED = "\x1b[31m"
COLOR_GREEN = "\x1b[32m"
COLOR_RESET = "\x1b[0m"

PLAYER_SPRITE = (
    " o ",
    "/|\\",
    "/ \\",
)
OBSTACLE_SPRITE = (
    "\\|||/ ",
    " (x_x) ",
    " / | \\",
    "  / \\  ",
)
REWARD_SPRITE = (
    " ___ ",
    "/$$$\\",
    "\\___/",
)

HUD_FORMAT = "Pontos: {}  Colisões: {}/5  Tempo: {}s  Jogador: {}"


class _KeySource(Protocol):
    def keyhit(self) -> bool: ...

    def readch(self) -> str: ...


@dataclass
class Entity:
    """A position on the play field, counted from the top-left corner at 0."""

    x: int
    y: int


def collides(a: Entity, b: Entity, aw: int, ah: int, bw: int, bh: int) -> bool:
    """True if the two axis-aligned boxes overlap."""
    return not (
        a.x + aw <= b.x
        or a.x >= b.x + bw
        or a.y + ah <= b.y
        or a.y >= b.y + bh
    )


def clear_sprite_area(screen: Screen, x: int, y: int, w: int, h: int) -> None:
    """Blank the on-screen part of a w-by-h box at (x, y)."""
    visible_width = sum(1 for col in range(x, x + w) if 0 <= col < MAX_X)
    for row in range(y, y + h):
        if 0 <= row < MAX_Y:
            screen.gotoxy(x + 1, row + 1)
            screen.write(" " * visible_width)


def draw_sprite(
    screen: Screen,
    sprite: Sequence[str],
    w: int,
    h: int,
    x: int,
    y: int,
    color: str,
) -> None:
    """Draw a sprite at (x, y), cut at the right edge; nothing if y < 0."""
    if y < 0:
        return
    screen.write(color)
    width = MAX_X - x if x + w > MAX_X else w
    for row, line in zip(range(y, y + h), sprite):
        if 0 <= row < MAX_Y:
            screen.gotoxy(x + 1, row + 1)
            if width > 0:
                screen.write(line[:width])
    screen.write(COLOR_RESET)


def format_hud(points: int, collisions: int, seconds: int, name: str) -> str:
    """The status line, cut to the screen width."""
    return HUD_FORMAT.format(points, collisions, seconds, name)[:MAX_X]


class GameState:
    """Positions, score and difficulty of one game."""

    def __init__(self, name: str, rng: Any = None) -> None:
        self.name = name[:MAX_NAME_LENGTH]
        self.rng = rng if rng is not None else random
        self._last_difficulty_increase = -DIFFICULTY_STEP_SECONDS
        self.reset()

    def reset(self) -> None:
        """Start a fresh game with the player at the top centre."""
        self.points = 0
        self.collisions = 0
        self.max_active_obstacles = START_ACTIVE_OBSTACLES
        self.obstacles: list[Entity] = []
        self.rewards: list[Entity] = []
        self.player = Entity(MAX_X // 2 - PLAYER_W // 2, 1)
        self.frame = 0

    def move_player(self, key: str) -> None:
        """Move left on 'a' and right on 'd', staying on the field."""
        if key == "a" and self.player.x > 0:
            self.player.x -= 1
        if key == "d" and self.player.x < MAX_X - PLAYER_W:
            self.player.x += 1

    def spawn_obstacle(self) -> Entity | None:
        """Add an obstacle at the bottom unless the active limit is reached."""
        if len(self.obstacles) >= min(self.max_active_obstacles, MAX_OBSTACLES):
            return None
        entity = Entity(self.rng.randrange(MAX_X - OBST_W), MAX_Y - OBST_H - 1)
        self.obstacles.append(entity)
        return entity

    def spawn_reward(self) -> Entity | None:
        """Add a reward at the bottom unless all reward slots are in use."""
        if len(self.rewards) >= MAX_REWARDS:
            return None
        entity = Entity(self.rng.randrange(MAX_X - REWARD_W), MAX_Y - REWARD_H - 1)
        self.rewards.append(entity)
        return entity

    def advance_entities(self) -> None:
        """Move every obstacle and reward up one row; drop those leaving the top."""
        for entity in (*self.obstacles, *self.rewards):
            entity.y -= 1
        self.obstacles = [e for e in self.obstacles if e.y >= 0]
        self.rewards = [e for e in self.rewards if e.y >= 0]

    def check_collisions(self) -> None:
        """Count obstacle hits and collect rewards touching the player."""
        kept_obstacles = []
        for entity in self.obstacles:
            if collides(self.player, entity, PLAYER_W, PLAYER_H, OBST_W, OBST_H):
                self.collisions += 1
            else:
                kept_obstacles.append(entity)
        self.obstacles = kept_obstacles

        kept_rewards = []
        for entity in self.rewards:
            if collides(self.player, entity, PLAYER_W, PLAYER_H, REWARD_W, REWARD_H):
                self.points += 1
            else:
                kept_rewards.append(entity)
        self.rewards = kept_rewards

    def raise_difficulty(self, seconds: int) -> bool:
        """Allow more obstacles every ten seconds; True if the limit rose."""
        if (
            seconds > 0
            and seconds % DIFFICULTY_STEP_SECONDS == 0
            and seconds != self._last_difficulty_increase
        ):
            raised = self.max_active_obstacles < MAX_OBSTACLES
            if raised:
                self.max_active_obstacles = min(
                    self.max_active_obstacles + DIFFICULTY_STEP, MAX_OBSTACLES
                )
            self._last_difficulty_increase = seconds
            return raised
        return False

    def tick(self) -> None:
        """Advance one frame: move, spawn, then resolve collisions."""
        self.advance_entities()
        if self.frame % OBSTACLE_EVERY == 0:
            self.spawn_obstacle()
        if self.frame % REWARD_EVERY == 0:
            self.spawn_reward()
        self.check_collisions()
        self.frame += 1

    def is_over(self) -> bool:
        return self.collisions >= MAX_COLLISIONS


def _draw_hud(screen: Screen, state: GameState, seconds: int) -> None:
    screen.gotoxy(1, MAX_Y + 1)
    screen.write(" " * MAX_X)
    screen.gotoxy(1, MAX_Y + 1)
    screen.write(format_hud(state.points, state.collisions, seconds, state.name))


def play_game(
    screen: Screen,
    keyboard: _KeySource,
    nickname: str,
    ranking_path: PathType = "ranking.txt",
    stdin: TextIO | None = None,
) -> GameState:
    """Run one game until five hits, save the score and wait for 'q'."""
    source = stdin if stdin is not None else sys.stdin
    screen.write("\a")
    time.sleep(0.2)

    state = GameState(nickname)
    timer = Timer()
    timer.init(1)
    last_update = timer.time_diff()

    screen.clear()
    screen.draw_borders()
    previous = Entity(state.player.x, state.player.y)

    while not state.is_over():
        if keyboard.keyhit():
            state.move_player(keyboard.readch())

        now = timer.time_diff()
        if now - last_update >= FRAME_INTERVAL_MS:
            clear_sprite_area(screen, previous.x, previous.y, PLAYER_W, PLAYER_H)
            for entity in state.obstacles:
                clear_sprite_area(screen, entity.x, entity.y, OBST_W, OBST_H)
            for entity in state.rewards:
                clear_sprite_area(screen, entity.x, entity.y, REWARD_W, REWARD_H)

            state.tick()

            for entity in state.obstacles:
                draw_sprite(
                    screen, OBSTACLE_SPRITE, OBST_W, OBST_H, entity.x, entity.y, COLOR_RED
                )
            for entity in state.rewards:
                draw_sprite(
                    screen, REWARD_SPRITE, REWARD_W, REWARD_H, entity.x, entity.y, COLOR_GREEN
                )
            draw_sprite(
                screen,
                PLAYER_SPRITE,
                PLAYER_W,
                PLAYER_H,
                state.player.x,
                state.player.y,
                COLOR_YELLOW,
            )
            previous = Entity(state.player.x, state.player.y)

            seconds = now // 1000
            _draw_hud(screen, state, seconds)
            state.raise_difficulty(seconds)

            last_update = now
            screen.update()
        time.sleep(0.01)

    save_score(ranking_path, state.name, state.points)
    screen.clear()
    screen.draw_borders()
    screen.gotoxy(MAX_X // 2 - 15, 19)
    screen.write(f"Game Over, {state.name}! Pontos: {state.points}")
    show_ranking(screen, ranking_path)
    screen.gotoxy(MAX_X // 2 - 15, 20)
    screen.write("Pressione 'q' para sair.")
    screen.update()

    while True:
        ch = source.read(1)
        if ch in ("", "q", "Q"):
            break
    return state
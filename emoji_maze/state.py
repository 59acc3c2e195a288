from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

import numpy as np

import config


class Point(NamedTuple):
    row: int
    col: int

    def step(self, delta):
        return Point(self.row + delta[0], self.col + delta[1])


class Direction(Enum):
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def delta(self):
        return self.value


# 上下左右
CARDINALS = tuple(d.delta for d in Direction)


class GameStatus(str, Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True, eq=False)
class GameState:
    """
    一局遊戲的完整狀態 (不可變)。
    move_player 會回傳新的實例，呼叫端只讀不寫。
    """

    level: int
    maze: np.ndarray  # ID_FLOOR / ID_WALL, 唯讀
    player: Point
    exit: Point
    key: Point
    has_key: bool
    coins: frozenset[Point]
    trees: frozenset[Point]
    rocks: frozenset[Point]
    monsters: frozenset[Point]
    points: int
    status: GameStatus
    steps: int

    @property
    def rows(self):
        return self.maze.shape[0]

    @property
    def cols(self):
        return self.maze.shape[1]

    def in_bounds(self, p):
        return 0 <= p.row < self.rows and 0 <= p.col < self.cols

    def is_wall(self, p):
        # 界外一律視為牆
        if not self.in_bounds(p):
            return True
        return self.maze[p.row, p.col] == config.ID_WALL

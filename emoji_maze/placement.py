from __future__ import annotations

import logging
from dataclasses import dataclass

import config
from emoji_maze.rng import shuffled
from emoji_maze.state import Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    trees: frozenset[Point]
    rocks: frozenset[Point]
    monsters: frozenset[Point]
    coins: frozenset[Point]


def key_index(path_length):
    """鑰匙在安全路徑上的索引，避開起點與出口"""
    return max(1, min(path_length - 2, int(path_length * config.KEY_PATH_RATIO)))


def free_floor_cells(maze, excluded):
    rows, cols = maze.shape
    cells = []
    for r in range(1, rows - 1):
        for c in range(1, cols - 1):
            if maze[r, c] != config.ID_FLOOR:
                continue
            p = Point(r, c)
            if p in excluded:
                continue
            cells.append(p)
    return cells


def place_entities(maze, safe_path, key, counts, rng):
    """
    從同一個洗牌後的池子依序切出樹、石頭、怪物、金幣，
    所以彼此不會重疊，也不會落在安全路徑或鑰匙上。
    """
    excluded = set(safe_path)
    excluded.add(key)
    pool = shuffled(free_floor_cells(maze, excluded), rng)

    wanted = counts.trees + counts.rocks + counts.monsters + counts.coins
    if len(pool) < wanted:
        logger.debug("placement pool has %d cells for %d entities", len(pool), wanted)

    bounds = []
    offset = 0
    for n in (counts.trees, counts.rocks, counts.monsters, counts.coins):
        bounds.append((offset, offset + n))
        offset += n

    trees, rocks, monsters, coins = (frozenset(pool[lo:hi]) for lo, hi in bounds)
    return Placement(trees=trees, rocks=rocks, monsters=monsters, coins=coins)

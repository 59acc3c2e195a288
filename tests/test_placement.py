import numpy as np
import pytest

import config
from emoji_maze.maze_generator import LevelConfig, MazeGenerator, level_config
from emoji_maze.pathfinding import shortest_path
from emoji_maze.placement import free_floor_cells, key_index, place_entities
from emoji_maze.state import Point


@pytest.mark.parametrize(
    "length, expected",
    [(3, 1), (10, 6), (21, 12), (100, 60)],
)
def test_key_index(length, expected):
    assert key_index(length) == expected


def test_key_index_stays_off_the_ends():
    for length in range(3, 200):
        idx = key_index(length)
        assert 1 <= idx <= length - 2


@pytest.fixture
def generated():
    rng = np.random.default_rng(42)
    cfg = level_config(3)
    maze = MazeGenerator.generate(cfg.rows, cfg.cols, rng)
    path = shortest_path(maze, Point(1, 1), Point(cfg.rows - 2, cfg.cols - 2))
    key = path[key_index(len(path))]
    return maze, path, key, cfg, rng


def test_placement_is_disjoint_and_off_the_safe_path(generated):
    maze, path, key, cfg, rng = generated
    placed = place_entities(maze, path, key, cfg, rng)

    groups = [placed.trees, placed.rocks, placed.monsters, placed.coins]
    for i, a in enumerate(groups):
        for b in groups[i + 1 :]:
            assert not (a & b)

    forbidden = set(path) | {key}
    for group in groups:
        assert not (group & forbidden)
        for p in group:
            assert maze[p.row, p.col] == config.ID_FLOOR


def test_placement_counts(generated):
    maze, path, key, cfg, rng = generated
    placed = place_entities(maze, path, key, cfg, rng)

    assert len(placed.trees) == cfg.trees
    assert len(placed.rocks) == cfg.rocks
    assert len(placed.monsters) == cfg.monsters
    assert len(placed.coins) == cfg.coins


def test_short_pool_places_what_fits(make_state, rng):
    state = make_state(
        [
            "#######",
            "#P...E#",
            "#K....#",
            "#######",
        ]
    )
    path = [Point(1, c) for c in range(1, 6)]
    counts = LevelConfig(rows=4, cols=7, trees=2, rocks=2, monsters=2, coins=2)
    placed = place_entities(state.maze, path, state.key, counts, rng)

    # row 2 minus the key leaves four free cells
    total = placed.trees | placed.rocks | placed.monsters | placed.coins
    assert total == set(free_floor_cells(state.maze, set(path) | {state.key}))
    assert len(placed.trees) == 2
    assert len(placed.rocks) == 2
    assert not placed.monsters
    assert not placed.coins

import numpy as np
import pytest

import config
from emoji_maze.maze_generator import MazeGenerator, floor_openings, level_config, room_doors
from emoji_maze.pathfinding import shortest_path
from emoji_maze.state import Point


def _floor(maze):
    return set(zip(*np.nonzero(maze == config.ID_FLOOR)))


@pytest.mark.parametrize("size", [9, 13, 21, 41])
def test_generate_shape_and_border(size):
    maze = MazeGenerator.generate(size, size, np.random.default_rng(size))

    assert maze.shape == (size, size)
    assert maze.dtype == np.int8
    assert (maze[0, :] == config.ID_WALL).all()
    assert (maze[-1, :] == config.ID_WALL).all()
    assert (maze[:, 0] == config.ID_WALL).all()
    assert (maze[:, -1] == config.ID_WALL).all()
    assert maze[1, 1] == config.ID_FLOOR
    assert maze[size - 2, size - 2] == config.ID_FLOOR


@pytest.mark.parametrize("seed", range(20))
def test_start_always_reaches_exit(seed):
    maze = MazeGenerator.generate(13, 13, np.random.default_rng(seed))
    path = shortest_path(maze, Point(1, 1), Point(11, 11))

    assert path is not None
    assert path[0] == Point(1, 1)
    assert path[-1] == Point(11, 11)


def test_perfect_maze_is_a_spanning_tree():
    rows, cols = 15, 11
    maze = MazeGenerator.carve_perfect_maze(rows, cols, np.random.default_rng(7))

    cells = ((rows - 1) // 2) * ((cols - 1) // 2)
    # every cell carved plus exactly cells - 1 connecting walls
    assert len(_floor(maze)) == 2 * cells - 1
    for r in range(1, rows - 1, 2):
        for c in range(1, cols - 1, 2):
            assert maze[r, c] == config.ID_FLOOR


def test_braid_and_rooms_only_add_floor():
    rng = np.random.default_rng(3)
    maze = MazeGenerator.carve_perfect_maze(21, 21, rng)
    before = _floor(maze)

    MazeGenerator.braid(maze, rng)
    braided = _floor(maze)
    assert before <= braided

    MazeGenerator.carve_rooms(maze, rng)
    assert braided <= _floor(maze)
    assert (maze[0, :] == config.ID_WALL).all()
    assert (maze[:, -1] == config.ID_WALL).all()


def test_braid_reduces_dead_ends():
    rng = np.random.default_rng(11)
    maze = MazeGenerator.carve_perfect_maze(21, 21, rng)

    def dead_ends(m):
        return sum(
            1
            for r in range(1, 20, 2)
            for c in range(1, 20, 2)
            if floor_openings(m, r, c) < 2
        )

    before = dead_ends(maze)
    passes = MazeGenerator.braid(maze, rng)
    assert before > 0
    assert dead_ends(maze) == 0
    # at least one pass that opens walls and one that confirms nothing is left
    assert 2 <= passes < 21 * 21


def test_same_seed_same_maze():
    a = MazeGenerator.generate(17, 17, np.random.default_rng(99))
    b = MazeGenerator.generate(17, 17, np.random.default_rng(99))
    assert np.array_equal(a, b)


@pytest.mark.parametrize("rows, cols", [(12, 13), (13, 14), (7, 7), (9, 5)])
def test_rejects_bad_dimensions(rows, cols):
    with pytest.raises(ValueError):
        MazeGenerator.generate(rows, cols, np.random.default_rng(0))


def test_level_config_sizes():
    assert level_config(1).rows == 13
    assert level_config(2).rows == 15
    assert level_config(15).rows == 41
    assert level_config(80).rows == 41
    assert level_config(5).rows == level_config(5).cols


def test_level_config_counts_are_monotonic_and_capped():
    configs = [level_config(n) for n in range(1, 60)]
    for prev, cur in zip(configs, configs[1:]):
        assert cur.trees >= prev.trees
        assert cur.rocks >= prev.rocks
        assert cur.monsters >= prev.monsters
        assert cur.coins >= prev.coins
    assert configs[-1].monsters == 14

    first = configs[0]
    assert (first.trees, first.rocks, first.monsters, first.coins) == (5, 4, 3, 8)


def test_level_config_rejects_level_zero():
    with pytest.raises(ValueError):
        level_config(0)


def test_braid_stops_when_dead_ends_cannot_be_opened():
    # a lone floor cell has no floor cell two steps away to connect to
    maze = np.full((9, 9), config.ID_WALL, dtype=np.int8)
    maze[1, 1] = config.ID_FLOOR

    passes = MazeGenerator.braid(maze, np.random.default_rng(0))

    assert passes == 1
    assert _floor(maze) == {(1, 1)}


def test_carve_rooms_opens_two_or_three_doors_per_room():
    rng = np.random.default_rng(5)
    maze = MazeGenerator.carve_perfect_maze(21, 21, rng)
    MazeGenerator.braid(maze, rng)

    rooms = MazeGenerator.carve_rooms(maze, rng)

    # every attempt fits in a 21x21 maze
    assert len(rooms) == config.ROOM_ATTEMPTS + (21 - config.BASE_SIZE) // 4
    for room in rooms:
        cells = maze[room.top : room.top + room.height, room.left : room.left + room.width]
        assert (cells == config.ID_FLOOR).all()
        assert 2 <= len(room.doors) <= 3
        assert len(set(room.doors)) == len(room.doors)

        for r, c in room.doors:
            assert 0 < r < 20 and 0 < c < 20
            assert maze[r, c] == config.ID_FLOOR
            outside_rows = r in (room.top - 1, room.top + room.height)
            outside_cols = c in (room.left - 1, room.left + room.width)
            within_cols = room.left <= c < room.left + room.width
            within_rows = room.top <= r < room.top + room.height
            assert (outside_rows and within_cols) or (outside_cols and within_rows)


def test_room_doors_sit_between_cells():
    maze = np.full((13, 13), config.ID_WALL, dtype=np.int8)

    # even midpoints move to the nearest odd coordinate
    assert room_doors(maze, 3, 5, 7, 5) == [(2, 7), (10, 7), (5, 4), (5, 10)]
    # doors on the outer border are skipped
    assert room_doors(maze, 1, 1, 3, 3) == [(4, 1), (1, 4)]


@pytest.mark.parametrize("seed", range(10))
def test_generated_pillars_are_never_dead_ends(seed):
    maze = MazeGenerator.generate(21, 21, np.random.default_rng(seed))

    for r in range(2, 20, 2):
        for c in range(2, 20, 2):
            if maze[r, c] == config.ID_FLOOR:
                assert floor_openings(maze, r, c) >= 2

import logging
from dataclasses import dataclass

import numpy as np

import config
from emoji_maze.rng import shuffled
from emoji_maze.state import CARDINALS

logger = logging.getLogger(__name__)

# 跨過一面牆的方向 (距離 2)
JUMPS = ((-2, 0), (2, 0), (0, -2), (0, 2))


@dataclass(frozen=True)
class LevelConfig:
    rows: int
    cols: int
    trees: int
    rocks: int
    monsters: int
    coins: int


def level_config(level):
    """關卡 -> 迷宮尺寸與各類物件數量 (隨關卡單調不減，有上限)"""
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")

    size = min(config.MAX_SIZE, config.BASE_SIZE + (level - 1) * 2)
    rows = size + 1 if size % 2 == 0 else size
    cols = rows
    interior = max(1, (rows - 2) * (cols - 2))

    return LevelConfig(
        rows=rows,
        cols=cols,
        trees=max(5, int(interior * 0.045)),
        rocks=max(4, int(interior * 0.03)),
        monsters=min(14, 3 + level // 2),
        coins=max(8, int(interior * 0.035)),
    )


def _is_interior(maze, r, c):
    rows, cols = maze.shape
    return 0 < r < rows - 1 and 0 < c < cols - 1


def floor_openings(maze, r, c):
    """計算某格上下左右有幾個通路"""
    rows, cols = maze.shape
    openings = 0
    for dr, dc in CARDINALS:
        nr, nc = r + dr, c + dc
        if 0 <= nr < rows and 0 <= nc < cols and maze[nr, nc] == config.ID_FLOOR:
            openings += 1
    return openings


def _random_odd_in_range(rng, low, high):
    raw = low + int(rng.integers(max(1, high - low + 1)))
    return raw - 1 if raw % 2 == 0 else raw


def _odd_midpoint(start, length):
    mid = start + length // 2
    return mid if mid % 2 == 1 else mid - 1


@dataclass(frozen=True)
class Room:
    top: int
    left: int
    height: int
    width: int
    doors: tuple


def room_doors(maze, top, left, height, width):
    """
    房間四條邊中點外側一格的候選門 (不含外框)。
    中點取最近的奇數座標，門才會落在兩個格子之間的牆上，而不是柱子上。
    """
    mid_r = _odd_midpoint(top, height)
    mid_c = _odd_midpoint(left, width)
    doors = [
        (top - 1, mid_c),
        (top + height, mid_c),
        (mid_r, left - 1),
        (mid_r, left + width),
    ]
    return [(r, c) for r, c in doors if _is_interior(maze, r, c)]


class MazeGenerator:
    @staticmethod
    def generate(rows, cols, rng):
        """
        生成迷宮並返回 numpy 陣列
        :param rows: 列數 (奇數, >= 9)
        :param cols: 行數 (奇數, >= 9)
        :param rng: numpy 的 random generator 實例
        :return: maze (numpy array, ID_FLOOR / ID_WALL)
        """
        maze = MazeGenerator.carve_perfect_maze(rows, cols, rng)
        perfect_floor = int(np.count_nonzero(maze == config.ID_FLOOR))

        MazeGenerator.braid(maze, rng)
        MazeGenerator.carve_rooms(maze, rng)

        # 確保出口是通路
        maze[rows - 2, cols - 2] = config.ID_FLOOR

        logger.debug(
            "generated %dx%d maze: %d floor cells after carving, %d after braid/rooms",
            rows,
            cols,
            perfect_floor,
            int(np.count_nonzero(maze == config.ID_FLOOR)),
        )
        return maze

    @staticmethod
    def carve_perfect_maze(rows, cols, rng):
        if rows % 2 == 0 or cols % 2 == 0:
            raise ValueError(f"maze dimensions must be odd, got {rows}x{cols}")
        if rows < config.MIN_SIZE or cols < config.MIN_SIZE:
            raise ValueError(
                f"maze dimensions must be >= {config.MIN_SIZE}, got {rows}x{cols}"
            )

        # 1. 初始化：全填滿牆壁
        maze = np.full((rows, cols), config.ID_WALL, dtype=np.int8)

        # 起點設為 (1, 1)
        maze[1, 1] = config.ID_FLOOR

        # 2. DFS 生成完美迷宮 (確保連通性)，用顯式堆疊避免遞迴深度問題
        stack = [(1, 1)]

        while stack:
            r, c = stack[-1]

            # 尋找周圍距離為 2 的未訪問鄰居 (跨過一面牆)
            neighbors = []
            for dr, dc in JUMPS:
                nr, nc = r + dr, c + dc
                if _is_interior(maze, nr, nc) and maze[nr, nc] == config.ID_WALL:
                    neighbors.append((nr, nc, dr // 2, dc // 2))

            if neighbors:
                # 隨機選一個鄰居
                nr, nc, wr, wc = neighbors[int(rng.integers(len(neighbors)))]
                # 打通中間的牆
                maze[r + wr, c + wc] = config.ID_FLOOR
                # 標記鄰居為通路
                maze[nr, nc] = config.ID_FLOOR
                stack.append((nr, nc))
            else:
                stack.pop()

        return maze

    @staticmethod
    def braid(maze, rng):
        """
        打通死路製造迴圈，只增加通路不移除
        :return: 實際掃描的輪數 (上限 rows * cols)
        """
        rows, cols = maze.shape
        changed = True
        passes = 0

        while changed and passes < rows * cols:
            changed = False
            passes += 1

            for r in range(1, rows - 1, 2):
                for c in range(1, cols - 1, 2):
                    if maze[r, c] != config.ID_FLOOR:
                        continue
                    if floor_openings(maze, r, c) >= 2:
                        continue

                    candidates = []
                    for dr, dc in JUMPS:
                        tr, tc = r + dr, c + dc
                        mr, mc = r + dr // 2, c + dc // 2
                        if not _is_interior(maze, tr, tc):
                            continue
                        if maze[tr, tc] != config.ID_FLOOR:
                            continue
                        if maze[mr, mc] == config.ID_WALL:
                            candidates.append((mr, mc))

                    if not candidates:
                        continue
                    mr, mc = candidates[int(rng.integers(len(candidates)))]
                    maze[mr, mc] = config.ID_FLOOR
                    changed = True

        logger.debug("braid finished after %d passes", passes)
        return passes

    @staticmethod
    def carve_rooms(maze, rng):
        """
        挖出數個矩形房間，每間開 2~3 個門通往外面
        :return: 實際挖出的 Room 列表 (含打開的門)
        """
        rows, cols = maze.shape
        attempts = config.ROOM_ATTEMPTS + (rows - config.BASE_SIZE) // 4
        rooms = []

        for _ in range(attempts):
            height = int(
                np.clip(
                    _random_odd_in_range(rng, config.ROOM_MIN_SIZE, config.ROOM_MAX_SIZE),
                    config.ROOM_MIN_SIZE,
                    rows - 2,
                )
            )
            width = int(
                np.clip(
                    _random_odd_in_range(rng, config.ROOM_MIN_SIZE, config.ROOM_MAX_SIZE),
                    config.ROOM_MIN_SIZE,
                    cols - 2,
                )
            )

            max_top = rows - height - 1
            max_left = cols - width - 1
            if max_top <= 1 or max_left <= 1:
                continue

            top = int(np.clip(_random_odd_in_range(rng, 1, max_top), 1, max_top))
            left = int(np.clip(_random_odd_in_range(rng, 1, max_left), 1, max_left))

            maze[top : top + height, left : left + width] = config.ID_FLOOR

            candidates = shuffled(room_doors(maze, top, left, height, width), rng)
            n_doors = min(len(candidates), 2 + int(rng.integers(2)))
            doors = tuple(candidates[:n_doors])
            for dr, dc in doors:
                maze[dr, dc] = config.ID_FLOOR

            rooms.append(Room(top, left, height, width, doors))

        logger.debug("carved %d of %d rooms", len(rooms), attempts)
        return rooms

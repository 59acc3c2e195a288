from collections import deque

import config
from emoji_maze.state import CARDINALS, Point


def shortest_path(maze, start, goal, blocked=None):
    """
    BFS 最短路徑
    輸入: maze(二維陣列, ID_FLOOR 是路, ID_WALL 是牆), start, goal, blocked(額外視為障礙的格子)
    輸出: 路徑座標列表 [start, ..., goal] 或 None (若無路)
    """
    start, goal = Point(*start), Point(*goal)
    rows, cols = maze.shape
    blocked = blocked or frozenset()

    parents = {start: None}
    queue = deque([start])

    while queue:
        current = queue.popleft()

        # 找到終點
        if current == goal:
            path = []
            walk = current
            while walk is not None:
                path.append(walk)
                walk = parents[walk]
            return path[::-1]  # 反轉路徑，從起點開始

        for dr, dc in CARDINALS:
            nxt = Point(current.row + dr, current.col + dc)
            if not (0 <= nxt.row < rows and 0 <= nxt.col < cols):
                continue
            if maze[nxt.row, nxt.col] == config.ID_WALL:
                continue
            if nxt in parents:
                continue
            # 終點本身不受 blocked 限制
            if nxt in blocked and nxt != goal:
                continue

            parents[nxt] = current
            queue.append(nxt)

    return None


def has_line_of_sight(maze, blockers, origin, target):
    """同一列或同一行，且中間每一格都是通路、沒有樹或石頭"""
    if origin.row != target.row and origin.col != target.col:
        return False

    rows, cols = maze.shape
    if origin.row == target.row:
        step = 1 if origin.col < target.col else -1
        between = (Point(origin.row, c) for c in range(origin.col + step, target.col, step))
    else:
        step = 1 if origin.row < target.row else -1
        between = (Point(r, origin.col) for r in range(origin.row + step, target.row, step))

    for p in between:
        if not (0 <= p.row < rows and 0 <= p.col < cols):
            return False
        if maze[p.row, p.col] == config.ID_WALL or p in blockers:
            return False
    return True

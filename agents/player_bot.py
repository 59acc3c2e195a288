from emoji_maze.pathfinding import shortest_path
from emoji_maze.state import Direction, GameStatus, Point

_DIRECTION_BY_DELTA = {d.delta: d for d in Direction}


class PlayerBot:
    """
    BFS 玩家機器人：先去拿鑰匙，再走向出口。
    會盡量繞開石頭與怪物，繞不開才只看牆壁。
    """

    def __init__(self, avoid_radius=1):
        self.avoid_radius = avoid_radius

    def goal(self, state):
        return state.exit if state.has_key else state.key

    def _danger_cells(self, state):
        cells = set(state.rocks)
        for m in state.monsters:
            for dr in range(-self.avoid_radius, self.avoid_radius + 1):
                for dc in range(-self.avoid_radius, self.avoid_radius + 1):
                    if abs(dr) + abs(dc) <= self.avoid_radius:
                        cells.add(Point(m.row + dr, m.col + dc))
        cells.discard(state.player)
        return cells

    def choose_direction(self, state):
        """回傳下一步的方向；沒有可走的路或遊戲已結束則回傳 None"""
        if state.status != GameStatus.PLAYING:
            return None

        goal = self.goal(state)
        path = shortest_path(state.maze, state.player, goal, blocked=self._danger_cells(state))
        if path is None:
            # 退而求其次：只避開怪物本身
            path = shortest_path(state.maze, state.player, goal, blocked=state.monsters)
        if path is None:
            path = shortest_path(state.maze, state.player, goal)

        if path is None or len(path) < 2:
            return None

        nxt = path[1]
        delta = (nxt.row - state.player.row, nxt.col - state.player.col)
        return _DIRECTION_BY_DELTA[delta]

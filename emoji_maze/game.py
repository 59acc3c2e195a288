"""
關卡 / 遊戲狀態機。

create_game 是唯一的建構方式；move_player 回傳新的 GameState。
勝利後要不要、何時進入下一關由呼叫端決定 (見 main.py)。
"""
import logging

import config
from emoji_maze.exceptions import UnreachableExitError
from emoji_maze.maze_generator import MazeGenerator, level_config
from emoji_maze.pathfinding import shortest_path
from emoji_maze.placement import key_index, place_entities
from emoji_maze.rng import make_rng
from emoji_maze.state import GameState, GameStatus, Point
from emoji_maze.turn import advance_monsters, move_player

__all__ = [
    "advance_monsters",
    "create_game",
    "move_player",
    "next_level",
    "restart_run",
    "retry_level",
    "status_text",
]

logger = logging.getLogger(__name__)


def create_game(level, rng=None):
    rng = make_rng(rng)
    cfg = level_config(level)

    maze = MazeGenerator.generate(cfg.rows, cfg.cols, rng)
    player = Point(1, 1)
    exit_ = Point(cfg.rows - 2, cfg.cols - 2)

    safe_path = shortest_path(maze, player, exit_)
    if safe_path is None:
        raise UnreachableExitError(
            f"level {level}: no path from {tuple(player)} to {tuple(exit_)} "
            f"in {cfg.rows}x{cfg.cols} maze"
        )

    key = safe_path[key_index(len(safe_path))]
    placement = place_entities(maze, safe_path, key, cfg, rng)
    maze.flags.writeable = False

    logger.info(
        "created level %d: %dx%d maze, safe path %d cells, %d monsters",
        level,
        cfg.rows,
        cfg.cols,
        len(safe_path),
        len(placement.monsters),
    )

    return GameState(
        level=level,
        maze=maze,
        player=player,
        exit=exit_,
        key=key,
        has_key=False,
        coins=placement.coins,
        trees=placement.trees,
        rocks=placement.rocks,
        monsters=placement.monsters,
        points=config.LEVEL_START_POINTS,
        status=GameStatus.PLAYING,
        steps=0,
    )


def next_level(state):
    """過關後下一個要建立的關卡編號；尚未過關則留在原關"""
    return state.level + 1 if state.status == GameStatus.WON else state.level


def retry_level(state, rng=None):
    return create_game(state.level, rng)


def restart_run(rng=None):
    return create_game(1, rng)


def status_text(state):
    if state.status == GameStatus.WON:
        return f"Level {state.level} cleared in {state.steps} steps. Next level loading..."
    if state.status == GameStatus.LOST:
        if state.points <= 0:
            return "Out of points."
        return "A monster caught you."
    if state.has_key:
        return "You have the key. Reach the door."
    return "Find the key, then reach the door."

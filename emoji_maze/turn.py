import logging
from dataclasses import replace

import config
from emoji_maze.pathfinding import has_line_of_sight
from emoji_maze.rng import make_rng, shuffled
from emoji_maze.state import CARDINALS, GameStatus, Point

logger = logging.getLogger(__name__)


def move_player(state, direction, rng=None):
    """
    處理一整個回合：玩家移動 (含推石頭、撿東西、勝負判定)，
    若遊戲仍在進行，所有怪物各走一步。
    被拒絕的移動 (撞牆、推不動) 直接回傳原本的 state。
    """
    if state.status != GameStatus.PLAYING:
        return state

    delta = direction.delta
    target = state.player.step(delta)
    if state.is_wall(target):
        return state

    rocks = state.rocks
    if target in state.rocks:
        pushed_to = target.step(delta)
        if _push_blocked(state, pushed_to):
            return state
        rocks = (state.rocks - {target}) | {pushed_to}

    # 樹不擋路，只擋視線
    points = state.points - config.STEP_COST
    coins = state.coins
    if target in coins:
        coins = coins - {target}
        points += config.COIN_POINTS

    has_key = state.has_key or target == state.key

    if points <= 0:
        status = GameStatus.LOST
    elif target in state.monsters:
        status = GameStatus.LOST
    elif target == state.exit and has_key:
        status = GameStatus.WON
    else:
        status = GameStatus.PLAYING

    next_state = replace(
        state,
        player=target,
        rocks=rocks,
        coins=coins,
        points=points,
        has_key=has_key,
        status=status,
        steps=state.steps + 1,
    )

    if next_state.status != GameStatus.PLAYING:
        logger.info(
            "level %d ended: %s after %d steps with %d points",
            next_state.level,
            next_state.status.value,
            next_state.steps,
            next_state.points,
        )
        return next_state
    return advance_monsters(next_state, make_rng(rng))


def _push_blocked(state, cell):
    return (
        state.is_wall(cell)
        or cell in state.rocks
        or cell in state.trees
        or cell in state.coins
        or cell in state.monsters
        or cell == state.exit
        or cell == state.key
        or cell == state.player
    )


def _monster_can_enter(state, cell):
    if state.is_wall(cell):
        return False
    if cell in state.trees or cell in state.rocks or cell in state.coins:
        return False
    # 還沒被撿走的鑰匙也不能踩
    return state.has_key or cell != state.key


def _choose_monster_move(state, monster, occupied, rng):
    player = state.player

    def can_move_to(cell):
        if not _monster_can_enter(state, cell):
            return False
        if cell == player:
            return True
        return cell not in occupied

    # 追擊：同列或同行且視線無阻
    toward = None
    if monster.row == player.row:
        toward = Point(monster.row, monster.col + (1 if player.col > monster.col else -1))
    elif monster.col == player.col:
        toward = Point(monster.row + (1 if player.row > monster.row else -1), monster.col)

    if toward is not None and can_move_to(toward):
        blockers = state.trees | state.rocks
        if has_line_of_sight(state.maze, blockers, monster, player):
            return toward

    # 遊蕩：隨機挑一個能走的鄰格，沒有就原地不動
    for dr, dc in shuffled(CARDINALS, rng):
        cell = Point(monster.row + dr, monster.col + dc)
        if can_move_to(cell):
            return cell
    return monster


def advance_monsters(state, rng):
    """
    所有怪物「同時」走一步。
    依隨機順序逐一決定，先決定的先佔位，避免兩隻怪物落在同一格。
    """
    if state.status != GameStatus.PLAYING:
        return state

    order = shuffled(sorted(state.monsters), rng)
    occupied = set(state.monsters)
    next_monsters = set()
    caught = False

    for monster in order:
        occupied.discard(monster)
        nxt = _choose_monster_move(state, monster, occupied, rng)

        if nxt == state.player:
            caught = True
            next_monsters.add(nxt)
            continue

        if nxt in occupied:
            nxt = monster

        next_monsters.add(nxt)
        occupied.add(nxt)

    if caught:
        logger.info(
            "level %d ended: monster caught the player after %d steps",
            state.level,
            state.steps,
        )
        return replace(state, monsters=frozenset(next_monsters), status=GameStatus.LOST)
    return replace(state, monsters=frozenset(next_monsters))

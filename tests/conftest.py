import numpy as np
import pytest

import config
from emoji_maze.state import GameState, GameStatus, Point

# Legend for ASCII boards:
#   '#' wall   '.' floor   'P' player   'E' exit   'K' key
#   'c' coin   'T' tree    'R' rock     'M' monster
_SETS = {"c": "coins", "T": "trees", "R": "rocks", "M": "monsters"}


def build_state(rows, *, points=config.LEVEL_START_POINTS, has_key=False, level=1):
    maze = np.full((len(rows), len(rows[0])), config.ID_WALL, dtype=np.int8)
    found = {"coins": set(), "trees": set(), "rocks": set(), "monsters": set()}
    player = exit_ = key = None

    for r, line in enumerate(rows):
        assert len(line) == len(rows[0]), "ragged board"
        for c, ch in enumerate(line):
            if ch == "#":
                continue
            maze[r, c] = config.ID_FLOOR
            p = Point(r, c)
            if ch == "P":
                player = p
            elif ch == "E":
                exit_ = p
            elif ch == "K":
                key = p
            elif ch in _SETS:
                found[_SETS[ch]].add(p)

    assert player is not None and exit_ is not None and key is not None
    maze.flags.writeable = False
    return GameState(
        level=level,
        maze=maze,
        player=player,
        exit=exit_,
        key=key,
        has_key=has_key,
        coins=frozenset(found["coins"]),
        trees=frozenset(found["trees"]),
        rocks=frozenset(found["rocks"]),
        monsters=frozenset(found["monsters"]),
        points=points,
        status=GameStatus.PLAYING,
        steps=0,
    )


@pytest.fixture
def make_state():
    return build_state


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


def assert_disjoint(state):
    """Entity sets never overlap; the player may only share a tree cell, or a
    monster cell once the game is lost."""
    groups = {
        "coins": state.coins,
        "trees": state.trees,
        "rocks": state.rocks,
        "monsters": state.monsters,
    }
    if not state.has_key:
        groups["key"] = frozenset({state.key})

    names = list(groups)
    for i, a in enumerate(names):
        for b in names[i + 1 :]:
            assert not (groups[a] & groups[b]), f"{a} overlaps {b}"

    assert state.player not in state.coins
    assert state.player not in state.rocks
    if state.player in state.monsters:
        assert state.status == GameStatus.LOST

import gymnasium as gym
from gymnasium import spaces
import numpy as np
import config

from emoji_maze.game import create_game, move_player, status_text
from emoji_maze.maze_generator import level_config
from emoji_maze.state import Direction, GameStatus
from envs.rendering import MazeRenderer

ACTIONS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


def encode_state(state):
    """把 GameState 轉成 ID 網格 (後畫的會蓋掉先畫的)"""
    grid = state.maze.astype(np.uint8)  # ID_FLOOR / ID_WALL
    layers = [
        (state.trees, config.ID_TREE),
        (state.coins, config.ID_COIN),
        (state.rocks, config.ID_ROCK),
        ((state.exit,), config.ID_EXIT),
        (() if state.has_key else (state.key,), config.ID_KEY),
        (state.monsters, config.ID_MONSTER),
        ((state.player,), config.ID_PLAYER),
    ]
    for cells, cell_id in layers:
        for p in cells:
            grid[p.row, p.col] = cell_id
    return grid


class MazeEnv(gym.Env):
    """
    玩家視角的環境：動作是上下左右，每一步就是 move_player 的一個回合。
    關卡固定 (迷宮尺寸決定觀測空間的形狀)。
    """

    metadata = {"render_modes": ["human"], "render_fps": config.FPS}

    def __init__(self, render_mode=None, level=config.ENV_LEVEL, seed=None):
        super(MazeEnv, self).__init__()

        self.level = level
        self.render_mode = render_mode
        self.rng = np.random.default_rng(seed)

        cfg = level_config(level)
        self.rows, self.cols = cfg.rows, cfg.cols

        # 初始化渲染器
        self.renderer = MazeRenderer(config.WINDOW_SIZE, config.FPS)

        # 狀態變數
        self.state = None
        self.episode_steps = 0

        # 定義動作空間
        self.action_space = spaces.Discrete(len(ACTIONS))

        # 定義觀測空間
        self.scale_factor = 4
        self.observation_space = spaces.Box(
            low=0,
            high=255,
            shape=(1, self.rows * self.scale_factor, self.cols * self.scale_factor),
            dtype=np.uint8,
        )

    def step(self, action):
        before = self.state
        after = move_player(before, ACTIONS[int(action)], self.rng)
        self.state = after
        self.episode_steps += 1

        reward, terminated, info = self._score_transition(before, after)

        truncated = False
        if not terminated and self.episode_steps >= config.MAX_EPISODE_STEPS:
            truncated = True
            info["result"] = "timeout"

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, info

    def _score_transition(self, before, after):
        """計算獎勵與終止狀態"""
        info = {"points": after.points, "steps": after.steps, "has_key": after.has_key}

        # 撞牆或推不動：回合沒有發生
        if after is before:
            return config.REWARD_BLOCKED, False, info

        reward = (after.points - before.points) * config.REWARD_STEP
        if len(after.coins) < len(before.coins):
            reward += config.REWARD_COIN
        if after.has_key and not before.has_key:
            reward += config.REWARD_KEY

        terminated = after.status != GameStatus.PLAYING
        if after.status == GameStatus.WON:
            reward += config.REWARD_WIN
            info["result"] = "won"
        elif after.status == GameStatus.LOST:
            if after.points <= 0:
                reward += config.REWARD_EXHAUSTED
                info["result"] = "exhausted"
            else:
                reward += config.REWARD_CAUGHT
                info["result"] = "caught"

        return reward, terminated, info

    def _get_obs(self):
        """產生觀測值"""
        obs = encode_state(self.state) * 25
        obs = np.repeat(
            np.repeat(obs, self.scale_factor, axis=0), self.scale_factor, axis=1
        )
        obs = np.expand_dims(obs, axis=0)
        return obs.astype(np.uint8)

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        if seed is not None:
            self.rng = np.random.default_rng(seed)

        self.state = create_game(self.level, self.rng)
        self.episode_steps = 0

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), {"points": self.state.points, "steps": 0, "has_key": False}

    def render(self):
        if self.render_mode == "human" and self.state is not None:
            self.renderer.render(self.state, status_text(self.state))

    def close(self):
        self.renderer.close()

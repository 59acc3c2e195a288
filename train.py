import logging
import os

from stable_baselines3 import PPO

import config
from envs.maze_env import MazeEnv


def train(total_timesteps=200000, model_path="maze_player_ppo"):
    logging.basicConfig(level=logging.WARNING)
    log_dir = "./tensorboard_logs/"
    os.makedirs(log_dir, exist_ok=True)

    # 1. 建立環境 (固定關卡)
    env = MazeEnv(render_mode=None, level=config.ENV_LEVEL)

    # 2. 定義模型
    model = PPO(
        "CnnPolicy",  # 觀測值是 (1, H, W) 的 uint8 影像
        env,
        verbose=1,
        learning_rate=0.0001,
        batch_size=128,
        ent_coef=0.05,  # 強制探索
        gamma=0.99,
        n_steps=4096,
        clip_range=0.1,
        gae_lambda=0.95,
        device="auto",
        tensorboard_log=log_dir,
    )

    print(f"開始訓練... (Level {config.ENV_LEVEL}, Entropy Coef: {model.ent_coef})")

    # 3. 開始訓練
    model.learn(total_timesteps=total_timesteps, tb_log_name="maze_player_ppo")

    # 4. 儲存模型
    model.save(model_path)
    print(f"模型已儲存至 {model_path}.zip")

    env.close()


if __name__ == "__main__":
    train()

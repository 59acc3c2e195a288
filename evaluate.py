import datetime
import logging
import os
import time
from collections import Counter

import numpy as np
from stable_baselines3 import PPO

import config
from agents.player_bot import PlayerBot
from envs.maze_env import ACTIONS, MazeEnv


def _bot_policy():
    bot = PlayerBot()

    def predict(env):
        direction = bot.choose_direction(env.state)
        if direction is None:
            return env.action_space.sample()
        return ACTIONS.index(direction)

    return predict


def _model_policy(model_path):
    model = PPO.load(model_path)

    def predict(env):
        action, _ = model.predict(env._get_obs(), deterministic=True)
        return action

    return predict


def evaluate(model_path="maze_player_ppo", n_episodes=100, use_bot=False, seed=None):
    """
    評估玩家策略並輸出報告至檔案
    :param model_path: 模型路徑 (不含 .zip)
    :param n_episodes: 測試回合數
    :param use_bot: True 則改用 BFS 機器人作為基準
    """
    logging.basicConfig(level=logging.WARNING)

    # 建立 logs 資料夾
    log_dir = "evaluation_logs"
    os.makedirs(log_dir, exist_ok=True)

    # 產生報告檔名 (包含時間戳記)
    name = "bfs_bot" if use_bot else os.path.basename(model_path)
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    report_filename = f"{log_dir}/eval_report_{name}_{timestamp}.txt"

    # 準備緩衝輸出的字串列表
    output_buffer = []

    def log(message):
        """同時印出到螢幕並存入緩衝區"""
        print(message)
        output_buffer.append(message)

    log(f"--- 開始評估: {name} ---")
    log(f"測試回合數: {n_episodes}")
    log(f"關卡: {config.ENV_LEVEL}")

    if not use_bot and not os.path.exists(f"{model_path}.zip"):
        log(f"錯誤: 找不到模型檔案 {model_path}.zip")
        return None

    env = MazeEnv(render_mode=None, level=config.ENV_LEVEL, seed=seed)
    predict = _bot_policy() if use_bot else _model_policy(model_path)

    stats = {
        "rewards": [],
        "steps": [],
        "points": [],
        "results": [],
    }

    start_time = time.time()

    for i in range(n_episodes):
        env.reset()
        terminated = False
        truncated = False
        episode_reward = 0
        info = {}

        while not (terminated or truncated):
            _, reward, terminated, truncated, info = env.step(predict(env))
            episode_reward += reward

        stats["results"].append(info.get("result", "unknown"))
        stats["steps"].append(env.state.steps)
        stats["points"].append(env.state.points)
        stats["rewards"].append(episode_reward)

        if (i + 1) % 10 == 0:
            print(f"進度: {i + 1}/{n_episodes}...", end="\r")

    total_time = time.time() - start_time
    log(f"\n評估完成！耗時: {total_time:.2f} 秒\n")

    # --- 計算統計指標 ---
    results_count = Counter(stats["results"])
    total = len(stats["results"])

    def share(key):
        count = results_count.get(key, 0)
        return count, (count / total) * 100

    # --- 輸出報表 ---
    log("=" * 40)
    log("       PLAYER EVALUATION REPORT       ")
    log(f"       Date: {timestamp}             ")
    log("=" * 40)
    log(f"平均獎勵 (Avg Reward): {np.mean(stats['rewards']):.2f}")
    log(f"平均步數 (Avg Steps) : {np.mean(stats['steps']):.2f} (±{np.std(stats['steps']):.2f})")
    log(f"平均剩餘分數         : {np.mean(stats['points']):.2f} / {config.LEVEL_START_POINTS}")
    log("-" * 40)
    log("結果分佈 (Result Distribution):")
    for label, key in (
        ("[O] 過關 (Won)           ", "won"),
        ("[X] 被怪物抓到 (Caught)  ", "caught"),
        ("[-] 分數耗盡 (Exhausted) ", "exhausted"),
        ("[T] 超時 (Timeout)       ", "timeout"),
    ):
        count, pct = share(key)
        log(f"  {label}: {count} ({pct:.1f}%)")
    log("=" * 40)

    # 寫入檔案
    with open(report_filename, "w", encoding="utf-8") as f:
        f.write("\n".join(output_buffer))

    print(f"\n報告已儲存至: {report_filename}")
    env.close()
    return results_count


if __name__ == "__main__":
    # 先用 BFS 機器人跑基準，再評估訓練好的模型
    evaluate(use_bot=True, n_episodes=200)
    evaluate(model_path="maze_player_ppo", n_episodes=200)

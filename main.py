import logging
import time

import numpy as np
import pygame

import config
from agents.player_bot import PlayerBot
from emoji_maze.game import create_game, move_player, next_level, restart_run, retry_level, status_text
from emoji_maze.state import Direction, GameStatus
from envs.rendering import MazeRenderer

logging.basicConfig(level=logging.INFO)

KEY_DIRECTIONS = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}


if __name__ == "__main__":
    rng = np.random.default_rng()
    renderer = MazeRenderer(config.WINDOW_SIZE, config.FPS)
    bot = PlayerBot()
    state = create_game(1, rng)
    renderer.render(state, status_text(state))  # 先開視窗，事件迴圈才能運作

    print("遊戲開始！")
    print("--- 操作說明 ---")
    print("方向鍵 / WASD: 移動角色 (HUMAN 模式)")
    print("空白鍵 (Space): 暫停 / 繼續 (AI 模式)")
    print("R: 重試本關    N: 從第 1 關重新開始")
    print("走過樹木、推動石頭；怪物看到你就會追過來")
    print(f"每關 {config.LEVEL_START_POINTS} 分，每步 -{config.STEP_COST}，金幣 +{config.COIN_POINTS}")
    print("----------------")

    running = True
    paused = False
    won_at = None  # 過關的時間點 (毫秒)

    while running:
        direction = None

        # 處理 Pygame 關閉視窗事件與按鍵輸入
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_SPACE:
                    paused = not paused
                    print(f"遊戲{'暫停' if paused else '繼續'}")
                elif event.key == pygame.K_r:
                    state = retry_level(state, rng)
                    won_at = None
                    print(f"重試第 {state.level} 關")
                elif event.key == pygame.K_n:
                    state = restart_run(rng)
                    won_at = None
                    print("從第 1 關重新開始")
                elif config.PLAYER_MODE == "HUMAN" and not paused:
                    direction = KEY_DIRECTIONS.get(event.key)

        if config.PLAYER_MODE == "AI" and not paused and state.status == GameStatus.PLAYING:
            direction = bot.choose_direction(state)

        if direction is not None and state.status == GameStatus.PLAYING:
            state = move_player(state, direction, rng)
            if state.status == GameStatus.WON:
                won_at = pygame.time.get_ticks()
                print(status_text(state))
            elif state.status == GameStatus.LOST:
                print(f"{status_text(state)}  (R 重試 / N 重新開始)")

        # 過關後延遲一下再進入下一關
        if won_at is not None and pygame.time.get_ticks() - won_at >= config.LEVEL_ADVANCE_MS:
            state = create_game(next_level(state), rng)
            won_at = None

        renderer.render(state, status_text(state))

        if direction is None:
            # 等待輸入時降低 CPU 使用率
            time.sleep(0.02)

    renderer.close()

import pygame
import config


def viewport(state, view_rows=config.VIEW_ROWS, view_cols=config.VIEW_COLS):
    """以玩家為中心的可視範圍 (start_row, start_col, rows, cols)，不超出迷宮邊界"""
    rows = min(view_rows, state.rows)
    cols = min(view_cols, state.cols)
    start_row = max(0, min(state.player.row - rows // 2, state.rows - rows))
    start_col = max(0, min(state.player.col - cols // 2, state.cols - cols))
    return start_row, start_col, rows, cols


class MazeRenderer:
    def __init__(self, window_size, fps):
        self.window_size = window_size
        self.fps = fps
        self.window = None
        self.clock = None
        self.font = None

    def init_window(self):
        if self.window is None:
            pygame.init()
            pygame.display.init()
            pygame.display.set_caption("Emoji Maze")
            # 增加高度給 UI
            self.window = pygame.display.set_mode(
                (self.window_size, self.window_size + 80)
            )
            self.font = pygame.font.SysFont("Arial", 20)
            self.clock = pygame.time.Clock()

    def render(self, state, message=""):
        self.init_window()

        canvas = pygame.Surface((self.window_size, self.window_size + 80))
        canvas.fill(config.COLOR_WHITE)

        start_row, start_col, view_rows, view_cols = viewport(state)
        pix_square_size = self.window_size / max(view_rows, view_cols)

        # 繪製迷宮 (只畫可視範圍)
        for r in range(start_row, start_row + view_rows):
            for c in range(start_col, start_col + view_cols):
                rect = pygame.Rect(
                    (c - start_col) * pix_square_size,
                    (r - start_row) * pix_square_size,
                    pix_square_size,
                    pix_square_size,
                )
                if state.maze[r, c] == config.ID_WALL:
                    pygame.draw.rect(canvas, config.COLOR_BLACK, rect)
                else:
                    pygame.draw.rect(canvas, config.COLOR_FLOOR, rect)
                self._draw_entity(canvas, state, r, c, rect)

                # 畫淡色網格線
                pygame.draw.rect(canvas, (220, 220, 220), rect, 1)

        # 繪製 UI
        self._draw_ui(canvas, state, message)

        self.window.blit(canvas, canvas.get_rect())
        pygame.event.pump()
        pygame.display.update()
        self.clock.tick(self.fps)

    def _draw_entity(self, canvas, state, r, c, rect):
        # 繪製優先順序與畫面上的疊放一致：玩家 > 鑰匙 > 金幣 > 出口 > 怪物 > 石頭 > 樹
        p = (r, c)
        radius = int(rect.width // 3)
        if p == state.player:
            pygame.draw.circle(canvas, config.COLOR_BLUE, rect.center, radius)
        elif p == state.key and not state.has_key:
            pygame.draw.circle(canvas, config.COLOR_GOLD, rect.center, radius // 2)
            pygame.draw.rect(canvas, config.COLOR_GOLD, rect.inflate(-rect.width // 2, -int(rect.height * 0.8)))
        elif p in state.coins:
            pygame.draw.circle(canvas, config.COLOR_GOLD, rect.center, radius // 2)
        elif p == state.exit:
            color = config.COLOR_GREEN if state.has_key else config.COLOR_LOCKED
            pygame.draw.rect(canvas, color, rect.inflate(-4, -4))
        elif p in state.monsters:
            pygame.draw.circle(canvas, config.COLOR_RED, rect.center, radius)
        elif p in state.rocks:
            pygame.draw.rect(canvas, config.COLOR_GREY, rect.inflate(-rect.width // 3, -rect.height // 3))
        elif p in state.trees:
            pygame.draw.polygon(
                canvas,
                config.COLOR_DARK_GREEN,
                [rect.midtop, rect.bottomleft, rect.bottomright],
            )

    def _draw_ui(self, canvas, state, message):
        top = self.window_size + 10

        # 關卡與迷宮尺寸
        level_text = f"Level {state.level} | Maze {state.rows}x{state.cols}"
        canvas.blit(self.font.render(level_text, True, (0, 0, 0)), (10, top))

        # 分數與剩餘金幣
        points_text = f"Points: {state.points} | Coins left: {len(state.coins)}"
        canvas.blit(self.font.render(points_text, True, (0, 0, 0)), (300, top))

        # 鑰匙狀態與訊息
        key_text = f"Key: {'Collected' if state.has_key else 'Missing'}  {message}"
        canvas.blit(self.font.render(key_text, True, (0, 0, 0)), (10, top + 30))

    def close(self):
        if self.window is not None:
            pygame.display.quit()
            pygame.quit()
            self.window = None

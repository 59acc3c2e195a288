# --- 迷宮尺寸 ---
BASE_SIZE = 13  # 第 1 關的邊長
MAX_SIZE = 41
MIN_SIZE = 9
ROOM_ATTEMPTS = 8
ROOM_MIN_SIZE = 3
ROOM_MAX_SIZE = 7

# --- 視窗 ---
WINDOW_SIZE = 600
FPS = 15
VIEW_ROWS = 13
VIEW_COLS = 13
LEVEL_ADVANCE_MS = 900  # 過關後自動進入下一關的延遲

# --- 遊戲機制 ---
LEVEL_START_POINTS = 100
COIN_POINTS = 5
STEP_COST = 1
KEY_PATH_RATIO = 0.6  # 鑰匙放在安全路徑約 60% 的位置

PLAYER_MODE = "HUMAN"  # 'AI' (BFS 自動) 或 'HUMAN' (手動)

# --- ID 定義 ---
ID_FLOOR = 0
ID_WALL = 1
# 以下只用於觀測值
ID_PLAYER = 2
ID_EXIT = 3
ID_MONSTER = 4
ID_KEY = 5
ID_COIN = 6
ID_TREE = 7
ID_ROCK = 8

# --- 強化學習環境 ---
ENV_LEVEL = 1
MAX_EPISODE_STEPS = 400

# --- 獎勵設定 ---
REWARD_STEP = 0.01  # 乘上分數變化
REWARD_COIN = 0.5
REWARD_KEY = 5.0
REWARD_WIN = 20.0
REWARD_CAUGHT = -10.0
REWARD_EXHAUSTED = -5.0
REWARD_BLOCKED = -0.1  # 撞牆或推不動石頭

# --- 顏色定義 (R, G, B) ---
COLOR_WHITE = (255, 255, 255)
COLOR_BLACK = (0, 0, 0)
COLOR_FLOOR = (247, 246, 239)
COLOR_BLUE = (0, 0, 255)
COLOR_GREEN = (0, 200, 0)
COLOR_DARK_GREEN = (20, 110, 40)
COLOR_RED = (220, 0, 0)
COLOR_GOLD = (240, 190, 20)
COLOR_GREY = (120, 120, 120)
COLOR_LOCKED = (150, 80, 30)

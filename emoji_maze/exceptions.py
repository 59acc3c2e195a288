class MazeError(Exception):
    """迷宮核心拋出的錯誤基底類別"""


class UnreachableExitError(MazeError):
    """生成的迷宮從起點走不到出口"""

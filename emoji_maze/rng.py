import numpy as np


def make_rng(rng=None):
    """接受現成的 Generator、整數種子或 None (不固定種子)。"""
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def shuffled(items, rng):
    # 用 permutation 取索引，避免 numpy 把 tuple 轉成陣列
    return [items[i] for i in rng.permutation(len(items))]

"""
numpy Generator plumbing shared by the randomness sources.

Responsibilities
  - Normalize seeds, SeedSequences and existing generators into a Generator.
  - Reseed a generator in place (the PRR source is reseeded per value).
  - Derive independent child generators for concurrent encoders.
  - Turn arbitrary byte strings into integer seeds.

Usage Context
  - Every randomness source owns its Generator; nothing here touches the
    legacy ``np.random`` global state.

Limitations
  - Reproducibility across numpy releases follows numpy's own guarantees.
"""
# 说明：随机源共用的 numpy Generator 工具函数，替代进程级全局播种。
# 职责：
# - create_rng：将 None / 整数 / SeedSequence / Generator 统一转换为 Generator
# - reseed_rng：原地替换生成器状态，PRR 随机源每次编码前都会调用
# - split_rng：通过 Generator.spawn 派生互相独立的子生成器，供并发编码使用
# - seed_from_bytes / make_seed：字节串到整数种子的映射，以及显式种子与配置种子的取舍

from __future__ import annotations

import hashlib
from typing import List, Optional, Union

import numpy as np

from .config import get_config

SeedLike = Union[None, int, np.random.SeedSequence, np.random.Generator]


def create_rng(seed: SeedLike = None) -> np.random.Generator:
    """Return ``seed`` if it already is a Generator, else a new PCG64 Generator seeded from it."""
    return seed if isinstance(seed, np.random.Generator) else np.random.default_rng(seed)


def reseed_rng(rng: np.random.Generator, seed: SeedLike) -> np.random.Generator:
    """Overwrite the bit generator state of ``rng`` so that it behaves as freshly seeded."""
    # 只替换状态不替换对象，持有该生成器引用的随机源无需更新
    rng.bit_generator.state = create_rng(seed).bit_generator.state
    return rng


def split_rng(rng: np.random.Generator, num: int) -> List[np.random.Generator]:
    """Spawn ``num`` child generators that are independent of each other and of ``rng``."""
    if num <= 0:
        raise ValueError("num must be positive")
    return list(rng.spawn(num))


def seed_from_bytes(*parts: bytes) -> int:
    """SHA-256 of the concatenated parts, read as a 256-bit big-endian integer."""
    return int.from_bytes(hashlib.sha256(b"".join(parts)).digest(), "big")


def make_seed(seed: Optional[int] = None) -> Optional[int]:
    # 显式种子优先；否则取 RuntimeConfig.rng_seed，仍为 None 时由 numpy 使用操作系统熵
    return seed if seed is not None else get_config().rng_seed

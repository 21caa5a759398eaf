"""
Unit tests for random number generation helpers.
"""
# 说明：随机数生成工具的单元测试。
# 覆盖：
# - create_rng / reseed_rng：基于种子的 RNG 创建与重置是否可复现，重置保持对象标识
# - split_rng：从单一 RNG 派生多个子生成器，并验证子生成器样本相互独立
# - seed_from_bytes：字节串到整数种子的稳定映射
# - make_seed：显式种子优先，否则回退到运行时配置

import numpy as np
import pytest

from rapporlib.core.utils import configure, create_rng, make_seed, reseed_rng, seed_from_bytes, split_rng


def test_create_rng_and_reseed() -> None:
    # 验证使用同一 seed 创建并重置 RNG 后，生成的随机数序列具有可复现性
    rng = create_rng(42)
    first = rng.random(8)
    same = reseed_rng(rng, 42)
    assert same is rng
    assert np.array_equal(rng.random(8), first)


def test_create_rng_passes_generator_through() -> None:
    # 验证传入已有 Generator 时直接返回该对象
    rng = np.random.default_rng(1)
    assert create_rng(rng) is rng


def test_split_rng_produces_independent_generators() -> None:
    # 验证 split_rng 产生的多个子生成器数量正确，且各自样本值不同（相互独立）
    rng = create_rng(123)
    children = split_rng(rng, 3)
    assert len(children) == 3
    samples = [child.random() for child in children]
    assert len(set(samples)) == len(samples)
    with pytest.raises(ValueError):
        split_rng(rng, 0)


def test_seed_from_bytes_is_stable() -> None:
    # 验证相同字节输入得到相同种子，不同输入得到不同种子
    assert seed_from_bytes(b"secret", b"value") == seed_from_bytes(b"secretvalue")
    assert seed_from_bytes(b"a") != seed_from_bytes(b"b")
    assert 0 <= seed_from_bytes(b"") < 2**256


def test_make_seed_falls_back_to_config() -> None:
    # 验证显式种子优先，未提供时回退到 RuntimeConfig.rng_seed
    configure(rng_seed=99)
    assert make_seed(5) == 5
    assert make_seed() == 99
    configure(rng_seed=None)
    assert make_seed() is None

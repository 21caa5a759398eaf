"""
Unit tests for the PRR and IRR randomness sources.
"""
# 说明：两阶段随机响应所用随机源的单元测试。
# 覆盖：
# - random_bits：概率取极值时的确定性输出与非法概率报错
# - DeterministicPrrRand：相同 (secret, value) 重新播种后输出一致，clone 保持一致，不同 secret 互不相关
# - NumpyIrrRand：显式种子可复现，spawn 派生的子源互相独立
# - create_irr_rand：未提供种子时回退到运行时配置的 rng_seed

import numpy as np
import pytest

from rapporlib.client.randomness import DeterministicPrrRand, NumpyIrrRand, create_irr_rand, random_bits
from rapporlib.client.types import Params
from rapporlib.core.utils import configure
from rapporlib.core.utils.param_validation import ParamValidationError


def _draws(rand, count=5):
    # 连续抽取若干组 p_bits / q_bits 的整数表示，便于比较两个随机源
    return [(rand.p_bits().to_int(), rand.q_bits().to_int()) for _ in range(count)]


def test_random_bits_extremes() -> None:
    # 验证概率 0 与 1 分别得到全 0 与全 1 位向量
    rng = np.random.default_rng(0)
    assert random_bits(rng, 0.0, 16).to_int() == 0
    assert random_bits(rng, 1.0, 16).to_int() == 0xFFFF
    assert random_bits(rng, 1.0, 128).count() == 128
    with pytest.raises(ParamValidationError):
        random_bits(rng, 1.5, 8)


def test_prr_source_is_deterministic_per_value() -> None:
    # 验证以相同值重新播种后 f_bits 与 uniform 完全一致
    params = Params(num_bits=64)
    rand = DeterministicPrrRand(params, b"secret")
    rand.seed(b"test")
    first = (rand.f_bits(), rand.uniform())
    rand.seed(b"other")
    rand.f_bits()
    rand.seed(b"test")
    assert (rand.f_bits(), rand.uniform()) == first


def test_prr_clone_reproduces_draws() -> None:
    # 验证 clone 得到的随机源对相同值给出相同抽样
    rand = DeterministicPrrRand(Params(num_bits=32), b"k")
    twin = rand.clone()
    rand.seed(b"v")
    twin.seed(b"v")
    assert rand.f_bits() == twin.f_bits()
    assert rand.uniform() == twin.uniform()


def test_prr_secret_changes_draws() -> None:
    # 验证不同 secret 下同一值的抽样不同
    params = Params(num_bits=64)
    a = DeterministicPrrRand(params, b"alice")
    b = DeterministicPrrRand(params, b"bob")
    a.seed(b"value")
    b.seed(b"value")
    assert a.f_bits() != b.f_bits()


def test_prr_uniform_follows_prob_f() -> None:
    # 验证 uniform 选择掩码按 prob_f 置位，f_bits 为公平硬币
    never = DeterministicPrrRand(Params(num_bits=64, prob_f=0.0))
    never.seed(b"v")
    assert never.uniform().to_int() == 0
    always = DeterministicPrrRand(Params(num_bits=64, prob_f=1.0))
    always.seed(b"v")
    assert always.uniform().count() == 64


def test_prr_rejects_non_bytes_secret() -> None:
    # 验证 secret 必须为字节串
    with pytest.raises(ParamValidationError):
        DeterministicPrrRand(Params(), "secret")  # type: ignore[arg-type]


def test_irr_source_is_reproducible_with_seed() -> None:
    # 验证相同种子的两个 IRR 源输出一致
    params = Params(num_bits=64)
    assert _draws(NumpyIrrRand(params, 11)) == _draws(NumpyIrrRand(params, 11))
    assert _draws(NumpyIrrRand(params, 11)) != _draws(NumpyIrrRand(params, 12))


def test_irr_spawn_produces_independent_sources() -> None:
    # 验证 spawn 派生的子源数量正确且输出互不相同
    parent = NumpyIrrRand(Params(num_bits=64), 5)
    children = parent.spawn(3)
    assert len(children) == 3
    assert all(child.num_bits == 64 for child in children)
    streams = [tuple(_draws(child)) for child in children]
    assert len(set(streams)) == 3


def test_create_irr_rand_uses_configured_seed() -> None:
    # 验证未显式给出种子时使用 RuntimeConfig.rng_seed
    configure(rng_seed=2024)
    params = Params(num_bits=32)
    assert _draws(create_irr_rand(params)) == _draws(create_irr_rand(params))
    assert _draws(create_irr_rand(params, seed=1)) == _draws(NumpyIrrRand(params, 1))

"""
Unit tests for the encoder factory and hash strategy registry.
"""
# 说明：哈希策略注册表与编码器工厂函数的单元测试。
# 覆盖：
# - 内置 rolling / digest / cohort 策略的注册与按名查找
# - 注册非法名称或非 HashStrategy 子类时报错
# - 自定义策略注册后可通过 create_encoder / EncoderFactory 使用
# - 便捷构造函数将 salt_rounds / digest_func / seed 等参数透传给策略

import pytest

from rapporlib.client import encoder_factory
from rapporlib.client.encoder_factory import (
    EncoderFactory,
    create_digest_encoder,
    create_encoder,
    create_rolling_hash_encoder,
    get_hash_strategy_class,
    register_hash_strategy,
)
from rapporlib.client.hashing import CohortHashStrategy, DigestHashStrategy, HashStrategy, RollingHashStrategy
from rapporlib.client.types import Params
from rapporlib.core.utils.param_validation import ParamValidationError


class FirstBitStrategy(HashStrategy):
    """Test strategy that always selects bit 0."""

    name = "first-bit"

    def bit_indices(self, value, num_bits, num_hashes, *, hash_part_width=None, cohort=0):
        return [0] * num_hashes


@pytest.fixture
def isolated_registry(monkeypatch):
    # 使用注册表副本，避免自定义策略泄漏到其他测试
    monkeypatch.setattr(encoder_factory, "_HASH_STRATEGY_REGISTRY", dict(encoder_factory._HASH_STRATEGY_REGISTRY))


def test_builtin_strategies_registered() -> None:
    # 验证内置策略按名称可查找
    assert get_hash_strategy_class("rolling") is RollingHashStrategy
    assert get_hash_strategy_class("digest") is DigestHashStrategy
    assert EncoderFactory.get_class("cohort") is CohortHashStrategy


def test_unknown_strategy_raises() -> None:
    # 验证查找未注册名称时抛出 ParamValidationError
    with pytest.raises(ParamValidationError):
        get_hash_strategy_class("missing")
    with pytest.raises(ParamValidationError):
        create_encoder("missing", "metric", 0, Params())


def test_register_rejects_invalid_entries() -> None:
    # 验证空名称与非 HashStrategy 子类均被拒绝
    with pytest.raises(ParamValidationError):
        register_hash_strategy("", RollingHashStrategy)
    with pytest.raises(ParamValidationError):
        register_hash_strategy("bogus", dict)  # type: ignore[arg-type]


def test_custom_strategy_roundtrip(isolated_registry) -> None:
    # 验证自定义策略注册后可用于构造编码器
    EncoderFactory.register("first-bit", FirstBitStrategy)
    params = Params(num_bits=8, prob_f=0.0, prob_p=0.0, prob_q=1.0)
    encoder = EncoderFactory.create("first-bit", "metric", 0, params, irr_seed=0)
    assert isinstance(encoder.hash_strategy, FirstBitStrategy)
    assert encoder.encode("anything") == b"\x01"


def test_rolling_factory_passes_salt_rounds() -> None:
    # 验证 salt_rounds 透传给滚动哈希策略
    encoder = create_rolling_hash_encoder("metric", 0, Params(), salt_rounds=True)
    assert isinstance(encoder.hash_strategy, RollingHashStrategy)
    assert encoder.hash_strategy.salt_rounds is True


def test_digest_factory_passes_functions() -> None:
    # 验证 digest_func / hmac_func 透传给摘要策略
    def digest(data):
        return b"\x00\x00"

    def hmac(key, data):
        return b""

    encoder = create_digest_encoder("metric", 0, Params(), digest_func=digest, hmac_func=hmac)
    assert encoder.hash_strategy.digest_func is digest
    assert encoder.hash_strategy.hmac_func is hmac


def test_cohort_encoder_via_name() -> None:
    # 验证按名称创建 cohort 策略编码器并透传种子
    encoder = create_encoder("cohort", "metric", 7, Params(num_bits=32), seed=5)
    assert encoder.hash_strategy.seed == 5
    assert encoder.cohort == 7
    assert encoder.is_valid

"""Factory and registry helpers for RAPPOR encoders."""
# 说明：提供哈希策略的注册与按名称实例化能力，并为滚动哈希与摘要两种变体提供便捷构造函数。
# 职责：
# - 维护从字符串名称到 HashStrategy 类的注册表用于集中管理
# - create_encoder：按策略名称组装哈希策略、确定性 PRR 源与 IRR 源，得到通用 Encoder
# - create_rolling_hash_encoder / create_digest_encoder：两种编码器变体的快捷入口
# - EncoderFactory：以静态方法形式镜像上述函数式接口

from __future__ import annotations

from typing import Any, Dict, Optional, Type

from rapporlib.core.utils.param_validation import ParamValidationError

from .encoder import Encoder
from .hashing import CohortHashStrategy, DigestFunc, DigestHashStrategy, HashStrategy, HmacFunc, RollingHashStrategy
from .randomness import DeterministicPrrRand, create_irr_rand
from .types import Params

_HASH_STRATEGY_REGISTRY: Dict[str, Type[HashStrategy]] = {}


def register_hash_strategy(name: str, cls: Type[HashStrategy]) -> None:
    """Register a hash strategy class under the given name."""
    # 将哈希策略类以给定名称注册到全局字典中用于后续按名查找
    if not name:
        raise ParamValidationError("hash strategy name must be non-empty")
    if not (isinstance(cls, type) and issubclass(cls, HashStrategy)):
        raise ParamValidationError("hash strategy must subclass HashStrategy")
    _HASH_STRATEGY_REGISTRY[str(name)] = cls


def get_hash_strategy_class(name: str) -> Type[HashStrategy]:
    """Retrieve a hash strategy class by name."""
    # 根据名称从注册表中获取策略类，不存在时抛出 ParamValidationError
    key = str(name)
    if key not in _HASH_STRATEGY_REGISTRY:
        raise ParamValidationError(f"hash strategy '{name}' not registered")
    return _HASH_STRATEGY_REGISTRY[key]


def create_encoder(
    name: str,
    metric_name: str,
    cohort: int,
    params: Params,
    *,
    secret: bytes = b"",
    irr_seed: Optional[int] = None,
    **strategy_kwargs: Any,
) -> Encoder:
    """
    Build an Encoder whose Bloom filter uses the hash strategy registered as ``name``.

    ``secret`` keys the deterministic PRR source; ``irr_seed`` (or the
    configured ``rng_seed``) makes the IRR source reproducible.
    """
    # 按名称实例化哈希策略，剩余关键字参数透传给策略构造函数
    strategy = get_hash_strategy_class(name)(**strategy_kwargs)
    return Encoder(
        metric_name,
        cohort,
        params,
        hash_strategy=strategy,
        prr_rand=DeterministicPrrRand(params, secret),
        irr_rand=create_irr_rand(params, irr_seed),
    )


def create_rolling_hash_encoder(
    metric_name: str,
    cohort: int,
    params: Params,
    *,
    secret: bytes = b"",
    irr_seed: Optional[int] = None,
    salt_rounds: bool = False,
) -> Encoder:
    """Encoder hashing values with the rolling string hash."""
    return create_encoder(
        "rolling", metric_name, cohort, params, secret=secret, irr_seed=irr_seed, salt_rounds=salt_rounds
    )


def create_digest_encoder(
    metric_name: str,
    cohort: int,
    params: Params,
    *,
    digest_func: Optional[DigestFunc] = None,
    hmac_func: Optional[HmacFunc] = None,
    secret: bytes = b"",
    irr_seed: Optional[int] = None,
) -> Encoder:
    """Encoder hashing values with a message digest; width must be 8, 16, 32, 64 or 128."""
    return create_encoder(
        "digest",
        metric_name,
        cohort,
        params,
        secret=secret,
        irr_seed=irr_seed,
        digest_func=digest_func,
        hmac_func=hmac_func,
    )


class EncoderFactory:
    """Convenience wrapper mirroring the function-based factory helpers."""
    # 提供面向对象封装的编码器工厂接口，便于在应用层以类方法形式调用

    @staticmethod
    def register(name: str, cls: Type[HashStrategy]) -> None:
        register_hash_strategy(name, cls)

    @staticmethod
    def get_class(name: str) -> Type[HashStrategy]:
        return get_hash_strategy_class(name)

    @staticmethod
    def create(name: str, metric_name: str, cohort: int, params: Params, **kwargs: Any) -> Encoder:
        return create_encoder(name, metric_name, cohort, params, **kwargs)


# Pre-register built-in strategies
register_hash_strategy(RollingHashStrategy.name, RollingHashStrategy)
register_hash_strategy(DigestHashStrategy.name, DigestHashStrategy)
register_hash_strategy(CohortHashStrategy.name, CohortHashStrategy)

"""
Process-wide settings for the RAPPOR client.

A single mutable RuntimeConfig instance holds the knobs shared by logging,
randomness and hashing; values can be overridden programmatically or read
from ``RAPPOR_*`` environment variables.
"""
# 说明：RAPPOR 客户端的进程级运行时配置，日志、随机源与哈希策略共用同一份可调选项。
# 职责：
# - RuntimeConfig：日志等级、日志脱敏开关、IRR 默认种子、默认摘要算法以及扩展字段
# - load_from_env(...)：按 _ENV_PARSERS 表解析 RAPPOR_ 前缀环境变量并写回字段
# - get_config() / configure(...)：读取与批量更新全局单例
# - reset_config()：恢复默认值（保持单例对象不变），供测试隔离使用
# 约定：
# - 开关类变量取值 1/true/yes/on（不区分大小写）为真，其余为假
# - 未知配置键在 update(...) 中抛出 AttributeError

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, Optional

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _parse_flag(raw: str) -> bool:
    return raw.strip().lower() in _TRUTHY


# 环境变量后缀 -> 解析函数；字段名为后缀的小写形式
_ENV_PARSERS: Dict[str, Callable[[str], Any]] = {
    "LOG_LEVEL": lambda raw: raw.strip().upper(),
    "MASK_SENSITIVE_FIELDS": _parse_flag,
    "RNG_SEED": lambda raw: int(raw.strip()),
    "DEFAULT_DIGEST": lambda raw: raw.strip().lower(),
}


@dataclass
class RuntimeConfig:
    log_level: str = field(default_factory=lambda: os.environ.get("RAPPOR_LOG_LEVEL", "INFO"))
    mask_sensitive_fields: bool = True
    rng_seed: Optional[int] = None
    default_digest: str = "md5"
    extra: Dict[str, Any] = field(default_factory=dict)

    def update(self, **kwargs: Any) -> None:
        # 先整体校验键名再写入，任一未知键都不会留下部分更新
        unknown = [key for key in kwargs if not hasattr(self, key)]
        if unknown:
            raise AttributeError(f"unknown config option '{unknown[0]}'")
        for key, value in kwargs.items():
            setattr(self, key, value)

    def load_from_env(self, prefix: str = "RAPPOR_") -> None:
        # 只覆盖已设置的变量，缺失的变量保留当前值
        for suffix, parse in _ENV_PARSERS.items():
            raw = os.environ.get(prefix + suffix)
            if raw is not None:
                setattr(self, suffix.lower(), parse(raw))


_GLOBAL_CONFIG = RuntimeConfig()


def get_config() -> RuntimeConfig:
    return _GLOBAL_CONFIG


def configure(**kwargs: Any) -> RuntimeConfig:
    """Update the global configuration in place and return it."""
    _GLOBAL_CONFIG.update(**kwargs)
    return _GLOBAL_CONFIG


def reset_config() -> RuntimeConfig:
    """Restore every field of the global configuration to its default."""
    # 用一份新实例的字段值覆盖单例，已持有 get_config() 引用的调用方仍看到同一对象
    defaults = RuntimeConfig()
    for f in fields(RuntimeConfig):
        setattr(_GLOBAL_CONFIG, f.name, getattr(defaults, f.name))
    return _GLOBAL_CONFIG

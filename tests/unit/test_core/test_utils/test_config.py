"""
Unit tests for runtime configuration utilities.
"""
# 说明：RuntimeConfig（运行时配置）及全局配置访问辅助函数的单元测试。
# 覆盖：
# - configure(...)：通过关键字参数更新全局配置实例字段，未知字段报错
# - RuntimeConfig.load_from_env(...)：从 RAPPOR_ 前缀环境变量加载并转换配置选项
# - get_config()：返回全局 RuntimeConfig 单例并保持状态一致性
# - reset_config()：原地恢复默认配置

import pytest

from rapporlib.core.utils import RuntimeConfig, configure, get_config, reset_config


def test_configure_updates_values() -> None:
    # 验证 configure(...) 能正确更新全局配置的字段值
    cfg = configure(rng_seed=7, default_digest="sha256")
    assert cfg.rng_seed == 7
    assert cfg.default_digest == "sha256"


def test_configure_rejects_unknown_option() -> None:
    # 验证未知配置键会显式报错而不是被静默忽略
    with pytest.raises(AttributeError):
        configure(no_such_option=True)


def test_runtime_config_env_override(monkeypatch) -> None:
    # 验证 RuntimeConfig.load_from_env(...) 按环境变量覆写默认配置并完成类型转换
    cfg = RuntimeConfig()
    monkeypatch.setenv("RAPPOR_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("RAPPOR_MASK_SENSITIVE_FIELDS", "false")
    monkeypatch.setenv("RAPPOR_RNG_SEED", "1234")
    monkeypatch.setenv("RAPPOR_DEFAULT_DIGEST", "sha1")
    cfg.load_from_env()
    assert cfg.log_level == "DEBUG"
    assert cfg.mask_sensitive_fields is False
    assert cfg.rng_seed == 1234
    assert cfg.default_digest == "sha1"


def test_runtime_config_env_keeps_unset_values(monkeypatch) -> None:
    # 验证未设置的环境变量不会改变现有配置值
    monkeypatch.delenv("RAPPOR_RNG_SEED", raising=False)
    cfg = RuntimeConfig(rng_seed=5)
    cfg.load_from_env()
    assert cfg.rng_seed == 5


def test_get_config_returns_singleton() -> None:
    # 验证 get_config() 每次返回的是同一全局实例（单例行为）
    cfg = get_config()
    cfg.mask_sensitive_fields = False
    assert get_config().mask_sensitive_fields is False


def test_reset_config_restores_defaults_in_place() -> None:
    # 验证 reset_config() 恢复默认值且不替换单例对象
    cfg = configure(rng_seed=3, default_digest="sha1", extra={"k": 1})
    restored = reset_config()
    assert restored is cfg is get_config()
    assert cfg.rng_seed is None
    assert cfg.default_digest == "md5"
    assert cfg.extra == {}

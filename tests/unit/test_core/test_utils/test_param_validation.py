"""
Unit tests for validation helpers.
"""
# 说明：参数验证工具（ensure / ensure_type / ensure_probability）的单元测试。
# 覆盖：
# - ensure：在条件为真时静默通过，条件为假时抛出 ParamValidationError 或指定异常
# - ensure_type：检查值是否属于给定类型集合，bool 不被当作 int 接受
# - ensure_probability：概率参数必须位于 [0, 1] 闭区间

import pytest

from rapporlib.core.utils import ParamValidationError, ensure, ensure_probability, ensure_type


def test_ensure_passes_and_fails() -> None:
    # 验证 ensure 在条件为 True 时不抛错，条件为 False 时抛 ParamValidationError
    ensure(True, "should not raise")
    with pytest.raises(ParamValidationError):
        ensure(False, "error")
    with pytest.raises(KeyError):
        ensure(False, "error", error=KeyError)


def test_param_validation_error_is_value_error() -> None:
    # 验证 ParamValidationError 可被调用方按 ValueError 捕获
    assert issubclass(ParamValidationError, ValueError)


def test_ensure_type_checks() -> None:
    # 验证 ensure_type 对正确类型通过，对错误类型抛 ParamValidationError
    ensure_type(5, (int,), label="value")
    with pytest.raises(ParamValidationError, match="value"):
        ensure_type("text", (int,), label="value")


def test_ensure_type_rejects_bool_for_int() -> None:
    # 验证 True/False 不会被当作整数参数接受，除非显式允许 bool
    with pytest.raises(ParamValidationError):
        ensure_type(True, (int,), label="num_bits")
    ensure_type(True, (bool,), label="flag")


@pytest.mark.parametrize("p", [0.0, 0.25, 1.0])
def test_ensure_probability_accepts_closed_interval(p) -> None:
    # 验证区间端点与内部值均合法
    ensure_probability(p, name="p")


@pytest.mark.parametrize("p", [-0.01, 1.01])
def test_ensure_probability_rejects_out_of_range(p) -> None:
    # 验证越界概率抛出 ParamValidationError
    with pytest.raises(ParamValidationError, match="prob_f"):
        ensure_probability(p, name="prob_f")

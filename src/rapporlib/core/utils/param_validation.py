"""
Argument checks shared by the client modules.
"""
# 说明：库内统一使用的轻量参数检查函数。
# 职责：
# - ParamValidationError：参数不合法时抛出的异常，继承 ValueError 便于调用方统一捕获
# - ensure：条件为假时抛出异常（默认 ParamValidationError，可指定其他类型）
# - ensure_type：类型检查，错误信息带参数名；int 参数拒绝 bool
# - ensure_probability：p/q/f 等概率必须落在 [0, 1]

from __future__ import annotations

from typing import Any, Tuple, Type


class ParamValidationError(ValueError):
    """An argument or parameter value is outside its allowed domain."""


def ensure(condition: bool, message: str, *, error: Type[Exception] = ParamValidationError) -> None:
    if not condition:
        raise error(message)


def ensure_type(value: Any, expected: Tuple[type, ...], *, label: str = "value") -> None:
    # bool 是 int 的子类，未显式列出 bool 时 True/False 不能充当位宽或计数
    if isinstance(value, bool) and bool not in expected:
        raise ParamValidationError(f"{label} must not be a bool")
    if not isinstance(value, expected):
        expected_names = " or ".join(t.__name__ for t in expected)
        raise ParamValidationError(f"{label} must be {expected_names}, got {type(value).__name__}")


def ensure_probability(p: float, name: str = "p") -> None:
    """Raise ParamValidationError unless ``0 <= p <= 1``."""
    ensure(0.0 <= p <= 1.0, f"{name} must be within [0, 1], got {p}")

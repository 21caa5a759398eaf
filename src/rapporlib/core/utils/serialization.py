"""
JSON helpers for parameters and reports.

Objects are flattened through ``to_dict`` or ``dataclasses.asdict``, byte
strings become lowercase hex, and an optional ``{"version", "payload"}``
envelope lets collectors evolve the report format.
"""
# 说明：参数与上报载体的 JSON 编解码工具。
# 职责：
# - mask_sensitive_data：返回指定键被替换为掩码的新字典
# - serialize_to_json：对象扁平化、可选字段掩码、可选版本封装，输出键有序的 JSON
# - deserialize_from_json：解析 JSON，遇到版本封装时只返回 payload

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from typing import Any, Dict, Optional, Sequence

SensitiveFields = Sequence[str]

_ENVELOPE_KEYS = frozenset({"version", "payload"})


def mask_sensitive_data(payload: Dict[str, Any], sensitive_fields: SensitiveFields, mask: str = "***") -> Dict[str, Any]:
    hidden = set(sensitive_fields)
    return {key: (mask if key in hidden else value) for key, value in payload.items()}


def _to_jsonable(obj: Any) -> Any:
    # 同时作为 json.dumps 的 default 回调处理嵌套对象
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if isinstance(obj, (bytes, bytearray)):
        return bytes(obj).hex()
    return obj


def serialize_to_json(
    obj: Any,
    *,
    sensitive_fields: Optional[SensitiveFields] = None,
    version: Optional[str] = None,
) -> str:
    """Serialize ``obj`` to JSON, masking top-level ``sensitive_fields`` and wrapping it when ``version`` is set."""
    body = _to_jsonable(obj)
    if sensitive_fields and isinstance(body, dict):
        body = mask_sensitive_data(body, sensitive_fields)
    document = body if version is None else {"version": version, "payload": body}
    return json.dumps(document, default=_to_jsonable, ensure_ascii=False, sort_keys=True)


def deserialize_from_json(text: str) -> Any:
    data = json.loads(text)
    if isinstance(data, dict) and set(data) == _ENVELOPE_KEYS:
        return data["payload"]
    return data

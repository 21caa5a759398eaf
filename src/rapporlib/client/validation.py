"""Bloom filter width validation performed once at encoder construction."""
# 说明：编码器构造阶段对 Bloom Filter 位宽的一次性校验，只产出有效性结果而从不抛出异常。
# 职责：
# - 维护位宽到单个哈希分量宽度（log2(num_bits)）的固定查找表
# - 校验位宽是否为整字节数，并在摘要变体下校验其是否属于受支持的 2 的幂宽度
# - 将查表失败统一转换为配置错误，避免将其当作移位量使用

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

HASH_PART_WIDTHS: Dict[int, int] = {8: 3, 16: 4, 32: 5, 64: 6, 128: 7}


def hash_part_width(bloom_width: int) -> Optional[int]:
    """Return log2(bloom_width) for supported widths, or None."""
    # 单个哈希函数消耗的比特数为 log2(位宽)，不在查找表中的位宽视为不受支持
    return HASH_PART_WIDTHS.get(bloom_width)


@dataclass(frozen=True)
class WidthValidation:
    """Outcome of validating a Bloom filter width."""

    is_valid: bool
    num_bytes: int
    hash_part_width: Optional[int] = None
    reason: Optional[str] = None


def validate_bloom_width(num_bits: int, *, require_supported_width: bool = False) -> WidthValidation:
    """
    Check that ``num_bits`` is a whole number of bytes.

    With ``require_supported_width`` the width must also be one of
    ``HASH_PART_WIDTHS``. Never raises; the caller stores the result.
    """
    # 先做整字节校验，再按需校验受支持宽度；任何一项失败都返回 num_bytes=0 的无效结果
    if num_bits <= 0 or num_bits % 8 != 0:
        return WidthValidation(False, 0, None, f"num_bits={num_bits} is not a positive multiple of 8")

    part_width = hash_part_width(num_bits)
    if require_supported_width and part_width is None:
        supported = ", ".join(str(w) for w in sorted(HASH_PART_WIDTHS))
        return WidthValidation(False, 0, None, f"num_bits={num_bits} is not one of the supported widths ({supported})")

    return WidthValidation(True, num_bits // 8, part_width, None)

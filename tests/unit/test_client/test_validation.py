"""
Unit tests for Bloom filter width validation.
"""
# 说明：编码器构造阶段位宽校验逻辑的单元测试。
# 覆盖：
# - hash_part_width：受支持位宽的 log2 查表与不支持位宽返回 None
# - validate_bloom_width：整字节校验、受支持宽度校验及 num_bytes 计算
# - 校验函数从不抛出异常，只返回带原因的结果对象

import dataclasses

import pytest

from rapporlib.client.validation import HASH_PART_WIDTHS, WidthValidation, hash_part_width, validate_bloom_width


@pytest.mark.parametrize("width, expected", [(8, 3), (16, 4), (32, 5), (64, 6), (128, 7)])
def test_hash_part_width_table(width, expected) -> None:
    # 验证受支持位宽的分量宽度为 log2(位宽)
    assert hash_part_width(width) == expected
    assert 2 ** HASH_PART_WIDTHS[width] == width


@pytest.mark.parametrize("width", [0, 10, 24, 256])
def test_hash_part_width_unsupported(width) -> None:
    # 验证不在查找表中的位宽返回 None
    assert hash_part_width(width) is None


def test_non_byte_aligned_width_is_invalid() -> None:
    # 验证非 8 倍数的位宽不合法且 num_bytes 为 0
    result = validate_bloom_width(10)
    assert result.is_valid is False
    assert result.num_bytes == 0
    assert "10" in result.reason


def test_supported_width_is_valid() -> None:
    # 验证 64 位有效，num_bytes=8，分量宽度为 6
    result = validate_bloom_width(64, require_supported_width=True)
    assert result == WidthValidation(True, 8, 6, None)


def test_byte_aligned_width_without_table_entry() -> None:
    # 验证 24 位在不要求受支持宽度时有效，要求时无效
    assert validate_bloom_width(24) == WidthValidation(True, 3, None, None)
    strict = validate_bloom_width(24, require_supported_width=True)
    assert strict.is_valid is False
    assert strict.num_bytes == 0


def test_wide_width_requires_table_entry_only_when_asked() -> None:
    # 验证 256 位对滚动哈希有效，对摘要变体无效
    assert validate_bloom_width(256).num_bytes == 32
    assert validate_bloom_width(256, require_supported_width=True).is_valid is False


@pytest.mark.parametrize("width", [0, -8])
def test_non_positive_width_is_invalid(width) -> None:
    # 验证非正位宽返回无效结果而非抛出异常
    assert validate_bloom_width(width).is_valid is False


def test_width_validation_is_frozen() -> None:
    # 验证校验结果对象不可变
    result = validate_bloom_width(8)
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.is_valid = False  # type: ignore[misc]

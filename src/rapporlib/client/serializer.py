"""Little-endian byte serialization of encoded bit vectors."""
# 说明：将最终 IRR 位向量按小端序打包为定长字节串，仅承担表示转换职责，不参与隐私保护。
# 职责：
# - to_le_bytes / write_le_bytes：第 i 个字节为 (v >> 8i) & 0xFF，写入新字节串或调用方提供的缓冲区
# - from_le_bytes：逆变换，将小端字节串还原为位向量，供测试与收集端使用
# - bit_string：按最高位在前输出 '0'/'1' 字符串，便于调试与模拟器输出

from __future__ import annotations

from typing import Optional, Union

from .bitvector import BitVector, bit_vector_from_int
from .exceptions import SerializationError


def _check_num_bytes(vector: BitVector, num_bytes: int) -> None:
    # 写出的字节数不得超过位向量本身覆盖的字节范围
    if num_bytes < 0:
        raise SerializationError("num_bytes must be non-negative")
    if num_bytes * 8 > vector.width:
        raise SerializationError(
            f"cannot write {num_bytes} bytes from a {vector.width}-bit vector"
        )


def to_le_bytes(vector: BitVector, num_bytes: Optional[int] = None) -> bytes:
    """Pack ``vector`` into ``num_bytes`` bytes, least-significant byte first."""
    if num_bytes is None:
        num_bytes = vector.width // 8
    _check_num_bytes(vector, num_bytes)
    return bytes(vector.byte_at(i) for i in range(num_bytes))


def write_le_bytes(vector: BitVector, output: bytearray, num_bytes: int) -> None:
    """Replace the content of ``output`` with the little-endian bytes of ``vector``."""
    # 先完成校验再改写缓冲区，校验失败时调用方的缓冲区保持原样
    if not isinstance(output, bytearray):
        raise SerializationError("output must be a bytearray")
    _check_num_bytes(vector, num_bytes)
    output[:] = to_le_bytes(vector, num_bytes)


def from_le_bytes(data: Union[bytes, bytearray], width: Optional[int] = None) -> BitVector:
    """Rebuild a bit vector from little-endian bytes (default width ``8 * len(data)``)."""
    if width is None:
        width = 8 * len(data)
    if width <= 0 or width > 8 * len(data):
        raise SerializationError(f"width {width} does not fit in {len(data)} bytes")
    return bit_vector_from_int(int.from_bytes(bytes(data), "little"), width)


def bit_string(vector: BitVector) -> str:
    """Return the bits as a string, most-significant bit first."""
    return format(vector.to_int(), f"0{vector.width}b")

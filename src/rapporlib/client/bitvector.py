"""
Fixed-width bit vectors used by every stage of the encoding pipeline.

Responsibilities
  - Define the capability set the stages rely on (set, AND, OR, NOT, shift, byte extract).
  - Provide a packed-integer implementation for filters up to 64 bits.
  - Provide a bitarray-backed implementation for wider filters.

Usage Context
  - Bloom builder, PRR, IRR and serializer only talk to BitVector, never to
    the concrete representation.

Limitations
  - Operands of binary operations must have the same width.
  - Vectors are immutable; every operation returns a new vector.
"""
# 说明：编码流水线各阶段共享的定宽位向量抽象，统一 Bloom/PRR/IRR 的按位运算接口。
# 职责：
# - BitVector：约定 with_bit/test_bit/&/|/~/>>/byte_at/count/to_int 等最小能力集合
# - IntBitVector：以单个 Python int 打包存储，适用于 <= 64 位的过滤器
# - BitArrayVector：以 little-endian bitarray 存储，适用于更宽的过滤器（如 128 位）
# - make_bit_vector / bit_vector_from_int / bit_vector_from_bools：按位宽自动选择具体实现

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence, Union

import numpy as np
from bitarray import bitarray
from bitarray.util import ba2int, int2ba, zeros

from rapporlib.core.utils.param_validation import ParamValidationError

# 单个机器整数可容纳的最大位宽，超过该宽度时改用 bitarray 表示
MAX_INT_WIDTH = 64


class BitVector(ABC):
    """
    Immutable fixed-width bit set.

    Bit ``i`` carries weight ``2**i``: ``to_int()`` and ``byte_at`` follow
    the little-endian convention used by the serializer.
    """

    def __init__(self, width: int):
        if width <= 0:
            raise ParamValidationError("bit vector width must be positive")
        self._width = int(width)

    @property
    def width(self) -> int:
        return self._width

    def __len__(self) -> int:
        return self._width

    def _check_index(self, index: int) -> None:
        # 位索引必须落在 [0, width) 区间内
        if not 0 <= index < self._width:
            raise ParamValidationError(f"bit index {index} out of range for width {self._width}")

    def _check_width(self, other: "BitVector") -> None:
        # 二元按位运算要求两侧位宽一致
        if not isinstance(other, BitVector):
            raise TypeError(f"unsupported operand type: {type(other).__name__}")
        if other.width != self._width:
            raise ParamValidationError(f"bit width mismatch: {self._width} != {other.width}")

    @abstractmethod
    def with_bit(self, index: int) -> "BitVector":
        """Return a copy with bit ``index`` set."""
        raise NotImplementedError

    @abstractmethod
    def test_bit(self, index: int) -> bool:
        raise NotImplementedError

    @abstractmethod
    def __and__(self, other: "BitVector") -> "BitVector":
        raise NotImplementedError

    @abstractmethod
    def __or__(self, other: "BitVector") -> "BitVector":
        raise NotImplementedError

    @abstractmethod
    def __invert__(self) -> "BitVector":
        raise NotImplementedError

    @abstractmethod
    def __rshift__(self, amount: int) -> "BitVector":
        raise NotImplementedError

    @abstractmethod
    def to_int(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def count(self) -> int:
        """Number of set bits."""
        raise NotImplementedError

    def byte_at(self, index: int) -> int:
        """Return byte ``index`` counted from the least-significant end."""
        # 第 i 个字节等价于 (v >> 8i) & 0xFF
        if not 0 <= index < (self._width + 7) // 8:
            raise ParamValidationError(f"byte index {index} out of range for width {self._width}")
        return (self.to_int() >> (8 * index)) & 0xFF

    def indices(self) -> List[int]:
        """Positions of set bits in ascending order."""
        return [i for i in range(self._width) if self.test_bit(i)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitVector):
            return NotImplemented
        return self._width == other.width and self.to_int() == other.to_int()

    def __hash__(self) -> int:
        return hash((self._width, self.to_int()))

    def __repr__(self) -> str:
        digits = (self._width + 3) // 4
        return f"{self.__class__.__name__}(0x{self.to_int():0{digits}x}, width={self._width})"


class IntBitVector(BitVector):
    """Bit vector packed into a single Python int (width <= 64)."""

    def __init__(self, value: int = 0, width: int = MAX_INT_WIDTH):
        super().__init__(width)
        if self._width > MAX_INT_WIDTH:
            raise ParamValidationError(f"IntBitVector supports at most {MAX_INT_WIDTH} bits")
        if value < 0:
            raise ParamValidationError("bit vector value must be non-negative")
        self._mask = (1 << self._width) - 1
        self._value = int(value) & self._mask

    def _wrap(self, value: int) -> "IntBitVector":
        return IntBitVector(value & self._mask, self._width)

    def with_bit(self, index: int) -> "IntBitVector":
        self._check_index(index)
        return self._wrap(self._value | (1 << index))

    def test_bit(self, index: int) -> bool:
        self._check_index(index)
        return bool((self._value >> index) & 1)

    def __and__(self, other: BitVector) -> "IntBitVector":
        self._check_width(other)
        return self._wrap(self._value & other.to_int())

    def __or__(self, other: BitVector) -> "IntBitVector":
        self._check_width(other)
        return self._wrap(self._value | other.to_int())

    def __invert__(self) -> "IntBitVector":
        # 取反必须按位宽截断，否则 Python 的 ~ 会得到负数
        return self._wrap(~self._value)

    def __rshift__(self, amount: int) -> "IntBitVector":
        if amount < 0:
            raise ParamValidationError("shift amount must be non-negative")
        return self._wrap(self._value >> amount)

    def to_int(self) -> int:
        return self._value

    def count(self) -> int:
        return bin(self._value).count("1")


class BitArrayVector(BitVector):
    """Bit vector backed by a little-endian ``bitarray`` for arbitrary widths."""

    def __init__(self, bits: Optional[Sequence[int]] = None, width: int = 0):
        # bits 按序列顺序解释：bits[i] 即第 i 位（权重 2**i），与输入 bitarray 的字节序无关
        if bits is None:
            super().__init__(width)
            self._bits = zeros(self._width, endian="little")
        else:
            super().__init__(len(bits))
            self._bits = bitarray([bool(b) for b in bits], endian="little")

    @classmethod
    def _adopt(cls, bits: bitarray) -> "BitArrayVector":
        # 内部运算产生的 little-endian bitarray 直接接管，避免逐位复制
        inst = cls.__new__(cls)
        BitVector.__init__(inst, len(bits))
        inst._bits = bits
        return inst

    @classmethod
    def from_int(cls, value: int, width: int) -> "BitArrayVector":
        if value < 0:
            raise ParamValidationError("bit vector value must be non-negative")
        value &= (1 << width) - 1
        return cls._adopt(int2ba(value, length=width, endian="little"))

    def _other_bits(self, other: BitVector) -> bitarray:
        self._check_width(other)
        if isinstance(other, BitArrayVector):
            return other._bits
        return int2ba(other.to_int(), length=self._width, endian="little")

    def with_bit(self, index: int) -> "BitArrayVector":
        self._check_index(index)
        bits = self._bits.copy()
        bits[index] = 1
        return self._adopt(bits)

    def test_bit(self, index: int) -> bool:
        self._check_index(index)
        return bool(self._bits[index])

    def __and__(self, other: BitVector) -> "BitArrayVector":
        return self._adopt(self._bits & self._other_bits(other))

    def __or__(self, other: BitVector) -> "BitArrayVector":
        return self._adopt(self._bits | self._other_bits(other))

    def __invert__(self) -> "BitArrayVector":
        return self._adopt(~self._bits)

    def __rshift__(self, amount: int) -> "BitArrayVector":
        if amount < 0:
            raise ParamValidationError("shift amount must be non-negative")
        # little-endian 下索引 0 为最低位，数值右移对应序列向低索引方向移动
        return self._adopt(self._bits << amount)

    def to_int(self) -> int:
        return ba2int(self._bits, signed=False)

    def count(self) -> int:
        return self._bits.count(1)

    def byte_at(self, index: int) -> int:
        if not 0 <= index < (self._width + 7) // 8:
            raise ParamValidationError(f"byte index {index} out of range for width {self._width}")
        chunk = self._bits[8 * index : 8 * index + 8]
        return ba2int(chunk, signed=False)

    def indices(self) -> List[int]:
        return [i for i, bit in enumerate(self._bits) if bit]


def make_bit_vector(width: int, indices: Iterable[int] = ()) -> BitVector:
    """Create a zeroed vector of ``width`` bits with ``indices`` set."""
    # 按位宽选择整数或 bitarray 表示，并依次置位给定索引
    vector: BitVector
    if width <= MAX_INT_WIDTH:
        vector = IntBitVector(0, width)
    else:
        vector = BitArrayVector(width=width)
    for idx in indices:
        vector = vector.with_bit(int(idx))
    return vector


def bit_vector_from_int(value: int, width: int) -> BitVector:
    """Wrap the low ``width`` bits of ``value``."""
    if width <= MAX_INT_WIDTH:
        return IntBitVector(value, width)
    return BitArrayVector.from_int(value, width)


def bit_vector_from_bools(bools: Union[np.ndarray, Sequence[bool]]) -> BitVector:
    """Build a vector whose bit ``i`` is ``bools[i]``."""
    # 将随机源产生的布尔数组（索引 i 对应第 i 位）打包为位向量
    flags = np.asarray(bools, dtype=bool).ravel()
    width = int(flags.size)
    if width <= MAX_INT_WIDTH:
        value = 0
        for idx in np.flatnonzero(flags):
            value |= 1 << int(idx)
        return IntBitVector(value, width)
    return BitArrayVector(flags.tolist())

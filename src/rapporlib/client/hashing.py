"""
Bloom filter builders: hash strategies mapping a value to bit positions.

Responsibilities
  - Define the HashStrategy interface consumed by the generic encoder.
  - Rolling string hash variant (djb2-style, seed 5381, multiplier 33).
  - Message-digest variant (MD5 by default) slicing one digest into rounds.
  - Cohort-seeded xxhash family giving each cohort distinct hash functions.

Usage Context
  - Injected into ``Encoder``; selected by name through the encoder factory.

Limitations
  - Collisions are accepted, so a Bloom filter may have fewer than
    ``num_hashes`` bits set.
  - Modulo bias for widths that do not divide the hash space is not corrected.
"""
# 说明：Bloom Filter 构造器，通过可插拔的哈希策略将输入值映射到若干比特位置并按位 OR 合并。
# 职责：
# - HashStrategy：约定 bit_indices / build_bloom 接口，由通用编码器注入使用
# - RollingHashStrategy：多项式滚动哈希（初值 5381、乘子 33），默认每轮复用同一哈希，可选按轮次加盐
# - DigestHashStrategy：对值计算一次消息摘要，取前两个字节作为初始哈希并按 log2(位宽) 逐轮右移
# - CohortHashStrategy：基于 xxhash 的带种子哈希族，不同 cohort 与轮次使用不同子种子

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Mapping, Optional

import xxhash

from rapporlib.core.utils.config import get_config
from rapporlib.core.utils.param_validation import ParamValidationError, ensure

from .bitvector import BitVector, make_bit_vector

DigestFunc = Callable[[bytes], bytes]
HmacFunc = Callable[[bytes, bytes], bytes]

ROLLING_HASH_SEED = 5381
ROLLING_HASH_MULTIPLIER = 33
_UINT32_MASK = 0xFFFFFFFF
_UINT64_MASK = 0xFFFFFFFFFFFFFFFF
# 黄金分割常数，用于打散不同 cohort / 轮次的子种子
_SEED_STRIDE = 0x9E3779B1


class HashStrategy(ABC):
    """
    Map a value to one Bloom filter bit index per hash round.

    Subclasses that slice a fixed hash into ``log2(num_bits)`` chunks set
    ``requires_supported_width`` so the encoder restricts widths to the
    supported powers of two.
    """

    name: str = "base"
    requires_supported_width: bool = False

    @abstractmethod
    def bit_indices(
        self,
        value: bytes,
        num_bits: int,
        num_hashes: int,
        *,
        hash_part_width: Optional[int] = None,
        cohort: int = 0,
    ) -> List[int]:
        """Return ``num_hashes`` indices in ``[0, num_bits)``."""
        raise NotImplementedError

    def build_bloom(
        self,
        value: bytes,
        num_bits: int,
        num_hashes: int,
        *,
        hash_part_width: Optional[int] = None,
        cohort: int = 0,
    ) -> BitVector:
        """OR the bit of every hash round into a fresh ``num_bits`` wide vector."""
        # 各轮索引可能碰撞，碰撞时置位数少于 num_hashes，属预期行为
        indices = self.bit_indices(
            value, num_bits, num_hashes, hash_part_width=hash_part_width, cohort=cohort
        )
        return make_bit_vector(num_bits, indices)

    def get_metadata(self) -> Mapping[str, Any]:
        return {"type": self.name}


class RollingHashStrategy(HashStrategy):
    """
    Polynomial string hash ``h = h * 33 + byte`` starting from 5381.

    The accumulator wraps as an unsigned 32-bit integer. Every round recomputes
    the same hash, so all rounds select the same bit; pass ``salt_rounds=True``
    to start round ``i`` from ``5381 + i`` and obtain distinct per-round hashes.
    """

    name = "rolling"

    def __init__(self, *, salt_rounds: bool = False):
        self.salt_rounds = bool(salt_rounds)

    @staticmethod
    def rolling_hash(value: bytes, seed: int = ROLLING_HASH_SEED) -> int:
        h = seed & _UINT32_MASK
        for byte in value:
            h = (h * ROLLING_HASH_MULTIPLIER + byte) & _UINT32_MASK
        return h

    def bit_indices(
        self,
        value: bytes,
        num_bits: int,
        num_hashes: int,
        *,
        hash_part_width: Optional[int] = None,
        cohort: int = 0,
    ) -> List[int]:
        del hash_part_width, cohort
        indices: List[int] = []
        for i in range(num_hashes):
            seed = ROLLING_HASH_SEED + i if self.salt_rounds else ROLLING_HASH_SEED
            indices.append(self.rolling_hash(value, seed) % num_bits)
        return indices

    def get_metadata(self) -> Mapping[str, Any]:
        return {"type": self.name, "salt_rounds": self.salt_rounds}


class DigestHashStrategy(HashStrategy):
    """
    Derive bit indices from a message digest of the value.

    - Configuration
      - digest_func: Callable returning the digest bytes of a value; defaults
        to the hashlib algorithm named by ``RuntimeConfig.default_digest``.
      - hmac_func: Optional keyed hash accepted for interface compatibility;
        not used when building the Bloom filter.

    - Behavior
      - The initial hash is ``digest[0] | digest[1] << 8``.
      - Round ``i`` sets ``hash % num_bits`` and then shifts the hash right by
        ``hash_part_width`` bits before the next round.
    """

    name = "digest"
    requires_supported_width = True

    def __init__(self, digest_func: Optional[DigestFunc] = None, hmac_func: Optional[HmacFunc] = None):
        if digest_func is None:
            algorithm = get_config().default_digest
            if algorithm not in hashlib.algorithms_available:
                raise ParamValidationError(f"digest algorithm '{algorithm}' is not available")
            # shake_* 等可变长度算法的 digest_size 为 0，digest() 需要额外的 length 参数
            if hashlib.new(algorithm).digest_size == 0:
                raise ParamValidationError(f"digest algorithm '{algorithm}' has no fixed digest size")
            self.algorithm: Optional[str] = algorithm

            def _hashlib_digest(data: bytes, _algorithm: str = algorithm) -> bytes:
                return hashlib.new(_algorithm, data).digest()

            digest_func = _hashlib_digest
        else:
            self.algorithm = None
        self.digest_func: DigestFunc = digest_func
        self.hmac_func = hmac_func

    def bit_indices(
        self,
        value: bytes,
        num_bits: int,
        num_hashes: int,
        *,
        hash_part_width: Optional[int] = None,
        cohort: int = 0,
    ) -> List[int]:
        del cohort
        # 查表失败必须在构造阶段转为配置错误，这里不允许把缺失的宽度当作移位量
        ensure(hash_part_width is not None, "hash_part_width is required for digest hashing")
        digest = self.digest_func(value)
        ensure(len(digest) >= 2, "digest must be at least two bytes long")

        # 只需要低精度：前两个字节足以覆盖 num_hashes * log2(num_bits) 个比特
        h = digest[0] | digest[1] << 8
        indices: List[int] = []
        for _ in range(num_hashes):
            indices.append(h % num_bits)
            h >>= hash_part_width
        return indices

    def get_metadata(self) -> Mapping[str, Any]:
        return {"type": self.name, "algorithm": self.algorithm}


class CohortHashStrategy(HashStrategy):
    """
    Seeded xxhash family where every (cohort, round) pair gets its own seed.
    """

    name = "cohort"

    def __init__(self, seed: int = 0):
        self.seed = int(seed)

    def _sub_seed(self, cohort: int, round_index: int, num_hashes: int) -> int:
        # 同一 cohort 内各轮次、不同 cohort 之间都使用互不相同的子种子
        return ((self.seed + cohort * num_hashes + round_index) * _SEED_STRIDE) & _UINT64_MASK

    def bit_indices(
        self,
        value: bytes,
        num_bits: int,
        num_hashes: int,
        *,
        hash_part_width: Optional[int] = None,
        cohort: int = 0,
    ) -> List[int]:
        del hash_part_width
        return [
            xxhash.xxh64(value, seed=self._sub_seed(cohort, i, num_hashes)).intdigest() % num_bits
            for i in range(num_hashes)
        ]

    def get_metadata(self) -> Mapping[str, Any]:
        return {"type": self.name, "seed": self.seed}

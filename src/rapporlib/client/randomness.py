"""
Randomness sources for the two randomized-response stages.

Responsibilities
  - Deterministic PRR source reseeded from the value on every call, so the
    permanent response of a value never changes (memoization without storage).
  - Non-deterministic IRR source drawing fresh bits on every call.
  - ``random_bits`` helper: one Bernoulli(probability) draw per bit.

Usage Context
  - Each encoder owns its own sources; there is no process-wide seeding.
  - ``spawn`` / ``clone`` hand independent sources to concurrent workers.

Limitations
  - Sources are not thread-safe: reseeding and drawing mutate generator state.
"""
# 说明：两阶段随机响应所需的随机源，取代原先进程级的全局播种，由每个编码器实例独占持有。
# 职责：
# - random_bits：按给定概率逐位做阈值比较生成定宽位向量
# - DeterministicRand / DeterministicPrrRand：每次 encode 前以 (secret, value) 重新播种，保证同一值的 PRR 恒定
# - IrrRand / NumpyIrrRand：基于 numpy Generator 的非确定性随机源，每次调用都生成新的 p_bits / q_bits
# - spawn / clone：为并发 worker 派生互相独立的随机源实例

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

import numpy as np

from rapporlib.core.utils.param_validation import ensure_probability, ensure_type
from rapporlib.core.utils.random import SeedLike, create_rng, make_seed, reseed_rng, seed_from_bytes, split_rng

from .bitvector import BitVector, bit_vector_from_bools
from .types import Params

# 公平硬币：PRR 覆盖原始比特时写入的噪声比特取 1 的概率
FAIR_COIN = 0.5


def random_bits(rng: np.random.Generator, probability: float, num_bits: int) -> BitVector:
    """Return ``num_bits`` bits, each independently 1 with ``probability``."""
    # 对每一位抽取 [0, 1) 均匀随机数并与阈值比较，小于阈值时置 1
    ensure_probability(probability, name="probability")
    return bit_vector_from_bools(rng.random(num_bits) < probability)


class DeterministicRand(ABC):
    """
    Seeded source for the permanent randomized response.

    ``seed(value)`` must fully determine the following ``f_bits()`` and
    ``uniform()`` draws.
    """

    num_bits: int

    @abstractmethod
    def seed(self, value: bytes) -> None:
        raise NotImplementedError

    @abstractmethod
    def f_bits(self) -> BitVector:
        """Noise bits written where the PRR overrides the Bloom filter."""
        raise NotImplementedError

    @abstractmethod
    def uniform(self) -> BitVector:
        """Selector mask choosing which Bloom bits the PRR overrides."""
        raise NotImplementedError

    @abstractmethod
    def clone(self) -> "DeterministicRand":
        """Return an independent source producing the same draws for the same seed."""
        raise NotImplementedError


class IrrRand(ABC):
    """Fresh-entropy source for the instantaneous randomized response."""

    num_bits: int

    @abstractmethod
    def p_bits(self) -> BitVector:
        raise NotImplementedError

    @abstractmethod
    def q_bits(self) -> BitVector:
        raise NotImplementedError

    @abstractmethod
    def spawn(self, num: int) -> List["IrrRand"]:
        """Return ``num`` independent sources for concurrent use."""
        raise NotImplementedError


class DeterministicPrrRand(DeterministicRand):
    """
    PRR source seeded with SHA-256(secret || value).

    - Configuration
      - params: Encoding parameters; ``num_bits`` and ``prob_f`` are used.
      - secret: Per-client secret mixed into the seed so that two clients
        reporting the same value get unrelated permanent responses.

    - Behavior
      - ``uniform()`` sets each bit with probability ``prob_f``; ``f_bits()``
        sets each bit with probability 1/2. Combined by
        ``(f_bits & uniform) | (bloom & ~uniform)`` every PRR bit is 1 with
        probability ``f/2 + (1 - f) * bloom_bit``.
      - ``f_bits()`` is drawn before ``uniform()``; callers must keep that order.
    """

    def __init__(self, params: Params, secret: bytes = b""):
        ensure_type(params, (Params,), label="params")
        ensure_type(secret, (bytes, bytearray), label="secret")
        self.params = params
        self.num_bits = params.num_bits
        self._secret = bytes(secret)
        # 初始状态无意义，encode 之前总会调用 seed()
        self._rng = create_rng(0)

    def seed(self, value: bytes) -> None:
        # 以 secret 长度作前缀，避免 (secret, value) 的不同切分得到相同种子
        prefix = len(self._secret).to_bytes(4, "big")
        reseed_rng(self._rng, seed_from_bytes(prefix, self._secret, bytes(value)))

    def f_bits(self) -> BitVector:
        return random_bits(self._rng, FAIR_COIN, self.num_bits)

    def uniform(self) -> BitVector:
        return random_bits(self._rng, self.params.prob_f, self.num_bits)

    def clone(self) -> "DeterministicPrrRand":
        return DeterministicPrrRand(self.params, self._secret)


class NumpyIrrRand(IrrRand):
    """
    IRR source backed by a numpy Generator (PCG64).

    Without an explicit ``rng`` the generator is seeded from
    ``RuntimeConfig.rng_seed`` when set, otherwise from OS entropy.

    Limitations
      - PCG64 is not a cryptographically secure generator.
      - A configured ``rng_seed`` gives every default IRR source the same
        stream; leave it unset outside tests and simulations.
    """

    def __init__(self, params: Params, rng: SeedLike = None):
        ensure_type(params, (Params,), label="params")
        self.params = params
        self.num_bits = params.num_bits
        self._rng = create_rng(rng if rng is not None else make_seed())

    def p_bits(self) -> BitVector:
        return random_bits(self._rng, self.params.prob_p, self.num_bits)

    def q_bits(self) -> BitVector:
        return random_bits(self._rng, self.params.prob_q, self.num_bits)

    def spawn(self, num: int) -> List["NumpyIrrRand"]:
        # 通过 SeedSequence.spawn 派生子生成器，子源之间以及与父源之间互不相关
        return [NumpyIrrRand(self.params, rng) for rng in split_rng(self._rng, num)]


def create_irr_rand(params: Params, seed: Optional[int] = None) -> NumpyIrrRand:
    """Build the default IRR source, honoring an explicit or configured seed."""
    return NumpyIrrRand(params, make_seed(seed))

"""
Generic RAPPOR encoder: Bloom filter -> PRR -> IRR -> little-endian bytes.

Responsibilities
  - Validate the Bloom filter width once at construction and expose the result.
  - Run the three perturbation stages with injected hash and randomness strategies.
  - Serialize the instantaneous response into a fixed-size byte string.

Usage Context
  - Build instances through ``rapporlib.client.encoder_factory`` for the
    rolling-hash and digest variants, or inject custom strategies directly.

Limitations
  - Not thread-safe: the PRR source is reseeded on every call. Use
    ``spawn`` to give each worker its own encoder.
"""
# 说明：通用 RAPPOR 编码器，按 Bloom Filter -> PRR -> IRR -> 小端字节串的顺序完成单次编码。
# 职责：
# - 构造阶段一次性校验位宽，记录 num_bytes / hash_part_width / is_valid，不抛出配置异常
# - permanent_randomized_response / instantaneous_randomized_response：两阶段随机响应的纯函数实现
# - encode / encode_into / encode_stages / generate_report：面向调用方的编码入口，均以有效性为前置条件
# - spawn：为并发场景派生独立随机源的编码器副本

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Union

from rapporlib.core.utils.logging import get_logger
from rapporlib.core.utils.param_validation import ensure, ensure_type

from .bitvector import BitVector
from .exceptions import InvalidEncoderError
from .hashing import HashStrategy
from .randomness import DeterministicRand, IrrRand
from .serializer import bit_string, to_le_bytes, write_le_bytes
from .types import EncodingTrace, Params, RapporReport
from .validation import validate_bloom_width

logger = get_logger(__name__)

Value = Union[str, bytes, bytearray]


def _value_bytes(value: Value) -> bytes:
    # 字符串按 UTF-8 编码（孤立代理码点以 surrogatepass 保留），字节串原样使用
    if isinstance(value, str):
        return value.encode("utf-8", "surrogatepass")
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise TypeError(f"value must be str or bytes, not {type(value).__name__}")


def permanent_randomized_response(bloom: BitVector, prr_rand: DeterministicRand, value: bytes) -> BitVector:
    """
    Return ``(f_bits & uniform) | (bloom & ~uniform)`` with the source seeded by ``value``.

    Seeding on every call makes the response for a value permanent without
    storing it anywhere.
    """
    prr_rand.seed(value)
    f_bits = prr_rand.f_bits()
    uniform = prr_rand.uniform()
    return (f_bits & uniform) | (bloom & ~uniform)


def instantaneous_randomized_response(prr: BitVector, irr_rand: IrrRand) -> BitVector:
    """
    Return ``(p_bits & ~prr) | (q_bits & prr)`` with freshly drawn coins.

    A 1 bit is reported with probability q where prr is 1, p where prr is 0.
    """
    p_bits = irr_rand.p_bits()
    q_bits = irr_rand.q_bits()
    return (p_bits & ~prr) | (q_bits & prr)


class Encoder:
    """
    Encode string values into RAPPOR reports.

    - Configuration
      - metric_name: Label of the reported metric; copied into reports.
      - cohort: Cohort of the client; passed to hash strategies that use it.
      - params: Encoding parameters shared with the randomness sources.
      - hash_strategy: Bloom filter builder.
      - prr_rand: Deterministic source reseeded per value.
      - irr_rand: Fresh-entropy source for the instantaneous response.

    - Behavior
      - An invalid width never raises at construction; it clears ``is_valid``
        and every encode entry point then raises ``InvalidEncoderError``.
    """

    def __init__(
        self,
        metric_name: str,
        cohort: int,
        params: Params,
        *,
        hash_strategy: HashStrategy,
        prr_rand: DeterministicRand,
        irr_rand: IrrRand,
    ):
        ensure_type(cohort, (int,), label="cohort")
        ensure_type(params, (Params,), label="params")
        ensure_type(hash_strategy, (HashStrategy,), label="hash_strategy")
        ensure_type(prr_rand, (DeterministicRand,), label="prr_rand")
        ensure_type(irr_rand, (IrrRand,), label="irr_rand")
        ensure(
            prr_rand.num_bits == params.num_bits and irr_rand.num_bits == params.num_bits,
            "randomness sources must produce num_bits wide vectors",
        )
        self.metric_name = str(metric_name)
        self.cohort = cohort
        self.params = params
        self.hash_strategy = hash_strategy
        self._prr_rand = prr_rand
        self._irr_rand = irr_rand

        check = validate_bloom_width(
            params.num_bits, require_supported_width=hash_strategy.requires_supported_width
        )
        self._num_bytes = check.num_bytes
        self._hash_part_width = check.hash_part_width
        self._is_valid = check.is_valid
        if check.is_valid:
            logger.info("num bytes: %d", self._num_bytes)
        else:
            logger.warning("encoder for metric '%s' is invalid: %s", self.metric_name, check.reason)

    @property
    def is_valid(self) -> bool:
        return self._is_valid

    @property
    def num_bytes(self) -> int:
        return self._num_bytes

    @property
    def hash_part_width(self) -> Optional[int]:
        return self._hash_part_width

    def _require_valid(self) -> None:
        if not self._is_valid:
            raise InvalidEncoderError(
                f"encoder for metric '{self.metric_name}' has an invalid configuration "
                f"(num_bits={self.params.num_bits}); check is_valid before encoding"
            )

    def encode_stages(self, value: Value) -> EncodingTrace:
        """Run all stages and return the bloom, prr and irr vectors."""
        # 诊断入口：bloom 与 prr 可还原真实值，只应在模拟或测试中使用
        self._require_valid()
        data = _value_bytes(value)

        bloom = self.hash_strategy.build_bloom(
            data,
            self.params.num_bits,
            self.params.num_hashes,
            hash_part_width=self._hash_part_width,
            cohort=self.cohort,
        )
        logger.debug("bloom filter built", extra={"value": data, "bloom": bit_string(bloom)})

        prr = permanent_randomized_response(bloom, self._prr_rand, data)
        logger.debug("permanent response computed", extra={"prr": bit_string(prr)})

        irr = instantaneous_randomized_response(prr, self._irr_rand)
        logger.debug("instantaneous response computed", extra={"irr": bit_string(irr)})
        return EncodingTrace(bloom=bloom, prr=prr, irr=irr)

    def encode(self, value: Value) -> bytes:
        """Return the ``num_bytes`` little-endian bytes of the instantaneous response."""
        trace = self.encode_stages(value)
        return to_le_bytes(trace.irr, self._num_bytes)

    def encode_into(self, value: Value, output: bytearray) -> bool:
        """Overwrite ``output`` with the encoded report; returns True on success."""
        # 与 encode 相同的前置条件：无效编码器在写入任何字节前即抛出异常
        trace = self.encode_stages(value)
        write_le_bytes(trace.irr, output, self._num_bytes)
        return True

    def generate_report(
        self,
        value: Value,
        *,
        user_id: Optional[Union[str, int]] = None,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> RapporReport:
        """Encode ``value`` and wrap it as a RapporReport."""
        return RapporReport(
            metric_name=self.metric_name,
            cohort=self.cohort,
            irr=self.encode(value),
            num_bits=self.params.num_bits,
            user_id=user_id,
            timestamp=datetime.now(timezone.utc),
            metadata=dict(metadata or {}),
        )

    def spawn(self, num: int) -> List["Encoder"]:
        """Return ``num`` encoders with independent randomness sources."""
        # PRR 源按相同 secret 克隆（永久响应保持一致），IRR 源从父源派生互相独立的子生成器
        ensure(num > 0, "num must be positive")
        return [
            Encoder(
                self.metric_name,
                self.cohort,
                self.params,
                hash_strategy=self.hash_strategy,
                prr_rand=self._prr_rand.clone(),
                irr_rand=irr_rand,
            )
            for irr_rand in self._irr_rand.spawn(num)
        ]

    def get_metadata(self) -> Mapping[str, Any]:
        """JSON-friendly description of the encoder configuration."""
        return {
            "metric_name": self.metric_name,
            "cohort": self.cohort,
            "num_bits": self.params.num_bits,
            "num_bytes": self._num_bytes,
            "num_hashes": self.params.num_hashes,
            "hash_part_width": self._hash_part_width,
            "hash_strategy": dict(self.hash_strategy.get_metadata()),
            "is_valid": self._is_valid,
        }

"""
Shared type definitions for the RAPPOR client.

Responsibilities
  - Define the immutable encoding parameters (Params) and their loaders.
  - Define the per-call stage trace (EncodingTrace).
  - Define the report payload handed to the transport layer (RapporReport).

Usage Context
  - Params are shared read-only by encoders and randomness sources.
  - RapporReport is the JSON-friendly envelope around the encoded bytes.

Limitations
  - Params only checks structural sanity; byte alignment of num_bits is the
    encoder's concern and is reported through its validity flag.
"""
# 说明：RAPPOR 客户端共享的类型定义，覆盖编码参数、单次编码阶段快照与上报载体。
# 职责：
# - Params：位宽、哈希次数、cohort 数以及 p/q/f 概率的不可变参数对象，支持 CSV / dict / JSON 转换
# - EncodingTrace：单次 encode 的 bloom / prr / irr 三阶段位向量快照，用于诊断与模拟
# - RapporReport：携带 IRR 字节串、cohort 与指标名的上报载体，提供 JSON 友好的序列化与反序列化

from __future__ import annotations

import csv
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Union

from rapporlib.core.utils.param_validation import ParamValidationError, ensure, ensure_probability, ensure_type
from rapporlib.core.utils.serialization import serialize_to_json

from .bitvector import BitVector

# RAPPOR 工具链参数 CSV 的表头：k=位宽, h=哈希次数, m=cohort 数, p/q/f=概率
CSV_HEADER = ["k", "h", "m", "p", "q", "f"]

# RapporReport JSON 封装的版本号
REPORT_VERSION = "1"


@dataclass(frozen=True)
class Params:
    """
    RAPPOR encoding parameters.

    - Configuration
      - num_bits: Bloom filter width in bits (k).
      - num_hashes: Number of hash rounds per value (h).
      - num_cohorts: Number of cohorts (m).
      - prob_p: IRR probability of reporting 1 when the PRR bit is 0.
      - prob_q: IRR probability of reporting 1 when the PRR bit is 1.
      - prob_f: PRR probability of replacing a Bloom bit with a fair coin.

    - Behavior
      - Validates positivity of counts and the [0, 1] range of probabilities.
      - Does not require num_bits to be byte aligned.
    """

    num_bits: int = 16
    num_hashes: int = 2
    num_cohorts: int = 64
    prob_p: float = 0.50
    prob_q: float = 0.75
    prob_f: float = 0.50

    def __post_init__(self) -> None:
        # 只做结构性校验；num_bits 是否为 8 的倍数交由编码器的有效性标志处理
        for name in ("num_bits", "num_hashes", "num_cohorts"):
            ensure_type(getattr(self, name), (int,), label=name)
            ensure(getattr(self, name) > 0, f"{name} must be positive")
        for name in ("prob_p", "prob_q", "prob_f"):
            ensure_type(getattr(self, name), (int, float), label=name)
            ensure_probability(float(getattr(self, name)), name=name)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Params":
        # 缺省字段沿用默认值，未知字段显式报错，避免配置拼写错误被静默忽略
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ParamValidationError(f"unknown params fields: {sorted(unknown)}")
        return cls(**dict(data))

    def to_json(self) -> str:
        """Serialize using the field names understood by the collector API."""
        return serialize_to_json(
            {
                "numBits": self.num_bits,
                "numHashes": self.num_hashes,
                "numCohorts": self.num_cohorts,
                "probPrr": self.prob_f,
                "probIrr0": self.prob_p,
                "probIrr1": self.prob_q,
            }
        )

    @classmethod
    def from_csv(cls, rows: Iterable[str]) -> "Params":
        """
        Read parameters from the two-row ``k,h,m,p,q,f`` CSV format.

        Raises:
            ParamValidationError: when the header, row count or values are malformed.
        """
        # 逐行解析：第一行必须是固定表头，第二行是参数值，不允许出现更多行
        reader = csv.reader(rows)
        params: Optional[Params] = None
        for i, row in enumerate(reader):
            if i == 0:
                if [cell.strip() for cell in row] != CSV_HEADER:
                    raise ParamValidationError(f"header {row} is malformed; expected {','.join(CSV_HEADER)}")
            elif i == 1:
                try:
                    params = cls(
                        num_bits=int(row[0]),
                        num_hashes=int(row[1]),
                        num_cohorts=int(row[2]),
                        prob_p=float(row[3]),
                        prob_q=float(row[4]),
                        prob_f=float(row[5]),
                    )
                except (ValueError, IndexError) as exc:
                    raise ParamValidationError(f"params row is malformed: {exc}") from exc
            else:
                raise ParamValidationError("params file should only have two rows")
        if params is None:
            raise ParamValidationError("expected a second row with params")
        return params


@dataclass(frozen=True)
class EncodingTrace:
    """Bit vectors produced by the three stages of a single encode call."""
    # 单次编码的阶段快照；bloom 与 prr 与真实值强相关，不应上报或落盘

    bloom: BitVector
    prr: BitVector
    irr: BitVector


@dataclass
class RapporReport:
    """
    Encoded report exchanged between client and collector.

    - Configuration
      - metric_name: Label of the metric the value belongs to.
      - cohort: Cohort the encoding client belongs to.
      - irr: Little-endian IRR bytes, exactly num_bits / 8 long.
      - num_bits: Bloom filter width used for encoding.
      - user_id: Optional client identifier.
      - timestamp: Optional event timestamp.
      - metadata: Additional routing or auditing metadata.

    - Behavior
      - Serializes the IRR bytes as lowercase hex for JSON transport.
    """

    metric_name: str
    cohort: int
    irr: bytes
    num_bits: int
    user_id: Optional[Union[str, int]] = None
    timestamp: Optional[datetime] = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict form with hex IRR and ISO-8601 timestamp."""
        return {
            "metric_name": self.metric_name,
            "cohort": self.cohort,
            "irr": bytes(self.irr).hex(),
            "num_bits": self.num_bits,
            "user_id": self.user_id,
            "timestamp": self.timestamp.isoformat() if self.timestamp is not None else None,
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RapporReport":
        """Create a report from its dictionary form."""
        # hex 字符串还原为字节串，ISO8601 字符串还原为 datetime；格式错误统一报参数错误
        irr = data["irr"]
        ts = data.get("timestamp")
        try:
            irr_bytes = bytes.fromhex(irr) if isinstance(irr, str) else bytes(irr)
            timestamp = datetime.fromisoformat(ts) if isinstance(ts, str) else ts
        except ValueError as exc:
            raise ParamValidationError(f"report field is malformed: {exc}") from exc
        return cls(
            metric_name=data["metric_name"],
            cohort=int(data["cohort"]),
            irr=irr_bytes,
            num_bits=int(data["num_bits"]),
            user_id=data.get("user_id"),
            timestamp=timestamp,
            metadata=data.get("metadata", {}),
        )

    def to_json(self, *, sensitive_fields: Optional[Sequence[str]] = None) -> str:
        # 以版本封装导出 JSON，可选对 user_id 等字段做掩码
        return serialize_to_json(self, sensitive_fields=sensitive_fields, version=REPORT_VERSION)


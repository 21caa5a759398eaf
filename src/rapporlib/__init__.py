"""Client-side RAPPOR encoding: Bloom filter, permanent and instantaneous randomized response."""

from __future__ import annotations

from .client import (
    Encoder,
    EncoderFactory,
    InvalidEncoderError,
    Params,
    RapporError,
    RapporReport,
    create_digest_encoder,
    create_encoder,
    create_rolling_hash_encoder,
)
from .core import ParamValidationError, RuntimeConfig, configure, get_config, get_logger

__version__ = "0.1.0"

__all__ = [
    "Encoder",
    "EncoderFactory",
    "InvalidEncoderError",
    "Params",
    "RapporError",
    "RapporReport",
    "create_digest_encoder",
    "create_encoder",
    "create_rolling_hash_encoder",
    "ParamValidationError",
    "RuntimeConfig",
    "configure",
    "get_config",
    "get_logger",
]

"""Shared utility helpers used across the library."""

from .config import (
    RuntimeConfig,
    get_config,
    configure,
    reset_config,
)
from .logging import (
    get_logger,
    configure_logging,
)
from .param_validation import (
    ensure,
    ensure_probability,
    ensure_type,
    ParamValidationError,
)
from .random import (
    create_rng,
    make_seed,
    reseed_rng,
    seed_from_bytes,
    split_rng,
)
from .serialization import (
    serialize_to_json,
    deserialize_from_json,
    mask_sensitive_data,
)

__all__ = [
    "RuntimeConfig",
    "get_config",
    "configure",
    "reset_config",
    "get_logger",
    "configure_logging",
    "ensure",
    "ensure_probability",
    "ensure_type",
    "ParamValidationError",
    "create_rng",
    "make_seed",
    "reseed_rng",
    "seed_from_bytes",
    "split_rng",
    "serialize_to_json",
    "deserialize_from_json",
    "mask_sensitive_data",
]

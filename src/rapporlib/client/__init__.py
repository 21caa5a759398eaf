"""Unified entry point for the RAPPOR client encoder."""

from __future__ import annotations

from .bitvector import (
    BitArrayVector,
    BitVector,
    IntBitVector,
    bit_vector_from_bools,
    bit_vector_from_int,
    make_bit_vector,
)
from .encoder import (
    Encoder,
    instantaneous_randomized_response,
    permanent_randomized_response,
)
from .encoder_factory import (
    EncoderFactory,
    create_digest_encoder,
    create_encoder,
    create_rolling_hash_encoder,
    get_hash_strategy_class,
    register_hash_strategy,
)
from .exceptions import InvalidEncoderError, RapporError, SerializationError
from .hashing import CohortHashStrategy, DigestHashStrategy, HashStrategy, RollingHashStrategy
from .randomness import (
    DeterministicPrrRand,
    DeterministicRand,
    IrrRand,
    NumpyIrrRand,
    create_irr_rand,
    random_bits,
)
from .serializer import bit_string, from_le_bytes, to_le_bytes, write_le_bytes
from .types import EncodingTrace, Params, RapporReport
from .validation import HASH_PART_WIDTHS, WidthValidation, hash_part_width, validate_bloom_width

__all__ = [
    "BitVector",
    "IntBitVector",
    "BitArrayVector",
    "make_bit_vector",
    "bit_vector_from_int",
    "bit_vector_from_bools",
    "Encoder",
    "permanent_randomized_response",
    "instantaneous_randomized_response",
    "EncoderFactory",
    "create_encoder",
    "create_rolling_hash_encoder",
    "create_digest_encoder",
    "register_hash_strategy",
    "get_hash_strategy_class",
    "RapporError",
    "InvalidEncoderError",
    "SerializationError",
    "HashStrategy",
    "RollingHashStrategy",
    "DigestHashStrategy",
    "CohortHashStrategy",
    "DeterministicRand",
    "DeterministicPrrRand",
    "IrrRand",
    "NumpyIrrRand",
    "create_irr_rand",
    "random_bits",
    "to_le_bytes",
    "write_le_bytes",
    "from_le_bytes",
    "bit_string",
    "Params",
    "EncodingTrace",
    "RapporReport",
    "HASH_PART_WIDTHS",
    "WidthValidation",
    "hash_part_width",
    "validate_bloom_width",
]

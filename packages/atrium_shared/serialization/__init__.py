"""Serialization helpers shared by Atrium output encoders."""

from .safe_integer import (
    DEFAULT_BOUNDS,
    MAX_SAFE_INTEGER,
    MIN_SAFE_INTEGER,
    JsSafeInt,
    SafeIntegerBounds,
    dumps,
    encode_number,
    to_jsonable,
)

__all__ = [
    "DEFAULT_BOUNDS",
    "MAX_SAFE_INTEGER",
    "MIN_SAFE_INTEGER",
    "JsSafeInt",
    "SafeIntegerBounds",
    "dumps",
    "encode_number",
    "to_jsonable",
]

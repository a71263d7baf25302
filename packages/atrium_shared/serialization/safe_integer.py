"""Safe-integer encoding for consumers with double-precision numbers.

Browsers and other JavaScript consumers parse JSON numbers as IEEE-754
doubles, which represent integers exactly only within ``±(2**53 - 1)``.
Database ``BIGINT`` identifiers routinely exceed that range, so numbers on or
beyond the bounds are emitted as decimal strings instead.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Annotated, Any, Mapping

from pydantic import BaseModel, PlainSerializer

if TYPE_CHECKING:
    from packages.atrium_shared.config import AtriumSettings

MAX_SAFE_INTEGER = 9_007_199_254_740_991
MIN_SAFE_INTEGER = -9_007_199_254_740_991


@dataclass(frozen=True)
class SafeIntegerBounds:
    """Exclusive bounds inside which numbers keep their native encoding."""

    minimum: int = MIN_SAFE_INTEGER
    maximum: int = MAX_SAFE_INTEGER

    def __post_init__(self) -> None:
        if self.minimum >= self.maximum:
            raise ValueError("safe integer minimum must be < maximum")

    @classmethod
    def from_settings(cls, settings: "AtriumSettings") -> "SafeIntegerBounds":
        """Build bounds from the ``serialization`` settings subtree."""
        return cls(
            minimum=settings.serialization.min_safe_integer,
            maximum=settings.serialization.max_safe_integer,
        )

    def contains(self, value: int) -> bool:
        """Return ``True`` when ``value`` lies strictly inside the bounds."""
        return self.minimum < value < self.maximum


DEFAULT_BOUNDS = SafeIntegerBounds()


def encode_number(value: Any, *, bounds: SafeIntegerBounds = DEFAULT_BOUNDS) -> Any:
    """Return ``value`` unchanged when safe, else its decimal string form.

    The integral part is taken by truncation, so ``1.5`` is judged as ``1``.
    Non-numeric values and booleans pass through untouched.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return value
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, Decimal) and not value.is_finite():
        return str(value)
    if bounds.contains(int(value)):
        return value
    return str(value)


def to_jsonable(payload: Any, *, bounds: SafeIntegerBounds = DEFAULT_BOUNDS) -> Any:
    """Return a JSON-ready copy of ``payload`` with every number bounded.

    Each numeric leaf is encoded independently; the surrounding structure is
    only walked, never inspected.
    """
    if isinstance(payload, BaseModel):
        return to_jsonable(payload.model_dump(mode="python"), bounds=bounds)
    if isinstance(payload, Mapping):
        return {str(key): to_jsonable(item, bounds=bounds) for key, item in payload.items()}
    if isinstance(payload, (list, tuple, set, frozenset)):
        return [to_jsonable(item, bounds=bounds) for item in payload]

    encoded = encode_number(payload, bounds=bounds)
    if isinstance(encoded, Decimal):
        return _decimal_to_json(encoded)
    return encoded


def _decimal_to_json(value: Decimal) -> int | float | str:
    """Return ``value`` as a JSON number only when that is exact.

    Fractions a double cannot hold exactly keep their full decimal text.
    """
    if value == value.to_integral_value():
        return int(value)
    as_float = float(value)
    if Decimal(repr(as_float)) == value:
        return as_float
    return str(value)


def dumps(payload: Any, *, bounds: SafeIntegerBounds = DEFAULT_BOUNDS) -> str:
    """Serialize ``payload`` into compact JSON with safe-integer encoding."""
    return json.dumps(
        to_jsonable(payload, bounds=bounds), default=str, separators=(",", ":")
    )


JsSafeInt = Annotated[
    int,
    PlainSerializer(lambda value: encode_number(value), when_used="json"),
]
"""Integer field type that serializes out-of-range values as strings in JSON."""

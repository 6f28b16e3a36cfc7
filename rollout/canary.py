from __future__ import annotations

import hashlib
import math
from decimal import Decimal
from typing import Union

from .errors import InvalidInput


BUCKETS = 100

Identifier = Union[str, bytes]
RolloutFraction = Union[int, float, Decimal]


def _identifier_bytes(identifier: Identifier) -> bytes:
    if isinstance(identifier, str):
        raw = identifier.encode("utf-8")
    elif isinstance(identifier, (bytes, bytearray)):
        raw = bytes(identifier)
    else:
        raise InvalidInput(f"identifier must be str or bytes, got {type(identifier).__name__}")
    if not raw:
        raise InvalidInput("identifier must be non-empty")
    return raw


def _fraction_decimal(fraction: RolloutFraction) -> Decimal:
    if isinstance(fraction, bool) or not isinstance(fraction, (int, float, Decimal)):
        raise InvalidInput(f"fraction must be a number, got {type(fraction).__name__}")
    if isinstance(fraction, float) and not math.isfinite(fraction):
        raise InvalidInput(f"fraction must be finite, got {fraction!r}")
    # str() keeps 0.3 as Decimal("0.3") rather than its binary expansion.
    d = fraction if isinstance(fraction, Decimal) else Decimal(str(fraction))
    if not d.is_finite():
        raise InvalidInput(f"fraction must be finite, got {fraction!r}")
    if d < 0 or d > 1:
        raise InvalidInput(f"fraction must be within [0, 1], got {fraction!r}")
    return d


def rollout_threshold(fraction: RolloutFraction) -> Decimal:
    """Exact bucket cut-off for a fraction; buckets strictly below it are inside."""
    return _fraction_decimal(fraction) * BUCKETS


def bucket_value(identifier: Identifier) -> int:
    h = hashlib.sha1(_identifier_bytes(identifier)).hexdigest()
    return int(h, 16) % BUCKETS


def is_in_rollout(identifier: Identifier, fraction: RolloutFraction) -> bool:
    """
    Stable membership test for a percentage rollout.

    The identifier lands in a bucket in [0, 99] (SHA-1 of its bytes, mod 100) and is
    inside the rollout iff bucket < fraction * 100. Raising the fraction only ever moves
    identifiers from outside to inside.
    """
    return bucket_value(identifier) < rollout_threshold(fraction)

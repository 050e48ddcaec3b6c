# follower_scout/extractor/numbers.py
"""Coercion of follower-like values ("12.5K", "1.2M", "3,400", 48213) to integers."""
from __future__ import annotations

import math
import re
from typing import Any, Optional

_NOISE_RE = re.compile(r"[^0-9.,kKmM]")
_NON_DIGIT_RE = re.compile(r"[^0-9]")
_SUFFIXED_RE = re.compile(r"^([0-9,.]+)\s*([kKmM])$")

_MULTIPLIERS = {"k": 1_000, "m": 1_000_000}


def to_number(value: Any) -> Optional[int]:
    """Return *value* as a non-negative int, or None if it does not look like a count.

    None means "unparseable" and is never conflated with a legitimate 0.
    """
    # bool is an int subclass, but a JSON true is not a count
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float):
        if not math.isfinite(value) or value < 0:
            return None
        return math.floor(value + 0.5)
    if not isinstance(value, str) or not value:
        return None

    cleaned = _NOISE_RE.sub("", value)
    if not cleaned:
        return None

    suffixed = _SUFFIXED_RE.match(cleaned)
    if suffixed:
        mantissa, suffix = suffixed.groups()
        try:
            scaled = float(mantissa.replace(",", "")) * _MULTIPLIERS[suffix.lower()]
        except ValueError:
            # "1.2.3K" and the like; fall back to plain digits
            pass
        else:
            # a mantissa too long for a float overflows to inf
            if not math.isfinite(scaled):
                return None
            # half-up, round() would round half to even
            return math.floor(scaled + 0.5)

    digits = _NON_DIGIT_RE.sub("", cleaned)
    if not digits:
        return None
    try:
        return int(digits)
    except ValueError:
        # past the int string conversion limit, not a follower count
        return None


__all__ = ["to_number"]

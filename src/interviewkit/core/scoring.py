"""Score normalization for provider-reported scores."""

from __future__ import annotations

import math

__all__ = ["is_json_number", "normalize_score"]


def is_json_number(value: object) -> bool:
    """True for ints and finite floats decoded from JSON; ``bool`` is not a number."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def normalize_score(raw: float) -> int:
    """Map a provider score onto an integer in ``[0, 100]``.

    Providers are asked for 0–100 but sometimes answer on a 0–1 scale.  Any
    value ``<= 1`` is read as a fraction and scaled by 100; larger values are
    taken as already on the 0–100 scale.  This is a heuristic: an integer
    score of exactly 1 out of 100 is indistinguishable from 1.0 and comes
    back as 100.

    Rounding is half-up (``99.5 -> 100``) and the result is clamped.  Ints
    are clamped without a float conversion, so arbitrarily large values from
    JSON never overflow.
    """
    if isinstance(raw, int):
        return max(0, min(100, raw * 100 if raw <= 1 else raw))
    scaled = raw * 100 if raw <= 1 else raw
    return max(0, min(100, math.floor(scaled + 0.5)))

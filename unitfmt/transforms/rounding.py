"""
Rounding transform for unitfmt.

Implements the five ``--round`` methods:

  up            -> ceil        (-2.3 -> -2)
  down          -> floor       (-2.3 -> -3)
  from-zero     -> away from 0 ( 2.3 ->  3, -2.3 -> -3)
  towards-zero  -> trunc       (-2.3 -> -2)
  nearest       -> half away from zero (2.5 -> 3)

Values that sit within float noise of an integer (e.g. the
``2.0000000000000004`` left behind by a base conversion) are snapped to
that integer first, so ``from-zero`` does not bump them a whole unit.
"""

from __future__ import annotations

import math

from unitfmt.config import RoundingPolicy

# Relative distance from an integer below which a value counts as integral
_SNAP_TOLERANCE = 1e-9


def _snap(value: float) -> float:
    nearest = round(value)
    if abs(value - nearest) <= _SNAP_TOLERANCE * max(1.0, abs(value)):
        return float(nearest)
    return value


def apply_rounding(value: float, policy: RoundingPolicy) -> float:
    """Round *value* to an integer using *policy*."""
    value = _snap(value)
    if policy is RoundingPolicy.UP:
        return float(math.ceil(value))
    if policy is RoundingPolicy.DOWN:
        return float(math.floor(value))
    if policy is RoundingPolicy.TOWARDS_ZERO:
        return float(math.trunc(value))
    if policy is RoundingPolicy.FROM_ZERO:
        if value.is_integer():
            return value
        return float(math.trunc(value)) + math.copysign(1.0, value)
    if policy is RoundingPolicy.NEAREST:
        magnitude = math.floor(abs(value) + 0.5)
        return float(magnitude if value >= 0 else -magnitude)
    raise ValueError(f"Unknown rounding policy: {policy!r}")


def round_to(value: float, policy: RoundingPolicy, digits: int = 0) -> float:
    """Round *value* to *digits* decimal places using *policy*."""
    if digits == 0:
        return apply_rounding(value, policy)
    factor = 10**digits
    return apply_rounding(value * factor, policy) / factor

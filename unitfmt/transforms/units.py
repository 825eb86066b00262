"""
Unit resolution, rescaling and suffix emission for unitfmt.

Two unit families are supported, each a fixed 9-tier table:

  SI  (base 10, tiers every 10^3):  "", K, M, G, T, P, E, Z, Y
  IEC (base 2,  tiers every 2^10):  "", Ki, Mi, Gi, Ti, Pi, Ei, Zi, Yi

A quantity is carried as ``(value, UnitScale(base, power))`` meaning
``value * base ** power`` base units. Converting between families uses
the tier equivalence ``2^(10x) ~ 10^(3x)``: a binary power of 10 maps
to a decimal power of 3 and back.

Functions here are pure: each returns a new ``UnitScale`` / value pair
instead of updating its arguments.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from unitfmt.config import UnitFamily
from unitfmt.exceptions import InvalidUnitError
from unitfmt.transforms.numbers import ParsedNumber

logger = logging.getLogger(__name__)

SI_SUFFIXES: tuple[str, ...] = ("", "K", "M", "G", "T", "P", "E", "Z", "Y")
IEC_SUFFIXES: tuple[str, ...] = ("", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi")

_SI_INDEX: dict[str, int] = {s: i for i, s in enumerate(SI_SUFFIXES)}
# IEC input accepts both the two-letter label and its one-letter form
_IEC_INDEX: dict[str, int] = {**_SI_INDEX, **{s: i for i, s in enumerate(IEC_SUFFIXES)}}

# Exponent distance between two adjacent tiers, and the top tier, per base
TIER_STEP: dict[int, int] = {10: 3, 2: 10}
MAX_POWER: dict[int, int] = {10: 24, 2: 80}


@dataclass(frozen=True)
class UnitScale:
    """``1 <suffix> == base ** power`` base units."""

    base: int = 10
    power: int = 0

    @property
    def multiplier(self) -> int:
        return self.base**self.power


@dataclass(frozen=True)
class ResolvedNumber:
    """A parsed field after unit resolution.

    Attributes:
        value: Mantissa, normalized so that it is below one tier of its base
            (unless the top tier is reached).
        scale: Base and power the mantissa is expressed in.
        quantity: The field's value in base units, computed from the raw
            numeral before normalization (``1.5K`` under SI -> ``1500.0``).
    """

    value: float
    scale: UnitScale
    quantity: float


def family_base(family: UnitFamily) -> int:
    """Natural base of a unit family (SI and none are decimal)."""
    if family in (UnitFamily.IEC, UnitFamily.IEC_I):
        return 2
    return 10


def unit_scale(family: UnitFamily, suffix: str) -> UnitScale:
    """Map a unit suffix to its scale under *family*.

    ``si`` looks the suffix up in the SI table and ``iec`` / ``iec-i`` in
    the IEC table; ``auto`` tries the SI table first and the IEC table
    second. Under any of these an unknown suffix leaves the number
    unscaled, so ``"5X"`` under ``si`` is 5. Only ``none`` rejects
    suffixes, since no unit family was requested to interpret them.

    Raises:
        InvalidUnitError: If *suffix* is non-empty and *family* is ``none``.
    """
    if family is UnitFamily.NONE:
        if suffix:
            raise InvalidUnitError(
                f"rejecting suffix '{suffix}' in input (consider using --from)", field=suffix
            )
        return UnitScale(base=10, power=0)

    if family in (UnitFamily.SI, UnitFamily.AUTO) and suffix in _SI_INDEX:
        return UnitScale(base=10, power=_SI_INDEX[suffix] * 3)
    if family in (UnitFamily.IEC, UnitFamily.IEC_I, UnitFamily.AUTO) and suffix in _IEC_INDEX:
        return UnitScale(base=2, power=_IEC_INDEX[suffix] * 10)

    logger.debug("Unknown suffix %r under %s; leaving value unscaled", suffix, family.value)
    return UnitScale(base=10, power=0)


def normalize(base: int, power: int, value: float, *, downward: bool = True) -> tuple[int, float]:
    """Move *value* into one tier of *base*, adjusting *power* to match.

    Raises the power by whole tiers while ``|value|`` spans at least one
    more tier (the largest multiple of the tier step not exceeding
    ``floor(log_base(|value|))``), stopping at the top tier. With
    *downward*, also lowers the power while ``|value| < 1`` and the
    power is above 0.

    Returns:
        ``(power, value)`` expressing the same quantity.
    """
    step = TIER_STEP[base]
    tier = base**step
    if value == 0:
        return power, value
    while abs(value) >= tier and power + step <= MAX_POWER[base]:
        value /= tier
        power += step
    if downward:
        while abs(value) < 1 and power >= step:
            value *= tier
            power -= step
    return power, value


def resolve_number(family: UnitFamily, parsed: ParsedNumber) -> ResolvedNumber:
    """Resolve a parsed field into a magnitude-aware scale and mantissa.

    The suffix fixes the base and the starting power; the numeral's own
    magnitude then pushes the power up, so ``"2048K"`` under IEC resolves
    to ``(2.0, 2^20)`` rather than ``(2048.0, 2^10)``.

    Raises:
        InvalidUnitError: If *family* is ``none`` and the field has a suffix.
    """
    scale = unit_scale(family, parsed.suffix)
    quantity = parsed.value * scale.multiplier
    power, value = normalize(scale.base, scale.power, parsed.value, downward=False)
    logger.debug(
        "Resolved %r%s under %s: base=%d power=%d value=%r",
        parsed.value, parsed.suffix, family.value, scale.base, power, value,
    )
    return ResolvedNumber(
        value=value,
        scale=UnitScale(base=scale.base, power=power),
        quantity=quantity,
    )


def corresponding_power(from_base: int, to_base: int, power: int) -> int:
    """Translate a power between bases with the 10 (binary) <-> 3 (decimal) rule."""
    if from_base == to_base:
        return power
    if from_base == 2:
        return (power // 10) * 3
    return (power * 10) // 3


def rescale(from_base: int, to_base: int, power: int, value: float) -> tuple[int, float]:
    """Express ``value * from_base ** power`` at *to_base*.

    The target power comes from ``corresponding_power``; the value
    absorbs the difference between the two tier sizes, e.g.
    ``rescale(10, 2, 3, 2.048) == (10, 2.0)``.

    Returns:
        ``(to_power, to_value)``.
    """
    if from_base == to_base:
        return power, value
    to_power = corresponding_power(from_base, to_base, power)
    return to_power, value * from_base**power / to_base**to_power


def to_si_suffix(base: int, power: int) -> tuple[str, int]:
    """Pick the largest SI tier at or below *power*.

    A binary *power* is first translated to its decimal counterpart.

    Returns:
        ``(suffix, remaining_power)``; the remainder is what is left of
        the power once the tier is consumed.
    """
    power = corresponding_power(base, 10, power)
    for tier in range(MAX_POWER[10], 0, -TIER_STEP[10]):
        if power >= tier:
            return SI_SUFFIXES[tier // 3], power - tier
    return "", power


def to_iec_suffix(base: int, power: int, iec_i: bool = False) -> tuple[str, int]:
    """Pick the largest IEC tier at or below *power*.

    A decimal *power* is first translated to its binary counterpart.
    With *iec_i* the label carries the trailing ``i`` (``Ki``),
    otherwise the single-letter form is used (``K``).

    Returns:
        ``(suffix, remaining_power)``.
    """
    power = corresponding_power(base, 2, power)
    for tier in range(MAX_POWER[2], 0, -TIER_STEP[2]):
        if power >= tier:
            suffix = IEC_SUFFIXES[tier // 10]
            return (suffix if iec_i else suffix[0]), power - tier
    return "", power


def emit_suffix(family: UnitFamily, base: int, power: int) -> tuple[str, int]:
    """Dispatch to the suffix emitter of the target *family*."""
    if family is UnitFamily.SI:
        return to_si_suffix(base, power)
    if family is UnitFamily.IEC:
        return to_iec_suffix(base, power)
    if family is UnitFamily.IEC_I:
        return to_iec_suffix(base, power, iec_i=True)
    return "", power

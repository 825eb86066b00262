"""
Per-field conversion pipeline for unitfmt.

Runs one field through the fixed sequence of transforms:

1. **Extract**: split the numeral from its unit suffix (after dropping
   the configured user suffix, if the field carries it).
2. **Resolve**: map the suffix to a ``(base, power)`` scale under the
   source family, normalizing the mantissa by its own magnitude.
3. **Unit size**: divide by ``to_unit_size``.
4. **Rescale**: convert to the target family's base and renormalize.
5. **Round**: unit-scaled output is rounded at display precision (one
   decimal below 10, none otherwise) with the configured policy, or
   ``from-zero`` by default; plain output is rounded to an integer only
   when a policy is configured.
6. **Emit suffix**: pick the target family's tier for the power.
7. **Export**: grouping, suffixes, padding / printf width.

The pipeline is **stateless** -- it only reads the (frozen) config, so
one instance can convert any number of fields.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from unitfmt.config import DEFAULT_ROUNDING, UnitfmtConfig
from unitfmt.export import export_value, format_number
from unitfmt.transforms.numbers import extract_number, strip_user_suffix
from unitfmt.transforms.rounding import apply_rounding, round_to
from unitfmt.transforms.units import (
    MAX_POWER,
    TIER_STEP,
    ResolvedNumber,
    emit_suffix,
    family_base,
    normalize,
    rescale,
    resolve_number,
)

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Outcome of converting one field.

    Attributes:
        text: The final field text, as written to the output line.
        value: The displayed number (after scaling and rounding).
        unit_suffix: The emitted unit suffix (``""`` for plain output).
    """

    text: str
    value: float
    unit_suffix: str = ""


def _display_digits(value: float) -> int:
    return 1 if abs(value) < 10 else 0


class ConversionPipeline:
    """Converts single fields according to a ``UnitfmtConfig``."""

    def __init__(self, config: UnitfmtConfig) -> None:
        self.config = config

    def convert(self, field: str) -> str:
        """Convert *field* and return the formatted text.

        Raises:
            ParseError: If the field has no valid numeral.
            InvalidUnitError: If the field has a suffix but no source family is set.
        """
        return self.run(field).text

    def run(self, field: str) -> ConversionResult:
        """Convert *field*, returning the text along with its parts."""
        config = self.config
        text = strip_user_suffix(field, config.formatting.suffix)
        parsed = extract_number(text, decimal_point=config.decimal_point)
        resolved = resolve_number(config.from_unit, parsed)

        if config.to_unit is None:
            value = resolved.quantity / config.to_unit_size
            if config.rounding is not None:
                value = apply_rounding(value, config.rounding)
            rendered, unit_suffix = format_number(value), ""
        else:
            value, unit_suffix = self._scale(resolved)
            if unit_suffix:
                rendered = format_number(value, _display_digits(value))
            else:
                rendered = format_number(value)

        out = export_value(rendered, unit_suffix, config.formatting)
        logger.debug("Converted %r -> %r", field, out)
        return ConversionResult(text=out, value=value, unit_suffix=unit_suffix)

    def _scale(self, resolved: ResolvedNumber) -> tuple[float, str]:
        """Express a resolved number in the target family.

        Returns:
            ``(display_value, unit_suffix)``.
        """
        config = self.config
        to_base = family_base(config.to_unit)
        value = resolved.value / config.to_unit_size

        power, value = rescale(resolved.scale.base, to_base, resolved.scale.power, value)
        power, value = normalize(to_base, power, value)
        suffix, value = self._emit(to_base, power, value)
        if not suffix:
            if config.rounding is not None:
                value = apply_rounding(value, config.rounding)
            return value, suffix

        policy = config.rounding or DEFAULT_ROUNDING
        rounded = round_to(value, policy, _display_digits(value))
        # Rounding can carry into the next tier: 999.6K -> 1000K -> 1.0M
        tier = to_base ** TIER_STEP[to_base]
        if abs(rounded) >= tier and power + TIER_STEP[to_base] <= MAX_POWER[to_base]:
            power += TIER_STEP[to_base]
            value /= tier
            suffix, value = self._emit(to_base, power, value)
            rounded = round_to(value, policy, _display_digits(value))
        return rounded, suffix

    def _emit(self, base: int, power: int, value: float) -> tuple[str, float]:
        suffix, remaining = emit_suffix(self.config.to_unit, base, power)
        if remaining:
            value *= base**remaining
        return suffix, value

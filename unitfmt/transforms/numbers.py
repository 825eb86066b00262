"""
Number extraction transform for unitfmt.

Splits one field into its leading numeral and trailing unit suffix:

  "1.5K"   -> (1.5, "K")
  "1,024"  -> (1024.0, "")
  "3,5Mi"  -> (3.5, "Mi")    with decimal_point=","

The numeral is the longest prefix made of digits, ``.`` and ``,``
(after the locale decimal point is normalized to ``.``), optionally led
by a single sign. Commas still present in the numeral are thousands
separators and are dropped before parsing.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from unitfmt.exceptions import ParseError

_NUMERAL_CHARS = frozenset("0123456789.,")


@dataclass(frozen=True)
class ParsedNumber:
    """A field split into its numeric value and unit suffix."""

    value: float
    suffix: str = ""


def strip_user_suffix(text: str, suffix: str) -> str:
    """Remove the configured ``--suffix`` literal from the end of *text*, if present."""
    if suffix and text.endswith(suffix):
        return text[: -len(suffix)]
    return text


def extract_number(text: str, decimal_point: str = ".") -> ParsedNumber:
    """Split *text* into a float and its trailing unit suffix.

    Args:
        text: Raw field text, e.g. ``"12.5Ki"``.
        decimal_point: The locale decimal-point character.

    Returns:
        ParsedNumber with the parsed value and the (possibly empty) suffix.

    Raises:
        ParseError: If the numeral is empty or not a finite float.
    """
    normalized = text.replace(decimal_point, ".") if decimal_point != "." else text

    end = 1 if normalized[:1] in ("+", "-") else 0
    while end < len(normalized) and normalized[end] in _NUMERAL_CHARS:
        end += 1
    numeral, suffix = normalized[:end], normalized[end:]

    try:
        value = float(numeral.replace(",", ""))
    except ValueError:
        raise ParseError(f"invalid number: '{text}'", field=text) from None
    if not math.isfinite(value):
        raise ParseError(f"number out of range: '{text}'", field=text)
    return ParsedNumber(value=value, suffix=suffix)

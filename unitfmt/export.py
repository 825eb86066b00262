"""
Exporter for unitfmt.

Turns a rendered number plus its unit suffix into the final field text:

1. **Grouping** (optional): thousands separators in the integer digits.
2. **Concatenation**: ``value + unit_suffix + user_suffix``.
3. **Padding**: right-align (width >= 0) or left-align (width < 0).
4. **printf override**: ``"<prefix>%<width>f<postfix>"`` supplies the
   width and literal text around the padded content.

Only the width-with-``f`` subset of printf is supported. Formats are
parsed by ``parse_printf`` when the configuration is built, so
``export_value`` never sees a malformed one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from unitfmt.exceptions import InvalidFormatError

if TYPE_CHECKING:
    from unitfmt.config import FormattingSpec

# Width token: a signed number; only its integer part sets the pad width
_WIDTH_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)")


@dataclass(frozen=True)
class PrintfFormat:
    """A parsed ``%<width>f`` format.

    Attributes:
        prefix: Literal text before the ``%``.
        width: Signed pad width; 0 when the format has no width.
        postfix: Literal text after the ``f``.
    """

    prefix: str
    width: int
    postfix: str


def parse_printf(fmt: str) -> PrintfFormat:
    """Parse a printf-style format such as ``"size: %-10f bytes"``.

    The directive runs from the first ``%`` to the next ``f``; the text
    between them is an optional signed width. A precision such as
    ``%10.2f`` is accepted, but only the integer part (``10``) is used.

    Raises:
        InvalidFormatError: If ``%`` or ``f`` is missing, or the width
            is not a number.
    """
    start = fmt.find("%")
    if start == -1:
        raise InvalidFormatError(f"Format '{fmt}' has no % directive")
    stop = fmt.find("f", start + 1)
    if stop == -1:
        raise InvalidFormatError(f"Format '{fmt}' ends in a directive with no 'f'")
    width_text = fmt[start + 1:stop]
    if width_text and not _WIDTH_RE.fullmatch(width_text):
        raise InvalidFormatError(
            f"Invalid width '{width_text}' in format '{fmt}'"
        )
    return PrintfFormat(
        prefix=fmt[:start],
        width=int(float(width_text)) if width_text else 0,
        postfix=fmt[stop + 1:],
    )


def group_digits(text: str) -> str:
    """Insert ``,`` between groups of three integer digits.

    The sign and any fractional part are carried through untouched:
    ``"-1234567.891"`` -> ``"-1,234,567.891"``.
    """
    sign = ""
    if text and text[0] in "+-":
        sign, text = text[0], text[1:]
    integer, dot, fraction = text.partition(".")

    # Leading group holds len % 3 digits, or a full group of three
    head = len(integer) % 3 or 3
    groups = [integer[:head]]
    for i in range(head, len(integer), 3):
        groups.append(integer[i:i + 3])
    return sign + ",".join(groups) + dot + fraction


def pad(content: str, width: int, suffix: str = "") -> str:
    """Pad *content* to ``abs(width)`` characters.

    The user *suffix* stays glued to the content and does not count
    towards the width. Content already at least as wide as the target
    is returned unchanged (plus the suffix).
    """
    fill = " " * max(0, abs(width) - len(content))
    if width >= 0:
        return f"{fill}{content}{suffix}"
    return f"{content}{suffix}{fill}"


def export_value(value: str, unit_suffix: str, spec: FormattingSpec) -> str:
    """Compose the final text of one converted field.

    Args:
        value: The rendered number, e.g. ``"1234.5"``.
        unit_suffix: Unit suffix from the emitter (``""``, ``"K"``, ``"Mi"``).
        spec: The formatting settings.

    Returns:
        The field text ready to be written, e.g. ``"   1,234K"``.
    """
    if spec.grouping:
        value = group_digits(value)
    content = value + unit_suffix

    printf = spec.printf
    if printf is not None:
        return printf.prefix + pad(content, printf.width, spec.suffix) + printf.postfix
    return pad(content, spec.padding, spec.suffix)


def format_number(value: float, digits: int | None = None) -> str:
    """Render a number as the decimal string the exporter works on.

    With *digits*, the value is shown with exactly that many decimals
    (``format_number(1.0, 1) == "1.0"``). Without, integral values drop
    the decimal point (``"42"``) and others use the shortest float form
    (``"2.5"``).
    """
    if value == 0:
        # Avoid "-0" / "-0.0"
        value = 0.0
    if digits is not None:
        return f"{value:.{digits}f}"
    if value.is_integer():
        return str(int(value))
    return repr(value)

"""
Custom exception hierarchy for unitfmt.

Why a custom hierarchy:
- Callers can catch specific exceptions (e.g., ParseError vs
  InvalidUnitError) without relying on generic ValueError/RuntimeError.
- The field router decides per ``InvalidMode`` what to do with a failed
  field; it only needs to catch ``ConversionError`` to tell a bad field
  apart from a programming error.
"""


class UnitfmtError(Exception):
    """Base exception for all unitfmt errors."""


class ConversionError(UnitfmtError):
    """Base class for failures raised while converting a single field.

    Carries the offending field text so diagnostics can quote it.
    """

    def __init__(self, message: str, field: str = "") -> None:
        super().__init__(message)
        self.field = field


class ParseError(ConversionError):
    """Raised when a field's numeral does not parse as a finite float.

    This includes fields with no numeral at all (e.g., ``"abc"``) and
    numerals with repeated decimal points (e.g., ``"1.2.3"``).
    """


class InvalidUnitError(ConversionError):
    """Raised when a unit suffix is not recognized by the requested family.

    Only raised when no source family was requested (``--from=none``):
    any suffix at all, such as the ``K`` in ``"1K"``, is rejected. The
    other families leave unknown suffixes unscaled.
    """


class InvalidFormatError(UnitfmtError):
    """Raised when a printf-style format string is malformed.

    Detected while the configuration is built, never at export time:
    - No ``%`` in the string.
    - No ``f`` after the ``%``.
    - A width token that is not a (signed) number.
    """


class ConfigValidationError(UnitfmtError):
    """Raised when a configuration value or file is unusable.

    This can happen if:
    - A field range such as ``"3-1"`` or ``"a-b"`` is malformed.
    - The YAML config file is empty.
    """


class OutputError(UnitfmtError):
    """Raised when writing formatted output fails.

    Only the CLI writes to streams, so the core never raises this.
    """

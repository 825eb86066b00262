"""
unitfmt: convert numbers to and from human-readable unit strings.

Works on individual fields of text lines, in the spirit of
``numfmt(1)``: ``1000`` <-> ``1.0K`` (SI), ``2048`` <-> ``2.0K`` (IEC),
``4096`` <-> ``4.0Ki`` (IEC-I).

Public API surface:

- ``convert(field, config=None, **options)`` -- convert a single field.
- ``format_line(line, config=None, **options)`` -- convert the selected
  fields of one line, leaving everything else untouched.
- ``format_lines(lines, config=None, **options)`` -- the same over many
  lines, honouring ``header``.
- ``convert_series(series, config)`` / ``convert_frame(df, config)`` --
  the same conversion over pandas columns.
- ``load_config(path)`` / ``save_config(config, path)`` -- YAML I/O for
  ``UnitfmtConfig``.

``options`` are ``UnitfmtConfig`` fields, used when no ``config`` is
given::

    >>> unitfmt.convert("1000", to="si")
    '1.0K'
    >>> unitfmt.format_line("a 1K b", fields="2", from_unit="iec")
    'a 1024 b'
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from unitfmt.config import (
    FormattingSpec,
    InvalidMode,
    RoundingPolicy,
    UnitFamily,
    UnitfmtConfig,
    load_config,
    save_config,
)
from unitfmt.exceptions import (
    ConfigValidationError,
    ConversionError,
    InvalidFormatError,
    InvalidUnitError,
    OutputError,
    ParseError,
    UnitfmtError,
)
from unitfmt.frame import convert_frame, convert_series
from unitfmt.router import FieldRouter
from unitfmt.transforms.pipeline import ConversionPipeline

__version__ = "0.1.0"

__all__ = [
    "convert",
    "format_line",
    "format_lines",
    "convert_series",
    "convert_frame",
    "load_config",
    "save_config",
    "UnitfmtConfig",
    "FormattingSpec",
    "UnitFamily",
    "RoundingPolicy",
    "InvalidMode",
    "UnitfmtError",
    "ConversionError",
    "ParseError",
    "InvalidUnitError",
    "InvalidFormatError",
    "ConfigValidationError",
    "OutputError",
]

logger = logging.getLogger(__name__)


def _resolve_config(config: UnitfmtConfig | None, options: dict[str, Any]) -> UnitfmtConfig:
    if config is not None:
        if options:
            raise TypeError("Pass either a config or keyword options, not both")
        return config
    return UnitfmtConfig.model_validate(options)


def convert(field: str, config: UnitfmtConfig | None = None, **options: Any) -> str:
    """Convert a single field.

    Raises:
        ParseError: If the field has no valid numeral.
        InvalidUnitError: If the field has a suffix but no source family is set.
    """
    return ConversionPipeline(_resolve_config(config, options)).convert(field)


def format_line(line: str, config: UnitfmtConfig | None = None, **options: Any) -> str:
    """Convert the selected fields of *line*; see ``FieldRouter.format_line``."""
    return FieldRouter(_resolve_config(config, options)).format_line(line)


def format_lines(
    lines: Iterable[str],
    config: UnitfmtConfig | None = None,
    **options: Any,
) -> Iterator[str]:
    """Convert many lines lazily, passing the first ``header`` lines through."""
    return FieldRouter(_resolve_config(config, options)).format_lines(lines)

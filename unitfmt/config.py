"""
Configuration models and YAML I/O for unitfmt.

This module defines the Pydantic models that hold the fully resolved
configuration handed to the conversion core, plus helpers for loading
and saving it as YAML.

Key models:
- UnitfmtConfig: Top-level config (units, rounding, formatting, routing).
- FormattingSpec: Grouping, padding, user suffix and printf format.
- FieldSelection: The set of 1-indexed field ranges to convert.

Key functions:
- parse_field_ranges(text) -> FieldSelection: Parse cut(1)-style ranges.
- load_config(path) -> UnitfmtConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.

Why Pydantic + YAML:
- Pydantic validates every option once, when the configuration is built,
  so malformed formats or ranges never reach the per-field pipeline.
- YAML lets users keep a reusable set of options next to their scripts.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from unitfmt.exceptions import ConfigValidationError
from unitfmt.export import PrintfFormat, parse_printf

logger = logging.getLogger(__name__)

# Upper bound used for open-ended field ranges such as "3-"
MAX_FIELD = 2**31 - 1


class UnitFamily(str, Enum):
    """Unit families understood by the resolver and the suffix emitter."""

    NONE = "none"
    SI = "si"
    IEC = "iec"
    IEC_I = "iec-i"
    AUTO = "auto"


class RoundingPolicy(str, Enum):
    """Rounding methods, named after the ``--round`` option values."""

    UP = "up"
    DOWN = "down"
    FROM_ZERO = "from-zero"
    TOWARDS_ZERO = "towards-zero"
    NEAREST = "nearest"


class InvalidMode(str, Enum):
    """What the field router does when a field fails to convert."""

    FAIL = "fail"
    WARN = "warn"
    IGNORE = "ignore"
    ABORT = "abort"


DEFAULT_ROUNDING = RoundingPolicy.FROM_ZERO


class FieldRange(BaseModel):
    """An inclusive, 1-indexed range of field positions."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(1, ge=1)
    end: int = Field(MAX_FIELD, ge=1)

    @model_validator(mode="after")
    def _check_order(self) -> FieldRange:
        if self.start > self.end:
            raise ValueError(
                f"Field range start ({self.start}) is after its end ({self.end})"
            )
        return self

    def __contains__(self, position: int) -> bool:
        return self.start <= position <= self.end


class FieldSelection(BaseModel):
    """Union of field ranges; a field is in scope if any range holds it."""

    model_config = ConfigDict(frozen=True)

    ranges: tuple[FieldRange, ...] = (FieldRange(start=1, end=1),)

    def __contains__(self, position: int) -> bool:
        return any(position in r for r in self.ranges)


def _parse_position(token: str, spec: str) -> int:
    if not token.isdigit():
        raise ConfigValidationError(f"Invalid field value: '{spec}'")
    position = int(token)
    if position < 1:
        raise ConfigValidationError(
            f"Fields are numbered from 1, got '{spec}'"
        )
    return position


def parse_field_range(spec: str) -> FieldRange:
    """Parse one cut(1)-style range.

    Forms: ``N`` (field N only), ``N-`` (N to end of line), ``-M``
    (1 to M), ``N-M``, and ``-`` (every field).

    Raises:
        ConfigValidationError: If the range is malformed or reversed.
    """
    spec = spec.strip()
    if not spec:
        raise ConfigValidationError("Empty field range")
    if "-" not in spec:
        position = _parse_position(spec, spec)
        return FieldRange(start=position, end=position)

    start_text, end_text = spec.split("-", 1)
    start = _parse_position(start_text, spec) if start_text else 1
    end = _parse_position(end_text, spec) if end_text else MAX_FIELD
    if start > end:
        raise ConfigValidationError(f"Invalid decreasing field range: '{spec}'")
    return FieldRange(start=start, end=end)


def parse_field_ranges(spec: str) -> FieldSelection:
    """Parse a comma-separated list of field ranges, e.g. ``"1,3-5,8-"``."""
    ranges = tuple(parse_field_range(part) for part in spec.split(","))
    return FieldSelection(ranges=ranges)


class FormattingSpec(BaseModel):
    """Output composition settings used by the exporter.

    ``padding`` sign controls alignment: non-negative right-aligns,
    negative left-aligns. A printf-style ``format`` takes priority over
    ``padding``; it is parsed here so malformed formats are rejected
    before any field is converted.
    """

    model_config = ConfigDict(frozen=True)

    grouping: bool = Field(False, description="Group integer digits by thousands")
    padding: int = Field(0, description="Pad output to this width (negative: left-align)")
    suffix: str = Field("", description="Literal appended to every converted field")
    format: str | None = Field(None, description="printf-style format, e.g. '%10f'")

    @field_validator("format")
    @classmethod
    def _check_format(cls, value: str | None) -> str | None:
        if value is not None:
            # Raises InvalidFormatError, which Pydantic lets propagate
            parse_printf(value)
        return value

    @property
    def printf(self) -> PrintfFormat | None:
        """The parsed printf format, or ``None`` when no format is set."""
        if self.format is None:
            return None
        return parse_printf(self.format)


class UnitfmtConfig(BaseModel):
    """Top-level configuration for unitfmt.

    Resolved once per process invocation and shared, read-only, by every
    line and field that is converted.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_unit: UnitFamily = Field(
        UnitFamily.NONE, alias="from", description="Unit family of input numbers"
    )
    to_unit: UnitFamily | None = Field(
        None, alias="to", description="Unit family to scale output to"
    )
    to_unit_size: float = Field(
        1.0, gt=0, description="Output unit size; values are divided by it"
    )
    rounding: RoundingPolicy | None = Field(
        None, description="Rounding method; unit-scaled output defaults to from-zero"
    )
    formatting: FormattingSpec = Field(default_factory=FormattingSpec)
    decimal_point: str = Field(".", min_length=1, max_length=1)
    delimiter: str | None = Field(
        None, min_length=1, max_length=1, description="Field delimiter (None = whitespace)"
    )
    fields: FieldSelection = Field(default_factory=FieldSelection)
    invalid: InvalidMode = InvalidMode.FAIL
    header: int = Field(0, ge=0, description="Header lines printed without conversion")
    zero_terminated: bool = Field(False, description="Records end with NUL, not newline")

    @field_validator("fields", mode="before")
    @classmethod
    def _parse_fields(cls, value: object) -> object:
        if isinstance(value, int):
            value = str(value)
        if isinstance(value, str):
            return parse_field_ranges(value)
        return value

    @field_validator("to_unit")
    @classmethod
    def _check_to_unit(cls, value: UnitFamily | None) -> UnitFamily | None:
        if value is UnitFamily.AUTO:
            raise ValueError("'auto' is only valid as a source unit family")
        if value is UnitFamily.NONE:
            return None
        return value


def load_config(path: str | Path) -> UnitfmtConfig:
    """Load and validate a YAML config file into a UnitfmtConfig.

    Field ranges may be written either as a string (``fields: "2-4"``)
    or as a list of ``{start, end}`` mappings.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty or a range is malformed.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    if not isinstance(raw, dict):
        raise ConfigValidationError(f"Config file must contain a mapping: {path}")
    if isinstance(raw.get("fields"), list):
        raw["fields"] = {"ranges": raw["fields"]}
    logger.info("Loaded config from %s", path)
    return UnitfmtConfig.model_validate(raw)


def save_config(config: UnitfmtConfig, path: str | Path) -> None:
    """Serialize a UnitfmtConfig to YAML.

    Writes a human-readable YAML file with a header comment. Field
    ranges are written as a list of ``{start, end}`` mappings.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json", by_alias=True)
    data["fields"] = data["fields"]["ranges"]
    with open(path, "w", encoding="utf-8") as f:
        f.write("# unitfmt configuration\n")
        f.write("# Command-line options override the values in this file.\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved config to %s", path)

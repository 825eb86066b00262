"""Typer command line for unitfmt: ``unitfmt [OPTIONS] [NUMBER]...``."""
import itertools
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional

import typer
from pydantic import ValidationError

from unitfmt import __version__
from unitfmt.config import InvalidMode, RoundingPolicy, UnitFamily, UnitfmtConfig, load_config, save_config
from unitfmt.exceptions import ConfigValidationError, ConversionError, InvalidFormatError, OutputError
from unitfmt.reader import read_records, write_records
from unitfmt.router import FieldRouter

__all__ = ["app", "run", "EXIT_CONVERSION_ERROR", "EXIT_NO_INPUT"]

EXIT_FAILURE = 1
EXIT_CONVERSION_ERROR = 2
# sysexits.h EX_NOINPUT
EXIT_NO_INPUT = 66

_EPILOG = """
UNIT options: none (suffixes are rejected), auto (1K = 1000, 1Ki = 1024),
si (1K = 1000), iec (1K = 1024), iec-i (1Ki = 1024).

FIELDS: N, N-, N-M, -M or -, several separated by commas.

Examples:

  unitfmt --to=si 1000          -> 1.0K

  unitfmt --to=iec 2048         -> 2.0K

  unitfmt --to=iec-i 4096       -> 4.0Ki

  echo 1K | unitfmt --from=si   -> 1000

  ls -l | unitfmt --header=1 --field=5 --to=iec
"""

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Convert numbers from/to human-readable strings.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"unitfmt {__version__}")
        raise typer.Exit()


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=True,
    )


def _fail(message: str, code: int) -> NoReturn:
    typer.echo(f"unitfmt: {message}", err=True)
    raise typer.Exit(code=code)


def build_config(base: Optional[UnitfmtConfig], overrides: Dict[str, Any], formatting: Dict[str, Any]) -> UnitfmtConfig:
    """Merge command-line values over *base* (or the defaults).

    ``None`` values mean "not given on the command line" and leave the
    base value in place.
    """
    data = base.model_dump() if base is not None else {}
    data.update({key: value for key, value in overrides.items() if value is not None})
    given_formatting = {key: value for key, value in formatting.items() if value is not None}
    if given_formatting:
        data["formatting"] = {**data.get("formatting", {}), **given_formatting}
    return UnitfmtConfig.model_validate(data)


@app.command(epilog=_EPILOG)
def main(
    numbers: Optional[List[str]] = typer.Argument(None, help="Numbers to convert; read from stdin if omitted"),
    from_unit: Optional[UnitFamily] = typer.Option(
        None, "--from", case_sensitive=False, help="Unit family of input numbers (default: none)"
    ),
    to_unit: Optional[UnitFamily] = typer.Option(
        None, "--to", case_sensitive=False, help="Auto-scale output numbers to this unit family"
    ),
    to_unit_size: Optional[float] = typer.Option(None, "--to-unit", help="Output unit size (default 1)"),
    rounding: Optional[RoundingPolicy] = typer.Option(
        None, "--round", case_sensitive=False, help="Rounding method (scaled output defaults to from-zero)"
    ),
    padding: Optional[int] = typer.Option(
        None, "--padding", help="Pad output to N characters; negative N left-aligns"
    ),
    fmt: Optional[str] = typer.Option(None, "--format", help="printf-style format with a width, e.g. '%10f'"),
    grouping: bool = typer.Option(False, "--grouping", help="Group digits by thousands, e.g. 1,000,000"),
    suffix: Optional[str] = typer.Option(
        None, "--suffix", help="Append SUFFIX to output numbers and accept it on input numbers"
    ),
    delimiter: Optional[str] = typer.Option(None, "-d", "--delimiter", help="Field delimiter (default: whitespace)"),
    fields: Optional[str] = typer.Option(None, "-f", "--field", help="Fields to convert (default 1, see FIELDS)"),
    header: Optional[int] = typer.Option(None, "--header", min=0, help="Print the first N lines unconverted"),
    invalid: Optional[InvalidMode] = typer.Option(
        None, "--invalid", case_sensitive=False, help="What to do with numbers that fail to convert"
    ),
    zero_terminated: bool = typer.Option(False, "-z", "--zero-terminated", help="Records end with NUL, not newline"),
    decimal_point: Optional[str] = typer.Option(None, "--decimal-point", help="Decimal-point character of input"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", exists=True, dir_okay=False, help="YAML config file with default options"
    ),
    write_config: Optional[Path] = typer.Option(
        None, "--write-config", dir_okay=False, help="Save the resolved options as YAML and exit"
    ),
    debug: bool = typer.Option(False, "--debug", help="Log how each number is interpreted"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """Convert numbers from/to human-readable strings."""
    _configure_logging(debug)

    try:
        base = load_config(config_path) if config_path is not None else None
        config = build_config(
            base,
            {
                "from_unit": from_unit,
                "to_unit": to_unit,
                "to_unit_size": to_unit_size,
                "rounding": rounding,
                "decimal_point": decimal_point,
                "delimiter": delimiter,
                "fields": fields,
                "invalid": invalid,
                "header": header,
                "zero_terminated": zero_terminated or None,
            },
            {
                "grouping": grouping or None,
                "padding": padding,
                "suffix": suffix,
                "format": fmt,
            },
        )
    except (ConfigValidationError, InvalidFormatError) as exc:
        _fail(str(exc), EXIT_FAILURE)
    except ValidationError as exc:
        _fail(f"invalid option: {exc}", EXIT_FAILURE)

    if write_config is not None:
        save_config(config, write_config)
        typer.echo(f"Saved config to {write_config}", err=True)
        raise typer.Exit()

    logger.debug("Resolved config: %s", config.model_dump_json())

    if numbers:
        records = iter(numbers)
    else:
        records = read_records(sys.stdin, zero_terminated=config.zero_terminated)
        first = next(records, None)
        if first is None:
            _fail("no numbers given on the command line or stdin", EXIT_NO_INPUT)
        records = itertools.chain([first], records)

    router = FieldRouter(config)
    try:
        write_records(router.format_lines(records), sys.stdout, zero_terminated=config.zero_terminated)
    except ConversionError as exc:
        sys.stdout.flush()
        _fail(str(exc), EXIT_CONVERSION_ERROR)
    except OutputError as exc:
        _fail(str(exc), EXIT_FAILURE)


def run() -> None:
    """Entry point for the ``unitfmt`` console script."""
    app()


if __name__ == "__main__":
    run()

"""
pandas adapter for unitfmt.

Applies the same per-field conversion to tabular data. A DataFrame row
plays the role of a line and the selected columns play the role of its
in-scope fields, so ``config.invalid`` keeps its meaning:

- ``fail``: the first bad cell raises.
- ``warn``: the error message replaces the cell (and is logged).
- ``ignore``: the bad cell becomes missing (``None``).
- ``abort``: the bad cell and the remaining selected cells of its row
  become missing.

Missing input cells (``NaN`` / ``None``) stay missing. Numeric cells
are rendered the way the exporter renders plain numbers before they are
parsed, so ``1024.0`` is read as ``"1024"``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import pandas as pd

from unitfmt.config import InvalidMode, UnitfmtConfig
from unitfmt.exceptions import ConversionError
from unitfmt.export import format_number
from unitfmt.transforms.pipeline import ConversionPipeline

logger = logging.getLogger(__name__)


def _cell_text(cell: object) -> str:
    if isinstance(cell, (int, float)) and not isinstance(cell, bool):
        return format_number(float(cell))
    return str(cell)


def convert_series(series: pd.Series, config: UnitfmtConfig) -> pd.Series:
    """Convert every cell of *series*, returning a new object-dtype Series.

    ``abort`` behaves like ``ignore`` here, since a Series holds a
    single field per row.

    Raises:
        ConversionError: On the first bad cell when ``config.invalid`` is ``fail``.
    """
    pipeline = ConversionPipeline(config)
    converted: list[object] = []
    for label, cell in series.items():
        if pd.isna(cell):
            converted.append(None)
            continue
        try:
            converted.append(pipeline.convert(_cell_text(cell)))
        except ConversionError as exc:
            if config.invalid is InvalidMode.FAIL:
                raise
            if config.invalid is InvalidMode.WARN:
                logger.warning("Row %r: %s", label, exc)
                converted.append(str(exc))
            else:
                converted.append(None)
    return pd.Series(converted, index=series.index, name=series.name, dtype=object)


def select_columns(df: pd.DataFrame, config: UnitfmtConfig) -> list[str]:
    """Columns whose 1-indexed positions are selected by ``config.fields``."""
    return [col for pos, col in enumerate(df.columns, start=1) if pos in config.fields]


def convert_frame(
    df: pd.DataFrame,
    config: UnitfmtConfig,
    columns: Sequence[str] | None = None,
) -> pd.DataFrame:
    """Convert the selected columns of *df*, row by row.

    Args:
        df: Input DataFrame. Not modified.
        config: The conversion configuration.
        columns: Columns to convert. Defaults to the columns at the
            positions selected by ``config.fields``.

    Returns:
        A copy of *df* with the selected columns converted to strings.

    Raises:
        KeyError: If a requested column is not in *df*.
        ConversionError: On the first bad cell when ``config.invalid`` is ``fail``.
    """
    if columns is None:
        columns = select_columns(df, config)
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise KeyError(f"Columns not found in DataFrame: {missing}")

    df = df.copy()
    if not columns:
        logger.warning("No columns selected for conversion")
        return df

    pipeline = ConversionPipeline(config)
    values = {col: df[col].astype(object).tolist() for col in columns}

    for row in range(len(df)):
        for i, col in enumerate(columns):
            cell = values[col][row]
            if pd.isna(cell):
                values[col][row] = None
                continue
            try:
                values[col][row] = pipeline.convert(_cell_text(cell))
            except ConversionError as exc:
                mode = config.invalid
                if mode is InvalidMode.FAIL:
                    raise
                if mode is InvalidMode.WARN:
                    logger.warning("Row %d, column %r: %s", row, col, exc)
                    values[col][row] = str(exc)
                elif mode is InvalidMode.IGNORE:
                    values[col][row] = None
                else:
                    for rest in columns[i:]:
                        values[rest][row] = None
                    break

    for col in columns:
        df[col] = pd.Series(values[col], index=df.index, dtype=object)
    logger.info("Converted %d column(s) x %d row(s)", len(columns), len(df))
    return df

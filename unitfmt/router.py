"""
Field router for unitfmt.

Walks the tokens of a line, counts content tokens as 1-indexed fields,
and sends the fields selected by ``config.fields`` through the
conversion pipeline. Delimiter runs and unselected fields are written
back unchanged.

When a selected field fails to convert, ``config.invalid`` decides what
happens next:

- ``fail``: the error propagates to the caller and the run stops.
- ``warn``: the error message replaces the field; the line continues.
- ``ignore``: the field is left out of the output; the line continues.
- ``abort``: the rest of the line, from the failed field on, is dropped
  together with the delimiter run in front of it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from unitfmt.config import InvalidMode, UnitfmtConfig
from unitfmt.exceptions import ConversionError
from unitfmt.transforms.pipeline import ConversionPipeline
from unitfmt.transforms.splitter import tokenize

logger = logging.getLogger(__name__)


class FieldRouter:
    """Applies the conversion pipeline to the selected fields of each line."""

    def __init__(self, config: UnitfmtConfig) -> None:
        self.config = config
        self.pipeline = ConversionPipeline(config)

    def format_line(self, line: str) -> str:
        """Convert the selected fields of one line.

        Raises:
            ConversionError: Only when ``config.invalid`` is ``fail``.
        """
        out: list[str] = []
        position = 0

        for index, token in enumerate(tokenize(line, self.config.delimiter)):
            if token.is_delimiter:
                out.append(token.text)
                continue
            position += 1
            if position not in self.config.fields:
                out.append(token.text)
                continue

            try:
                out.append(self.pipeline.convert(token.text))
            except ConversionError as exc:
                mode = self.config.invalid
                if mode is InvalidMode.FAIL:
                    raise
                if mode is InvalidMode.WARN:
                    logger.warning("Field %d: %s", position, exc)
                    out.append(str(exc))
                elif mode is InvalidMode.IGNORE:
                    logger.debug("Field %d ignored: %s", position, exc)
                else:
                    logger.debug("Field %d: %s -- dropping rest of line", position, exc)
                    if index > 0:
                        # Tokens alternate, so the last one kept is the delimiter run
                        out.pop()
                    break

        return "".join(out)

    def format_lines(self, lines: Iterable[str]) -> Iterator[str]:
        """Convert a sequence of lines, passing ``config.header`` lines through."""
        count = 0
        for count, line in enumerate(lines, start=1):
            if count <= self.config.header:
                yield line
            else:
                yield self.format_line(line)
        logger.info("Formatted %d line(s)", count)

"""
Record I/O for unitfmt.

Frames raw input into records and writes formatted records back out.
Records end with a newline, or with NUL in ``zero_terminated`` mode. A
trailing terminator does not start an extra empty record, and a final
record without a terminator is still returned.

This module is the only place that touches streams; the conversion
core works purely on strings.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import TextIO

from unitfmt.exceptions import OutputError

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


def record_terminator(zero_terminated: bool = False) -> str:
    return "\0" if zero_terminated else "\n"


def split_records(data: str, zero_terminated: bool = False) -> list[str]:
    """Split a block of text into records."""
    if not data:
        return []
    records = data.split(record_terminator(zero_terminated))
    if records[-1] == "":
        records.pop()
    return records


def read_records(stream: TextIO, zero_terminated: bool = False) -> Iterator[str]:
    """Yield records from *stream* one at a time.

    The stream is read in chunks, so large inputs are never held in
    memory at once.
    """
    terminator = record_terminator(zero_terminated)
    pending = ""
    while True:
        chunk = stream.read(_CHUNK_SIZE)
        if not chunk:
            break
        pending += chunk
        *complete, pending = pending.split(terminator)
        yield from complete
    if pending:
        yield pending


def write_records(
    records: Iterable[str],
    stream: TextIO,
    zero_terminated: bool = False,
) -> int:
    """Write each record followed by its terminator.

    Returns:
        Number of records written.

    Raises:
        OutputError: If the stream cannot be written to.
    """
    terminator = record_terminator(zero_terminated)
    written = 0
    try:
        for record in records:
            stream.write(record + terminator)
            written += 1
        stream.flush()
    except OSError as exc:
        raise OutputError(f"Failed to write output: {exc}") from exc
    logger.debug("Wrote %d record(s)", written)
    return written

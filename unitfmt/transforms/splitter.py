"""
Line tokenizer for unitfmt.

Splits a line into alternating content and delimiter-run tokens so the
field router can convert some fields and write everything else back
byte-for-byte:

  "a  10 b"  ->  ["a", "  ", "10", " ", "b"]

A run of consecutive delimiter characters is a single token, so it
separates exactly two fields. With no explicit delimiter, any
whitespace character delimits.

This is a two-state scanner (inside content / inside a delimiter run)
rather than a regular expression.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Token:
    """A slice of a line: either field content or a delimiter run."""

    text: str
    is_delimiter: bool = False


def _is_delimiter(char: str, delimiter: str | None) -> bool:
    if delimiter is None:
        return char.isspace()
    return char == delimiter


def tokenize(line: str, delimiter: str | None = None) -> list[Token]:
    """Split *line* into content and delimiter-run tokens.

    Joining the ``text`` of the returned tokens gives back *line*.

    Args:
        line: One input record, without its terminator.
        delimiter: Single delimiter character, or ``None`` for whitespace.

    Returns:
        Tokens in line order; empty for an empty line.
    """
    tokens: list[Token] = []
    start = 0
    in_delimiter: bool | None = None

    for i, char in enumerate(line):
        state = _is_delimiter(char, delimiter)
        if in_delimiter is None:
            in_delimiter = state
        elif state != in_delimiter:
            tokens.append(Token(line[start:i], in_delimiter))
            start = i
            in_delimiter = state

    if line:
        tokens.append(Token(line[start:], bool(in_delimiter)))
    return tokens

"""Shell-style tokenizer for command text.

Quoting follows the shell loosely: single and double quotes group words,
a backslash escapes the next character (the backslash itself is kept in the
token value), and a backslash at the end of a line joins the next line onto
the current command. Unterminated quotes are not an error here; the scanner
just runs to the end of the input.
"""

import logging
from collections.abc import Iterator

from .base import Token

logger = logging.getLogger(__name__)

SEPARATORS = " \t\r"

# (value, row, column, end_row, end_column)
_Span = tuple[str, int, int, int, int]


def _is_line_break(text: str, index: int) -> bool:
    return text.startswith("\n", index) or text.startswith("\r\n", index)


def _scan(text: str) -> Iterator[_Span]:
    row = col = 0
    chars: list[str] = []
    start: tuple[int, int] | None = None
    in_single = in_double = escaped = False

    i = 0
    while i < len(text):
        ch = text[i]
        quoted = in_single or in_double

        if escaped:
            escaped = False
            chars.append(ch)
        elif ch == "\\" and not quoted and _is_line_break(text, i + 1):
            # Line continuation: drop the backslash and the line break.
            i += 2 if text[i + 1] == "\n" else 3
            row += 1
            col = 0
            continue
        elif ch == "\n" and not quoted:
            if chars:
                yield ("".join(chars), *start, row, col)
            chars, start = [], None
        elif ch == "\\" and not in_single:
            escaped = True
            if start is None:
                start = (row, col)
            chars.append(ch)
        elif ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch in SEPARATORS and not quoted:
            if chars:
                yield ("".join(chars), *start, row, col)
            chars, start = [], None
        else:
            if start is None:
                start = (row, col)
            chars.append(ch)

        if ch == "\n":
            row += 1
            col = 0
        else:
            col += 1
        i += 1

    if chars:
        yield ("".join(chars), *start, row, col)


def tokenize_with_positions(text: str) -> list[Token]:
    """Split command text into tokens carrying their source range.

    A token's range starts at the first character appended to its value (an
    opening quote is skipped, a leading escape backslash is not) and ends
    where the token is flushed, so a closing quote is included. Coordinates
    are zero-based rows and columns of the raw text, continuation lines
    included.
    """
    tokens = [
        Token(value=value, row=row, column=column, end_row=end_row, end_column=end_column)
        for value, row, column, end_row, end_column in _scan(text)
    ]
    logger.debug("tokenized %d characters into %d tokens", len(text), len(tokens))
    return tokens


def tokenize(text: str) -> list[str]:
    """Split command text into token values only."""
    return [span[0] for span in _scan(text)]

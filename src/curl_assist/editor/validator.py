"""Validates curl command text and reports positioned diagnostics for the editor.

Two independent passes run over the raw text: a quote-balance scan and a
token scan that checks flags, their values, methods, header syntax and the
presence of a URL. Nothing here raises for bad input; every problem becomes
a Diagnostic.
"""

import logging
from typing import Literal

from pydantic import BaseModel

from curl_assist.parser.base import Token
from curl_assist.parser.curl import is_url
from curl_assist.parser.tokenizer import tokenize_with_positions
from curl_assist.reference.tables import ALL_FLAGS, ALL_METHODS, FLAGS_REQUIRING_VALUE, HTTP_METHODS, KNOWN_FLAGS

logger = logging.getLogger(__name__)

SIMILARITY_THRESHOLD = 0.5

MISSING_URL = "Missing URL. A cURL command needs a URL."


class Diagnostic(BaseModel):
    """One error or warning anchored to a range of the source text."""

    row: int
    column: int
    end_row: int
    end_column: int
    text: str
    kind: Literal["error", "warning"] = "error"

    @classmethod
    def at(cls, token: Token, text: str, kind: str = "error") -> "Diagnostic":
        return cls(
            row=token.row,
            column=token.column,
            end_row=token.end_row,
            end_column=token.end_column,
            text=text,
            kind=kind,
        )


def check_unclosed_quotes(text: str) -> list[Diagnostic]:
    """Report quotes still open at the end of the input.

    Quote state carries across lines. A backslash escapes the next character
    except inside single quotes, where it is literal.

    Returns one error per unclosed quote kind, anchored at its opening quote.
    """
    errors = []
    row = col = 0
    single_start: tuple[int, int] | None = None
    double_start: tuple[int, int] | None = None
    escaped = False

    for ch in text:
        if escaped:
            escaped = False
        elif ch == "\\" and single_start is None:
            escaped = True
        elif ch == "'" and double_start is None:
            single_start = None if single_start is not None else (row, col)
        elif ch == '"' and single_start is None:
            double_start = None if double_start is not None else (row, col)

        if ch == "\n":
            row += 1
            col = 0
        else:
            col += 1

    for start, label in ((single_start, "single"), (double_start, "double")):
        if start is not None:
            errors.append(Diagnostic(
                row=start[0],
                column=start[1],
                end_row=start[0],
                end_column=start[1] + 1,
                text=f"Unclosed {label} quote",
            ))
    return errors


def similarity(first: str, second: str) -> float:
    """Bigram Dice coefficient between two strings, from 0.0 to 1.0."""
    if first == second:
        return 1.0
    if len(first) < 2 or len(second) < 2:
        return 0.0

    bigrams = {first[i:i + 2] for i in range(len(first) - 1)}
    matches = sum(1 for i in range(len(second) - 1) if second[i:i + 2] in bigrams)
    return (2 * matches) / (len(first) + len(second) - 2)


def find_similar_flag(flag: str, threshold: float = SIMILARITY_THRESHOLD) -> str | None:
    """Return the known flag closest to ``flag`` if it scores above ``threshold``."""
    lowered = flag.lower()
    best_match = None
    best_score = 0.0
    for candidate in ALL_FLAGS:
        score = similarity(lowered, candidate.lower())
        if score > best_score and score > threshold:
            best_score = score
            best_match = candidate
    return best_match


def validate_curl(text: str | None, threshold: float = SIMILARITY_THRESHOLD) -> list[Diagnostic]:
    """Check curl command text for problems an editor should underline.

    Returns diagnostics in scan order: unclosed quotes first, then token
    problems, then a missing-URL error if no URL was found.
    """
    if not text or not text.strip():
        return []

    diagnostics = check_unclosed_quotes(text)
    tokens = tokenize_with_positions(text)

    has_url = False
    i = 0
    while i < len(tokens):
        token = tokens[i]
        value = token.value

        if value.lower() == "curl":
            i += 1
            continue

        if is_url(value):
            has_url = True
            i += 1
            continue

        if not value.startswith("-"):
            # Stray words are tolerated, same as the parser.
            i += 1
            continue

        if value not in KNOWN_FLAGS:
            suggestion = find_similar_flag(value, threshold)
            message = f'Unknown flag "{value}"'
            if suggestion:
                message += f'. Did you mean "{suggestion}"?'
            diagnostics.append(Diagnostic.at(token, message))
            i += 1
            continue

        if value not in FLAGS_REQUIRING_VALUE:
            i += 1
            continue

        if i + 1 >= len(tokens) or tokens[i + 1].value.startswith("-"):
            diagnostics.append(Diagnostic.at(token, f'Flag "{value}" requires a value'))
            i += 1
            continue

        argument = tokens[i + 1]
        if value in ("-X", "--request") and argument.value.upper() not in HTTP_METHODS:
            diagnostics.append(Diagnostic.at(
                argument,
                f'Invalid HTTP method "{argument.value}". Valid: {", ".join(ALL_METHODS)}',
            ))
        elif value in ("-H", "--header") and ":" not in argument.value:
            diagnostics.append(Diagnostic.at(
                argument,
                'Header should be "Name: Value" format (missing colon)',
                kind="warning",
            ))
        i += 2

    if not has_url and tokens:
        anchor = next((t for t in tokens if t.value.lower() != "curl"), tokens[0])
        diagnostics.append(Diagnostic.at(anchor, MISSING_URL))

    logger.debug("validated %d tokens: %d diagnostics", len(tokens), len(diagnostics))
    return diagnostics

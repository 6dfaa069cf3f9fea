"""Context-aware completions for curl command text.

The text before the cursor on the current line decides what is being typed:
a ``{{variable}}``, a method after -X, a header after -H, a flag, or nothing
in particular. The first matching rule wins.
"""

import logging
import re

from pydantic import BaseModel

from curl_assist.env import EnvironmentStore
from curl_assist.exceptions import CurlAssistError
from curl_assist.reference.tables import FLAG_ENTRIES, HEADER_ENTRIES, METHOD_ENTRIES

logger = logging.getLogger(__name__)

VARIABLE_SCORE = 500
PREVIEW_LENGTH = 30

# Evaluated in order; the first pattern that matches the text before the cursor wins.
CONTEXT_RULES = (
    ("variable", re.compile(r"\{\{[^}]*$")),
    ("method", re.compile(r"(?:-X|--request)\s*$")),
    ("header", re.compile(r"(?:-H|--header)\s*['\"]?$")),
    ("flag", re.compile(r"(?:^|\s)-[a-zA-Z-]*$")),
    ("general", re.compile(r"(?:^\s*|\s)$")),
)

PREFIX_PATTERN = re.compile(r"[a-zA-Z_0-9\-{]*$")


class Suggestion(BaseModel):
    """One entry of the autocomplete popup."""

    caption: str
    value: str
    kind: str
    description: str = ""
    score: int = 0


def detect_context(line: str, column: int) -> str | None:
    """Classify what is being typed at ``column`` of ``line``; None if nothing matches."""
    before = line[:column]
    for name, pattern in CONTEXT_RULES:
        if pattern.search(before):
            return name
    return None


def current_prefix(line: str, column: int) -> str:
    """The identifier fragment just before the cursor, as an editor would report it."""
    return PREFIX_PATTERN.search(line[:column]).group(0)


def variable_suggestions(store: EnvironmentStore | None, preview_length: int = PREVIEW_LENGTH) -> list[Suggestion]:
    """Suggest the active environment's enabled variables.

    A store signals that it is not available by raising CurlAssistError
    (``EnvironmentStore.from_file`` does so while its file cannot be loaded);
    that yields no suggestions instead of failing the completion.
    """
    if store is None:
        return []
    try:
        variables = store.active_variables()
    except CurlAssistError:
        logger.debug("environment store unavailable; no variable suggestions")
        return []

    suggestions = []
    for variable in variables:
        preview = variable.value or "empty"
        if len(preview) > preview_length:
            preview = preview[:preview_length] + "..."
        reference = f"{{{{{variable.key}}}}}"
        suggestions.append(Suggestion(
            caption=reference,
            value=reference,
            kind="variable",
            description=preview,
            score=VARIABLE_SCORE,
        ))
    return suggestions


def _ranked(entries, top: int, value_suffix: str = "") -> list[Suggestion]:
    return [
        Suggestion(
            caption=caption,
            value=caption + value_suffix,
            kind=kind,
            description=description,
            score=top - i,
        )
        for i, (caption, kind, description) in enumerate(entries)
    ]


def _method_suggestions(store, prefix):
    return _ranked(METHOD_ENTRIES, 1000)


def _header_suggestions(store, prefix):
    return _ranked(HEADER_ENTRIES, 1000)


def _flag_suggestions(store, prefix):
    wanted = prefix.lower()
    matching = [entry for entry in FLAG_ENTRIES if entry[0].lower().startswith(wanted)]
    return _ranked(matching, 900, value_suffix=" ")


def _general_suggestions(store, prefix):
    return _ranked(METHOD_ENTRIES, 800) + _ranked(FLAG_ENTRIES[:10], 700, value_suffix=" ")


HANDLERS = {
    "variable": lambda store, prefix: variable_suggestions(store),
    "method": _method_suggestions,
    "header": _header_suggestions,
    "flag": _flag_suggestions,
    "general": _general_suggestions,
}


def get_completions(
    text: str,
    row: int,
    column: int,
    prefix: str | None = None,
    store: EnvironmentStore | None = None,
) -> list[Suggestion]:
    """Return ranked suggestions for the cursor at (row, column) of ``text``.

    Only the current line up to the cursor is considered. ``prefix`` is the
    fragment the editor will replace; when omitted it is taken from the text
    before the cursor. The store is read, never modified.
    """
    lines = (text or "").split("\n")
    line = lines[row].rstrip("\r") if 0 <= row < len(lines) else ""
    column = max(0, min(column, len(line)))
    if prefix is None:
        prefix = current_prefix(line, column)

    context = detect_context(line, column)
    logger.debug("completion context at %d:%d is %s", row, column, context)
    if context is None:
        return []
    return HANDLERS[context](store, prefix)


def doc_tooltip(suggestion: Suggestion) -> dict | None:
    """Tooltip content for a suggestion, or None when it has no description."""
    if not suggestion.description:
        return None
    return {"caption": suggestion.caption, "description": suggestion.description}

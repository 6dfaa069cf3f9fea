"""Syntax classification of curl command text for editor highlighting.

Each line is scanned left to right; at every position the rules of the
current state are tried in order and the first match wins. Quoted strings
can span lines, so the state carries over from one line to the next.
"""

import re

from pydantic import BaseModel


class Span(BaseModel):
    row: int
    start: int
    end: int
    kind: str  # variable / method / flag / url / string / header / number / escape / continuation / comment / text
    value: str


VARIABLE = ("variable", re.compile(r"\{\{[^}]+\}\}"))
ESCAPE = ("escape", re.compile(r"\\."))

# (kind, pattern, next state)
RULES = {
    "start": (
        (*VARIABLE, None),
        ("method", re.compile(r"\b(?:GET|POST|PUT|PATCH|DELETE|HEAD|OPTIONS|CONNECT|TRACE)\b"), None),
        ("flag", re.compile(r"--[a-z][a-z0-9-]*"), None),
        ("flag", re.compile(r"-[A-Za-z]\b"), None),
        ("url", re.compile(r"https?://[^\s'\"]+"), None),
        ("string", re.compile(r'"'), "double"),
        ("string", re.compile(r"'"), "single"),
        ("header", re.compile(r"[A-Za-z][A-Za-z0-9-]*(?=\s*:)"), None),
        ("number", re.compile(r"\b\d+\b"), None),
        ("continuation", re.compile(r"\\$"), None),
        ("comment", re.compile(r"#.*"), None),
    ),
    "double": (
        (*VARIABLE, None),
        (*ESCAPE, None),
        ("string", re.compile(r'"'), "start"),
    ),
    "single": (
        (*VARIABLE, None),
        (*ESCAPE, None),
        ("string", re.compile(r"'"), "start"),
    ),
}

DEFAULT_KIND = {"start": "text", "double": "string", "single": "string"}


def highlight_line(line: str, row: int = 0, state: str = "start") -> tuple[list[Span], str]:
    """Classify one line; returns its spans and the state the next line starts in."""
    spans: list[Span] = []
    pos = 0
    while pos < len(line):
        for kind, pattern, next_state in RULES[state]:
            match = pattern.match(line, pos)
            if match and match.end() > pos:
                _append(spans, row, pos, match.end(), kind, line, merge=False)
                pos = match.end()
                if next_state:
                    state = next_state
                break
        else:
            _append(spans, row, pos, pos + 1, DEFAULT_KIND[state], line, merge=True)
            pos += 1
    return spans, state


def highlight(text: str) -> list[Span]:
    """Classify every line of ``text``."""
    spans: list[Span] = []
    state = "start"
    for row, line in enumerate((text or "").split("\n")):
        line_spans, state = highlight_line(line.rstrip("\r"), row, state)
        spans.extend(line_spans)
    return spans


def _append(spans: list[Span], row: int, start: int, end: int, kind: str, line: str, merge: bool) -> None:
    previous = spans[-1] if spans else None
    if merge and previous is not None and previous.kind == kind and previous.end == start:
        previous.end = end
        previous.value = line[previous.start:end]
        return
    spans.append(Span(row=row, start=start, end=end, kind=kind, value=line[start:end]))

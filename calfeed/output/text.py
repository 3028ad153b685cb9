"""RFC 5545 TEXT escaping and content-line folding."""

import re
from typing import Iterable

from calfeed.constants import CRLF, MAX_LINE_OCTETS

FOLD_SEPARATOR = CRLF + " "

# Properties whose values are free text and must be escaped
TEXT_PROPERTIES = frozenset({"SUMMARY", "DESCRIPTION", "LOCATION"})

_ESCAPED = re.compile(r"\\(.)", re.DOTALL)
_UNESCAPES = {"\\": "\\", ",": ",", ";": ";", "n": "\n", "N": "\n"}


def escape_text(value: str) -> str:
    """Escape a TEXT value.

    Order matters: backslashes first so the escapes added afterwards are
    not escaped again. Bare carriage returns are dropped.
    """
    return (
        value.replace("\\", "\\\\")
        .replace(",", "\\,")
        .replace(";", "\\;")
        .replace("\r\n", "\n")
        .replace("\r", "")
        .replace("\n", "\\n")
    )


def unescape_text(value: str) -> str:
    """Reverse :func:`escape_text` in a single pass."""

    def _replace(match: re.Match) -> str:
        char = match.group(1)
        return _UNESCAPES.get(char, char)

    return _ESCAPED.sub(_replace, value)


def fold_line(line: str, limit: int = MAX_LINE_OCTETS) -> str:
    """Fold one content line so no physical line exceeds ``limit`` octets.

    Continuation lines start with a single space, which counts toward
    the limit. Multi-byte UTF-8 characters are never split.
    """
    if "\r" in line or "\n" in line:
        raise ValueError("Content line must not contain line breaks")
    if len(line.encode("utf-8")) <= limit:
        return line

    segments = []
    current = []
    budget = limit
    used = 0
    for char in line:
        size = len(char.encode("utf-8"))
        if used + size > budget:
            segments.append("".join(current))
            current = []
            used = 0
            budget = limit - 1  # leading space of the continuation line
        current.append(char)
        used += size
    segments.append("".join(current))
    return FOLD_SEPARATOR.join(segments)


def unfold_lines(text: str) -> list[str]:
    """Split a document into logical content lines, undoing folding."""
    unfolded = re.sub(r"\r?\n[ \t]", "", text)
    return [line for line in re.split(r"\r?\n", unfolded) if line]


def content_line(name: str, value: str, params: str = "") -> str:
    """Build an unfolded content line, escaping free-text properties."""
    if name.upper() in TEXT_PROPERTIES:
        value = escape_text(value)
    prefix = f"{name};{params}" if params else name
    return f"{prefix}:{value}"


def join_lines(lines: Iterable[str]) -> str:
    """Fold every line independently and join with CRLF, trailing CRLF included."""
    return "".join(fold_line(line) + CRLF for line in lines)

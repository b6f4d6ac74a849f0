"""Infer a chapter's display title from its translated text."""

import re
from typing import Optional

# Only the head of a translation can hold the title line
MAX_TITLE_LINES = 3

# Ordered: the first pattern to match wins
_TITLE_PATTERNS = [
    re.compile(r"^Chapter\s+\d+[:\-\s](.+)$", re.IGNORECASE),
    re.compile(r"^第\d+章[:\-\s](.+)$"),
    re.compile(r"^Ch\.\s*\d+[:\-\s](.+)$", re.IGNORECASE),
    re.compile(r"^\d+[:\-\s](.+)$"),
]

# Fallback heuristic: short line starting with A-Z, a digit or the 第 marker
_TITLE_LIKE_RE = re.compile(r"^[A-Z0-9第]")
_MIN_TITLE_LEN = 6
_MAX_TITLE_LEN = 99


def _head_lines(text: str, limit: int = MAX_TITLE_LINES) -> list[str]:
    """Return up to ``limit`` stripped, non-blank lines from the start of text."""
    lines = []
    for line in text.splitlines():
        line = line.strip()
        if line:
            lines.append(line)
            if len(lines) >= limit:
                break
    return lines


def _looks_like_title(line: str) -> bool:
    return _MIN_TITLE_LEN <= len(line) <= _MAX_TITLE_LEN and bool(_TITLE_LIKE_RE.match(line))


def extract_chapter_title(translation: str) -> Optional[str]:
    """Return the most likely title line of a translated chapter, or None.

    The first three non-blank lines are checked against the known
    chapter-heading patterns ("Chapter 12: ...", "第12章 ...", "Ch. 12: ...",
    "12: ..."); the whole matching line is returned, not just the captured
    title. When no line matches, the first of those lines that is 6-99
    characters long and starts with an uppercase letter, a digit or 第 is
    used instead.

    None means no title could be inferred; it is never returned as "".
    """
    if not translation:
        return None

    lines = _head_lines(translation)

    for line in lines:
        for pattern in _TITLE_PATTERNS:
            if pattern.match(line):
                return line

    for line in lines:
        if _looks_like_title(line):
            return line

    return None


def split_manual_translation(text: str) -> tuple[str, str]:
    """Split a hand-written translation into (title, body).

    The first non-blank line is the title; the remaining non-blank lines,
    joined with newlines, are the body. Either part may be "".
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return "", ""
    title = lines[0].strip()
    body = "\n".join(lines[1:]).strip()
    return title, body

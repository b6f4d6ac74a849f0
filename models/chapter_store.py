"""Locate and remove chapters inside a novel's chapter list by chapter number.

Chapters are addressed from the outside by their 1-based ``chapter_number``
label. A stored chapter list is expected to be in ascending, gap-free order
so that label ``n`` lives at offset ``n - 1``; that position is tried first
and confirmed against the stored label. Lists that break the invariant
(gaps after deletion, reordered scrapes) fall back to a label lookup, so a
write never lands on a chapter with a different label.
"""

import logging
import re
from typing import Iterable

from config.exceptions import ChapterNotFoundError, InvalidChapterNumberError
from models.chapter import Chapter

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"[0-9]+")


def parse_chapter_number(chapter_number: str) -> int:
    """Parse a chapter label as a positive integer.

    Raises:
        InvalidChapterNumberError: label is not a plain integer >= 1.
    """
    text = str(chapter_number).strip()
    if not _NUMBER_RE.fullmatch(text):
        raise InvalidChapterNumberError(chapter_number)
    number = int(text)
    if number < 1:
        raise InvalidChapterNumberError(chapter_number)
    return number


def resolve_chapter_offset(chapters: list[Chapter], chapter_number: str) -> int:
    """Return the list offset of the chapter labelled ``chapter_number``.

    Raises:
        InvalidChapterNumberError: label does not parse.
        ChapterNotFoundError: no chapter in the list carries the label.
    """
    label = str(chapter_number).strip()
    offset = parse_chapter_number(label) - 1
    if offset < len(chapters) and chapters[offset].chapter_number == label:
        return offset

    logger.debug(
        "Chapter %s not at offset %d of %d, falling back to lookup",
        label, offset, len(chapters),
    )
    for i, ch in enumerate(chapters):
        if ch.chapter_number == label:
            return i
    raise ChapterNotFoundError(label)


def remove_chapters(chapters: list[Chapter], chapter_numbers: Iterable[str]) -> list[Chapter]:
    """Return ``chapters`` without every entry whose label is in ``chapter_numbers``.

    Matching is by label equality, not position; order is preserved and an
    empty selection returns an equal list.
    """
    excluded = {str(n) for n in chapter_numbers}
    return [ch for ch in chapters if ch.chapter_number not in excluded]


def sort_chapters(chapters: list[Chapter], descending: bool = False) -> list[Chapter]:
    """Return chapters ordered by numeric label; non-numeric labels sort last."""
    def key(ch: Chapter):
        text = ch.chapter_number.strip()
        return (0, int(text)) if _NUMBER_RE.fullmatch(text) else (1, 0)

    ordered = sorted(chapters, key=key)
    if descending:
        ordered.reverse()
    return ordered

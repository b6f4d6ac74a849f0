"""Reconcile a fresh scrape of a novel against the stored chapter list."""

from models.chapter import Chapter


def find_new_chapters(stored: list[Chapter], fresh: list[Chapter]) -> list[Chapter]:
    """Return the chapters of ``fresh`` whose chapter number is not yet stored.

    Identity is the ``chapter_number`` label only; stored chapters are never
    compared field by field. The result keeps the scraped order.
    """
    known = {ch.chapter_number for ch in stored}
    return [ch for ch in fresh if ch.chapter_number not in known]


def append_new_chapters(stored: list[Chapter], fresh: list[Chapter]) -> tuple[list[Chapter], int]:
    """Return (stored + unseen fresh chapters, number appended).

    The stored chapters keep their position and content; sync only appends.
    """
    new_chapters = find_new_chapters(stored, fresh)
    return list(stored) + new_chapters, len(new_chapters)

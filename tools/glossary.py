"""Glossary helpers: merging translation results and searching terms."""

from typing import Optional


def merge_glossary(
    current: Optional[dict[str, str]],
    fresh: Optional[dict[str, str]],
) -> dict[str, str]:
    """Overlay ``fresh`` terms on ``current``; fresh values win on collision.

    Neither input is modified. Existing key order is kept and new keys are
    appended in the order the translation service returned them.
    """
    merged = dict(current or {})
    merged.update(fresh or {})
    return merged


def search_glossary(glossary: Optional[dict[str, str]], query: str = "") -> list[tuple[str, str]]:
    """Return (source, target) pairs where either side contains ``query``.

    Matching is a case-insensitive substring test; an empty query returns
    every entry.
    """
    entries = list((glossary or {}).items())
    needle = query.strip().lower()
    if not needle:
        return entries
    return [
        (source, target) for source, target in entries
        if needle in source.lower() or needle in target.lower()
    ]

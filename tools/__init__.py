"""Tools package: title extraction, glossary merging, and chapter sync."""

from tools.title_extractor import extract_chapter_title, split_manual_translation
from tools.glossary import merge_glossary, search_glossary
from tools.novel_sync import find_new_chapters, append_new_chapters

__all__ = [
    "extract_chapter_title",
    "split_manual_translation",
    "merge_glossary",
    "search_glossary",
    "find_new_chapters",
    "append_new_chapters",
]

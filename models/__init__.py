"""Models package: database, data models, and chapter lookup."""

from models.database import Database
from models.novel import Novel, LibraryStats, ChapterView
from models.chapter import Chapter
from models.chapter_store import (
    parse_chapter_number,
    resolve_chapter_offset,
    remove_chapters,
    sort_chapters,
)

__all__ = [
    "Database",
    "Novel",
    "LibraryStats",
    "ChapterView",
    "Chapter",
    "parse_chapter_number",
    "resolve_chapter_offset",
    "remove_chapters",
    "sort_chapters",
]

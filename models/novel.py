"""Novel data model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from models.chapter import Chapter


@dataclass
class Novel:
    """A scraped novel with its chapter list and translation glossary."""
    id: Optional[int] = None
    title: str = ""
    author: str = ""
    cover_img: str = ""
    chapters: list[Chapter] = field(default_factory=list)
    glossary: dict[str, str] = field(default_factory=dict)
    source_url: Optional[str] = None  # None = sync disabled
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def translated_count(self) -> int:
        return sum(1 for ch in self.chapters if ch.is_translated)

    @property
    def translation_progress(self) -> float:
        """Percentage of chapters with a translation (0-100)."""
        if not self.chapters:
            return 0.0
        return self.translated_count / len(self.chapters) * 100


@dataclass
class LibraryStats:
    """Aggregate numbers across the whole library."""
    total_novels: int = 0
    total_chapters: int = 0
    translated_chapters: int = 0
    recently_added: list[Novel] = field(default_factory=list)


@dataclass
class ChapterView:
    """A chapter prepared for reading, with its neighbours in reading order."""
    novel: Novel
    chapter: Chapter
    content: Optional[str] = None
    prev_chapter: Optional[Chapter] = None
    next_chapter: Optional[Chapter] = None

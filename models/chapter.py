"""Chapter data model."""

from dataclasses import dataclass, asdict
from typing import Optional


@dataclass
class Chapter:
    """A single chapter entry inside a novel's chapter list.

    ``chapter_number`` is the scraper's string label, not an index; it is
    usually numeric but gaps and non-numeric labels occur.
    """
    chapter_number: str = ""
    chapter_name: str = ""
    url: str = ""
    content: Optional[str] = None
    translation: Optional[str] = None
    translated_chapter_title: Optional[str] = None

    @property
    def is_translated(self) -> bool:
        return bool(self.translation)

    @property
    def display_title(self) -> str:
        return self.translated_chapter_title or self.chapter_name

    def to_dict(self) -> dict:
        """Serialize to the stored document shape, dropping unset optional fields."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    @classmethod
    def from_dict(cls, data: dict) -> "Chapter":
        return cls(
            chapter_number=str(data.get("chapter_number", "")),
            chapter_name=data.get("chapter_name", "") or "",
            url=data.get("url", "") or "",
            content=data.get("content"),
            translation=data.get("translation"),
            translated_chapter_title=data.get("translated_chapter_title"),
        )

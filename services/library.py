"""Library operations: scraping, reading, translating and managing novels.

``LibraryService`` raises the exceptions in ``config.exceptions``; the
functions in ``services.actions`` wrap it into ``ActionResult`` values.
"""

import logging
from typing import Iterable, Optional

from config.exceptions import (
    ChapterNotFoundError,
    MissingSourceUrlError,
    NotModifiedError,
    NovelNotFoundError,
    ValidationError,
)
from config.settings import Settings
from models.chapter import Chapter
from models.chapter_store import remove_chapters, resolve_chapter_offset
from models.database import Database
from models.novel import ChapterView, LibraryStats, Novel
from services.scraper_client import ScraperClient
from tools.glossary import merge_glossary
from tools.novel_sync import append_new_chapters
from tools.title_extractor import extract_chapter_title, split_manual_translation

logger = logging.getLogger(__name__)


class LibraryService:
    """Novel library backed by a Database and the scraper service."""

    def __init__(
        self,
        db: Database,
        client: ScraperClient,
        settings: Optional[Settings] = None,
    ):
        self.db = db
        self.client = client
        self.settings = settings or Settings()

    # ---- Helpers ----

    def _require_novel(self, novel_id: int) -> Novel:
        novel = self.db.get_novel(novel_id)
        if novel is None:
            raise NovelNotFoundError(novel_id)
        return novel

    @staticmethod
    def _check_modified(rowcount: int, what: str, novel_id: int):
        if rowcount < 1:
            raise NotModifiedError(f"Failed to update database: {what}", {"novel_id": novel_id})

    # ---- Novels ----

    def add_novel(self, url: str) -> Novel:
        """Scrape a novel from ``url`` and store it with an empty glossary."""
        scraped = self.client.scrape_novel(url)
        novel = Novel(
            title=scraped.title,
            author=scraped.author,
            cover_img=scraped.cover_img,
            chapters=[ch.to_chapter() for ch in scraped.chapters],
            glossary={},
            source_url=url,
        )
        novel_id = self.db.create_novel(novel)
        return self._require_novel(novel_id)

    def list_novels(self) -> list[Novel]:
        return self.db.list_novels()

    def get_novel(self, novel_id: int) -> Novel:
        return self._require_novel(novel_id)

    def delete_novel(self, novel_id: int) -> None:
        if self.db.delete_novel(novel_id) != 1:
            raise NovelNotFoundError(novel_id)

    def update_novel_metadata(
        self,
        novel_id: int,
        title: Optional[str] = None,
        author: Optional[str] = None,
    ) -> None:
        """Overwrite the title and/or author; omitted fields are left as they are."""
        fields = {}
        if title is not None:
            fields["title"] = title
        if author is not None:
            fields["author"] = author
        if not fields:
            raise ValidationError("Nothing to update: give a title or an author")
        rows = self.db.update_novel_fields(novel_id, **fields)
        if rows < 1:
            raise NovelNotFoundError(novel_id)
        logger.info("Novel %d metadata updated: %s", novel_id, ", ".join(fields))

    def get_library_stats(self) -> LibraryStats:
        novels = self.db.list_novels()
        return LibraryStats(
            total_novels=len(novels),
            total_chapters=sum(len(n.chapters) for n in novels),
            translated_chapters=sum(n.translated_count for n in novels),
            recently_added=novels[:self.settings.recent_novels_limit],
        )

    # ---- Chapters ----

    def fetch_chapter_content(self, chapter_url: str) -> str:
        return self.client.extract_chapter(chapter_url)

    def save_chapter_content(self, novel_id: int, chapter_number: str, content: str) -> None:
        novel = self._require_novel(novel_id)
        offset = resolve_chapter_offset(novel.chapters, chapter_number)
        rows = self.db.set_chapter_fields(novel_id, offset, {"content": content})
        self._check_modified(rows, "chapter content", novel_id)

    def read_chapter(self, novel_id: int, chapter_number: str) -> ChapterView:
        """Return a chapter with its neighbours, fetching and saving the body on first read."""
        novel = self._require_novel(novel_id)
        offset = resolve_chapter_offset(novel.chapters, chapter_number)
        chapter = novel.chapters[offset]

        content = chapter.content
        if not content and chapter.url:
            content = self.client.extract_chapter(chapter.url)
            if content:
                rows = self.db.set_chapter_fields(novel_id, offset, {"content": content})
                self._check_modified(rows, "chapter content", novel_id)
                chapter.content = content

        return ChapterView(
            novel=novel,
            chapter=chapter,
            content=content,
            prev_chapter=novel.chapters[offset - 1] if offset > 0 else None,
            next_chapter=novel.chapters[offset + 1] if offset < len(novel.chapters) - 1 else None,
        )

    def translate_chapter(
        self,
        novel_id: int,
        chapter_number: str,
        content: str,
        merge: bool = False,
    ) -> str:
        """Translate ``content`` and store it on the chapter.

        A first translation replaces the novel's glossary with the one the
        service returns; ``merge=True`` (retranslation) overlays it on the
        existing glossary instead.
        """
        novel = self._require_novel(novel_id)
        offset = resolve_chapter_offset(novel.chapters, chapter_number)

        result = self.client.translate(content)
        fields = {"translation": result.translation}
        title = extract_chapter_title(result.translation)
        if title is not None:
            fields["translated_chapter_title"] = title
        glossary = merge_glossary(novel.glossary, result.glossary) if merge else dict(result.glossary)

        rows = self.db.set_chapter_fields(novel_id, offset, fields, glossary=glossary)
        self._check_modified(rows, "chapter translation", novel_id)
        logger.info(
            "Chapter %s of novel %d %s (title=%r, glossary=%d terms)",
            chapter_number, novel_id, "retranslated" if merge else "translated",
            title, len(glossary),
        )
        return result.translation

    def save_manual_translation(self, novel_id: int, chapter_number: str, text: str) -> None:
        """Store a hand-written translation; its first non-blank line is the title."""
        novel = self._require_novel(novel_id)
        offset = resolve_chapter_offset(novel.chapters, chapter_number)

        title, body = split_manual_translation(text)
        fields = {"translation": body}
        if title:
            fields["translated_chapter_title"] = title
        rows = self.db.set_chapter_fields(novel_id, offset, fields)
        self._check_modified(rows, "manual translation", novel_id)

    def delete_chapters(self, novel_id: int, chapter_numbers: Iterable[str]) -> int:
        """Remove every chapter whose label is in ``chapter_numbers``. Returns count removed."""
        novel = self._require_novel(novel_id)
        remaining = remove_chapters(novel.chapters, chapter_numbers)
        rows = self.db.update_novel_fields(novel_id, chapters=remaining)
        self._check_modified(rows, "chapter deletion", novel_id)
        removed = len(novel.chapters) - len(remaining)
        logger.info("Deleted %d chapters from novel %d", removed, novel_id)
        return removed

    def delete_chapter(self, novel_id: int, chapter_number: str) -> int:
        return self.delete_chapters(novel_id, [chapter_number])

    # ---- Glossary ----

    def update_glossary_term(self, novel_id: int, source_term: str, target_term: str) -> None:
        if not source_term:
            raise ValidationError("Glossary source term must not be empty")
        rows = self.db.set_glossary_term(novel_id, source_term, target_term)
        if rows < 1:
            raise NovelNotFoundError(novel_id)

    # ---- Sync ----

    def update_novel_from_source(self, novel_id: int) -> int:
        """Append chapters published since the last scrape. Returns the number added.

        Title, author and cover are always refreshed from the source. The
        chapter list is only rewritten when there is something to append.
        """
        novel = self._require_novel(novel_id)
        if not novel.source_url:
            raise MissingSourceUrlError(novel_id)

        scraped = self.client.scrape_novel(novel.source_url)
        fresh = [ch.to_chapter() for ch in scraped.chapters]
        chapters, added = append_new_chapters(novel.chapters, fresh)

        fields = {
            "title": scraped.title,
            "author": scraped.author,
            "cover_img": scraped.cover_img,
        }
        if added:
            fields["chapters"] = chapters
        rows = self.db.update_novel_fields(novel_id, **fields)
        self._check_modified(rows, "novel sync", novel_id)

        if added:
            logger.info("Novel %d synced: %d new chapters", novel_id, added)
        else:
            logger.info("Novel %d is up to date (%d chapters)", novel_id, len(novel.chapters))
        return added

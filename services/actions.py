"""User-facing actions with a uniform success/failure result.

Every action returns an ``ActionResult``; no exception escapes to the
caller. Expected failures (service errors, missing records, bad input)
carry their message, anything else is logged with its traceback and
reported generically.
"""

import functools
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Optional

from config.exceptions import NovelShelfError
from config.settings import Settings
from models.database import Database
from services.library import LibraryService
from services.scraper_client import ScraperClient

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR = "An unexpected error occurred"


@dataclass
class ActionResult:
    """Outcome of an action: ``data`` on success, ``error`` on failure."""
    success: bool
    data: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = True) -> "ActionResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "ActionResult":
        return cls(success=False, error=error)


def action(func: Callable) -> Callable:
    """Run ``func`` and wrap its return value, or its failure, in an ActionResult."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> ActionResult:
        try:
            return ActionResult.ok(func(*args, **kwargs))
        except NovelShelfError as e:
            logger.warning("%s failed: %s", func.__name__, e)
            return ActionResult.fail(e.message)
        except Exception:
            logger.exception("%s failed unexpectedly", func.__name__)
            return ActionResult.fail(UNEXPECTED_ERROR)
    return wrapper


class LibraryActions:
    """Action surface over a LibraryService."""

    def __init__(self, service: LibraryService):
        self.service = service

    @action
    def scrape_novel(self, url: str):
        return self.service.add_novel(url)

    @action
    def get_all_novels(self):
        return self.service.list_novels()

    @action
    def get_novel_by_id(self, novel_id: int):
        return self.service.get_novel(novel_id)

    @action
    def get_chapter_content(self, chapter_url: str):
        return self.service.fetch_chapter_content(chapter_url)

    @action
    def save_chapter_content(self, novel_id: int, chapter_number: str, content: str):
        self.service.save_chapter_content(novel_id, chapter_number, content)
        return True

    @action
    def read_chapter(self, novel_id: int, chapter_number: str):
        return self.service.read_chapter(novel_id, chapter_number)

    @action
    def translate_chapter(self, novel_id: int, chapter_number: str, content: str):
        return self.service.translate_chapter(novel_id, chapter_number, content)

    @action
    def retranslate_chapter(self, novel_id: int, chapter_number: str, content: str):
        return self.service.translate_chapter(novel_id, chapter_number, content, merge=True)

    @action
    def save_manual_translation(self, novel_id: int, chapter_number: str, translation: str):
        self.service.save_manual_translation(novel_id, chapter_number, translation)
        return True

    @action
    def update_glossary_term(self, novel_id: int, source_term: str, target_term: str):
        self.service.update_glossary_term(novel_id, source_term, target_term)
        return True

    @action
    def delete_novel(self, novel_id: int):
        self.service.delete_novel(novel_id)
        return True

    @action
    def update_novel_metadata(self, novel_id: int, title: Optional[str] = None, author: Optional[str] = None):
        self.service.update_novel_metadata(novel_id, title=title, author=author)
        return True

    @action
    def get_library_stats(self):
        return self.service.get_library_stats()

    @action
    def delete_chapter(self, novel_id: int, chapter_number: str):
        self.service.delete_chapter(novel_id, chapter_number)
        return True

    @action
    def delete_chapters_batch(self, novel_id: int, chapter_numbers: Iterable[str]):
        self.service.delete_chapters(novel_id, chapter_numbers)
        return True

    @action
    def update_novel_from_source(self, novel_id: int):
        return self.service.update_novel_from_source(novel_id)


@contextmanager
def open_library(settings: Optional[Settings] = None) -> Iterator[LibraryActions]:
    """Build the database, service client and actions; close the client on exit."""
    settings = settings or Settings()
    db = Database(settings.sqlite_db_path)
    with ScraperClient(settings) as client:
        yield LibraryActions(LibraryService(db, client, settings))

"""Services package: scraper client, library operations, and actions."""

from services.scraper_client import ScraperClient
from services.library import LibraryService
from services.actions import ActionResult, LibraryActions, open_library

__all__ = [
    "ScraperClient",
    "LibraryService",
    "ActionResult",
    "LibraryActions",
    "open_library",
]

"""Shared pytest fixtures for the novelshelf test suite."""

import json

import httpx
import pytest


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_db_path(tmp_path):
    """Return a temporary SQLite database path."""
    return tmp_path / "test_library.db"


@pytest.fixture
def db(tmp_db_path):
    """Return an initialized Database instance backed by a temp file."""
    from models.database import Database
    return Database(tmp_db_path)


# ---------------------------------------------------------------------------
# Settings fixture
# ---------------------------------------------------------------------------

@pytest.fixture
def settings(tmp_path):
    """Return a Settings instance with all paths pointing to tmp_path."""
    from config.settings import Settings
    return Settings(
        _env_file=None,
        sqlite_db_path=tmp_path / "library.db",
        log_dir=tmp_path / "logs",
        service_base_url="http://scraper.test",
        request_timeout=5.0,
    )


# ---------------------------------------------------------------------------
# Fake scraper / translation service
# ---------------------------------------------------------------------------

def make_chapters(numbers, with_content=False):
    """Build Chapter objects labelled with the given chapter numbers."""
    from models.chapter import Chapter
    return [
        Chapter(
            chapter_number=str(n),
            chapter_name=f"第{n}章",
            url=f"https://novels.test/book/1/{n}",
            content=f"第{n}章的内容" if with_content else None,
        )
        for n in numbers
    ]


class FakeService:
    """In-memory stand-in for the scraper service, served via httpx.MockTransport.

    Tests adjust the canned payloads or ``status`` per endpoint; every
    request is recorded in ``calls`` as (path, query url or JSON body).
    """

    def __init__(self):
        self.scrape_payload = {
            "title": "修罗武神",
            "author": "善良的蜜蜂",
            "coverImg": "https://novels.test/cover.jpg",
            "chapters": [
                {"chapter_number": str(n), "chapter_name": f"第{n}章", "url": f"https://novels.test/book/1/{n}"}
                for n in range(1, 4)
            ],
        }
        self.extract_payload = {"success": True, "content": "楚枫站在山巅。\n风很大。"}
        self.translate_payload = {
            "translation": "Chapter 1: The Peak\nChu Feng stood on the peak.\nThe wind was strong.",
            "new_terms": {"楚枫": "Chu Feng"},
            "glossary": {"楚枫": "Chu Feng"},
        }
        self.status = {"/scrape": 200, "/extract": 200, "/translate": 200}
        self.raise_transport_error = False
        self.calls = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if request.method == "POST":
            self.calls.append((path, json.loads(request.content)))
        else:
            self.calls.append((path, request.url.params.get("url")))

        if self.raise_transport_error:
            raise httpx.ConnectError("connection refused", request=request)

        status = self.status.get(path, 404)
        if status != 200:
            return httpx.Response(status, json={"detail": "error"})
        payload = {
            "/scrape": self.scrape_payload,
            "/extract": self.extract_payload,
            "/translate": self.translate_payload,
        }[path]
        return httpx.Response(200, json=payload)


@pytest.fixture
def fake_service():
    return FakeService()


@pytest.fixture
def client(settings, fake_service):
    """Return a ScraperClient routed to the fake service."""
    from services.scraper_client import ScraperClient
    c = ScraperClient(settings, transport=httpx.MockTransport(fake_service.handler))
    yield c
    c.close()


@pytest.fixture
def service(db, client, settings):
    from services.library import LibraryService
    return LibraryService(db, client, settings)


@pytest.fixture
def actions(service):
    from services.actions import LibraryActions
    return LibraryActions(service)


# ---------------------------------------------------------------------------
# Sample data fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_novel(db):
    """Insert and return a Novel with chapters "1".."5" and a small glossary."""
    from models.novel import Novel
    novel = Novel(
        title="修罗武神",
        author="善良的蜜蜂",
        cover_img="https://novels.test/cover.jpg",
        chapters=make_chapters(range(1, 6)),
        glossary={"龙": "dragon", "剑": "sword"},
        source_url="https://novels.test/book/1",
    )
    novel.id = db.create_novel(novel)
    return novel

"""HTTP client for the external scraper / translation service.

Endpoints (paths configurable in Settings):

    GET  /scrape?url=<novel url>     -> {title, author, coverImg, chapters: [...]}
    GET  /extract?url=<chapter url>  -> {success, content}
    POST /translate {text}           -> {translation, new_terms, glossary}

Every call is a single round trip: no retries, non-2xx responses and
transport failures are raised immediately.
"""

import logging
from typing import Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from config.exceptions import ServiceResponseError, ServiceTransportError
from config.settings import Settings
from models.chapter import Chapter

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class ScrapedChapter(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    chapter_number: str
    chapter_name: str = ""
    url: str = ""

    def to_chapter(self) -> Chapter:
        return Chapter(
            chapter_number=self.chapter_number,
            chapter_name=self.chapter_name,
            url=self.url,
        )


class NovelScrapeResponse(BaseModel):
    title: str = ""
    author: str = ""
    cover_img: str = Field(default="", alias="coverImg")
    chapters: list[ScrapedChapter] = Field(default_factory=list)


class ChapterContentResponse(BaseModel):
    success: bool = False
    content: str = ""


class TranslationResponse(BaseModel):
    translation: str
    new_terms: dict[str, str] = Field(default_factory=dict)
    glossary: dict[str, str] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class ScraperClient:
    """Synchronous client for the scrape, extract and translate endpoints."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.settings = settings or Settings()
        self._client = httpx.Client(
            base_url=self.settings.service_base_url,
            timeout=self.settings.request_timeout,
            transport=transport,
        )

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> dict:
        """Perform one request and return the decoded JSON body."""
        try:
            r = self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            raise ServiceTransportError(f"Timed out calling {path}", {"error": str(e)}) from e
        except httpx.TransportError as e:
            raise ServiceTransportError(f"Could not reach service at {path}", {"error": str(e)}) from e

        logger.debug("%s %s -> %d (%d bytes)", method, r.url, r.status_code, len(r.content))

        if not r.is_success:
            raise ServiceResponseError(
                f"Service returned HTTP {r.status_code}", status_code=r.status_code, url=path,
            )
        try:
            data = r.json()
        except ValueError as e:
            raise ServiceResponseError(
                "Service returned a non-JSON body", status_code=r.status_code, url=path,
            ) from e
        if not isinstance(data, dict):
            raise ServiceResponseError("Service returned an unexpected body", url=path)
        return data

    def scrape_novel(self, url: str) -> NovelScrapeResponse:
        """Scrape novel metadata and the chapter list from ``url``."""
        logger.info("Scraping novel: %s", url)
        data = self._request("GET", self.settings.scrape_endpoint, params={"url": url})
        try:
            result = NovelScrapeResponse.model_validate(data)
        except PydanticValidationError as e:
            raise ServiceResponseError(f"Malformed scrape response: {e.error_count()} errors") from e
        logger.info("Scraped '%s': %d chapters", result.title, len(result.chapters))
        return result

    def extract_chapter(self, chapter_url: str) -> str:
        """Fetch the body text of one chapter."""
        logger.info("Extracting chapter: %s", chapter_url)
        data = self._request("GET", self.settings.extract_endpoint, params={"url": chapter_url})
        try:
            result = ChapterContentResponse.model_validate(data)
        except PydanticValidationError as e:
            raise ServiceResponseError(f"Malformed extract response: {e.error_count()} errors") from e
        if not result.success:
            raise ServiceResponseError("Service could not extract chapter content", url=chapter_url)
        return result.content

    def translate(self, text: str) -> TranslationResponse:
        """Translate chapter text; the response carries the service's glossary."""
        logger.info("Translating %d chars", len(text))
        data = self._request("POST", self.settings.translate_endpoint, json={"text": text})
        try:
            result = TranslationResponse.model_validate(data)
        except PydanticValidationError as e:
            raise ServiceResponseError(f"Malformed translate response: {e.error_count()} errors") from e
        logger.info(
            "Translation received: %d chars, %d new terms, %d glossary terms",
            len(result.translation), len(result.new_terms), len(result.glossary),
        )
        return result

"""Tests for the scraper / translation service client."""

import httpx
import pytest

from config.exceptions import ServiceError, ServiceResponseError, ServiceTransportError


class TestScrapeNovel:
    def test_parses_metadata_and_chapters(self, client, fake_service):
        result = client.scrape_novel("https://novels.test/book/1")
        assert result.title == "修罗武神"
        assert result.cover_img == "https://novels.test/cover.jpg"
        assert [ch.chapter_number for ch in result.chapters] == ["1", "2", "3"]
        assert fake_service.calls == [("/scrape", "https://novels.test/book/1")]

    def test_numeric_chapter_numbers_coerced(self, client, fake_service):
        fake_service.scrape_payload["chapters"] = [{"chapter_number": 1, "chapter_name": "a", "url": "u"}]
        result = client.scrape_novel("https://novels.test/book/1")
        assert result.chapters[0].chapter_number == "1"
        assert result.chapters[0].to_chapter().content is None

    def test_non_success_status_raises(self, client, fake_service):
        fake_service.status["/scrape"] = 502
        with pytest.raises(ServiceResponseError) as exc_info:
            client.scrape_novel("https://novels.test/book/1")
        assert exc_info.value.status_code == 502

    def test_malformed_payload_raises(self, client, fake_service):
        fake_service.scrape_payload = {"chapters": [{"chapter_name": "missing number"}]}
        with pytest.raises(ServiceResponseError, match="Malformed"):
            client.scrape_novel("https://novels.test/book/1")


class TestExtractChapter:
    def test_returns_content(self, client, fake_service):
        assert client.extract_chapter("https://novels.test/book/1/1") == "楚枫站在山巅。\n风很大。"

    def test_success_false_raises(self, client, fake_service):
        fake_service.extract_payload = {"success": False, "content": ""}
        with pytest.raises(ServiceResponseError, match="extract"):
            client.extract_chapter("https://novels.test/book/1/1")


class TestTranslate:
    def test_posts_text_and_parses_response(self, client, fake_service):
        result = client.translate("楚枫站在山巅。")
        assert result.translation.startswith("Chapter 1: The Peak")
        assert result.glossary == {"楚枫": "Chu Feng"}
        assert fake_service.calls == [("/translate", {"text": "楚枫站在山巅。"})]

    def test_missing_translation_raises(self, client, fake_service):
        fake_service.translate_payload = {"glossary": {}}
        with pytest.raises(ServiceResponseError):
            client.translate("x")


class TestTransportFailures:
    def test_connection_error_raises_transport_error(self, client, fake_service):
        fake_service.raise_transport_error = True
        with pytest.raises(ServiceTransportError):
            client.translate("x")

    def test_non_json_body(self, settings):
        from services.scraper_client import ScraperClient
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>"))
        with ScraperClient(settings, transport=transport) as c:
            with pytest.raises(ServiceResponseError, match="non-JSON"):
                c.scrape_novel("https://novels.test/book/1")

    def test_all_failures_are_service_errors(self):
        assert issubclass(ServiceResponseError, ServiceError)
        assert issubclass(ServiceTransportError, ServiceError)


class TestConfiguration:
    def test_custom_endpoints_used(self, settings):
        from services.scraper_client import ScraperClient
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, json={"success": True, "content": "x"})

        settings.extract_endpoint = "/v2/extract"
        with ScraperClient(settings, transport=httpx.MockTransport(handler)) as c:
            c.extract_chapter("https://novels.test/c/1")
        assert seen[0].startswith("http://scraper.test/v2/extract?url=")

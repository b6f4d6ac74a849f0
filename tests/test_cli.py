"""Tests for the click command-line interface."""

import httpx
import pytest
from click.testing import CliRunner

from models.database import Database
from models.novel import Novel
from conftest import make_chapters


@pytest.fixture
def cli_env(tmp_path, monkeypatch, fake_service):
    """Point the CLI at a temp library and the fake service; return the db path."""
    from services.scraper_client import ScraperClient

    db_path = tmp_path / "cli_library.db"
    monkeypatch.setenv("NOVELSHELF_SQLITE_DB_PATH", str(db_path))
    monkeypatch.setenv("NOVELSHELF_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("NOVELSHELF_SERVICE_BASE_URL", "http://scraper.test")
    monkeypatch.setattr(
        "services.actions.ScraperClient",
        lambda settings: ScraperClient(settings, transport=httpx.MockTransport(fake_service.handler)),
    )
    return db_path


@pytest.fixture
def stored_novel(cli_env):
    db = Database(cli_env)
    return db.create_novel(Novel(
        title="修罗武神",
        author="善良的蜜蜂",
        chapters=make_chapters(range(1, 6)),
        glossary={"龙": "dragon", "楚枫": "Chu Feng"},
        source_url="https://novels.test/book/1",
    ))


def _run(*args):
    from cli.main import cli
    return CliRunner().invoke(cli, list(args))


class TestLibraryCommands:
    def test_add(self, cli_env):
        result = _run("add", "https://novels.test/book/1")
        assert result.exit_code == 0, result.output
        assert "Novel added" in result.output
        assert len(Database(cli_env).list_novels()) == 1

    def test_add_failure_exits_nonzero(self, cli_env, fake_service):
        fake_service.status["/scrape"] = 500
        result = _run("add", "https://novels.test/book/1")
        assert result.exit_code == 1
        assert "HTTP 500" in result.output

    def test_list_empty(self, cli_env):
        result = _run("list")
        assert result.exit_code == 0
        assert "empty" in result.output

    def test_list(self, stored_novel):
        result = _run("list")
        assert result.exit_code == 0
        assert "修罗武神" in result.output

    def test_show_missing_novel(self, cli_env):
        result = _run("show", "-n", "42")
        assert result.exit_code == 1
        assert "Novel 42 not found" in result.output

    def test_show(self, stored_novel):
        result = _run("show", "-n", str(stored_novel))
        assert result.exit_code == 0
        assert "Chapters" in result.output

    def test_stats(self, stored_novel):
        result = _run("stats")
        assert result.exit_code == 0
        assert "Library stats" in result.output

    def test_rename(self, cli_env, stored_novel):
        result = _run("rename", "-n", str(stored_novel), "--title", "Martial God Asura")
        assert result.exit_code == 0
        assert Database(cli_env).get_novel(stored_novel).title == "Martial God Asura"

    def test_update(self, stored_novel, fake_service):
        fake_service.scrape_payload["chapters"] = [
            {"chapter_number": str(n), "chapter_name": "x", "url": "u"} for n in range(1, 8)
        ]
        result = _run("update", "-n", str(stored_novel))
        assert result.exit_code == 0
        assert "2 new chapter(s)" in result.output


class TestChapterCommands:
    def test_read_fetches_body(self, cli_env, stored_novel):
        result = _run("read", "-n", str(stored_novel), "-c", "2")
        assert result.exit_code == 0, result.output
        assert "楚枫站在山巅" in result.output
        assert Database(cli_env).get_novel(stored_novel).chapters[1].content

    def test_translate_range(self, cli_env, stored_novel, fake_service):
        result = _run("translate", "-n", str(stored_novel), "-c", "1-2")
        assert result.exit_code == 0, result.output
        chapters = Database(cli_env).get_novel(stored_novel).chapters
        assert [ch.chapter_number for ch in chapters if ch.translation] == ["1", "2"]

    def test_translate_reports_failures(self, stored_novel, fake_service):
        fake_service.status["/translate"] = 500
        result = _run("translate", "-n", str(stored_novel), "-c", "1")
        assert result.exit_code == 1
        assert "1 of 1" in result.output

    def test_save_translation(self, cli_env, stored_novel, tmp_path):
        path = tmp_path / "ch3.txt"
        path.write_text("Chapter 3: Hand Made\nBody line.", encoding="utf-8")
        result = _run("save-translation", "-n", str(stored_novel), "-c", "3", "-f", str(path))
        assert result.exit_code == 0, result.output
        chapter = Database(cli_env).get_novel(stored_novel).chapters[2]
        assert chapter.translated_chapter_title == "Chapter 3: Hand Made"
        assert chapter.translation == "Body line."

    def test_delete_chapters_batch(self, cli_env, stored_novel):
        result = _run("delete", "-n", str(stored_novel), "-c", "2,4", "-f")
        assert result.exit_code == 0, result.output
        chapters = Database(cli_env).get_novel(stored_novel).chapters
        assert [ch.chapter_number for ch in chapters] == ["1", "3", "5"]

    def test_delete_cancelled(self, cli_env, stored_novel):
        from cli.main import cli
        result = CliRunner().invoke(cli, ["delete", "-n", str(stored_novel)], input="n\n")
        assert "Cancelled" in result.output
        assert Database(cli_env).get_novel(stored_novel) is not None

    def test_delete_novel(self, cli_env, stored_novel):
        result = _run("delete", "-n", str(stored_novel), "-f")
        assert result.exit_code == 0
        assert Database(cli_env).get_novel(stored_novel) is None

    def test_bad_range(self, stored_novel):
        result = _run("delete", "-n", str(stored_novel), "-c", "5-2", "-f")
        assert result.exit_code != 0


class TestGlossaryCommands:
    def test_glossary_filter(self, stored_novel):
        result = _run("glossary", "-n", str(stored_novel), "-q", "chu")
        assert result.exit_code == 0
        assert "Chu Feng" in result.output
        assert "dragon" not in result.output

    def test_set_term(self, cli_env, stored_novel):
        result = _run("set-term", "-n", str(stored_novel), "龙", "wyrm")
        assert result.exit_code == 0
        assert Database(cli_env).get_novel(stored_novel).glossary["龙"] == "wyrm"


class TestParseChapterNumbers:
    def test_formats(self):
        from cli.main import _parse_chapter_numbers
        assert _parse_chapter_numbers("3") == ["3"]
        assert _parse_chapter_numbers("1-3") == ["1", "2", "3"]
        assert _parse_chapter_numbers("1, 5,10") == ["1", "5", "10"]

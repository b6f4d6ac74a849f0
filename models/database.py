"""SQLite document store for novels.

Each novel is one row. Its chapter list and glossary are JSON documents held
in the row, so a chapter is updated in place with a JSON field path
(``$[offset].translation``) rather than through a separate table.
"""

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

from models.chapter import Chapter
from models.novel import Novel

logger = logging.getLogger(__name__)

_CREATE_TABLES_SQL = """
CREATE TABLE IF NOT EXISTS novels (
    id INTEGER PRIMARY KEY,
    title TEXT NOT NULL DEFAULT '',
    author TEXT NOT NULL DEFAULT '',
    cover_img TEXT NOT NULL DEFAULT '',
    chapters TEXT NOT NULL DEFAULT '[]',
    glossary TEXT NOT NULL DEFAULT '{}',
    source_url TEXT,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""

# Indexes added via migration (idempotent)
_MIGRATION_SQL = [
    "CREATE INDEX IF NOT EXISTS idx_novels_created ON novels(created_at)",
]

# Chapter fields that may be written through a field path
CHAPTER_FIELDS = frozenset({
    "chapter_name", "url", "content", "translation", "translated_chapter_title",
})


def _dumps(value) -> str:
    return json.dumps(value, ensure_ascii=False)


def _parse_timestamp(value) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


class Database:
    """SQLite store for novels, their chapter lists and glossaries."""

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection for one operation; commit on success, always close."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode = WAL")
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def _init_db(self):
        with self._connect() as conn:
            conn.executescript(_CREATE_TABLES_SQL)
        self._migrate()

    def _migrate(self):
        """Apply idempotent schema migrations (indexes)."""
        with self._connect() as conn:
            for sql in _MIGRATION_SQL:
                try:
                    conn.execute(sql)
                except sqlite3.OperationalError as e:
                    logger.debug("Migration skipped (already applied): %s", e)

    # ---- Novel CRUD ----

    def create_novel(self, novel: Novel) -> int:
        with self._connect() as conn:
            cursor = conn.execute(
                "INSERT INTO novels (title, author, cover_img, chapters, glossary, source_url) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (novel.title, novel.author, novel.cover_img,
                 _dumps([ch.to_dict() for ch in novel.chapters]),
                 _dumps(novel.glossary), novel.source_url),
            )
            novel_id = cursor.lastrowid
        logger.info("Novel %d created: %s (%d chapters)", novel_id, novel.title, len(novel.chapters))
        return novel_id

    def get_novel(self, novel_id: int) -> Optional[Novel]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM novels WHERE id = ?", (novel_id,)).fetchone()
            if not row:
                return None
            return self._row_to_novel(row)

    def list_novels(self) -> list[Novel]:
        """Return all novels, most recently added first."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM novels ORDER BY created_at DESC, id DESC"
            ).fetchall()
            return [self._row_to_novel(r) for r in rows]

    def delete_novel(self, novel_id: int) -> int:
        """Delete a novel with its chapters and glossary. Returns rows deleted."""
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM novels WHERE id = ?", (novel_id,))
            deleted = cursor.rowcount
        if deleted:
            logger.info("Novel %d deleted", novel_id)
        return deleted

    def update_novel_fields(self, novel_id: int, **fields) -> int:
        """Overwrite top-level novel fields. Returns rows modified.

        ``chapters`` (list of Chapter) and ``glossary`` (dict) are stored as
        JSON; any other keyword must be a plain column.
        """
        allowed = {"title", "author", "cover_img", "chapters", "glossary", "source_url"}
        unknown = set(fields) - allowed
        if unknown:
            raise ValueError(f"Unknown novel fields: {sorted(unknown)}")

        assignments = []
        params = []
        for name, value in fields.items():
            if name == "chapters":
                value = _dumps([ch.to_dict() for ch in value])
            elif name == "glossary":
                value = _dumps(value)
            assignments.append(f"{name}=?")
            params.append(value)
        assignments.append("updated_at=CURRENT_TIMESTAMP")

        with self._connect() as conn:
            cursor = conn.execute(
                f"UPDATE novels SET {', '.join(assignments)} WHERE id=?",
                (*params, novel_id),
            )
            return cursor.rowcount

    # ---- Chapter field paths ----

    def set_chapter_fields(
        self,
        novel_id: int,
        offset: int,
        fields: dict[str, str],
        glossary: Optional[dict[str, str]] = None,
    ) -> int:
        """Set fields of the chapter at ``offset`` in one statement.

        When ``glossary`` is given it replaces the novel's glossary in the
        same write. Returns rows modified; the caller resolves ``offset``.
        """
        unknown = set(fields) - CHAPTER_FIELDS
        if unknown:
            raise ValueError(f"Unknown chapter fields: {sorted(unknown)}")
        if offset < 0:
            raise ValueError(f"Negative chapter offset: {offset}")

        path_args = []
        params = []
        for name, value in fields.items():
            path_args.append("?, ?")
            params.extend([f"$[{offset}].{name}", value])

        assignments = []
        if path_args:
            assignments.append(f"chapters=json_set(chapters, {', '.join(path_args)})")
        if glossary is not None:
            assignments.append("glossary=?")
            params.append(_dumps(glossary))
        assignments.append("updated_at=CURRENT_TIMESTAMP")

        with self._connect() as conn:
            cursor = conn.execute(
                f"UPDATE novels SET {', '.join(assignments)} WHERE id=?",
                (*params, novel_id),
            )
            return cursor.rowcount

    # ---- Glossary ----

    def set_glossary_term(self, novel_id: int, source_term: str, target_term: str) -> int:
        """Set a single glossary entry. Returns rows modified."""
        with self._connect() as conn:
            row = conn.execute("SELECT glossary FROM novels WHERE id = ?", (novel_id,)).fetchone()
            if not row:
                return 0
            glossary = json.loads(row["glossary"] or "{}")
            glossary[source_term] = target_term
            cursor = conn.execute(
                "UPDATE novels SET glossary=?, updated_at=CURRENT_TIMESTAMP WHERE id=?",
                (_dumps(glossary), novel_id),
            )
            return cursor.rowcount

    def _row_to_novel(self, row) -> Novel:
        return Novel(
            id=row["id"], title=row["title"], author=row["author"],
            cover_img=row["cover_img"],
            chapters=[Chapter.from_dict(d) for d in json.loads(row["chapters"] or "[]")],
            glossary=json.loads(row["glossary"] or "{}"),
            source_url=row["source_url"],
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )

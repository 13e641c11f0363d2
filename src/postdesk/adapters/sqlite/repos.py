import sqlite3
from datetime import UTC, datetime
from typing import Any

from postdesk.domain.entities import Post


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


def _row_to_post(row: dict[str, Any]) -> Post:
    return Post(slug=row["slug"], title=row["title"], markdown=row["markdown"])


class SQLitePostRepo:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        return conn

    def get_post(self, slug: str) -> Post | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT slug, title, markdown FROM posts WHERE slug = ?", (slug,)
            ).fetchone()
            return _row_to_post(row) if row else None
        finally:
            conn.close()

    def list_posts(self) -> list[Post]:
        conn = self._get_conn()
        try:
            rows = conn.execute("SELECT slug, title, markdown FROM posts ORDER BY slug").fetchall()
            return [_row_to_post(r) for r in rows]
        finally:
            conn.close()

    def create_post(self, *, title: str, slug: str, markdown: str) -> Post:
        """Insert a post. A taken slug raises sqlite3.IntegrityError."""
        now = datetime.now(UTC).isoformat()
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO posts (slug, title, markdown, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
            """,
                (slug, title, markdown, now, now),
            )
            conn.commit()
        finally:
            conn.close()
        return Post(slug=slug, title=title, markdown=markdown)

    def update_post(self, *, title: str, slug: str, markdown: str) -> Post:
        now = datetime.now(UTC).isoformat()
        conn = self._get_conn()
        try:
            cursor = conn.execute(
                "UPDATE posts SET title = ?, markdown = ?, updated_at = ? WHERE slug = ?",
                (title, markdown, now, slug),
            )
            conn.commit()
            if cursor.rowcount == 0:
                raise LookupError(f"Post not found: {slug}")
        finally:
            conn.close()
        return Post(slug=slug, title=title, markdown=markdown)

    def delete_post(self, slug: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM posts WHERE slug = ?", (slug,))
            conn.commit()
        finally:
            conn.close()

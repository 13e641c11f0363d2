"""
SQL migration runner for the posts database.

Migration files are named ``NNNN_description.sql`` and hold an ``-- Up``
section and an optional ``-- Down`` section. Only ``-- Up`` is applied. A file
without markers is treated as entirely ``-- Up``. The bundled migrations ship
inside the ``postdesk.migrations`` package, so no working directory is assumed.
"""

from __future__ import annotations

import logging
import re
import sqlite3
from dataclasses import dataclass
from importlib.resources import files
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_MIGRATIONS_DIR = Path(str(files("postdesk.migrations")))

_FILENAME_RE = re.compile(r"^\d{4}_[a-z0-9_]+\.sql$")
_SECTION_RE = re.compile(r"^--\s*(Up|Down)\s*$", re.IGNORECASE | re.MULTILINE)


class MigrationError(RuntimeError):
    """Raised when a migration file is malformed or fails to apply."""


@dataclass(frozen=True)
class Migration:
    name: str
    up_sql: str


def parse_migration(name: str, content: str) -> Migration:
    """Split a migration file into its sections and keep the ``-- Up`` one."""
    sections: dict[str, str] = {}
    markers = list(_SECTION_RE.finditer(content))
    if not markers:
        sections["up"] = content
    for i, marker in enumerate(markers):
        end = markers[i + 1].start() if i + 1 < len(markers) else len(content)
        key = marker.group(1).lower()
        if key in sections:
            raise MigrationError(f"Migration {name} has more than one -- {marker.group(1)}")
        sections[key] = content[marker.end() : end]

    up_sql = sections.get("up", "").strip()
    if not up_sql:
        raise MigrationError(f"Migration {name} has no -- Up statements")
    return Migration(name=name, up_sql=up_sql)


def discover_migrations(directory: Path) -> list[Migration]:
    """Read every migration file in ``directory`` in filename order."""
    migrations = []
    for path in sorted(directory.glob("*.sql")):
        if not _FILENAME_RE.match(path.name):
            raise MigrationError(f"Unexpected migration filename: {path.name}")
        migrations.append(parse_migration(path.name, path.read_text()))
    return migrations


class SQLiteMigrator:
    def __init__(self, db_path: str, migrations_dir: str | Path | None = None):
        self.db_path = db_path
        self.migrations_dir = Path(migrations_dir) if migrations_dir else DEFAULT_MIGRATIONS_DIR

    def _applied(self, conn: sqlite3.Connection) -> set[str]:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS _migrations (
                filename TEXT PRIMARY KEY NOT NULL,
                applied_at DATETIME DEFAULT CURRENT_TIMESTAMP
            )
        """
        )
        return {row[0] for row in conn.execute("SELECT filename FROM _migrations")}

    def pending(self) -> list[Migration]:
        """Migrations not yet recorded in the database."""
        conn = sqlite3.connect(self.db_path)
        try:
            applied = self._applied(conn)
        finally:
            conn.close()
        return [m for m in discover_migrations(self.migrations_dir) if m.name not in applied]

    def run_migrations(self) -> list[str]:
        """Apply pending migrations, each in its own transaction. Returns their names."""
        pending = self.pending()
        conn = sqlite3.connect(self.db_path, isolation_level=None)
        try:
            for migration in pending:
                logger.info("Applying migration: %s", migration.name)
                try:
                    conn.execute("BEGIN")
                    # executescript would commit mid-way, so run statement by statement
                    for statement in _split_statements(migration.up_sql):
                        conn.execute(statement)
                    conn.execute("INSERT INTO _migrations (filename) VALUES (?)", (migration.name,))
                    conn.execute("COMMIT")
                except sqlite3.Error as e:
                    conn.execute("ROLLBACK")
                    raise MigrationError(f"Migration {migration.name} failed: {e}") from e
        finally:
            conn.close()

        logger.info("Migrations up to date (%d applied)", len(pending))
        return [m.name for m in pending]


def _split_statements(script: str) -> list[str]:
    statements = []
    buffer = ""
    for line in script.splitlines(keepends=True):
        buffer += line
        if sqlite3.complete_statement(buffer):
            if buffer.strip():
                statements.append(buffer.strip())
            buffer = ""
    if buffer.strip():
        statements.append(buffer.strip())
    return statements

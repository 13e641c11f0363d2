from .migrator import SQLiteMigrator
from .repos import SQLitePostRepo

__all__ = ["SQLiteMigrator", "SQLitePostRepo"]

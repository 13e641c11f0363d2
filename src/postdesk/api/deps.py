import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from postdesk.adapters.sqlite import SQLitePostRepo
from postdesk.rules.loader import load_rules
from postdesk.rules.models import PostRulesAdapter, Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("POSTDESK_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "postdesk.db")
        self.rules_path = Path(
            os.environ.get("POSTDESK_RULES_PATH", str(self.base_dir / "rules.yaml"))
        )
        # None selects the migrations bundled with the package
        self.migrations_dir = os.environ.get("POSTDESK_MIGRATIONS_DIR") or None


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def _load_rules_cached(path: Path) -> Rules:
    return load_rules(path)


def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return _load_rules_cached(settings.rules_path)


def get_post_rules(rules: Rules = Depends(get_rules)) -> PostRulesAdapter:
    return PostRulesAdapter(rules)


# --- Repos ---
def get_post_repo(settings: Settings = Depends(get_settings)) -> SQLitePostRepo:
    return SQLitePostRepo(settings.db_path)

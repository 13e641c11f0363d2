import logging
import os
import sqlite3
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from postdesk import __version__
from postdesk.adapters.sqlite import SQLiteMigrator
from postdesk.api.deps import Settings, get_settings
from postdesk.api.routes import admin_posts
from postdesk.app_shell.config import validate_ops_rules
from postdesk.components.posts import DEFAULT_ADMIN_PATH
from postdesk.rules.loader import load_rules

logger = logging.getLogger(__name__)


def startup_or_exit(settings: Settings) -> None:
    """Load rules, check the environment and migrate (fail-fast)."""
    try:
        rules = load_rules(settings.rules_path)
        validate_ops_rules(rules)
        os.makedirs(settings.data_dir, exist_ok=True)
        SQLiteMigrator(settings.db_path, settings.migrations_dir).run_migrations()
        logger.info("Rules loaded from %s", settings.rules_path)
    except (OSError, ValueError, RuntimeError, sqlite3.Error) as e:
        logger.critical("Startup failed: %s", e)
        sys.exit(1)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    startup_or_exit(get_settings())
    yield


app = FastAPI(
    title="postdesk",
    version=__version__,
    lifespan=lifespan,
)

# --- Routers ---
app.include_router(admin_posts.router, prefix=DEFAULT_ADMIN_PATH, tags=["Posts Admin"])


@app.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "ok"}

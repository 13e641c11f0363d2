import argparse
import logging
import os
import sqlite3
import sys
from pathlib import Path

from postdesk.adapters.sqlite import SQLiteMigrator, SQLitePostRepo
from postdesk.api.deps import Settings
from postdesk.components.posts import (
    PostActionInput,
    PostInvariantError,
    run_action,
    run_list,
)
from postdesk.domain.entities import NEW_POST_SLUG
from postdesk.rules.loader import load_rules
from postdesk.rules.models import PostRulesAdapter

logger = logging.getLogger("cli")


def handle_migrate(settings: Settings, args: argparse.Namespace) -> int:
    os.makedirs(settings.data_dir, exist_ok=True)
    applied = SQLiteMigrator(settings.db_path, settings.migrations_dir).run_migrations()
    print(f"Applied {len(applied)} migrations.")
    return 0


def handle_list(settings: Settings, args: argparse.Namespace) -> int:
    result = run_list(repo=SQLitePostRepo(settings.db_path))
    for post in result.posts:
        print(f"{post.slug}\t{post.title}")
    return 0


def handle_create(settings: Settings, args: argparse.Namespace) -> int:
    markdown_path = Path(args.markdown_file)
    if not markdown_path.exists():
        logger.error("File %s not found.", markdown_path)
        return 1

    form = {
        "intent": "create",
        "title": args.title,
        "slug": args.slug,
        "markdown": markdown_path.read_text(),
    }
    rules = PostRulesAdapter(load_rules(settings.rules_path))
    try:
        result = run_action(
            PostActionInput(slug=NEW_POST_SLUG, form=form),
            repo=SQLitePostRepo(settings.db_path),
            rules=rules,
        )
    except sqlite3.IntegrityError:
        logger.error("A post with slug %s already exists.", args.slug)
        return 1
    except sqlite3.OperationalError as e:
        logger.error("Database not ready (%s). Run `postdesk migrate` first.", e)
        return 1
    if not result.success:
        for field_name, message in result.errors.as_dict().items():
            logger.error("%s: %s", field_name, message)
        return 1

    print(f"Created post {args.slug}.")
    return 0


def handle_delete(settings: Settings, args: argparse.Namespace) -> int:
    try:
        run_action(
            PostActionInput(slug=args.slug, form={"intent": "delete"}),
            repo=SQLitePostRepo(settings.db_path),
        )
    except PostInvariantError as e:
        logger.error("%s", e)
        return 1
    except sqlite3.OperationalError as e:
        logger.error("Database not ready (%s). Run `postdesk migrate` first.", e)
        return 1
    print(f"Deleted post {args.slug}.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="postdesk", description="postdesk CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # migrate
    subparsers.add_parser("migrate", help="Apply pending database migrations")

    # list
    subparsers.add_parser("list", help="List posts")

    # create
    create_parser = subparsers.add_parser("create", help="Create a post")
    create_parser.add_argument("--slug", required=True, help="Unique slug for the post")
    create_parser.add_argument("--title", required=True, help="Post title")
    create_parser.add_argument(
        "--markdown-file", required=True, help="Path to a file holding the post markdown"
    )

    # delete
    delete_parser = subparsers.add_parser("delete", help="Delete a post")
    delete_parser.add_argument("--slug", required=True, help="Slug of the post to delete")

    return parser


HANDLERS = {
    "migrate": handle_migrate,
    "list": handle_list,
    "create": handle_create,
    "delete": handle_delete,
}


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)
    return HANDLERS[args.command](Settings(), args)


if __name__ == "__main__":
    sys.exit(main())

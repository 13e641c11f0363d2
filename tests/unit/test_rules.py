"""
Tests for rules loading and the ops checks run at startup.
"""

from pathlib import Path

import pytest

from postdesk.app_shell.config import ConfigError, validate_ops_rules
from postdesk.rules.loader import load_rules
from postdesk.rules.models import PostRulesAdapter, Rules

PROJECT_ROOT = Path(__file__).parent.parent.parent


def test_project_rules_file_loads() -> None:
    rules = load_rules(PROJECT_ROOT / "rules.yaml")
    assert rules.posts.admin_path == "/posts/admin"
    assert rules.posts.required_messages.slug == "Slug is required"


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_rules(tmp_path / "nope.yaml")


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "rules.yaml"
    path.write_text("")
    assert load_rules(path) == Rules()


def test_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "rules.yaml"
    path.write_text("posts: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid YAML"):
        load_rules(path)


def test_invalid_schema(tmp_path: Path) -> None:
    path = tmp_path / "rules.yaml"
    path.write_text("posts:\n  admin_path: no-leading-slash\n")
    with pytest.raises(ValueError, match="Rules validation failed"):
        load_rules(path)


def test_blank_required_message_rejected(tmp_path: Path) -> None:
    path = tmp_path / "rules.yaml"
    path.write_text("posts:\n  required_messages:\n    title: ''\n")
    with pytest.raises(ValueError, match="Rules validation failed"):
        load_rules(path)


def test_adapter() -> None:
    adapter = PostRulesAdapter(Rules())
    assert adapter.get_admin_path() == "/posts/admin"
    assert adapter.get_required_messages() == {
        "title": "Title is required",
        "slug": "Slug is required",
        "markdown": "Markdown is required",
    }


def test_required_env(monkeypatch: pytest.MonkeyPatch) -> None:
    rules = Rules.model_validate({"ops": {"required_env": ["POSTDESK_TEST_REQUIRED"]}})

    monkeypatch.delenv("POSTDESK_TEST_REQUIRED", raising=False)
    with pytest.raises(ConfigError, match="POSTDESK_TEST_REQUIRED"):
        validate_ops_rules(rules)

    monkeypatch.setenv("POSTDESK_TEST_REQUIRED", "1")
    validate_ops_rules(rules)

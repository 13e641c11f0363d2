"""
Posts component input/output models.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from postdesk.domain.entities import Intent, Post

# --- Errors ---


class PostInvariantError(Exception):
    """Raised when a request breaks an assumption the screen cannot recover from."""


class PostNotFoundError(PostInvariantError):
    """Raised when a slug other than the new-post sentinel has no matching post."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"Post not found: {slug}")
        self.slug = slug


@dataclass(frozen=True)
class FormErrors:
    """Per-field required-value errors for one submission."""

    title: str | None = None
    slug: str | None = None
    markdown: str | None = None

    @property
    def has_errors(self) -> bool:
        return any(m is not None for m in (self.title, self.slug, self.markdown))

    def as_dict(self) -> dict[str, str]:
        """Only the fields that failed."""
        items = {"title": self.title, "slug": self.slug, "markdown": self.markdown}
        return {name: message for name, message in items.items() if message is not None}


# --- Input Models ---


@dataclass(frozen=True)
class LoadPostInput:
    """Input for loading the post behind an admin URL."""

    slug: str


@dataclass(frozen=True)
class PostActionInput:
    """Input for a form submission against an admin URL."""

    slug: str
    form: Mapping[str, str | None] = field(default_factory=dict)


# --- Output Models ---


@dataclass(frozen=True)
class LoadPostOutput:
    """Loaded post, or None when the URL is the new-post form."""

    post: Post | None

    @property
    def is_new_post(self) -> bool:
        return self.post is None


@dataclass(frozen=True)
class PostActionOutput:
    """Result of a form submission.

    On success ``redirect_to`` is set. On a validation failure ``errors`` holds
    the messages and ``values`` echoes what was submitted.
    """

    redirect_to: str | None = None
    intent: str | None = None
    post: Post | None = None
    errors: FormErrors = field(default_factory=FormErrors)
    values: dict[str, str] = field(default_factory=dict)
    success: bool = True


@dataclass(frozen=True)
class PostListOutput:
    """All posts for the admin listing."""

    posts: list[Post] = field(default_factory=list)
    success: bool = True


# --- View State ---


@dataclass(frozen=True)
class ButtonState:
    """One submit button: its intent value, label and disabled flag."""

    value: Intent
    label: str
    pending_label: str
    disabled: bool = False
    disabled_for: tuple[Intent, ...] = ()


@dataclass(frozen=True)
class FormPendingState:
    """Which intent is in flight and how the form's buttons react to it."""

    is_new_post: bool
    is_creating: bool = False
    is_updating: bool = False
    is_deleting: bool = False
    submit_button: ButtonState | None = None
    delete_button: ButtonState | None = None

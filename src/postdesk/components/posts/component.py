"""
Posts component - loader, form action and pending state for the post admin screen.

Load:
- "new" is the sentinel for an empty create form
- any other slug must resolve to a stored post

Action:
- intent "delete" short-circuits before validation and deletes by the URL slug
- otherwise title, slug and markdown are each required (non-empty string)
- a valid submission creates when the URL slug is "new", else updates the post
  at the URL slug (a different slug in the form is ignored)
- every successful submission redirects to the admin listing
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from postdesk.domain.entities import NEW_POST_SLUG, Intent, Post

from .models import (
    ButtonState,
    FormErrors,
    FormPendingState,
    LoadPostInput,
    LoadPostOutput,
    PostActionInput,
    PostActionOutput,
    PostInvariantError,
    PostListOutput,
    PostNotFoundError,
)
from .ports import PostRepoPort, RulesPort

logger = logging.getLogger(__name__)

# --- Default Configuration ---

DEFAULT_ADMIN_PATH = "/posts/admin"

DEFAULT_REQUIRED_MESSAGES: dict[str, str] = {
    "title": "Title is required",
    "slug": "Slug is required",
    "markdown": "Markdown is required",
}

FORM_FIELDS = ("title", "slug", "markdown")


# --- Validation Functions ---


def _is_present(value: object) -> bool:
    return isinstance(value, str) and value != ""


def validate_post_form(
    title: object,
    slug: object,
    markdown: object,
    *,
    messages: Mapping[str, str] | None = None,
) -> FormErrors:
    """Run the three required-field checks. No length or format checks."""
    msgs = {**DEFAULT_REQUIRED_MESSAGES, **(messages or {})}
    return FormErrors(
        title=None if _is_present(title) else msgs["title"],
        slug=None if _is_present(slug) else msgs["slug"],
        markdown=None if _is_present(markdown) else msgs["markdown"],
    )


def _require_slug(slug: str) -> str:
    if not slug:
        raise PostInvariantError("slug not found")
    return slug


def _admin_path(rules: RulesPort | None) -> str:
    return rules.get_admin_path() if rules else DEFAULT_ADMIN_PATH


# --- Component Entry Points ---


def run_load(
    inp: LoadPostInput,
    *,
    repo: PostRepoPort,
) -> LoadPostOutput:
    """
    Load the post behind an admin URL.

    Raises:
        PostInvariantError: slug is empty.
        PostNotFoundError: slug is not "new" and no post has it.
    """
    slug = _require_slug(inp.slug)
    if slug == NEW_POST_SLUG:
        return LoadPostOutput(post=None)

    post = repo.get_post(slug)
    if post is None:
        raise PostNotFoundError(slug)
    return LoadPostOutput(post=post)


def run_action(
    inp: PostActionInput,
    *,
    repo: PostRepoPort,
    rules: RulesPort | None = None,
) -> PostActionOutput:
    """
    Handle a submission of the post form.

    Args:
        inp: URL slug and the submitted fields (title, slug, markdown, intent).
        repo: Post repository port.
        rules: Optional rules port for the redirect path and messages.

    Returns:
        PostActionOutput with a redirect on success, or errors and the
        submitted values when a required field is empty.
    """
    route_slug = _require_slug(inp.slug)
    intent = inp.form.get("intent")
    redirect_to = _admin_path(rules)

    if intent == "delete":
        repo.delete_post(route_slug)
        logger.info("Deleted post %s", route_slug)
        return PostActionOutput(redirect_to=redirect_to, intent=intent)

    title = inp.form.get("title")
    slug = inp.form.get("slug")
    markdown = inp.form.get("markdown")

    errors = validate_post_form(
        title,
        slug,
        markdown,
        messages=rules.get_required_messages() if rules else None,
    )
    if errors.has_errors:
        values: dict[str, str] = {}
        for name in FORM_FIELDS:
            value = inp.form.get(name)
            if isinstance(value, str):
                values[name] = value
        return PostActionOutput(intent=intent, errors=errors, values=values, success=False)

    if not (isinstance(title, str) and isinstance(slug, str) and isinstance(markdown, str)):
        raise PostInvariantError("title, slug and markdown must be strings")

    if route_slug == NEW_POST_SLUG:
        post = repo.create_post(title=title, slug=slug, markdown=markdown)
        logger.info("Created post %s", post.slug)
    else:
        post = repo.update_post(title=title, slug=route_slug, markdown=markdown)
        logger.info("Updated post %s", post.slug)

    return PostActionOutput(redirect_to=redirect_to, intent=intent, post=post)


def run_list(*, repo: PostRepoPort) -> PostListOutput:
    """List posts for the admin listing, ordered by slug."""
    posts = sorted(repo.list_posts(), key=lambda p: p.slug)
    return PostListOutput(posts=posts)


# --- Pending State ---


def pending_state(post: Post | None, submitting_intent: str | None = None) -> FormPendingState:
    """
    Derive button labels and disabled flags for the form.

    ``submitting_intent`` is the intent of the submission in flight, if any.
    """
    is_new_post = post is None
    is_creating = submitting_intent == "create"
    is_updating = submitting_intent == "update"
    is_deleting = submitting_intent == "delete"

    primary: Intent = "create" if is_new_post else "update"
    if is_new_post:
        label, pending_label = "Create Post", "Creating..."
        in_flight = is_creating
    else:
        label, pending_label = "Update Post", "Updating..."
        in_flight = is_updating

    submit_button = ButtonState(
        value=primary,
        label=pending_label if in_flight else label,
        pending_label=pending_label,
        disabled=is_creating or is_updating,
        disabled_for=("create", "update"),
    )

    delete_button = None
    if not is_new_post:
        delete_button = ButtonState(
            value="delete",
            label="Deleting..." if is_deleting else "Delete Post",
            pending_label="Deleting...",
            disabled=is_deleting,
            disabled_for=("delete",),
        )

    return FormPendingState(
        is_new_post=is_new_post,
        is_creating=is_creating,
        is_updating=is_updating,
        is_deleting=is_deleting,
        submit_button=submit_button,
        delete_button=delete_button,
    )

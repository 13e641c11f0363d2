"""
Post admin routes - listing, create/edit form and form submission.

Key behaviors:
- GET /{slug} loads the post ("new" gives an empty create form)
- POST /{slug} dispatches on the submitted intent and redirects on success
- A required-field failure re-renders the form with inline errors (400)
- Loader invariants map to 400 (missing slug) and 404 (unknown post)
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from postdesk.api.deps import get_post_repo, get_post_rules
from postdesk.components.posts import (
    LoadPostInput,
    PostActionInput,
    PostInvariantError,
    PostNotFoundError,
    run_action,
    run_list,
    run_load,
)
from postdesk.domain.entities import NEW_POST_SLUG
from postdesk.ui.post_form import render_page, render_post_form, render_post_list

router = APIRouter()

SUBMITTED_FIELDS = ("title", "slug", "markdown", "intent")


def _http_error(exc: PostInvariantError) -> HTTPException:
    if isinstance(exc, PostNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


def _page_title(slug: str) -> str:
    return "New Post" if slug == NEW_POST_SLUG else f"Edit {slug}"


@router.get("", response_class=HTMLResponse, summary="Post admin listing")
def list_posts(
    repo: Any = Depends(get_post_repo),
    rules: Any = Depends(get_post_rules),
) -> HTMLResponse:
    """List every post with an edit link and a create link."""
    result = run_list(repo=repo)
    body = render_post_list(result.posts, admin_path=rules.get_admin_path())
    return HTMLResponse(render_page("Posts Admin", body))


@router.get("/{slug}", response_class=HTMLResponse, summary="Post create/edit form")
def post_form(
    slug: str,
    repo: Any = Depends(get_post_repo),
) -> HTMLResponse:
    """Render the form, pre-filled when the slug names an existing post."""
    try:
        loaded = run_load(LoadPostInput(slug=slug), repo=repo)
    except PostInvariantError as exc:
        raise _http_error(exc) from exc

    return HTMLResponse(render_page(_page_title(slug), render_post_form(loaded.post)))


@router.post("/{slug}", response_class=HTMLResponse, summary="Submit the post form")
async def submit_post_form(
    slug: str,
    request: Request,
    repo: Any = Depends(get_post_repo),
    rules: Any = Depends(get_post_rules),
) -> Response:
    """Create, update or delete depending on the submitted intent."""
    form_data = await request.form()
    form: dict[str, str | None] = {}
    for name in SUBMITTED_FIELDS:
        value = form_data.get(name)
        # File parts are not valid values for any field
        form[name] = value if isinstance(value, str) else None

    try:
        result = run_action(PostActionInput(slug=slug, form=form), repo=repo, rules=rules)
    except PostInvariantError as exc:
        raise _http_error(exc) from exc

    if result.success and result.redirect_to:
        return RedirectResponse(url=result.redirect_to, status_code=status.HTTP_303_SEE_OTHER)

    # Re-run the loader so the form keeps its new/existing shape
    try:
        loaded = run_load(LoadPostInput(slug=slug), repo=repo)
    except PostInvariantError as exc:
        raise _http_error(exc) from exc

    body = render_post_form(loaded.post, errors=result.errors, values=result.values)
    return HTMLResponse(
        render_page(_page_title(slug), body),
        status_code=status.HTTP_400_BAD_REQUEST,
    )

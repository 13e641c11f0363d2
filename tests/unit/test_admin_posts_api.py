"""
Tests for the post admin routes.
"""

from __future__ import annotations

from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from postdesk.api.deps import get_post_repo, get_post_rules
from postdesk.api.routes.admin_posts import router
from postdesk.domain.entities import Post
from postdesk.rules.models import PostRulesAdapter, Rules

# --- Test Fixtures ---


@pytest.fixture
def client(repo: Any) -> TestClient:
    """Test client with dependency overrides."""
    app = FastAPI()
    app.include_router(router, prefix="/posts/admin")

    app.dependency_overrides[get_post_repo] = lambda: repo
    app.dependency_overrides[get_post_rules] = lambda: PostRulesAdapter(Rules())

    return TestClient(app, follow_redirects=False)


# --- Loader ---


class TestPostForm:
    def test_new_form(self, client: TestClient) -> None:
        response = client.get("/posts/admin/new")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "Create Post" in response.text
        assert "<title>New Post</title>" in response.text

    def test_existing_form(self, client: TestClient, existing_post: Post) -> None:
        response = client.get(f"/posts/admin/{existing_post.slug}")

        assert response.status_code == 200
        assert 'value="Hello World"' in response.text
        assert "Update Post" in response.text
        assert "Delete Post" in response.text

    def test_unknown_slug_404(self, client: TestClient) -> None:
        response = client.get("/posts/admin/does-not-exist")

        assert response.status_code == 404
        assert response.json()["detail"] == "Post not found: does-not-exist"


class TestListing:
    def test_lists_posts(self, client: TestClient, existing_post: Post) -> None:
        response = client.get("/posts/admin")

        assert response.status_code == 200
        assert f'href="/posts/admin/{existing_post.slug}"' in response.text
        assert 'href="/posts/admin/new"' in response.text


# --- Action ---


class TestSubmit:
    def test_create_redirects(self, client: TestClient, repo: Any) -> None:
        response = client.post(
            "/posts/admin/new",
            data={"title": "T", "slug": "t", "markdown": "M", "intent": "create"},
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/posts/admin"
        assert repo.calls == [("create", {"title": "T", "slug": "t", "markdown": "M"})]

    @pytest.mark.parametrize(
        ("field", "message"),
        [
            ("title", "Title is required"),
            ("slug", "Slug is required"),
            ("markdown", "Markdown is required"),
        ],
    )
    def test_missing_field_rerenders(
        self, client: TestClient, repo: Any, field: str, message: str
    ) -> None:
        data = {"title": "T", "slug": "t", "markdown": "M", "intent": "create"}
        data[field] = ""

        response = client.post("/posts/admin/new", data=data)

        assert response.status_code == 400
        assert f'<em class="text-red-600">{message}</em>' in response.text
        assert repo.calls == []

    def test_failed_submission_keeps_values(self, client: TestClient) -> None:
        response = client.post(
            "/posts/admin/new",
            data={"title": "Draft title", "slug": "", "markdown": "", "intent": "create"},
        )

        assert response.status_code == 400
        assert 'value="Draft title"' in response.text

    def test_update_keeps_route_slug(
        self, client: TestClient, repo: Any, existing_post: Post
    ) -> None:
        response = client.post(
            f"/posts/admin/{existing_post.slug}",
            data={"title": "New", "slug": "changed", "markdown": "Body", "intent": "update"},
        )

        assert response.status_code == 303
        assert repo.calls == [
            ("update", {"title": "New", "slug": existing_post.slug, "markdown": "Body"})
        ]

    def test_delete_bypasses_validation(
        self, client: TestClient, repo: Any, existing_post: Post
    ) -> None:
        response = client.post(f"/posts/admin/{existing_post.slug}", data={"intent": "delete"})

        assert response.status_code == 303
        assert response.headers["location"] == "/posts/admin"
        assert repo.calls == [("delete", {"slug": existing_post.slug})]

    def test_update_validation_failure_keeps_edit_shape(
        self, client: TestClient, existing_post: Post
    ) -> None:
        response = client.post(
            f"/posts/admin/{existing_post.slug}",
            data={"title": "", "slug": existing_post.slug, "markdown": "x", "intent": "update"},
        )

        assert response.status_code == 400
        assert "Update Post" in response.text
        assert "readonly" in response.text

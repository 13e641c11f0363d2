import pytest

from postdesk.adapters.sqlite.migrator import DEFAULT_MIGRATIONS_DIR
from postdesk.domain.entities import Post


class InMemoryPostRepo:
    """In-memory post repository that records every persistence call."""

    def __init__(self) -> None:
        self._posts: dict[str, Post] = {}
        self.calls: list[tuple[str, dict[str, str]]] = []

    def get_post(self, slug: str) -> Post | None:
        return self._posts.get(slug)

    def list_posts(self) -> list[Post]:
        return list(self._posts.values())

    def create_post(self, *, title: str, slug: str, markdown: str) -> Post:
        self.calls.append(("create", {"title": title, "slug": slug, "markdown": markdown}))
        post = Post(slug=slug, title=title, markdown=markdown)
        self._posts[slug] = post
        return post

    def update_post(self, *, title: str, slug: str, markdown: str) -> Post:
        self.calls.append(("update", {"title": title, "slug": slug, "markdown": markdown}))
        post = Post(slug=slug, title=title, markdown=markdown)
        self._posts[slug] = post
        return post

    def delete_post(self, slug: str) -> None:
        self.calls.append(("delete", {"slug": slug}))
        self._posts.pop(slug, None)

    def add(self, post: Post) -> None:
        """Seed a post without recording a call."""
        self._posts[post.slug] = post


@pytest.fixture
def repo() -> InMemoryPostRepo:
    return InMemoryPostRepo()


@pytest.fixture
def existing_post(repo: InMemoryPostRepo) -> Post:
    post = Post(slug="hello-world", title="Hello World", markdown="# Hello\n\nFirst post.")
    repo.add(post)
    return post


@pytest.fixture
def migrations_dir() -> str:
    return str(DEFAULT_MIGRATIONS_DIR)

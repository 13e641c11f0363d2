"""
Posts component port definitions.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from postdesk.domain.entities import Post


class PostRepoPort(Protocol):
    """Persistence interface for posts, keyed by slug."""

    def get_post(self, slug: str) -> Post | None:
        """Get a post by slug."""
        ...

    def list_posts(self) -> list[Post]:
        """List every post."""
        ...

    def create_post(self, *, title: str, slug: str, markdown: str) -> Post:
        """Store a new post."""
        ...

    def update_post(self, *, title: str, slug: str, markdown: str) -> Post:
        """Replace the title and markdown of the post with this slug."""
        ...

    def delete_post(self, slug: str) -> None:
        """Delete the post with this slug."""
        ...


class RulesPort(Protocol):
    """Port for the posts section of the rules file."""

    def get_admin_path(self) -> str:
        """Path to redirect to after a successful submission."""
        ...

    def get_required_messages(self) -> Mapping[str, str]:
        """Message per field shown when the field is left empty."""
        ...

from typing import Literal

from pydantic import BaseModel

# --- Enums / Literals ---
Intent = Literal["create", "update", "delete"]

NEW_POST_SLUG = "new"

# --- Posts ---


class Post(BaseModel):
    slug: str  # Unique identifier, enforced by the store
    title: str
    markdown: str

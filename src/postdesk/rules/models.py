from pydantic import BaseModel, Field


class RequiredMessages(BaseModel):
    title: str = Field(default="Title is required", min_length=1)
    slug: str = Field(default="Slug is required", min_length=1)
    markdown: str = Field(default="Markdown is required", min_length=1)


class PostRules(BaseModel):
    admin_path: str = Field(default="/posts/admin", pattern=r"^/")
    required_messages: RequiredMessages = Field(default_factory=RequiredMessages)


class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)


class Rules(BaseModel):
    posts: PostRules = Field(default_factory=PostRules)
    ops: OpsRules = Field(default_factory=OpsRules)


class PostRulesAdapter:
    """Adapter to map Rules to the posts component RulesPort."""

    def __init__(self, rules: Rules):
        self._rules = rules.posts

    def get_admin_path(self) -> str:
        return self._rules.admin_path

    def get_required_messages(self) -> dict[str, str]:
        return self._rules.required_messages.model_dump()

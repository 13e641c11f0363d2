"""
Posts component - Post admin screen: load, validate, dispatch and pending state.
"""

from .component import (
    DEFAULT_ADMIN_PATH,
    DEFAULT_REQUIRED_MESSAGES,
    pending_state,
    run_action,
    run_list,
    run_load,
    validate_post_form,
)
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

__all__ = [
    # Entry points
    "pending_state",
    "run_action",
    "run_list",
    "run_load",
    "validate_post_form",
    # Defaults
    "DEFAULT_ADMIN_PATH",
    "DEFAULT_REQUIRED_MESSAGES",
    # Input models
    "LoadPostInput",
    "PostActionInput",
    # Output models
    "ButtonState",
    "FormErrors",
    "FormPendingState",
    "LoadPostOutput",
    "PostActionOutput",
    "PostListOutput",
    # Errors
    "PostInvariantError",
    "PostNotFoundError",
    # Ports
    "PostRepoPort",
    "RulesPort",
]

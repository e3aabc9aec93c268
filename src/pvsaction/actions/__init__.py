"""GitHub Actions runner bridge."""

from pvsaction.actions.runtime import (
    add_mask,
    get_input,
    is_github_actions,
    set_failed,
    set_output,
)

__all__ = ["add_mask", "get_input", "is_github_actions", "set_failed", "set_output"]

"""Release workflow."""

from .git import GitBranch, pr_numbers_since
from .workflow import Releaser

__all__ = [
    "GitBranch",
    "Releaser",
    "pr_numbers_since",
]

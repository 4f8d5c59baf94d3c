"""GitHub API access."""

from .client import GitHubClient
from .models import Label, PullRequest, Release, User

__all__ = [
    "GitHubClient",
    "Label",
    "PullRequest",
    "Release",
    "User",
]

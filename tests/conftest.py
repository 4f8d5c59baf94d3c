"""Shared fixtures."""

from typing import Sequence

import pytest

from releaser.config import Config
from releaser.github import PullRequest


def build_pr(body: str = "", author: str = "", number: int = 0,
             labels: Sequence[str] = (), title: str = "") -> PullRequest:
    return PullRequest.model_validate({
        "number": number,
        "title": title,
        "body": body,
        "user": {"login": author},
        "labels": [{"name": name} for name in labels],
    })


@pytest.fixture
def make_pr():
    """Factory for pull requests."""
    return build_pr


@pytest.fixture
def config(monkeypatch) -> Config:
    """Configuration unaffected by the environment."""
    for var in ("GITHUB_TOKEN", "RELEASER_GITHUB_TOKEN", "RELEASER_DRY_RUN",
                "RELEASER_OWNER", "RELEASER_REPO", "RELEASER_BRANCH",
                "RELEASER_GIT_DIR", "RELEASER_API_URL"):
        monkeypatch.delenv(var, raising=False)
    return Config(github_token="secret", git_dir="/tmp/collectd/.git")

"""Exceptions raised by releaser."""

from typing import Optional


class ReleaserError(Exception):
    """Base class for all releaser errors."""


class ParseError(ReleaserError):
    """A release tag does not follow the collectd-6.<minor>.<patch> scheme."""

    def __init__(self, tag: str):
        super().__init__(f"unable to parse tag {tag!r}")
        self.tag = tag


class NoQualifyingChangeError(ReleaserError):
    """None of the merged pull requests is a feature or a fix."""

    def __init__(self, message: str = "no features or fixes in list of PRs"):
        super().__init__(message)


class GitHubError(ReleaserError):
    """A GitHub API request failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ReleaseNotFoundError(GitHubError):
    """No previous release could be found."""


class GitError(ReleaserError):
    """Running git failed."""

    def __init__(self, message: str, stderr: str = ""):
        super().__init__(message)
        self.stderr = stderr

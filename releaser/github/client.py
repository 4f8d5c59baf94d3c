"""GitHub client wrapper using the PyGithub library."""

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import requests
from github import Auth, Github, GithubException, InputGitTreeElement
from github.GitCommit import GitCommit
from github.GitTree import GitTree
from github.Repository import Repository

from ..config import Config
from ..exceptions import GitHubError
from .models import PullRequest, Release


PER_PAGE = 100


class GitHubClient:
    """Wrapper for the parts of the GitHub API needed to cut a release."""

    def __init__(self, config: Config, logger: Optional[logging.Logger] = None,
                 gh: Optional[Github] = None):
        """Initialize GitHub client.

        Args:
            config: Configuration object containing GitHub settings
            logger: Logger instance
            gh: PyGithub instance, created from the config if omitted
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)

        if gh is None:
            auth = Auth.Token(config.github_token) if config.github_token else None
            gh = Github(
                auth=auth,
                base_url=config.api_url,
                timeout=int(config.timeout),
                per_page=PER_PAGE,
            )
        self.gh = gh

        # Cache for repository instance
        self._repo: Optional[Repository] = None

    def _get_repo(self) -> Repository:
        """Get repository instance with caching."""
        if self._repo is None:
            self._repo = self.gh.get_repo(f"{self.config.owner}/{self.config.repo}")
        return self._repo

    @contextmanager
    def _api_call(self, what: str):
        """Turn PyGithub and transport errors into GitHubError."""
        try:
            yield
        except GithubException as e:
            self.logger.error(f"Error {what}: {e}")
            raise GitHubError(f"{what}: {e}", status_code=e.status) from e
        except requests.RequestException as e:
            self.logger.error(f"Error {what}: {e}")
            raise GitHubError(f"{what}: {e}") from e

    def list_releases(self) -> List[Release]:
        """List all releases of the repository.

        Returns:
            List of releases
        """
        with self._api_call("listing releases"):
            result = [Release.from_github(r) for r in self._get_repo().get_releases()]

        self.logger.debug(f"Fetched {len(result)} release(s)")
        return result

    def get_pull_request(self, number: int) -> PullRequest:
        """Get pull request by number.

        Args:
            number: Pull request number

        Returns:
            The pull request
        """
        with self._api_call(f"getting pull request {number}"):
            return PullRequest.from_github(self._get_repo().get_pull(number))

    def get_branch_head(self, branch: str) -> str:
        """Get the SHA of the head commit of a branch."""
        with self._api_call(f"getting branch {branch}"):
            return self._get_repo().get_branch(branch).commit.sha

    def get_contents(self, path: str, ref: str) -> str:
        """Get file content from the repository.

        Args:
            path: Path to file
            ref: Git reference (branch/commit)

        Returns:
            Decoded file content
        """
        with self._api_call(f"getting file {path}"):
            content = self._get_repo().get_contents(path, ref=ref)
            return content.decoded_content.decode("utf-8")

    def get_git_commit(self, sha: str) -> GitCommit:
        with self._api_call(f"getting commit {sha}"):
            return self._get_repo().get_git_commit(sha)

    def create_tree(self, base_tree: GitTree, entries: List[Dict[str, Any]]) -> GitTree:
        """Create a tree from blob entries on top of an existing tree.

        Args:
            base_tree: Tree to base the new one on
            entries: Dicts with ``path``, ``mode``, ``type`` and ``content``
        """
        elements = [
            InputGitTreeElement(e["path"], e["mode"], e["type"], content=e["content"])
            for e in entries
        ]
        with self._api_call("creating tree"):
            return self._get_repo().create_git_tree(elements, base_tree=base_tree)

    def create_commit(self, message: str, tree: GitTree, parents: List[GitCommit]) -> GitCommit:
        with self._api_call("creating commit"):
            return self._get_repo().create_git_commit(message, tree, parents)

    def update_ref(self, branch: str, sha: str) -> None:
        """Move a branch to a new commit. Only fast-forwards are allowed."""
        with self._api_call(f"updating branch {branch}"):
            self._get_repo().get_git_ref(f"heads/{branch}").edit(sha, force=False)

    def create_release(self, tag_name: str, target: str, name: str, body: str,
                       prerelease: bool = True) -> Release:
        """Create a new release.

        Args:
            tag_name: Tag to create the release for, created if missing
            target: Branch or commit the tag points to
            name: Release name
            body: Release description
            prerelease: Mark the release as a pre-release

        Returns:
            The created release
        """
        with self._api_call(f"creating release {tag_name}"):
            release = self._get_repo().create_git_release(
                tag=tag_name,
                name=name,
                message=body,
                draft=False,
                prerelease=prerelease,
                target_commitish=target,
            )
        return Release.from_github(release)

"""Git plumbing: finding merged pull requests and committing via the API."""

import logging
import os
import subprocess
from typing import Any, Dict, List, Optional

from ..exceptions import GitError
from ..github import GitHubClient


logger = logging.getLogger(__name__)


def pr_numbers_since(ref: str, branch: str, git_dir: Optional[str] = None) -> List[int]:
    """Find the pull requests merged into ``branch`` since ``ref``.

    GitHub merge commits read ``Merge pull request #123 from user/branch``,
    so with ``--pretty=oneline`` the number is the fifth field.

    Args:
        ref: Tag or commit of the previous release
        branch: Release branch
        git_dir: Repository to run git in, exported as GIT_DIR

    Returns:
        Pull request numbers, newest merge first

    Raises:
        GitError: If git cannot be run or fails
    """
    args = [
        "git",
        "log",
        "--merges",
        "--pretty=oneline",
        "--grep=Merge pull request",
        f"{ref}..{branch}",
    ]
    logger.info(" ".join(args))

    env = dict(os.environ)
    if git_dir:
        env["GIT_DIR"] = git_dir

    try:
        result = subprocess.run(args, capture_output=True, text=True, check=True, env=env)
    except FileNotFoundError as e:
        raise GitError("git not found") from e
    except subprocess.CalledProcessError as e:
        for line in (e.stderr or "").splitlines():
            logger.error(f"git log: {line}")
        raise GitError(f"git log failed with exit code {e.returncode}", stderr=e.stderr or "") from e

    for line in result.stderr.splitlines():
        logger.error(f"git log: {line}")

    numbers = []
    for line in result.stdout.splitlines():
        fields = line.split(" ")
        if len(fields) < 5:
            continue
        try:
            n = int(fields[4].removeprefix("#"))
        except ValueError:
            continue
        if n > 0:
            numbers.append(n)

    return numbers


class GitBranch:
    """A branch on GitHub that files can be staged and committed to."""

    def __init__(self, client: GitHubClient, name: str, head_sha: str):
        self.client = client
        self.name = name
        self.head_sha = head_sha
        self.stage: List[Dict[str, Any]] = []

    @classmethod
    def checkout(cls, client: GitHubClient, name: str) -> "GitBranch":
        """Look up the current head of a branch."""
        return cls(client, name, client.get_branch_head(name))

    def cat_file(self, path: str) -> str:
        """Read a file as of the branch head."""
        return self.client.get_contents(path, self.head_sha)

    def add(self, path: str, content: str) -> None:
        """Stage new content for a file."""
        self.stage.append({
            "path": path,
            "mode": "100644",
            "type": "blob",
            "content": content,
        })

    def commit(self, message: str) -> Optional[str]:
        """Commit the staged files on top of the branch head and move the branch.

        Returns:
            SHA of the new commit, or None if nothing was staged
        """
        if not self.stage:
            return None

        parent = self.client.get_git_commit(self.head_sha)
        tree = self.client.create_tree(parent.tree, self.stage)

        commit = self.client.create_commit(message, tree, [parent])
        logger.info(f"Successfully created new commit: {commit.html_url}")

        self.client.update_ref(self.name, commit.sha)

        self.head_sha = commit.sha
        self.stage = []
        return commit.sha

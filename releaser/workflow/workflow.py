"""The release workflow: from merged pull requests to a published release."""

import logging
from datetime import datetime
from typing import List, Optional

from ..changelog import Changelog
from ..config import Config
from ..exceptions import ReleaseNotFoundError
from ..github import GitHubClient, PullRequest, Release
from ..version import EPOCH, Version, parse_tag
from .git import GitBranch, pr_numbers_since


class Releaser:
    """Cuts a new release of the configured repository."""

    def __init__(self, config: Config, client: GitHubClient,
                 logger: Optional[logging.Logger] = None):
        self.config = config
        self.client = client
        self.logger = logger or logging.getLogger(__name__)

    @property
    def dry_run(self) -> bool:
        return self.config.dry_run

    def run(self) -> Optional[Version]:
        """Run the whole release workflow.

        Returns:
            The released version, or None if no pull requests were merged

        Raises:
            ReleaserError: If any step fails. NoQualifyingChangeError signals
                that the merged pull requests do not warrant a release.
        """
        prev_release = self.last_release()
        self.logger.info(
            f"Previous release was {prev_release.name!r} at tag {prev_release.tag_name!r}"
        )

        prs = self.pull_requests_since(prev_release.tag_name)
        self.logger.info(f"Found {len(prs)} pull request(s)")
        if not prs:
            return None

        prev_version = parse_tag(prev_release)
        next_version = prev_version.next(prs)
        self.logger.info(f"The next version is {next_version}")

        changelog = Changelog.build(datetime.now(), next_version, prs)
        print(f"ChangeLog:\n{changelog}", end="")

        self.update_changelog(next_version, changelog)
        self.create_release(next_version, changelog)
        return next_version

    def last_release(self) -> Release:
        """Find the most recently created, published collectd 6 release.

        Raises:
            ReleaseNotFoundError: If there is none
        """
        ret = None
        for release in self.client.list_releases():
            if release.draft or not release.name.startswith(str(EPOCH)):
                continue
            if release.created_at is None:
                continue
            if ret is None or ret.created_at < release.created_at:
                ret = release

        if ret is None:
            raise ReleaseNotFoundError("no release found")
        return ret

    def pull_requests_since(self, ref: str) -> List[PullRequest]:
        """Fetch the pull requests merged into the release branch since ``ref``."""
        numbers = pr_numbers_since(ref, self.config.branch, self.config.git_dir)
        if not numbers:
            self.logger.info("No new pull requests found.")
            return []

        return self.fetch_pull_requests(numbers)

    def fetch_pull_requests(self, numbers: List[int]) -> List[PullRequest]:
        prs = []
        for number in numbers:
            pr = self.client.get_pull_request(number)
            self.logger.info(f"* #{pr.number} {pr.title!r}")
            prs.append(pr)
        return prs

    def update_changelog(self, version: Version, changelog: Changelog) -> None:
        """Prepend the new entries to the ChangeLog file and commit it."""
        path = self.config.changelog_file
        branch = GitBranch.checkout(self.client, self.config.branch)

        prev_content = branch.cat_file(path)
        content = changelog.file_format() + "\n" + prev_content

        if self.dry_run:
            self.logger.info(f"File {path}:\n{changelog.file_format()}")
            return

        branch.add(path, content)
        branch.commit(f"Update {path} for version {version}.")

    def create_release(self, version: Version, changelog: Changelog) -> Optional[Release]:
        """Create the GitHub pre-release for the new version."""
        if self.dry_run:
            self.logger.info(
                f"GitHub Release: tag={version.tag!r} target={self.config.branch!r} "
                f"name={str(version)!r} prerelease=True\n{changelog.markdown()}"
            )
            return None

        release = self.client.create_release(
            tag_name=version.tag,
            target=self.config.branch,
            name=str(version),
            body=changelog.markdown(),
            prerelease=True,
        )
        self.logger.info(f"Successfully created release: {release.html_url}")
        return release

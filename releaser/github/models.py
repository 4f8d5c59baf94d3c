"""Records returned by the GitHub API."""

from datetime import datetime
from typing import Any, Optional, Tuple

from dateutil import parser as date_parser
from pydantic import BaseModel, ConfigDict, field_validator


class User(BaseModel):
    """GitHub user, reduced to what the changelog needs."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    login: str = ""


class Label(BaseModel):
    """Issue / pull request label."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str


class PullRequest(BaseModel):
    """A merged pull request.

    Built from the API payload or a PyGithub object.
    GitHub sends ``null`` for an empty body, which is stored as ``""``.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    number: int = 0
    title: str = ""
    body: str = ""
    user: User = User()
    labels: Tuple[Label, ...] = ()

    @field_validator("title", "body", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("user", mode="before")
    @classmethod
    def default_user(cls, v):
        return {} if v is None else v

    @field_validator("labels", mode="before")
    @classmethod
    def default_labels(cls, v):
        return () if v is None else v

    @property
    def label_names(self) -> Tuple[str, ...]:
        return tuple(label.name for label in self.labels)

    @classmethod
    def from_github(cls, pr: Any) -> "PullRequest":
        """Build from a PyGithub ``PullRequest``."""
        return cls(
            number=pr.number,
            title=pr.title,
            body=pr.body,
            user={"login": pr.user.login} if pr.user else None,
            labels=[{"name": label.name} for label in pr.labels],
        )


class Release(BaseModel):
    """A GitHub release."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    tag_name: str = ""
    draft: bool = False
    prerelease: bool = False
    created_at: Optional[datetime] = None
    html_url: str = ""

    @field_validator("name", "tag_name", "html_url", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_created_at(cls, v: Any) -> Any:
        """Parse GitHub's ISO-8601 timestamps (``2024-01-26T10:00:00Z``)."""
        if isinstance(v, str):
            return date_parser.isoparse(v)
        return v

    @classmethod
    def from_github(cls, release: Any) -> "Release":
        """Build from a PyGithub ``GitRelease``."""
        return cls(
            name=release.title,
            tag_name=release.tag_name,
            draft=release.draft,
            prerelease=release.prerelease,
            created_at=release.created_at,
            html_url=release.html_url,
        )

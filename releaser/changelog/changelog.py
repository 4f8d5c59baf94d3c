"""Changelog assembly from pull request descriptions.

A pull request opts into the changelog with a line of the form::

    ChangeLog: Build system: the foo option has been added.

Entries from pull requests labelled ``core`` come first, ordered by pull
request number; all other entries follow in alphabetical order.
"""

import datetime as dt
import logging
import re
from typing import Iterable, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict

from ..github.models import PullRequest
from ..version import Version


logger = logging.getLogger(__name__)

LABEL_CORE = "core"
TEXT_WIDTH = 80
WRAP_INDENT = 9

CHANGELOG_RE = re.compile(r"^ChangeLog: (.*)", re.MULTILINE)


def has_label(pr: PullRequest, name: str) -> bool:
    """Check whether the pull request carries a label with exactly this name."""
    return name in pr.label_names


class Entry(BaseModel):
    """A single changelog line contributed by one pull request."""

    model_config = ConfigDict(frozen=True)

    text: str
    author: str
    pr_number: int
    is_core: bool = False

    def __str__(self) -> str:
        return f"{self.text} Thanks to @{self.author}. #{self.pr_number}"

    def sort_key(self) -> Tuple[int, int, str]:
        """Core entries first, by PR number; all others after, by text."""
        if self.is_core:
            return (0, self.pr_number, "")
        return (1, 0, self.text)

    def file_format(self) -> str:
        """Render the entry for the ChangeLog file, wrapped at 80 columns.

        Tabs count as eight columns, so both the ``\\t*`` bullet and the
        ``\\t `` continuation indent leave the cursor at column 9. Widths are
        counted in UTF-8 bytes.
        """
        buf = ["\t*"]
        col = WRAP_INDENT
        for word in str(self).split(" "):
            width = len(word.encode("utf-8"))
            if col + 1 + width > TEXT_WIDTH:
                buf.append("\n\t ")
                col = WRAP_INDENT
            buf.append(" " + word)
            col += 1 + width
        buf.append("\n")
        return "".join(buf)


def parse_entry(pr: PullRequest) -> Optional[Entry]:
    """Extract the changelog entry from a pull request body.

    Args:
        pr: Pull request to inspect

    Returns:
        The entry, or None if the body has no ``ChangeLog:`` line
    """
    m = CHANGELOG_RE.search(pr.body)
    if not m:
        return None

    text = m.group(1).strip()
    if not text.endswith("."):
        text += "."

    return Entry(
        text=text,
        author=pr.user.login,
        pr_number=pr.number,
        is_core=has_label(pr, LABEL_CORE),
    )


class Changelog(BaseModel):
    """The changes going into one release, in presentation order."""

    model_config = ConfigDict(frozen=True)

    date: Union[dt.datetime, dt.date]
    version: Version
    entries: Tuple[Entry, ...] = ()

    @classmethod
    def build(cls, date: Union[dt.datetime, dt.date], version: Version,
              prs: Iterable[PullRequest]) -> "Changelog":
        """Collect and order the entries of all pull requests.

        Pull requests without a ``ChangeLog:`` line are skipped.
        """
        entries = []
        for pr in prs:
            entry = parse_entry(pr)
            if entry is None:
                logger.debug(f"PR #{pr.number} has no ChangeLog line, skipping")
                continue
            entries.append(entry)

        entries.sort(key=Entry.sort_key)
        return cls(date=date, version=version, entries=tuple(entries))

    def __str__(self) -> str:
        return self.markdown()

    def markdown(self) -> str:
        """Short form, used as the body of the GitHub release."""
        return "".join(f"*   {entry}\n" for entry in self.entries)

    def file_format(self) -> str:
        """Long form, prepended to the ChangeLog file."""
        header = f"{self.date.strftime('%Y-%m-%d')}, Version {self.version}\n"
        return header + "".join(entry.file_format() for entry in self.entries)

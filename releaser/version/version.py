"""Release versions and next-version inference.

collectd 6 releases are tagged ``collectd-6.<minor>.<patch>[<suffix>]``.
The next version is derived from the labels of the pull requests merged
since the previous release:

- any ``Feature`` label bumps the minor version,
- otherwise any ``Fix`` label bumps the patch version,
- otherwise there is nothing to release.

While a version carries a suffix (e.g. ``.rc0``) only the number inside the
suffix advances.
"""

import logging
import re
from enum import IntEnum
from typing import Iterable, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..exceptions import NoQualifyingChangeError, ParseError
from ..github.models import PullRequest, Release


logger = logging.getLogger(__name__)

EPOCH = 6
TAG_PREFIX = "collectd-"

LABEL_FEATURE = "Feature"
LABEL_FIX = "Fix"

TAG_RE = re.compile(r"collectd-(6)\.([0-9]+)\.([0-9]+)(.*)")
SUFFIX_RE = re.compile(r"([^0-9]*)([0-9]+)(.*)")


class PRType(IntEnum):
    """Kind of change a pull request introduces, ordered by impact."""

    MAINTENANCE = 0
    FIX = 1
    FEATURE = 2


def classify_pr(pr: PullRequest) -> PRType:
    """Classify a pull request by its labels.

    A ``Feature`` label wins over ``Fix``; anything else is maintenance.
    """
    is_fix = False
    for name in pr.label_names:
        if name == LABEL_FEATURE:
            return PRType.FEATURE
        if name == LABEL_FIX:
            is_fix = True
    return PRType.FIX if is_fix else PRType.MAINTENANCE


class Version(BaseModel):
    """An immutable collectd version."""

    model_config = ConfigDict(frozen=True)

    major: int = EPOCH
    minor: int = Field(default=0, ge=0)
    patch: int = Field(default=0, ge=0)
    suffix: str = ""

    @field_validator("major")
    @classmethod
    def check_epoch(cls, v: int) -> int:
        if v != EPOCH:
            raise ValueError(f"major version must be {EPOCH}, got {v}")
        return v

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}{self.suffix}"

    @property
    def tag(self) -> str:
        """Name of the git tag for this version."""
        return TAG_PREFIX + str(self)

    def next(self, prs: Iterable[PullRequest]) -> "Version":
        """Compute the version following this one.

        Args:
            prs: Pull requests merged since this version was released

        Returns:
            The next version

        Raises:
            NoQualifyingChangeError: If no pull request is a feature or a fix
        """
        max_type = max((classify_pr(pr) for pr in prs), default=PRType.MAINTENANCE)
        logger.debug(f"Highest change type since {self}: {max_type.name}")

        if max_type == PRType.FEATURE:
            # patch is intentionally not reset
            ret = self.model_copy(update={"minor": self.minor + 1})
        elif max_type == PRType.FIX:
            ret = self.model_copy(update={"patch": self.patch + 1})
        else:
            raise NoQualifyingChangeError()

        # A suffixed version only advances its suffix.
        if self.suffix:
            return self.next_suffix()

        return ret

    def next_suffix(self) -> "Version":
        """Increment the first number in the suffix, or append ``0`` if it has none."""
        m = SUFFIX_RE.fullmatch(self.suffix)
        if m:
            suffix = f"{m.group(1)}{int(m.group(2)) + 1}{m.group(3)}"
        else:
            suffix = self.suffix + "0"
        return self.model_copy(update={"suffix": suffix})


def parse_tag(tag: Union[str, Release]) -> Version:
    """Parse a release tag such as ``collectd-6.0.0.rc0``.

    Args:
        tag: Tag name, or the release carrying it

    Returns:
        Parsed version

    Raises:
        ParseError: If the tag does not match ``collectd-6.<minor>.<patch>[<suffix>]``
    """
    if isinstance(tag, Release):
        tag = tag.tag_name

    m = TAG_RE.fullmatch(tag)
    if not m:
        raise ParseError(tag)

    return Version(
        major=int(m.group(1)),
        minor=int(m.group(2)),
        patch=int(m.group(3)),
        suffix=m.group(4),
    )

"""Version parsing and next-version inference."""

from .version import (
    EPOCH,
    PRType,
    Version,
    classify_pr,
    parse_tag,
)

__all__ = [
    "EPOCH",
    "PRType",
    "Version",
    "classify_pr",
    "parse_tag",
]

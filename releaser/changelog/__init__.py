"""Changelog generation module."""

from .changelog import (
    Changelog,
    Entry,
    has_label,
    parse_entry,
)

__all__ = [
    "Changelog",
    "Entry",
    "has_label",
    "parse_entry",
]

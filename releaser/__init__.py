"""Releaser - cuts collectd releases from merged pull requests."""

__version__ = "0.1.0"

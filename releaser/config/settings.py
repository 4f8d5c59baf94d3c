"""Configuration management for Releaser."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)

TOKEN_ENV = "GITHUB_TOKEN"


class Config(BaseSettings):
    """Configuration settings for Releaser."""

    model_config = SettingsConfigDict(
        env_prefix="RELEASER_", case_sensitive=False, extra="ignore"
    )

    api_url: str = "https://api.github.com"
    github_token: Optional[str] = None
    owner: str = "collectd"
    repo: str = "collectd"
    branch: str = "collectd-6.0"
    git_dir: Optional[str] = None
    changelog_file: str = "ChangeLog"
    dry_run: bool = True
    timeout: float = 30.0

    @field_validator("api_url")
    @classmethod
    def normalize_api_url(cls, v):
        """Ensure the API URL has a protocol and no trailing slash."""
        if v and not v.startswith(("http://", "https://")):
            v = f"https://{v}"
        return v.rstrip("/")


def load_json_config(config_path: str) -> dict:
    """Load configuration from JSON file.

    Args:
        config_path: Path to JSON configuration file

    Returns:
        Configuration dictionary

    Raises:
        ValueError: If the file cannot be read or parsed
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Error loading config file {config_path}: {e}") from e


def find_config_file() -> Optional[str]:
    """Find configuration file in common locations.

    Returns:
        Path to config file or None if not found
    """
    search_paths = [
        "releaser.json",
        ".releaser.json",
        "~/.releaser.json",
        "~/.config/releaser/config.json",
    ]

    for path_str in search_paths:
        path = Path(path_str).expanduser()
        if path.is_file():
            return str(path)

    return None


def get_config(config_file: Optional[str] = None) -> Config:
    """Load configuration from a JSON file and environment variables.

    Environment variables take precedence over the file. The token is also
    read from the plain ``GITHUB_TOKEN`` variable.

    Args:
        config_file: Optional path to JSON config file

    Returns:
        Configuration object
    """
    config_data = {}

    json_config_path = config_file or find_config_file()
    if json_config_path:
        try:
            config_data.update(load_json_config(json_config_path))
            logger.debug(f"Loaded config file {json_config_path}")
        except ValueError as e:
            logger.warning(f"Ignoring config file: {e}")

    env_config = {
        "api_url": os.getenv("RELEASER_API_URL"),
        "github_token": os.getenv("RELEASER_GITHUB_TOKEN") or os.getenv(TOKEN_ENV),
        "owner": os.getenv("RELEASER_OWNER"),
        "repo": os.getenv("RELEASER_REPO"),
        "branch": os.getenv("RELEASER_BRANCH"),
        "git_dir": os.getenv("RELEASER_GIT_DIR"),
    }

    env_config = {k: v for k, v in env_config.items() if v is not None}
    config_data.update(env_config)

    return Config(**config_data)


def create_sample_config(path: str = "releaser.json") -> None:
    """Create a sample configuration file.

    Args:
        path: Path where to create the sample config file
    """
    sample_config = {
        "github_token": "your-github-token-here",
        "owner": "collectd",
        "repo": "collectd",
        "branch": "collectd-6.0",
        "git_dir": "/path/to/collectd/.git",
    }

    with open(path, "w", encoding="utf-8") as f:
        json.dump(sample_config, f, indent=2)

    print(f"Sample configuration file created at: {path}")
    print("Please edit the file and add your GitHub token.")

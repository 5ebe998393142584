"""Configuration management for ghchangelog."""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Any, List
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


ENV_PREFIX = "GHCHANGELOG_"

# Wildcard value for ``issue_line_labels`` that selects every label
ALL_LABELS = "ALL"


def is_in_array(item: Any, array: List[Any]) -> bool:
    """Check if item is in array.

    Args:
        item: Item to search for
        array: List to search in

    Returns:
        True if item is found in array
    """
    return item in array


class Options(BaseSettings):
    """Rendering options for a changelog run."""

    frontmatter: Optional[str] = None
    header: str = "# Changelog"
    base: Optional[str] = "HISTORY.md"

    unreleased: bool = True
    unreleased_only: bool = False
    unreleased_label: str = "Unreleased"
    future_release: Optional[str] = None

    simple_list: bool = False
    compare_link: bool = True
    release_url: Optional[str] = None
    date_format: str = "%Y-%m-%d"

    filter_issues_by_milestone: bool = False
    issues_of_open_milestones: bool = True
    issue_line_labels: List[str] = []
    author: bool = True
    usernames_as_github_logins: bool = False

    issues: bool = True
    pulls: bool = True
    issue_prefix: str = "**Closed issues:**"
    merge_prefix: str = "**Merged pull requests:**"

    user: Optional[str] = None
    project: Optional[str] = None
    github_site: str = "https://github.com"
    since_tag: Optional[str] = None
    exclude_tags: List[str] = []

    verbose: bool = False

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        extra="forbid",
        frozen=True,
    )

    @field_validator('github_site')
    @classmethod
    def normalize_github_site(cls, v):
        """Ensure the site has a protocol and no trailing slash."""
        if v and not v.startswith(('http://', 'https://')):
            v = f"https://{v}"
        return v.rstrip('/')

    @property
    def project_url(self) -> str:
        """Web URL of the project, used for tree and compare links."""
        return f"{self.github_site}/{self.user}/{self.project}"


def load_json_config(config_path: str) -> dict:
    """Load configuration from JSON file.

    Args:
        config_path: Path to JSON configuration file

    Returns:
        Configuration dictionary
    """
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        raise ValueError(f"Error loading config file {config_path}: {e}")


def find_config_file() -> Optional[str]:
    """Find configuration file in common locations.

    Returns:
        Path to config file or None if not found
    """
    search_paths = [
        "ghchangelog.json",
        ".ghchangelog.json",
        "~/.ghchangelog.json",
        "~/.config/ghchangelog/config.json",
    ]

    for path_str in search_paths:
        path = Path(path_str).expanduser()
        if path.exists() and path.is_file():
            return str(path)

    return None


def get_config(config_file: Optional[str] = None, **overrides: Any) -> Options:
    """Load options from a JSON file, environment variables and overrides.

    Precedence, lowest first: defaults, JSON file, ``GHCHANGELOG_*``
    environment variables, explicit keyword overrides. Overrides that are
    ``None`` are ignored so unset CLI flags fall through.

    Args:
        config_file: Optional path to JSON config file
        **overrides: Option values that win over every other source

    Returns:
        Options object
    """
    logger = logging.getLogger(__name__)
    config_data = {}

    json_config_path = config_file or find_config_file()
    if json_config_path:
        try:
            config_data.update(load_json_config(json_config_path))
            logger.debug(f"Loaded configuration from {json_config_path}")
        except ValueError as e:
            logger.warning(f"{e}; using environment and defaults")

    # Environment variables override JSON config, so drop JSON keys that
    # the environment also sets and let the settings model read them
    env_keys = {key.upper() for key in os.environ}
    config_data = {
        k: v for k, v in config_data.items()
        if f"{ENV_PREFIX}{k}".upper() not in env_keys
    }

    config_data.update({k: v for k, v in overrides.items() if v is not None})

    return Options(**config_data)


def create_sample_config(path: str = "ghchangelog.json") -> None:
    """Create a sample configuration file.

    Args:
        path: Path where to create the sample config file
    """
    sample_config = {
        "user": "your-github-user",
        "project": "your-project",
        "header": "# Changelog",
        "base": "HISTORY.md",
        "issue_line_labels": ["bug", "enhancement"],
        "usernames_as_github_logins": True,
    }

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(sample_config, f, indent=2)

    print(f"Sample configuration file created at: {path}")
    print("Please edit the file and set your GitHub user and project.")

"""ghchangelog - Markdown changelogs from GitHub tags, issues and pull requests."""

__version__ = "0.1.0"

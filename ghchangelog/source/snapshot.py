"""Tag and issue source backed by a local JSON snapshot of GitHub data."""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from ..changelog.models import Item, Label, Milestone, Tag, User


# Timestamp fields tried in order when an item has no actual_date
ITEM_DATE_FIELDS = ("actual_date", "merged_at", "closed_at", "created_at")


class SnapshotError(ValueError):
    """Raised when a snapshot file cannot be read or parsed."""


class SnapshotSource:
    """Reads tags, issues and pull requests from a JSON export.

    The document has the shape::

        {
            "tags": [{"name": "v1.0.0", "date": "2024-01-01T00:00:00Z"}],
            "issues": [{"number": 1, "title": "...", "html_url": "...",
                        "closed_at": "...", "labels": [...], "user": {...}}],
            "pull_requests": [{"number": 2, "merged_at": "...", ...}]
        }

    Records follow the GitHub REST payloads. Entries of ``issues`` carrying a
    non-null ``pull_request`` marker are treated as pull requests.
    """

    def __init__(self, path: str, logger: Optional[logging.Logger] = None):
        """Initialize snapshot source.

        Args:
            path: Path to the snapshot JSON file
            logger: Logger instance
        """
        self.path = path
        self.logger = logger or logging.getLogger(__name__)
        self._data: Optional[Dict[str, Any]] = None

    def _load(self) -> Dict[str, Any]:
        if self._data is None:
            try:
                with open(self.path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise SnapshotError(f"Error loading snapshot {self.path}: {e}")
            if not isinstance(data, dict):
                raise SnapshotError(f"Snapshot {self.path} must contain a JSON object")
            self._data = data
        return self._data

    def fetch_tags(self) -> List[Tag]:
        """Return all tags of the snapshot in file order."""
        tags = []
        for raw in self._load().get('tags', []):
            tag = self._parse_tag(raw)
            if tag is not None:
                tags.append(tag)

        self.logger.debug(f"Loaded {len(tags)} tags from {self.path}")
        return tags

    def fetch_issues_and_pull_requests(self) -> Tuple[List[Item], List[Item]]:
        """Return the (issues, pull_requests) pools of the snapshot."""
        data = self._load()
        issues = []
        pull_requests = []

        for raw in data.get('issues', []):
            item = self._parse_item(raw, is_pull_request=raw.get('pull_request') is not None)
            if item is None:
                continue
            if item.is_pull_request:
                pull_requests.append(item)
            else:
                issues.append(item)

        for raw in data.get('pull_requests', []):
            item = self._parse_item(raw, is_pull_request=True)
            if item is not None:
                pull_requests.append(item)

        self.logger.debug(
            f"Loaded {len(issues)} issues and {len(pull_requests)} pull requests from {self.path}"
        )
        return issues, pull_requests

    def _parse_tag(self, raw: Dict[str, Any]) -> Optional[Tag]:
        time = raw.get('date') or raw.get('time') or (raw.get('commit') or {}).get('created_at')
        if not time:
            self.logger.warning(f"Skipping tag {raw.get('name')!r} without a date")
            return None

        try:
            return Tag(name=raw['name'], link=raw.get('link'), time=time)
        except (KeyError, ValueError) as e:
            raise SnapshotError(f"Invalid tag in {self.path}: {raw!r}: {e}")

    def _parse_item(self, raw: Dict[str, Any], is_pull_request: bool) -> Optional[Item]:
        actual_date = next((raw[f] for f in ITEM_DATE_FIELDS if raw.get(f)), None)
        if actual_date is None:
            self.logger.warning(f"Skipping #{raw.get('number')} without a date")
            return None

        user = raw.get('user')
        milestone = raw.get('milestone')
        try:
            return Item(
                number=raw['number'],
                title=raw['title'],
                html_url=raw['html_url'],
                actual_date=actual_date,
                labels=tuple(Label(name=label['name'], url=label.get('url') or '') for label in raw.get('labels') or []),
                user=User(login=user['login'], html_url=user.get('html_url', '')) if user else None,
                is_pull_request=is_pull_request,
                milestone=Milestone(title=milestone['title'], state=milestone.get('state', 'closed')) if milestone else None,
            )
        except (KeyError, ValidationError) as e:
            raise SnapshotError(f"Invalid item #{raw.get('number')} in {self.path}: {e}")

from __future__ import annotations

from typing import Any, Sequence

import pytest

from ghchangelog.changelog.models import Item, Label, Milestone, Tag, User
from ghchangelog.config import Options


PROJECT_URL = "https://github.com/octocat/hello"


class StaticSource:
    """In-memory tag and item source."""

    def __init__(self, tags: Sequence[Tag] = (), issues: Sequence[Item] = (),
                 pull_requests: Sequence[Item] = ()) -> None:
        self.tags = list(tags)
        self.issues = list(issues)
        self.pull_requests = list(pull_requests)

    def fetch_tags(self) -> list[Tag]:
        return list(self.tags)

    def fetch_issues_and_pull_requests(self) -> tuple[list[Item], list[Item]]:
        return list(self.issues), list(self.pull_requests)


def make_options(**kwargs: Any) -> Options:
    values: dict[str, Any] = {"user": "octocat", "project": "hello", "base": None}
    values.update(kwargs)
    return Options(**values)


def make_tag(name: str, time: str) -> Tag:
    return Tag(name=name, time=time)


def make_item(
    number: int,
    date: str,
    title: str | None = None,
    pull_request: bool = False,
    user: str | None = None,
    labels: Sequence[str] = (),
    milestone: str | None = None,
    milestone_state: str = "closed",
) -> Item:
    kind = "pull" if pull_request else "issues"
    return Item(
        number=number,
        title=title or f"Item {number}",
        html_url=f"{PROJECT_URL}/{kind}/{number}",
        actual_date=date,
        labels=tuple(
            Label(name=name, url=f"https://api.github.com/repos/octocat/hello/labels/{name}")
            for name in labels
        ),
        user=User(login=user, html_url=f"https://github.com/{user}") if user else None,
        is_pull_request=pull_request,
        milestone=Milestone(title=milestone, state=milestone_state) if milestone else None,
    )


@pytest.fixture
def options() -> Options:
    return make_options()

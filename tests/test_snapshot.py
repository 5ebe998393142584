from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from ghchangelog.source import SnapshotError, SnapshotSource


def _snapshot(tmp_path: Path, data: object) -> str:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_fetch_tags_parses_dates(tmp_path: Path) -> None:
    source = SnapshotSource(_snapshot(tmp_path, {"tags": [
        {"name": "v1.0", "date": "2024-01-01T00:00:00Z"},
        {"name": "v0.9", "commit": {"created_at": "2023-12-01T08:00:00+01:00"}},
        {"name": "no-date"},
    ]}))

    tags = source.fetch_tags()

    assert [tag.name for tag in tags] == ["v1.0", "v0.9"]
    assert tags[0].time == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert tags[0].link == "v1.0"
    assert tags[1].time == datetime(2023, 12, 1, 7, 0, tzinfo=timezone.utc)


def test_fetch_issues_and_pull_requests(tmp_path: Path) -> None:
    source = SnapshotSource(_snapshot(tmp_path, {
        "issues": [
            {"number": 1, "title": "Bug", "html_url": "https://github.com/o/p/issues/1",
             "closed_at": "2024-01-02T00:00:00Z",
             "labels": [{"name": "bug", "url": "https://api.github.com/repos/o/p/labels/bug"}],
             "milestone": {"title": "v1.0", "state": "closed"}},
            {"number": 2, "title": "PR listed as issue", "html_url": "https://github.com/o/p/pull/2",
             "closed_at": "2024-01-03T00:00:00Z", "pull_request": {"url": "..."},
             "user": {"login": "alice", "html_url": "https://github.com/alice"}},
            {"number": 3, "title": "Marker is null", "html_url": "https://github.com/o/p/issues/3",
             "closed_at": "2024-01-03T00:00:00Z", "pull_request": None},
            {"number": 4, "title": "Still open", "html_url": "https://github.com/o/p/issues/4"},
        ],
        "pull_requests": [
            {"number": 5, "title": "Merged", "html_url": "https://github.com/o/p/pull/5",
             "merged_at": "2024-01-04T00:00:00Z", "closed_at": "2024-01-05T00:00:00Z"},
        ],
    }))

    issues, pull_requests = source.fetch_issues_and_pull_requests()

    assert [i.number for i in issues] == [1, 3]
    assert [p.number for p in pull_requests] == [2, 5]
    assert all(not i.is_pull_request for i in issues)
    assert all(p.is_pull_request for p in pull_requests)
    assert issues[0].labels[0].name == "bug"
    assert issues[0].milestone.title == "v1.0"
    assert pull_requests[0].user.login == "alice"
    assert pull_requests[1].user is None
    assert pull_requests[1].actual_date == datetime(2024, 1, 4, tzinfo=timezone.utc)


def test_missing_snapshot_raises(tmp_path: Path) -> None:
    with pytest.raises(SnapshotError):
        SnapshotSource(str(tmp_path / "missing.json")).fetch_tags()


def test_snapshot_must_be_an_object(tmp_path: Path) -> None:
    with pytest.raises(SnapshotError):
        SnapshotSource(_snapshot(tmp_path, [])).fetch_tags()


def test_item_without_title_raises(tmp_path: Path) -> None:
    source = SnapshotSource(_snapshot(tmp_path, {"issues": [
        {"number": 1, "html_url": "https://github.com/o/p/issues/1", "closed_at": "2024-01-02T00:00:00Z"},
    ]}))
    with pytest.raises(SnapshotError):
        source.fetch_issues_and_pull_requests()


def test_null_labels_and_label_urls_are_treated_as_absent(tmp_path: Path) -> None:
    source = SnapshotSource(_snapshot(tmp_path, {"issues": [
        {"number": 1, "title": "No labels", "html_url": "https://github.com/o/p/issues/1",
         "closed_at": "2024-01-02T00:00:00Z", "labels": None},
        {"number": 2, "title": "Label without url", "html_url": "https://github.com/o/p/issues/2",
         "closed_at": "2024-01-02T00:00:00Z", "labels": [{"name": "bug", "url": None}]},
    ]}))

    issues, _ = source.fetch_issues_and_pull_requests()

    assert issues[0].labels == ()
    assert issues[1].labels[0].name == "bug"
    assert issues[1].labels[0].url == ""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from ghchangelog.changelog import CREDIT_LINE
from ghchangelog.cli.main import cli


SNAPSHOT = {
    "tags": [
        {"name": "v1.0", "date": "2024-01-01T00:00:00Z"},
        {"name": "v2.0", "date": "2024-02-01T00:00:00Z"},
    ],
    "pull_requests": [
        {"number": 5, "title": "Add feature", "html_url": "https://github.com/octocat/hello/pull/5",
         "merged_at": "2024-01-15T00:00:00Z",
         "labels": [{"name": "enhancement", "url": "https://api.github.com/repos/octocat/hello/labels/enhancement"}],
         "user": {"login": "alice", "html_url": "https://github.com/alice"}},
    ],
}


def _write_snapshot(tmp_path: Path) -> str:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(SNAPSHOT), encoding="utf-8")
    return str(path)


def _base_args(tmp_path: Path) -> list[str]:
    return [
        "--config-file", str(tmp_path / "none.json"),
        "generate",
        "--data", _write_snapshot(tmp_path),
        "--user", "octocat",
        "--project", "hello",
        "--base", str(tmp_path / "HISTORY.md"),
    ]


def test_generate_to_stdout(tmp_path: Path) -> None:
    result = CliRunner().invoke(
        cli,
        _base_args(tmp_path) + ["--stdout", "--usernames-as-github-logins", "--issue-line-labels", "ALL"],
    )

    assert result.exit_code == 0, result.output
    assert "## [v2.0](https://github.com/octocat/hello/tree/v2.0) (2024-02-01)" in result.output
    assert (
        "- Add feature [\\#5](https://github.com/octocat/hello/pull/5)"
        " [enhancement](https://github.com/octocat/hello/labels/enhancement) (@alice)"
    ) in result.output


def test_generate_writes_output_file(tmp_path: Path) -> None:
    output = tmp_path / "CHANGELOG.md"

    result = CliRunner().invoke(cli, _base_args(tmp_path) + ["--output", str(output), "--no-author"])

    assert result.exit_code == 0, result.output
    content = output.read_text(encoding="utf-8")
    assert content.startswith("# Changelog\n\n## [v2.0]")
    assert content.endswith(CREDIT_LINE)
    assert "alice" not in content


def test_generate_requires_user_and_project(tmp_path: Path) -> None:
    result = CliRunner().invoke(cli, [
        "--config-file", str(tmp_path / "none.json"),
        "generate", "--data", _write_snapshot(tmp_path), "--stdout",
    ])

    assert result.exit_code == 1


def test_generate_reports_snapshot_errors(tmp_path: Path) -> None:
    result = CliRunner().invoke(cli, [
        "--config-file", str(tmp_path / "none.json"),
        "generate", "--data", str(tmp_path / "missing.json"),
        "--user", "octocat", "--project", "hello", "--stdout",
    ])

    assert result.exit_code == 1


def test_init_config(tmp_path: Path) -> None:
    path = tmp_path / "ghchangelog.json"
    result = CliRunner().invoke(cli, ["init-config", "--path", str(path)])

    assert result.exit_code == 0
    assert json.loads(path.read_text(encoding="utf-8"))["user"] == "your-github-user"

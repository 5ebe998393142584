"""Markdown rendering of changelog headers, sections and item lines."""

from typing import List, Optional, Sequence

from ..config import ALL_LABELS, Options, is_in_array
from .models import Boundary, Item, Label, Unreleased


# Characters that would otherwise change how a title renders
ENCAPSULATED_CHARACTERS = ["<", ">", "*", "_", "(", ")", "[", "]", "#"]

API_LABEL_HOST = "api.github.com/repos"
WEB_LABEL_HOST = "github.com"

NULL_USER = "{Null user}"


def escape_markdown(text: str) -> str:
    """Backslash-escape Markdown-significant characters in ``text``."""
    text = text.replace("\\", "\\\\")
    for char in ENCAPSULATED_CHARACTERS:
        text = text.replace(char, f"\\{char}")
    return text


def labels_for_line(item: Item, options: Options) -> List[Label]:
    """Labels of ``item`` selected by ``issue_line_labels``, in item order."""
    if options.issue_line_labels == [ALL_LABELS]:
        return list(item.labels)
    return [label for label in item.labels
            if is_in_array(label.name, options.issue_line_labels)]


def format_label_badges(item: Item, options: Options) -> str:
    badges = []
    for label in labels_for_line(item, options):
        url = label.url.replace(API_LABEL_HOST, WEB_LABEL_HOST, 1)
        badges.append(f" [{label.name}]({url})")
    return "".join(badges)


def format_author(item: Item, options: Options) -> str:
    """Attribution suffix for pull requests, empty for plain issues."""
    if not options.author or not item.is_pull_request:
        return ""

    user = item.user
    if user is None:
        return f" ({NULL_USER})"

    if options.usernames_as_github_logins:
        return f" (@{user.login})"
    return f" ([{user.login}]({user.html_url}))"


def format_issue_line(item: Item, options: Options) -> str:
    """Render one issue or pull request as a Markdown line.

    Example:
        Add coveralls integration [\\#223](https://github.com/o/r/pull/223) (@octocat)

    Args:
        item: Issue or pull request
        options: Rendering options

    Returns:
        Line without list marker or newline
    """
    line = f"{escape_markdown(item.title)} [\\#{item.number}]({item.html_url})"
    if options.issue_line_labels:
        line += format_label_badges(item, options)
    return line + format_author(item, options)


def render_sub_section(items: Sequence[Item], prefix: str, options: Options) -> str:
    """Render a titled list of items, or nothing when there are none.

    Args:
        items: Items in display order
        prefix: Sub-section title, omitted when ``simple_list`` is set
        options: Rendering options

    Returns:
        Markdown block ending with a blank line, or an empty string
    """
    if not items:
        return ""

    parts = []
    if not options.simple_list:
        parts.append(f"{prefix}\n\n")
    for item in items:
        parts.append(f"- {format_issue_line(item, options)}\n")
    parts.append("\n")
    return "".join(parts)


def render_header(newer_tag: Boundary, older_tag_link: Optional[str],
                  project_url: str, options: Options) -> str:
    """Render the ``##`` release header and optional compare link.

    The plain unreleased section has no date. A ``release_url`` template is
    %-formatted with the tag link; templates that do not take exactly one
    value raise ``TypeError``.

    Args:
        newer_tag: Tag or unreleased boundary the section ends at
        older_tag_link: Link name of the previous tag, if any
        project_url: Web URL of the project
        options: Rendering options

    Returns:
        Header block
    """
    newer_tag_link = newer_tag.link

    if options.release_url:
        release_url = options.release_url % newer_tag_link
    else:
        release_url = f"{project_url}/tree/{newer_tag_link}"

    if isinstance(newer_tag, Unreleased) and not newer_tag.future:
        header = f"## [{newer_tag.name}]({release_url})\n\n"
    else:
        time_string = newer_tag.time.strftime(options.date_format)
        header = f"## [{newer_tag.name}]({release_url}) ({time_string})\n"

    if options.compare_link and older_tag_link:
        header += f"[Full Changelog]({project_url}/compare/{older_tag_link}...{newer_tag_link})\n\n"

    return header

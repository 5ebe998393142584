"""Changelog generation module."""

from .generator import CREDIT_LINE, Generator, generate_changelog
from .filters import filter_by_milestone, filter_for_interval, select_by_interval
from .formatting import escape_markdown, format_issue_line, render_header, render_sub_section
from .models import Item, Label, Milestone, Tag, Unreleased, User

__all__ = [
    "CREDIT_LINE",
    "Generator",
    "generate_changelog",
    "filter_by_milestone",
    "filter_for_interval",
    "select_by_interval",
    "escape_markdown",
    "format_issue_line",
    "render_header",
    "render_sub_section",
    "Item",
    "Label",
    "Milestone",
    "Tag",
    "Unreleased",
    "User",
]

"""Changelog generation logic."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Tuple

from ..config import Options
from .filters import filter_for_interval
from .formatting import render_header, render_sub_section
from .models import Boundary, Item, Tag, TagInterval, Unreleased
from .tags import (
    build_tag_section_mapping,
    filter_excluded_tags,
    filter_since_tag,
    sort_tags_by_date,
    version_of_first_item,
)


CREDIT_LINE = "\n\n\\* *This Changelog was automatically generated by ghchangelog*"


class Generator:
    """Builds a changelog document from tags and issue/pull-request pools.

    ``source`` provides ``fetch_tags()`` and
    ``fetch_issues_and_pull_requests()``; see ``ghchangelog.source``.
    """

    def __init__(self, options: Options, source, logger: Optional[logging.Logger] = None):
        self.options = options
        self.source = source
        self.logger = logger or logging.getLogger(__name__)

        self.sorted_tags: List[Tag] = []
        self.filtered_tags: List[Tag] = []
        self.tag_section_mapping: List[TagInterval] = []
        self.issues: List[Item] = []
        self.pull_requests: List[Item] = []

        self._since_tag: Optional[str] = None
        self._since_tag_detected = False

    def _progress(self, message: str) -> None:
        if self.options.verbose:
            self.logger.info(message)
        else:
            self.logger.debug(message)

    @property
    def tag_names(self) -> List[str]:
        """Names of tags that own a section; the since tag only bounds one."""
        since_tag = self.detect_since_tag()
        return [tag.name for tag in self.filtered_tags if tag.name != since_tag]

    def detect_since_tag(self) -> Optional[str]:
        """Tag the changelog starts after.

        The configured ``since_tag`` wins; otherwise the newest version
        already present in the base file is used.
        """
        if not self._since_tag_detected:
            self._since_tag = self.options.since_tag or version_of_first_item(self.options.base)
            self._since_tag_detected = True
        return self._since_tag

    def fetch_and_filter_tags(self) -> List[Tag]:
        """Fetch, sort and select tags and derive the section mapping."""
        since_tag = self.detect_since_tag()

        all_tags = self.source.fetch_tags()
        self.sorted_tags = filter_excluded_tags(sort_tags_by_date(all_tags), self.options.exclude_tags)
        self.filtered_tags = filter_since_tag(self.sorted_tags, since_tag)
        self.tag_section_mapping = build_tag_section_mapping(
            self.sorted_tags, self.filtered_tags, since_tag
        )

        self._progress(
            f"Using {len(self.filtered_tags)} of {len(all_tags)} tags, "
            f"{len(self.tag_section_mapping)} sections"
        )
        return self.filtered_tags

    def fetch_issues_and_pull_requests(self) -> Tuple[List[Item], List[Item]]:
        issues, pull_requests = self.source.fetch_issues_and_pull_requests()
        self.issues = list(issues)
        self.pull_requests = list(pull_requests)

        self._progress(f"Fetched {len(self.issues)} issues and {len(self.pull_requests)} pull requests")
        return self.issues, self.pull_requests

    def unreleased_boundary(self) -> Unreleased:
        """Upper boundary for items not yet part of a tagged release."""
        now = datetime.now(timezone.utc)
        if self.options.future_release:
            return Unreleased(
                name=self.options.future_release,
                link=self.options.future_release,
                time=now,
                future=True,
            )
        return Unreleased(name=self.options.unreleased_label, time=now)

    def create_log_for_tag(self, pull_requests: List[Item], issues: List[Item],
                           newer_tag: Boundary, older_tag_link: Optional[str]) -> str:
        """Render one release section: header, pull requests, issues."""
        parts = [render_header(newer_tag, older_tag_link, self.options.project_url, self.options)]

        if self.options.pulls:
            parts.append(render_sub_section(pull_requests, self.options.merge_prefix, self.options))
        if self.options.issues:
            parts.append(render_sub_section(issues, self.options.issue_prefix, self.options))

        return "".join(parts)

    def generate_between_tags(self, older_tag: Optional[Tag], newer_tag: Optional[Boundary]) -> str:
        """Generate the section for items between two tags.

        Args:
            older_tag: Items at or before this tag are excluded; None for the first tag
            newer_tag: Items after this tag are excluded; None for the unreleased section

        Returns:
            Rendered section, empty for an unreleased section without items
        """
        filtered_issues, filtered_pull_requests = filter_for_interval(
            self.issues, self.pull_requests, older_tag, newer_tag, self.tag_names, self.options
        )

        older_tag_link = self.detect_since_tag() if older_tag is None else older_tag.link

        if not isinstance(newer_tag, Tag):
            if not filtered_issues and not filtered_pull_requests:
                # do not generate empty unreleased section
                return ""
            newer_tag = newer_tag or self.unreleased_boundary()

        return self.create_log_for_tag(filtered_pull_requests, filtered_issues, newer_tag, older_tag_link)

    def generate_unreleased_section(self) -> str:
        if not self.options.unreleased:
            return ""

        if self.filtered_tags:
            start_tag = self.filtered_tags[0]
        elif self.sorted_tags:
            start_tag = self.sorted_tags[-1]
        else:
            start_tag = None
        return self.generate_between_tags(start_tag, None)

    def generate_for_all_tags(self) -> str:
        """Generate the unreleased section and one section per tag interval."""
        self._progress("Generating log...")

        parts = [self.generate_unreleased_section()]
        for older_tag, newer_tag in self.tag_section_mapping:
            parts.append(self.generate_between_tags(older_tag, newer_tag))

        return "".join(parts)

    def compound_changelog(self) -> str:
        """Build the complete changelog document.

        Returns:
            Markdown document ending with exactly one credit line
        """
        self.fetch_and_filter_tags()
        self.fetch_issues_and_pull_requests()

        parts = []
        if self.options.frontmatter:
            parts.append(self.options.frontmatter)
        parts.append(f"{self.options.header}\n\n")

        if self.options.unreleased_only:
            start_tag = self.filtered_tags[0] if self.filtered_tags else None
            parts.append(self.generate_between_tags(start_tag, None))
        else:
            parts.append(self.generate_for_all_tags())

        base = self.options.base
        if base and Path(base).is_file():
            self._progress(f"Appending base file {base}")
            with open(base, 'r', encoding='utf-8') as f:
                parts.append(f.read())

        # Remove credit lines left by earlier runs
        log = "".join(parts).replace(CREDIT_LINE, "")
        return log + CREDIT_LINE


def generate_changelog(options: Options, source, logger: Optional[logging.Logger] = None) -> str:
    """Generate a changelog document for ``source``.

    Args:
        options: Rendering options
        source: Tag and item source
        logger: Logger instance

    Returns:
        Markdown document
    """
    return Generator(options, source, logger).compound_changelog()

"""Tag ordering, selection and section mapping."""

import logging
import re
from pathlib import Path
from typing import List, Optional, Sequence

from .models import Tag, TagInterval


logger = logging.getLogger(__name__)

# First release heading of an existing changelog, e.g. "## [v1.2.0](...)"
VERSION_HEADING_RE = re.compile(r'^## \[(?P<version>[^\]]+)\]', re.MULTILINE)


def sort_tags_by_date(tags: Sequence[Tag]) -> List[Tag]:
    """Sort tags newest first; ties keep their input order."""
    return sorted(tags, key=lambda tag: tag.time, reverse=True)


def filter_excluded_tags(tags: Sequence[Tag], exclude_tags: Sequence[str]) -> List[Tag]:
    if not exclude_tags:
        return list(tags)
    return [tag for tag in tags if tag.name not in exclude_tags]


def filter_since_tag(tags: Sequence[Tag], since_tag: Optional[str]) -> List[Tag]:
    """Keep tags from the newest down to and including ``since_tag``.

    Args:
        tags: Tags sorted newest first
        since_tag: Name of the oldest tag to keep

    Returns:
        Selected tags; all of them if ``since_tag`` is unset or unknown
    """
    if not since_tag:
        return list(tags)

    for index, tag in enumerate(tags):
        if tag.name == since_tag:
            return list(tags[:index + 1])

    logger.warning(f"Since tag '{since_tag}' not found, using all tags")
    return list(tags)


def build_tag_section_mapping(section_tags: Sequence[Tag], filtered_tags: Sequence[Tag],
                              since_tag: Optional[str] = None) -> List[TagInterval]:
    """Pair every filtered tag with the tag released before it.

    The older side is looked up in ``section_tags`` so compare links stay
    correct when tags between two sections were filtered out. The since tag
    only serves as a lower boundary and gets no section of its own.

    Args:
        section_tags: All candidate tags, newest first
        filtered_tags: Tags that get a section
        since_tag: Name of the tag the changelog starts after

    Returns:
        List of (older, newer) intervals, newest first
    """
    mapping = []
    for index, tag in enumerate(section_tags):
        if since_tag and tag.name == since_tag:
            continue
        if tag not in filtered_tags:
            continue
        older_tag = section_tags[index + 1] if index + 1 < len(section_tags) else None
        mapping.append((older_tag, tag))
    return mapping


def version_of_first_item(base: Optional[str]) -> Optional[str]:
    """Return the version of the first release heading in ``base``.

    Args:
        base: Path to an existing changelog

    Returns:
        Version name or None if the file is missing or has no heading
    """
    if not base:
        return None

    path = Path(base)
    if not path.is_file():
        return None

    with open(path, 'r', encoding='utf-8') as f:
        match = VERSION_HEADING_RE.search(f.read())

    return match.group('version') if match else None

"""Selection of issues and pull requests for one tag interval."""

import logging
from typing import Collection, List, Optional, Sequence, Tuple

from ..config import Options, is_in_array
from .models import Boundary, Item, Tag


logger = logging.getLogger(__name__)


def select_by_interval(items: Sequence[Item], date_field: str,
                       older_tag: Optional[Tag],
                       newer_tag: Optional[Boundary]) -> List[Item]:
    """Select items whose ``date_field`` lies in ``(older, newer]``.

    A missing older tag means "since the beginning", a missing or
    unreleased newer tag means "up to now". Input order is kept.

    Args:
        items: Issues or pull requests
        date_field: Name of the timestamp attribute to compare
        older_tag: Exclusive lower boundary
        newer_tag: Inclusive upper boundary

    Returns:
        Items falling inside the interval
    """
    lower = older_tag.time if older_tag is not None else None
    upper = newer_tag.time if isinstance(newer_tag, Tag) else None

    selected = []
    for item in items:
        t = getattr(item, date_field)
        if t is None:
            continue
        if lower is not None and not t > lower:
            continue
        if upper is not None and not t <= upper:
            continue
        selected.append(item)
    return selected


def filter_by_milestone(items: Sequence[Item], tag_name: Optional[str],
                        all_items: Sequence[Item], tag_names: Collection[str],
                        options: Options) -> List[Item]:
    """Refine a time-filtered list using milestone assignments.

    Items assigned to the milestone of another known tag are dropped, as
    are items of open milestones unless ``issues_of_open_milestones`` is
    set. For a real tag, items from ``all_items`` whose milestone is that
    tag are added even when they fall outside the time window.

    Args:
        items: Time-filtered items
        tag_name: Name of the newer tag, None for the unreleased section
        all_items: Whole pool the items were filtered from
        tag_names: Names of all known tags
        options: Rendering options

    Returns:
        Refined list of items
    """
    kept = []
    for item in items:
        milestone = item.milestone
        if milestone is None:
            kept.append(item)
        elif milestone.is_open:
            if options.issues_of_open_milestones:
                kept.append(item)
        elif not is_in_array(milestone.title, tag_names):
            kept.append(item)

    if tag_name is not None:
        for item in all_items:
            milestone = item.milestone
            if milestone is None or milestone.title != tag_name:
                continue
            if is_in_array(milestone.title, tag_names) and item not in kept:
                kept.append(item)

    return kept


def filter_for_interval(issues: Sequence[Item], pull_requests: Sequence[Item],
                        older_tag: Optional[Tag], newer_tag: Optional[Boundary],
                        tag_names: Collection[str],
                        options: Options) -> Tuple[List[Item], List[Item]]:
    """Apply the time and milestone filters to both item pools.

    Returns:
        Tuple of (filtered issues, filtered pull requests)
    """
    filtered_pull_requests = select_by_interval(pull_requests, "actual_date", older_tag, newer_tag)
    filtered_issues = select_by_interval(issues, "actual_date", older_tag, newer_tag)

    if options.filter_issues_by_milestone:
        newer_tag_name = newer_tag.name if isinstance(newer_tag, Tag) else None
        filtered_issues = filter_by_milestone(
            filtered_issues, newer_tag_name, issues, tag_names, options
        )
        filtered_pull_requests = filter_by_milestone(
            filtered_pull_requests, newer_tag_name, pull_requests, tag_names, options
        )

    logger.debug(
        f"Interval {older_tag.name if older_tag else None!s}.."
        f"{newer_tag.name if newer_tag else None!s}: "
        f"{len(filtered_issues)} issues, {len(filtered_pull_requests)} pull requests"
    )
    return filtered_issues, filtered_pull_requests

# src/utbanner/core/banner.py
"""
Text rules for the single-line coverage banner.

A banner looks like ``//UT Coverage: 33%, 1/3, NEED_MORE (see TICKET-42)``:
a generated prefix followed by an optional hand-written note. Everything here
is pure string work, no I/O.
"""
from enum import Enum

from utbanner.config import (
    ANNOTATION_START,
    BANNER_MARKER,
    BANNER_TEMPLATE,
    ENOUGH_SUFFIX,
    NEED_MORE_SUFFIX,
    TEST_FILE_SUFFIX,
)


class BannerState(Enum):
    MATCH = "match"      # already current, nothing to write
    FOREIGN = "foreign"  # not a managed banner, leave the file alone
    STALE = "stale"      # managed banner with old numbers


def coverage_percent(covered: int, total: int) -> int:
    """Percentage rounded half up, in integer arithmetic."""
    return (200 * covered + total) // (2 * total)


def render_banner(covered: int, total: int, path: str = "") -> str:
    """
    Builds the canonical banner for a file.
    Raises ValueError for counts no report should contain (total must be > 0).
    """
    if total <= 0:
        raise ValueError(f"total line count must be positive, got {total}")
    if covered < 0 or covered > total:
        raise ValueError(f"covered line count {covered} outside 0..{total}")

    banner = BANNER_TEMPLATE.format(
        percent=coverage_percent(covered, total), covered=covered, total=total
    )
    if covered != total:
        # Rounding must never advertise a partially covered file as complete.
        banner = banner.replace("100%", "99%")
    banner += ENOUGH_SUFFIX if str(path).endswith(TEST_FILE_SUFFIX) else NEED_MORE_SUFFIX
    return banner


def classify_banner(existing_line: str, rendered: str) -> BannerState:
    if not existing_line.startswith(BANNER_MARKER):
        return BannerState.FOREIGN
    if existing_line.startswith(rendered):
        return BannerState.MATCH
    return BannerState.STALE


def merge_banner(existing_line: str, rendered: str) -> str:
    """Carries the trailing ' (...)' note of the old line over to the new one."""
    pos = existing_line.find(ANNOTATION_START)
    if pos == -1:
        return rendered
    return rendered + existing_line[pos:]

# merger.py
"""Turns raw search and statistics records into ranked Items.

The videos endpoint carries no usable join key in our raw records, so
``stats_records[i]`` is taken to describe ``search_records[i]``. The two
sequences are aligned before any filtering happens.
"""
import logging
import re
from typing import Iterable, List, Optional, Sequence, Tuple

from errors import MalformedStatEntry
from models import Item, SearchRecord, StatsRecord

logger = logging.getLogger(__name__)

FALLBACK_DURATION = "0:00"

# Closed codepoint intervals for Japanese script.
TARGET_SCRIPT_RANGES: Tuple[Tuple[int, int], ...] = (
    (0x3000, 0x303F),  # CJK symbols and punctuation
    (0x3040, 0x309F),  # hiragana
    (0x30A0, 0x30FF),  # katakana
    (0xFF00, 0xFF9F),  # full-width and half-width forms
    (0x4E00, 0x9FAF),  # CJK unified ideographs
    (0x3400, 0x4DBF),  # CJK extension A
)

_DURATION_RE = re.compile(
    r"^P(?:(?P<days>\d+)D)?"
    r"(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+)S)?)?$"
)
_DIGITS_RE = re.compile(r"^[0-9]+$")


def has_target_script(title: str) -> bool:
    """True if any character of ``title`` falls in TARGET_SCRIPT_RANGES."""
    for char in title:
        codepoint = ord(char)
        for low, high in TARGET_SCRIPT_RANGES:
            if low <= codepoint <= high:
                return True
    return False


def parse_view_count(text: Optional[str]) -> int:
    """Parses a decimal view count string. Raises MalformedStatEntry on anything else."""
    if text is None:
        raise MalformedStatEntry("view count is missing")
    text = str(text).strip()
    if not _DIGITS_RE.match(text):
        raise MalformedStatEntry(f"view count {text!r} is not a non-negative integer")
    return int(text)


def parse_duration(code: Optional[str]) -> str:
    """Decodes an ISO-8601 duration such as ``PT1H2M3S`` into ``1:02:03``.

    Days are folded into hours, and the hour segment is omitted when zero.
    """
    if not code:
        raise MalformedStatEntry("duration is missing")
    stripped = code.strip()
    match = _DURATION_RE.match(stripped)
    if not match or stripped == "P" or stripped.endswith("T"):
        raise MalformedStatEntry(f"duration {code!r} is not an ISO-8601 duration")

    parts = {name: int(value or 0) for name, value in match.groupdict().items()}
    total = (parts["days"] * 24 + parts["hours"]) * 3600 + parts["minutes"] * 60 + parts["seconds"]
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def _apply_stats(record: SearchRecord, stats: Optional[StatsRecord]) -> Tuple[int, str]:
    if stats is None:
        return 0, FALLBACK_DURATION

    try:
        views = parse_view_count(stats.view_count_text)
    except MalformedStatEntry as e:
        logger.debug("Falling back to 0 views for %s: %s", record.video_id, e)
        views = 0

    try:
        duration = parse_duration(stats.duration_code)
    except MalformedStatEntry as e:
        logger.debug("Falling back to %s for %s: %s", FALLBACK_DURATION, record.video_id, e)
        duration = FALLBACK_DURATION
    return views, duration


def merge_records(search_records: Sequence[SearchRecord],
                  stats_records: Sequence[Optional[StatsRecord]]) -> List[Item]:
    """Joins search and statistics records by position, filters titles and normalizes fields."""
    if len(stats_records) > len(search_records):
        logger.warning("Got %d statistics records for %d search records; ignoring the extra ones.",
                       len(stats_records), len(search_records))
    elif len(stats_records) < len(search_records):
        logger.info("Only %d of %d search records have statistics; using defaults for the rest.",
                    len(stats_records), len(search_records))

    seen: set[str] = set()
    merged: List[Item] = []
    for index, record in enumerate(search_records):
        stats = stats_records[index] if index < len(stats_records) else None
        if not has_target_script(record.title):
            continue
        if record.video_id in seen:
            logger.warning("Dropping duplicate video id %s from search results.", record.video_id)
            continue
        seen.add(record.video_id)

        views, duration = _apply_stats(record, stats)
        merged.append(Item(
            id=record.video_id,
            title=record.title,
            view_metric=views,
            duration_text=duration,
            thumbnail_ref=record.thumbnail_url,
        ))
    return merged


def rank_items(items: Iterable[Item]) -> List[Item]:
    """Sorts by view count, highest first. sorted() is stable, so ties keep merge order."""
    return sorted(items, key=lambda item: item.view_metric, reverse=True)

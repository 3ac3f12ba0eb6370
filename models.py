# models.py
from dataclasses import dataclass

WATCH_URL_TEMPLATE = "https://{host}/watch?v={video_id}"
DEFAULT_WATCH_HOST = "www.youtube.com"


def watch_url(video_id: str, host: str = DEFAULT_WATCH_HOST) -> str:
    return WATCH_URL_TEMPLATE.format(host=host, video_id=video_id)


@dataclass(frozen=True)
class Item:
    """A single video in the result set."""
    id: str
    title: str
    view_metric: int = 0
    duration_text: str = "0:00"
    thumbnail_ref: str = ""


@dataclass(frozen=True)
class SearchRecord:
    """One raw entry of the search endpoint."""
    video_id: str
    title: str
    thumbnail_url: str = ""


@dataclass(frozen=True)
class StatsRecord:
    """One raw entry of the videos endpoint, positionally aligned with a SearchRecord."""
    view_count_text: str = ""
    duration_code: str = ""


@dataclass(frozen=True)
class MoveEvent:
    moved_id: str
    target_id: str


@dataclass(frozen=True)
class ToggleEvent:
    id: str


@dataclass(frozen=True)
class SelectAllEvent:
    checked: bool


@dataclass(frozen=True)
class ClickEvent:
    id: str

"""
Shared pytest fixtures for the find-yt-manual tests.
"""
from typing import List

import pytest

from models import Item
from store import OrderedCollection


def make_item(video_id: str, title: str = "", views: int = 0, duration: str = "0:00") -> Item:
    return Item(id=video_id, title=title or f"動画 {video_id}", view_metric=views,
                duration_text=duration, thumbnail_ref=f"https://i.ytimg.com/vi/{video_id}/mqdefault.jpg")


@pytest.fixture
def abc_items() -> List[Item]:
    return [make_item("a", views=30), make_item("b", views=20), make_item("c", views=10)]


@pytest.fixture
def collection(abc_items) -> OrderedCollection:
    return OrderedCollection(abc_items)

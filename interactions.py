# interactions.py
import logging
from typing import Callable, Iterable, Optional, Union

from errors import InvalidReference
from models import (DEFAULT_WATCH_HOST, ClickEvent, Item, MoveEvent, SelectAllEvent,
                    ToggleEvent, watch_url)
from store import OrderedCollection

logger = logging.getLogger(__name__)

Event = Union[MoveEvent, ToggleEvent, SelectAllEvent, ClickEvent]


class InteractionAdapter:
    """Feeds UI events into an OrderedCollection and drops the stale ones.

    Ids come from what the UI last rendered, so a search that replaced the
    result set mid-gesture makes them stale. Those events are logged and
    ignored, as are edits that arrive while a search is still in flight:
    the pending replace would discard them anyway.
    """
    def __init__(self, store: OrderedCollection,
                 opener: Optional[Callable[[str], object]] = None,
                 watch_host: str = DEFAULT_WATCH_HOST):
        self.store = store
        self.opener = opener
        self.watch_host = watch_host
        self.keyword = ""
        self.generation = 0
        self.search_in_flight = False

    # --- Search lifecycle ---
    def begin_search(self, keyword: str) -> int:
        self.generation += 1
        self.search_in_flight = True
        logger.debug("Search %d for %r started.", self.generation, keyword)
        return self.generation

    def complete_search(self, generation: int, keyword: str, items: Iterable[Item]) -> bool:
        """Installs ``items`` if ``generation`` is still the latest search."""
        if generation != self.generation:
            logger.info("Discarding results of superseded search %d (current is %d).",
                        generation, self.generation)
            return False
        self.store.replace(items)
        self.keyword = keyword
        self.search_in_flight = False
        return True

    def fail_search(self, generation: int) -> None:
        if generation == self.generation:
            self.search_in_flight = False

    # --- UI events ---
    def on_move(self, moved_id: str, target_id: str) -> bool:
        if self._blocked("move"):
            return False
        try:
            self.store.reorder(moved_id, target_id)
        except InvalidReference as e:
            logger.info("Dropping stale move %s -> %s: %s", moved_id, target_id, e)
            return False
        return True

    def on_toggle(self, video_id: str) -> bool:
        if self._blocked("toggle"):
            return False
        try:
            self.store.toggle(video_id)
        except InvalidReference as e:
            logger.info("Dropping stale toggle: %s", e)
            return False
        return True

    def on_select_all(self, checked: bool) -> bool:
        if self._blocked("select-all"):
            return False
        self.store.set_all(checked)
        return True

    def on_click(self, video_id: str) -> Optional[str]:
        """Returns the watch URL for ``video_id`` and hands it to the opener, if any."""
        if video_id not in self.store:
            logger.info("Dropping click on unknown video id %r.", video_id)
            return None
        url = self.watch_url(video_id)
        if self.opener is not None:
            self.opener(url)
        return url

    def watch_url(self, video_id: str) -> str:
        return watch_url(video_id, self.watch_host)

    def dispatch(self, event: Event) -> Union[bool, Optional[str]]:
        if isinstance(event, MoveEvent):
            return self.on_move(event.moved_id, event.target_id)
        if isinstance(event, ToggleEvent):
            return self.on_toggle(event.id)
        if isinstance(event, SelectAllEvent):
            return self.on_select_all(event.checked)
        if isinstance(event, ClickEvent):
            return self.on_click(event.id)
        raise TypeError(f"Unsupported event: {event!r}")

    def _blocked(self, kind: str) -> bool:
        if self.search_in_flight:
            logger.info("Dropping %s event while search %d is in flight.", kind, self.generation)
            return True
        return False

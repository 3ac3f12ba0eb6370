# store.py
import logging
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from errors import InvalidReference
from models import Item

logger = logging.getLogger(__name__)


class OrderedCollection:
    """The current result set and the ids selected for export.

    replace, reorder, toggle and set_all are the only ways to change state.
    Order and selection are independent: reordering never touches the
    selection and toggling never touches the order.
    """
    def __init__(self, items: Iterable[Item] = ()):
        self._items: List[Item] = []
        self._index: Dict[str, Item] = {}
        self._selected: Set[str] = set()
        self.replace(items)

    # --- Mutators ---
    def replace(self, items: Iterable[Item]) -> None:
        """Installs a new result set and clears the selection."""
        new_items = list(items)
        index: Dict[str, Item] = {}
        for item in new_items:
            if item.id in index:
                raise ValueError(f"Duplicate video id in result set: {item.id!r}")
            index[item.id] = item

        self._items = new_items
        self._index = index
        self._selected = set()
        logger.debug("Result set replaced with %d items.", len(new_items))

    def reorder(self, moved_id: str, target_id: str) -> None:
        """Moves ``moved_id`` to the position currently held by ``target_id``."""
        self._require(moved_id)
        self._require(target_id)
        if moved_id == target_id:
            return
        old_index = self.index_of(moved_id)
        new_index = self.index_of(target_id)
        item = self._items.pop(old_index)
        self._items.insert(new_index, item)

    def toggle(self, video_id: str) -> bool:
        """Flips selection of ``video_id`` and returns whether it is now selected."""
        self._require(video_id)
        if video_id in self._selected:
            self._selected.discard(video_id)
            return False
        self._selected.add(video_id)
        return True

    def set_all(self, checked: bool) -> None:
        self._selected = set(self._index) if checked else set()

    # --- Read API ---
    @property
    def items(self) -> Tuple[Item, ...]:
        return tuple(self._items)

    @property
    def ids(self) -> List[str]:
        return [item.id for item in self._items]

    @property
    def selected_ids(self) -> FrozenSet[str]:
        return frozenset(self._selected)

    @property
    def all_selected(self) -> bool:
        """Derived select-all flag. Vacuously true for an empty result set."""
        return len(self._selected) == len(self._items)

    def get(self, video_id: str) -> Optional[Item]:
        return self._index.get(video_id)

    def index_of(self, video_id: str) -> int:
        self._require(video_id)
        for position, item in enumerate(self._items):
            if item.id == video_id:
                return position
        raise InvalidReference(video_id)

    def is_selected(self, video_id: str) -> bool:
        return video_id in self._selected

    def selected_items(self) -> List[Item]:
        """Selected items in current display order."""
        return [item for item in self._items if item.id in self._selected]

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, video_id: object) -> bool:
        return video_id in self._index

    def _require(self, video_id: str) -> None:
        if video_id not in self._index:
            raise InvalidReference(video_id)

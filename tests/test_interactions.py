"""
Tests for turning UI events into collection operations
"""
import pytest

from conftest import make_item
from interactions import InteractionAdapter
from models import ClickEvent, MoveEvent, SelectAllEvent, ToggleEvent
from store import OrderedCollection


@pytest.fixture
def adapter(collection):
    return InteractionAdapter(collection)


def test_move_and_toggle_reach_the_store(adapter):
    assert adapter.on_move("a", "b") is True
    assert adapter.on_toggle("c") is True

    assert adapter.store.ids == ["b", "a", "c"]
    assert adapter.store.selected_ids == {"c"}


def test_stale_ids_are_dropped(adapter):
    assert adapter.on_move("a", "gone") is False
    assert adapter.on_toggle("gone") is False

    assert adapter.store.ids == ["a", "b", "c"]
    assert adapter.store.selected_ids == frozenset()


def test_events_are_dropped_while_search_in_flight(adapter):
    adapter.begin_search("new")

    assert adapter.on_move("a", "b") is False
    assert adapter.on_toggle("a") is False
    assert adapter.on_select_all(True) is False
    assert adapter.store.ids == ["a", "b", "c"]
    assert adapter.store.selected_ids == frozenset()


def test_ids_from_before_a_search_are_stale_after_it(adapter):
    generation = adapter.begin_search("dogs")
    assert adapter.complete_search(generation, "dogs", [make_item("x"), make_item("y")])

    assert adapter.on_move("a", "b") is False
    assert adapter.on_toggle("a") is False
    assert adapter.store.ids == ["x", "y"]
    assert adapter.keyword == "dogs"


def test_last_search_wins(adapter):
    first = adapter.begin_search("one")
    second = adapter.begin_search("two")

    assert adapter.complete_search(second, "two", [make_item("new")]) is True
    assert adapter.complete_search(first, "one", [make_item("old")]) is False

    assert adapter.store.ids == ["new"]
    assert adapter.keyword == "two"
    assert not adapter.search_in_flight


def test_failed_search_leaves_result_set(adapter):
    adapter.store.toggle("a")
    generation = adapter.begin_search("broken")

    adapter.fail_search(generation)

    assert not adapter.search_in_flight
    assert adapter.store.ids == ["a", "b", "c"]
    assert adapter.store.selected_ids == {"a"}


def test_failure_of_superseded_search_keeps_newer_in_flight(adapter):
    first = adapter.begin_search("one")
    adapter.begin_search("two")

    adapter.fail_search(first)

    assert adapter.search_in_flight


def test_click_builds_watch_url_and_calls_opener(collection):
    opened = []
    adapter = InteractionAdapter(collection, opener=opened.append)

    assert adapter.on_click("b") == "https://www.youtube.com/watch?v=b"
    assert adapter.on_click("gone") is None
    assert opened == ["https://www.youtube.com/watch?v=b"]


def test_dispatch(adapter):
    assert adapter.dispatch(MoveEvent("c", "a")) is True
    assert adapter.dispatch(ToggleEvent("a")) is True
    assert adapter.dispatch(ClickEvent("a")) == "https://www.youtube.com/watch?v=a"
    assert adapter.store.ids == ["c", "a", "b"]

    assert adapter.dispatch(SelectAllEvent(True)) is True
    assert adapter.store.all_selected
    assert adapter.dispatch(SelectAllEvent(False)) is True
    assert adapter.store.selected_ids == frozenset()

    with pytest.raises(TypeError):
        adapter.dispatch("not an event")


def test_empty_collection_select_all():
    adapter = InteractionAdapter(OrderedCollection())

    assert adapter.on_select_all(True) is True
    assert adapter.store.all_selected


def test_watch_urls_use_configured_host(collection):
    opened = []
    adapter = InteractionAdapter(collection, opener=opened.append, watch_host="yt.example")

    assert adapter.watch_url("a") == "https://yt.example/watch?v=a"
    assert adapter.dispatch(ClickEvent("b")) == "https://yt.example/watch?v=b"
    assert opened == ["https://yt.example/watch?v=b"]

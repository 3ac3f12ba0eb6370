"""
Tests for merging and ranking raw search/statistics records
"""
import pytest

from errors import MalformedStatEntry
from merger import (has_target_script, merge_records, parse_duration,
                    parse_view_count, rank_items)
from models import SearchRecord, StatsRecord


def test_scenario_merge_then_rank():
    """Two Japanese-titled videos come back ranked by views"""
    search = [SearchRecord("a", "テスト1"), SearchRecord("b", "テスト2")]
    stats = [StatsRecord("100", "PT1M30S"), StatsRecord("500", "PT2M")]

    ranked = rank_items(merge_records(search, stats))

    assert [(i.id, i.view_metric, i.duration_text) for i in ranked] == [
        ("b", 500, "2:00"),
        ("a", 100, "1:30"),
    ]


@pytest.mark.parametrize("code, expected", [
    ("PT2M", "2:00"),
    ("PT1M30S", "1:30"),
    ("PT45S", "0:45"),
    ("PT1H2M3S", "1:02:03"),
    ("PT10H", "10:00:00"),
    ("PT90M", "1:30:00"),
    ("P1DT1S", "24:00:01"),
    ("P0D", "0:00"),
])
def test_parse_duration(code, expected):
    assert parse_duration(code) == expected


@pytest.mark.parametrize("code", ["", None, "P", "PT", "1:30", "PT1.5S", "garbage", "P1DT"])
def test_parse_duration_rejects_malformed(code):
    with pytest.raises(MalformedStatEntry):
        parse_duration(code)


def test_parse_view_count():
    assert parse_view_count("12345") == 12345
    assert parse_view_count(" 7 ") == 7
    for bad in ("", None, "-3", "1.5", "many", "１２"):
        with pytest.raises(MalformedStatEntry):
            parse_view_count(bad)


def test_has_target_script():
    assert has_target_script("ひらがな")
    assert has_target_script("カタカナ")
    assert has_target_script("漢字")
    assert has_target_script("Python入門")
    assert has_target_script("ｶﾀｶﾅ")
    assert not has_target_script("English only")
    assert not has_target_script("한국어")
    assert not has_target_script("")


def test_non_japanese_titles_are_dropped_without_shifting_stats():
    """Stats stay aligned with their own search record even when a neighbour is filtered out"""
    search = [SearchRecord("en", "English title"), SearchRecord("jp", "日本語タイトル")]
    stats = [StatsRecord("999", "PT9M"), StatsRecord("5", "PT5S")]

    merged = merge_records(search, stats)

    assert len(merged) == 1
    assert merged[0].id == "jp"
    assert merged[0].view_metric == 5
    assert merged[0].duration_text == "0:05"


def test_short_stats_fall_back_to_defaults():
    search = [SearchRecord("a", "あ"), SearchRecord("b", "い")]
    stats = [StatsRecord("10", "PT1M")]

    merged = merge_records(search, stats)

    assert merged[1].view_metric == 0
    assert merged[1].duration_text == "0:00"


def test_malformed_stat_entry_only_affects_its_item():
    search = [SearchRecord("a", "あ"), SearchRecord("b", "い")]
    stats = [StatsRecord("lots", "soon"), StatsRecord("3", "PT3S")]

    merged = merge_records(search, stats)

    assert (merged[0].view_metric, merged[0].duration_text) == (0, "0:00")
    assert (merged[1].view_metric, merged[1].duration_text) == (3, "0:03")


def test_extra_stats_are_ignored():
    merged = merge_records([SearchRecord("a", "あ")], [StatsRecord("1", "PT1S"), StatsRecord("2", "PT2S")])

    assert len(merged) == 1
    assert merged[0].view_metric == 1


def test_duplicate_ids_keep_first_occurrence():
    search = [SearchRecord("a", "最初"), SearchRecord("a", "二番目")]
    stats = [StatsRecord("1", "PT1S"), StatsRecord("2", "PT2S")]

    merged = merge_records(search, stats)

    assert [(i.id, i.title) for i in merged] == [("a", "最初")]


def test_thumbnail_is_carried_through():
    merged = merge_records([SearchRecord("a", "あ", "https://img/a.jpg")], [StatsRecord("1", "PT1S")])

    assert merged[0].thumbnail_ref == "https://img/a.jpg"


def test_rank_ties_keep_merge_order():
    search = [SearchRecord(vid, f"動画{vid}") for vid in "wxyz"]
    stats = [StatsRecord("5", "PT1S"), StatsRecord("9", "PT1S"), StatsRecord("5", "PT1S"), StatsRecord("", "")]

    ranked = rank_items(merge_records(search, stats))

    assert [i.id for i in ranked] == ["x", "w", "y", "z"]


def test_merge_and_rank_are_deterministic():
    search = [SearchRecord(str(n), f"動画{n}") for n in range(20)]
    stats = [StatsRecord(str(n % 4), "PT1M") for n in range(20)]

    first = rank_items(merge_records(search, stats))
    second = rank_items(merge_records(search, stats))

    assert first == second
    views = [i.view_metric for i in first]
    assert views == sorted(views, reverse=True)

"""
Channel feed parsing and the Siege relevance filter.
"""
import types

from siegestats.feed import (
    FeedEntry,
    find_latest_relevant,
    is_relevant,
    iter_feed_entries,
    pick_tag,
)
from upstream_fakes import entry_xml, feed_xml


def test_relevance_filter_selects_siege_video():
    xml = feed_xml(
        entry_xml("acNews01", "Assassin's Creed News"),
        entry_xml("r6Trail1", "Rainbow Six Siege Y9S4 Trailer"),
    )
    video = find_latest_relevant(xml)
    assert video is not None
    assert video.video_id == "r6Trail1"
    assert video.title == "Rainbow Six Siege Y9S4 Trailer"


def test_newest_relevant_entry_wins():
    xml = feed_xml(
        entry_xml("first001", "R6 Pro League Highlights"),
        entry_xml("second02", "Rainbow Six Siege Operation Reveal"),
    )
    assert find_latest_relevant(xml).video_id == "first001"


def test_entry_fields_are_extracted():
    entry = next(iter_feed_entries(feed_xml(entry_xml("abc123", "Siege Esports"))))
    assert entry == FeedEntry(
        video_id="abc123",
        title="Siege Esports",
        published="2024-11-26T17:00:00+00:00",
        link="https://www.youtube.com/watch?v=abc123",
        thumbnail="https://i2.ytimg.com/vi/abc123/hqdefault.jpg",
    )
    assert entry.to_dict()["videoId"] == "abc123"


def test_feed_title_outside_entries_is_ignored():
    entries = list(iter_feed_entries(feed_xml(entry_xml("abc123", "Far Cry Trailer"))))
    assert [e.title for e in entries] == ["Far Cry Trailer"]


def test_entries_are_yielded_lazily():
    entries = iter_feed_entries(feed_xml(entry_xml("a1", "One"), entry_xml("b2", "Two")))
    assert isinstance(entries, types.GeneratorType)
    assert next(entries).video_id == "a1"
    assert next(entries).video_id == "b2"


def test_missing_fields_become_empty_strings():
    xml = "<feed><entry><title>Rainbow6 clip</title></entry></feed>"
    entry = next(iter_feed_entries(xml))
    assert entry.title == "Rainbow6 clip"
    assert entry.video_id == ""
    assert entry.link == ""
    assert entry.thumbnail == ""
    assert entry.published == ""


def test_relevant_entry_without_video_id_is_skipped():
    xml = (
        "<feed><entry><title>Siege teaser</title></entry>"
        + entry_xml("ok000001", "Siege patch notes")
        + "</feed>"
    )
    assert find_latest_relevant(xml).video_id == "ok000001"


def test_plain_video_id_tag_is_used_as_fallback():
    xml = "<entry><videoId>plain01</videoId><title>Siege</title></entry>"
    assert find_latest_relevant(xml).video_id == "plain01"


def test_no_relevant_video_returns_none():
    xml = feed_xml(entry_xml("a1", "Just Dance 2025"), entry_xml("b2", "Anno 117"))
    assert find_latest_relevant(xml) is None
    assert find_latest_relevant("") is None


def test_title_entities_are_unescaped():
    entry = next(iter_feed_entries(entry_xml("x1", "Siege &amp; Friends")))
    assert entry.title == "Siege & Friends"


def test_is_relevant_is_case_insensitive_substring():
    assert is_relevant("RAINBOW SIX Invitational")
    assert is_relevant("New r6 map")
    assert is_relevant("BesiegeD")
    assert not is_relevant("The Division 2")
    assert not is_relevant(None)


def test_pick_tag_returns_first_match():
    assert pick_tag("<a> one </a><a>two</a>", "a") == "one"
    assert pick_tag("<b>x</b>", "a") == ""

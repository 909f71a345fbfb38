"""
YouTube channel feed parsing.

The channel RSS endpoint returns an Atom document; each <entry> is one upload,
newest first. Fields are pulled out with targeted patterns rather than a full
XML parse so a damaged entry only loses the fields that are damaged.
"""
import html
import re
from dataclasses import asdict, dataclass
from typing import Dict, Iterator, Optional

from siegestats.utils.helpers import safe_lower

RELEVANT_KEYWORDS = ("rainbow six", "rainbow6", "siege", "r6")

ENTRY_PATTERN = re.compile(r"<entry>([\s\S]*?)</entry>")
LINK_HREF_PATTERN = re.compile(r'<link[^>]*href="([^"]+)"')
THUMBNAIL_URL_PATTERN = re.compile(r'<media:thumbnail[^>]*url="([^"]+)"')


@dataclass
class FeedEntry:
    """One video from the feed. Missing fields are empty strings."""
    video_id: str = ""
    title: str = ""
    published: str = ""
    link: str = ""
    thumbnail: str = ""

    def to_dict(self) -> Dict[str, str]:
        data = asdict(self)
        data["videoId"] = data.pop("video_id")
        return data


def pick_tag(block: str, tag: str) -> str:
    """Text of the first <tag>...</tag> in block, stripped, or ""."""
    match = re.search(rf"<{re.escape(tag)}>([\s\S]*?)</{re.escape(tag)}>", block)
    return match.group(1).strip() if match else ""


def _first_group(pattern: "re.Pattern[str]", block: str) -> str:
    match = pattern.search(block)
    return match.group(1) if match else ""


def parse_entry(block: str) -> FeedEntry:
    return FeedEntry(
        video_id=pick_tag(block, "yt:videoId") or pick_tag(block, "videoId"),
        title=html.unescape(pick_tag(block, "title")),
        published=pick_tag(block, "published"),
        link=_first_group(LINK_HREF_PATTERN, block),
        thumbnail=_first_group(THUMBNAIL_URL_PATTERN, block),
    )


def iter_feed_entries(xml_text: str) -> Iterator[FeedEntry]:
    """Lazily yield entries in document order (a single pass over the text)."""
    for match in ENTRY_PATTERN.finditer(xml_text or ""):
        yield parse_entry(match.group(1))


def is_relevant(title: str) -> bool:
    """Case-insensitive substring match against the Siege keywords."""
    lowered = safe_lower(title)
    return any(keyword in lowered for keyword in RELEVANT_KEYWORDS)


def find_latest_relevant(xml_text: str) -> Optional[FeedEntry]:
    """
    First Siege-related entry that has a video id, or None.

    Feeds list newest uploads first, so the first hit is the latest video.
    """
    for entry in iter_feed_entries(xml_text):
        if entry.title and is_relevant(entry.title) and entry.video_id:
            return entry
    return None

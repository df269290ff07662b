"""
Artifact normalizer: raw parsed records -> complete, schedule-stamped artifacts.

The calendar UI never null-checks, so every artifact leaves here with every
common field set. Scheduling (day + time-of-day) is a pure function of the
artifact's position in its array, driven by the per-type tables below.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from one_take_studio.domain.models import AnalysisResult, SpicyMoment

TWITTER_TEMPLATES = (
    "challenge",
    "list",
    "before-after",
    "opposed-thoughts",
    "hidden-truth",
    "curation",
)
UNKNOWN_TEMPLATE = "unknown"

TIKTOK_TIMES = ("9:00 AM", "12:00 PM", "3:00 PM", "6:00 PM", "11:00 AM")
TWITTER_TIMES = ("10:30 AM", "2:00 PM", "9:00 AM")
LINKEDIN_TIMES = ("8:00 AM", "7:30 AM")
NEWSLETTER_TIMES = ("6:00 AM",)

DEFAULT_ANALYSIS_TITLE = "Untitled"

_TIMESTAMP_RE = re.compile(r"^\s*(\d+:\d{2}(?::\d{2})?)")


def _five_day_cycle(index: int) -> int:
    return (index % 5) + 1


def _every_other_day(index: int) -> int:
    # Day 2, Day 4, ...
    return (index * 2) + 2


def _launch_day(index: int) -> int:
    return 1


@dataclass(frozen=True)
class Schedule:
    """index -> (day, time) for one content type."""

    day_for: Callable[[int], int]
    times: Tuple[str, ...]

    def slot(self, index: int) -> Tuple[int, str]:
        return self.day_for(index), self.times[index % len(self.times)]


@dataclass(frozen=True)
class ContentType:
    name: str
    prefix: str
    label: str  # used for "Untitled <label>"
    array_key: str  # key of the array in the model's JSON answer
    schedule: Schedule
    max_items: Optional[int] = None


TIKTOK = ContentType("tiktok", "tt", "TikTok", "scripts", Schedule(_five_day_cycle, TIKTOK_TIMES))
TWITTER = ContentType("twitter", "tw", "Thread", "threads", Schedule(_five_day_cycle, TWITTER_TIMES))
LINKEDIN = ContentType("linkedin", "li", "Post", "posts", Schedule(_every_other_day, LINKEDIN_TIMES))
NEWSLETTER = ContentType(
    "newsletter", "nl", "Newsletter", "newsletters", Schedule(_launch_day, NEWSLETTER_TIMES), max_items=1
)

CONTENT_TYPES: Dict[str, ContentType] = {
    c.name: c for c in (TIKTOK, TWITTER, LINKEDIN, NEWSLETTER)
}


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _title(value: Any, label: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return f"Untitled {label}"


def _tags(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [tag for tag in value if isinstance(tag, str)]


def normalize_template(value: Any) -> str:
    """Lower-case exact match against the six thread templates, else 'unknown'."""
    template = value.lower() if isinstance(value, str) else ""
    return template if template in TWITTER_TEMPLATES else UNKNOWN_TEMPLATE


def normalize_artifact(content_type: ContentType, record: Dict[str, Any], index: int) -> Dict[str, Any]:
    """Build a new artifact for `record` at 0-based `index`; `record` is not modified."""
    day, time = content_type.schedule.slot(index)
    artifact: Dict[str, Any] = {
        "id": f"{content_type.prefix}-{index + 1}",
        "type": content_type.name,
        "title": _title(record.get("title"), content_type.label),
    }
    if content_type is TIKTOK:
        artifact["hook"] = _text(record.get("hook"))
    elif content_type is TWITTER:
        artifact["template"] = normalize_template(record.get("template"))
    artifact["content"] = _text(record.get("content"))
    if content_type is LINKEDIN:
        artifact["shareUrl"] = _text(record.get("shareUrl"))
    artifact["day"] = day
    artifact["time"] = time
    artifact["tags"] = _tags(record.get("tags"))
    return artifact


def normalize_artifacts(content_type: str, records: Any) -> List[Dict[str, Any]]:
    """
    Normalize an array of raw records. Entries that are not JSON objects are
    dropped before positions (and therefore ids/days/times) are assigned.
    """
    ctype = CONTENT_TYPES[content_type]
    if not isinstance(records, list):
        return []
    entries = [r for r in records if isinstance(r, dict)]
    if ctype.max_items is not None:
        entries = entries[:ctype.max_items]
    return [normalize_artifact(ctype, record, index) for index, record in enumerate(entries)]


def format_timestamp(seconds: Any) -> str:
    """Seconds -> 'M:SS' (minutes unpadded). Bad or negative input gives '0:00'."""
    try:
        total = float(seconds)
    except (TypeError, ValueError):
        return "0:00"
    if not math.isfinite(total) or total < 0:
        return "0:00"
    mins = int(total // 60)
    secs = int(total % 60)
    return f"{mins}:{secs:02d}"


def _timestamp(value: Any) -> str:
    if isinstance(value, bool):
        return "0:00"
    if isinstance(value, (int, float)):
        return format_timestamp(value)
    if isinstance(value, str):
        # "0:30-0:59" style ranges keep their start
        match = _TIMESTAMP_RE.match(value)
        if match:
            return match.group(1)
        return value.strip() or "0:00"
    return "0:00"


def _spicy_moment(record: Dict[str, Any]) -> Optional[SpicyMoment]:
    quote = record.get("quote")
    if not isinstance(quote, str) or not quote.strip():
        return None
    moment: SpicyMoment = {"timestamp": _timestamp(record.get("timestamp")), "quote": quote}
    reason = record.get("reason")
    if isinstance(reason, str):
        moment["reason"] = reason
    return moment


def default_analysis(duration_seconds: Any = 0) -> AnalysisResult:
    return {
        "title": DEFAULT_ANALYSIS_TITLE,
        "duration": format_timestamp(duration_seconds),
        "topics": [],
        "spicyMoments": [],
    }


def normalize_analysis(record: Any, duration_seconds: Any = 0) -> AnalysisResult:
    """Coerce the analysis answer; the duration always comes from the transcript."""
    if not isinstance(record, dict):
        return default_analysis(duration_seconds)

    title = record.get("title")
    topics = record.get("topics")
    moments = record.get("spicyMoments")
    spicy: List[SpicyMoment] = []
    if isinstance(moments, list):
        for entry in moments:
            if isinstance(entry, dict):
                moment = _spicy_moment(entry)
                if moment is not None:
                    spicy.append(moment)

    return {
        "title": title if isinstance(title, str) and title.strip() else DEFAULT_ANALYSIS_TITLE,
        "duration": format_timestamp(duration_seconds),
        "topics": [t for t in topics if isinstance(t, str)] if isinstance(topics, list) else [],
        "spicyMoments": spicy,
    }

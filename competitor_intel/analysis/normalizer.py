"""
Content normalizer.

Turns raw content records (competitor posts as collected, or the user's
published posts) into ``ContentItem`` objects. Field names differ between the
upstream tables, so several aliases are accepted per field. Bad values never
raise: they fall back to safe defaults.
"""

import logging
import math
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from competitor_intel.core.exceptions import MalformedContentItemError
from competitor_intel.models.content import ContentItem, EngagementMetrics

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("content_text", "content", "text")
TIMESTAMP_FIELDS = ("post_date", "published_at", "posted_at")
ENGAGEMENT_FIELDS = ("engagement_metrics", "engagement_data", "engagement")
TOPIC_FIELDS = ("topics", "tags")
CONTENT_TYPE_FIELDS = ("content_type", "type")
MEDIA_FIELDS = ("image_urls", "media_urls")

_datetime_adapter = TypeAdapter(datetime)


def _first(record: Mapping, fields: Sequence[str]) -> Any:
    for field in fields:
        value = record.get(field)
        if value is not None:
            return value
    return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string, datetime or epoch seconds into an aware UTC datetime."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None

    try:
        parsed = _datetime_adapter.validate_python(value)
    except ValidationError:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _count(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return 0
        return max(int(value), 0)
    return 0


def parse_engagement(value: Any) -> EngagementMetrics:
    """Read likes/comments/shares from an engagement mapping."""
    if not isinstance(value, Mapping):
        return EngagementMetrics()
    return EngagementMetrics(
        likes=_count(value.get("likes")),
        comments=_count(value.get("comments")),
        shares=_count(value.get("shares")),
    )


def _string_list(value: Any, lowercase: bool = False) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, Iterable):
        return []

    seen = []
    for entry in value:
        if not isinstance(entry, str):
            continue
        cleaned = entry.strip()
        if lowercase:
            cleaned = cleaned.lower()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen


def normalize_record(record: Any, index: Optional[int] = None) -> ContentItem:
    """
    Normalize one raw record.

    Raises:
        MalformedContentItemError: If the record is not a mapping at all
    """
    if not isinstance(record, Mapping):
        raise MalformedContentItemError(
            f"expected a mapping, got {type(record).__name__}", index=index
        )

    text = _first(record, TEXT_FIELDS)
    platform = record.get("platform")
    content_type = _first(record, CONTENT_TYPE_FIELDS)

    return ContentItem(
        text=text if isinstance(text, str) else "",
        posted_at=parse_timestamp(_first(record, TIMESTAMP_FIELDS)),
        platform=platform.strip() if isinstance(platform, str) and platform.strip() else "unknown",
        engagement=parse_engagement(_first(record, ENGAGEMENT_FIELDS)),
        declared_topics=_string_list(_first(record, TOPIC_FIELDS), lowercase=True),
        content_type=content_type.strip() if isinstance(content_type, str) and content_type.strip() else None,
        media_urls=_string_list(_first(record, MEDIA_FIELDS)),
    )


def normalize_content(records: Optional[Iterable[Any]]) -> List[ContentItem]:
    """Normalize a corpus; malformed records become empty items instead of failing the batch."""
    items: List[ContentItem] = []
    for index, record in enumerate(records or []):
        try:
            items.append(normalize_record(record, index=index))
        except MalformedContentItemError as e:
            logger.warning(f"Recovered malformed content item: {e.message}")
            items.append(ContentItem())
    return items


"""
Topic and format extraction.

Topics are the union of declared tags and vocabulary keywords found in the
post text. Formats are coarse tags derived from media presence, text length
and the declared content type. Both return ordered, de-duplicated lists so
that downstream "first N" selections are deterministic.
"""

from typing import Iterable, List, Optional, Sequence

from competitor_intel.core.config import settings
from competitor_intel.models.content import ContentItem


def _add(collected: List[str], value: str):
    if value not in collected:
        collected.append(value)


def extract_topics(
    items: Iterable[ContentItem],
    vocabulary: Optional[Sequence[str]] = None
) -> List[str]:
    """Collect declared topics plus vocabulary keywords matched case-insensitively."""
    keywords = [k.lower() for k in (vocabulary if vocabulary is not None else settings.TOPIC_VOCABULARY)]
    topics: List[str] = []

    for item in items:
        for tag in item.declared_topics:
            _add(topics, tag)

        text = item.text.lower()
        for keyword in keywords:
            if keyword and keyword in text:
                _add(topics, keyword)

    return topics


def extract_formats(
    items: Iterable[ContentItem],
    long_form_threshold: Optional[int] = None,
    short_form_threshold: Optional[int] = None
) -> List[str]:
    """Tag the formats a corpus uses: image, long_form, short_form and declared types."""
    long_form = long_form_threshold if long_form_threshold is not None else settings.LONG_FORM_THRESHOLD
    short_form = short_form_threshold if short_form_threshold is not None else settings.SHORT_FORM_THRESHOLD
    formats: List[str] = []

    for item in items:
        length = len(item.text)
        if item.has_media:
            _add(formats, "image")
        if length > long_form:
            _add(formats, "long_form")
        if 0 < length <= short_form:
            _add(formats, "short_form")
        if item.content_type:
            _add(formats, item.content_type)

    return formats

"""
Unit tests for the content normalizer.

Tests cover:
- Field alias resolution for text, timestamps, engagement and topics
- Recovery from malformed records and values
- Timestamp aliases that are not posting times
"""

import pytest
from datetime import datetime, timezone

from competitor_intel.analysis.normalizer import (
    normalize_content, normalize_record, parse_engagement, parse_timestamp
)
from competitor_intel.core.exceptions import MalformedContentItemError
from competitor_intel.models.content import ContentItem


class TestParseTimestamp:
    """Tests for timestamp parsing."""

    def test_iso_string_with_z_suffix(self):
        parsed = parse_timestamp("2024-03-01T09:30:00Z")
        assert parsed == datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)

    def test_offset_is_converted_to_utc(self):
        parsed = parse_timestamp("2024-03-01T11:30:00+02:00")
        assert parsed == datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)
        assert parsed.tzinfo == timezone.utc

    def test_naive_values_are_treated_as_utc(self):
        parsed = parse_timestamp(datetime(2024, 3, 1, 9, 30))
        assert parsed.tzinfo == timezone.utc

    def test_epoch_seconds(self):
        assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_fractional_seconds_of_any_precision(self):
        parsed = parse_timestamp("2024-03-01T09:00:00.12345+00:00")
        assert parsed == datetime(2024, 3, 1, 9, 0, 0, 123450, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, "", "yesterday", True, {"a": 1}])
    def test_unparseable_values_return_none(self, value):
        assert parse_timestamp(value) is None


class TestParseEngagement:
    """Tests for engagement counter parsing."""

    def test_counts_are_read(self):
        metrics = parse_engagement({"likes": 10, "comments": "3", "shares": 2.0})
        assert (metrics.likes, metrics.comments, metrics.shares) == (10, 3, 2)
        assert metrics.total == 15

    def test_negative_and_junk_values_become_zero(self):
        metrics = parse_engagement({"likes": -5, "comments": "many", "shares": None})
        assert metrics.total == 0

    def test_non_mapping_yields_empty_metrics(self):
        assert parse_engagement("lots").total == 0


class TestNormalizeRecord:
    """Tests for single-record normalization."""

    def test_competitor_post_fields(self):
        item = normalize_record({
            "content_text": "Hello world",
            "post_date": "2024-03-01T09:00:00Z",
            "platform": "linkedin",
            "engagement_metrics": {"likes": 4},
            "topics": ["Marketing", "marketing", " Sales "],
            "content_type": "article",
            "image_urls": ["https://cdn.example.com/a.png"],
        })

        assert item.text == "Hello world"
        assert item.posted_at.hour == 9
        assert item.platform == "linkedin"
        assert item.engagement.likes == 4
        assert item.declared_topics == ["marketing", "sales"]
        assert item.content_type == "article"
        assert item.has_media

    def test_user_post_aliases(self):
        item = normalize_record({
            "content": "My post",
            "published_at": "2024-02-01T10:00:00Z",
            "engagement_data": {"comments": 2},
            "tags": "growth, branding",
        })

        assert item.text == "My post"
        assert item.posted_at is not None
        assert item.engagement.comments == 2
        assert item.declared_topics == ["growth", "branding"]

    def test_missing_fields_use_defaults(self):
        item = normalize_record({})
        assert item == ContentItem()
        assert item.platform == "unknown"
        assert not item.has_timestamp
        assert not item.has_engagement

    def test_row_insert_time_is_not_a_posting_time(self):
        item = normalize_record({
            "content_text": "hi",
            "post_date": None,
            "created_at": "2024-05-01T03:00:00Z",
            "platform": "linkedin",
        })

        assert item.posted_at is None
        assert not item.has_timestamp

    def test_non_mapping_raises(self):
        with pytest.raises(MalformedContentItemError) as exc_info:
            normalize_record(["not", "a", "post"], index=3)
        assert exc_info.value.details["index"] == 3


class TestNormalizeContent:
    """Tests for corpus normalization."""

    def test_malformed_records_are_recovered(self):
        items = normalize_content([{"text": "ok"}, "garbage", None])
        assert len(items) == 3
        assert items[0].text == "ok"
        assert items[1] == ContentItem()
        assert items[2] == ContentItem()

    def test_none_corpus_is_empty(self):
        assert normalize_content(None) == []


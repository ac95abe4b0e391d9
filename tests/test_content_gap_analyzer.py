"""
Unit tests for the Content-Gap Analyzer.
"""

import pytest

from competitor_intel.analysis.content_gap_analyzer import ContentGapAnalyzer
from competitor_intel.analysis.normalizer import normalize_content
from competitor_intel.models.base import ImpactLevel
from competitor_intel.models.content import ContentItem


@pytest.fixture
def analyzer():
    """Create a Content-Gap Analyzer instance for testing."""
    return ContentGapAnalyzer()


class TestContentGapAnalysis:
    """Tests for topic and format gaps."""

    def test_gaps_and_overlaps(self, analyzer, competitor, competitor_posts, user_posts):
        result = analyzer.analyze(
            normalize_content(competitor_posts), normalize_content(user_posts), competitor
        )

        assert result.user_topics == ["marketing", "sales"]
        assert result.content_overlaps.topics == ["marketing", "sales"]
        assert result.content_gaps.topics == [
            "growth", "leadership", "productivity", "branding",
            "technology", "customer service", "strategy", "innovation",
        ]
        assert result.content_overlaps.competitive_intensity == pytest.approx(0.2)
        assert result.content_gaps.formats == ["article", "post"]

    def test_gaps_and_overlaps_partition_competitor_topics(
        self, analyzer, competitor, competitor_posts, user_posts
    ):
        result = analyzer.analyze(
            normalize_content(competitor_posts), normalize_content(user_posts), competitor
        )
        gaps = set(result.content_gaps.topics)
        overlaps = set(result.content_overlaps.topics)

        assert gaps | overlaps == set(result.competitor_topics)
        assert gaps & overlaps == set()

    def test_opportunities_and_recommendations(self, analyzer, competitor, competitor_posts, user_posts):
        result = analyzer.analyze(
            normalize_content(competitor_posts), normalize_content(user_posts), competitor
        )
        opportunities = result.content_gaps.opportunities

        assert len(opportunities) == 5
        assert opportunities[0].topic == "growth"
        assert opportunities[0].priority == ImpactLevel.HIGH
        assert opportunities[0].reasoning == (
            "Acme Corp is actively creating content about growth, which you're not covering"
        )
        assert result.recommendations == [
            "Create content about growth to compete with Acme Corp",
            "Create content about leadership to compete with Acme Corp",
            "Create content about productivity to compete with Acme Corp",
            "Experiment with article content format",
            "Experiment with post content format",
        ]

    def test_empty_user_corpus(self, analyzer, competitor):
        competitor_items = [ContentItem(text=f"marketing idea {i}") for i in range(10)]
        result = analyzer.analyze(competitor_items, [], competitor)

        assert "marketing" in result.content_gaps.topics
        assert result.content_overlaps.topics == []
        assert result.content_overlaps.competitive_intensity == 0

    def test_no_competitor_topics(self, analyzer, competitor):
        result = analyzer.analyze([ContentItem(text="hello")], [ContentItem(text="marketing")], competitor)

        assert result.content_gaps.topics == []
        assert result.content_overlaps.competitive_intensity == 0.0
        assert result.content_gaps.opportunities == []

    def test_full_overlap(self, analyzer, competitor):
        items = [ContentItem(text="sales and marketing")]
        result = analyzer.analyze(items, items, competitor)

        assert result.content_gaps.topics == []
        assert result.content_overlaps.competitive_intensity == 1.0

"""
Unit tests for the Competitive Intelligence Engine.

Tests cover:
- Mode resolution and structural request validation
- Dispatch and result metadata for every mode
- Empty corpora and degenerate inputs
- Reproducibility of aggregate results
"""

import pytest
from datetime import timedelta
from unittest.mock import patch

from competitor_intel.analysis.engine import CONFIDENCE_SCORES, CompetitiveIntelligenceEngine
from competitor_intel.core.exceptions import (
    EngineError, InsufficientDataError, MissingUserCorpusError, UnsupportedModeError
)
from competitor_intel.models.analysis import (
    AnalysisRequest, ComprehensiveAnalysis, ContentGapAnalysis, PerformanceAnalysis,
    SentimentAnalysis, StrategyAnalysis
)
from competitor_intel.models.base import AnalysisMode, AnalysisStatus, ThreatLevel

from conftest import BASE_TIME, make_post


@pytest.fixture
def engine():
    """Create an engine instance for testing."""
    return CompetitiveIntelligenceEngine()


def request_for(mode, competitor, competitor_content=None, user_content=None):
    return AnalysisRequest(
        subject_id="user_1",
        competitor=competitor,
        mode=mode,
        competitor_content=competitor_content,
        user_content=user_content,
        business_profile_id="biz_1",
    )


class TestRequestValidation:
    """Tests for structural errors."""

    def test_unknown_mode(self, engine, competitor, competitor_posts):
        with pytest.raises(UnsupportedModeError) as exc_info:
            engine.analyze(request_for("vibes", competitor, competitor_posts))

        assert exc_info.value.status_code == 400
        assert exc_info.value.details == {"mode": "vibes"}

    def test_missing_competitor_content(self, engine, competitor):
        with pytest.raises(InsufficientDataError):
            engine.analyze(request_for("sentiment", competitor, None))

    def test_empty_competitor_content_for_gap_analysis(self, engine, competitor):
        with pytest.raises(InsufficientDataError):
            engine.analyze(request_for("content_gap", competitor, [], []))

    @pytest.mark.parametrize("mode", ["content_gap", "comprehensive"])
    def test_missing_user_content(self, engine, competitor, competitor_posts, mode):
        with pytest.raises(MissingUserCorpusError) as exc_info:
            engine.analyze(request_for(mode, competitor, competitor_posts, None))

        assert exc_info.value.status_code == 422

    @pytest.mark.parametrize("mode", ["sentiment", "strategy", "performance"])
    def test_user_content_is_optional(self, engine, competitor, competitor_posts, mode):
        outcome = engine.analyze(request_for(mode, competitor, competitor_posts, None))
        assert outcome.result.mode == AnalysisMode(mode)

    def test_unexpected_failures_are_wrapped(self, engine, competitor, competitor_posts):
        with patch.object(engine.sentiment_analyzer, "analyze", side_effect=ZeroDivisionError("boom")):
            with pytest.raises(EngineError) as exc_info:
                engine.analyze(request_for("sentiment", competitor, competitor_posts))

        assert "boom" in exc_info.value.message


class TestDispatch:
    """Tests for per-mode dispatch."""

    @pytest.mark.parametrize("mode,payload_type", [
        ("content_gap", ContentGapAnalysis),
        ("sentiment", SentimentAnalysis),
        ("strategy", StrategyAnalysis),
        ("performance", PerformanceAnalysis),
        ("comprehensive", ComprehensiveAnalysis),
    ])
    def test_payload_and_metadata(self, engine, competitor, competitor_posts, user_posts, mode, payload_type):
        outcome = engine.analyze(request_for(mode, competitor, competitor_posts, user_posts))
        result = outcome.result

        assert isinstance(result.results, payload_type)
        assert result.confidence_score == CONFIDENCE_SCORES[AnalysisMode(mode)]
        assert result.subject_id == "user_1"
        assert result.competitor_id == "comp_123"
        assert result.business_profile_id == "biz_1"
        assert result.status == AnalysisStatus.COMPLETED
        assert result.processing_time_ms >= 0
        assert all(rec.analysis_id == result.id for rec in outcome.recommendations)
        assert len(outcome.recommendations) <= 5

    def test_comprehensive_recommendations(self, engine, competitor, competitor_posts, user_posts):
        outcome = engine.analyze(request_for("comprehensive", competitor, competitor_posts, user_posts))
        summary = outcome.result.results.executive_summary

        assert summary.key_findings[0] == "Acme Corp has 8 content gap opportunities"
        assert 0 <= summary.opportunity_score <= 100
        assert [r.title for r in outcome.recommendations] == [
            "Explore growth Content",
            "Create More article Content",
            "Optimize Posting Schedule",
            "Match Acme Corp's Positive Messaging",
        ]

    def test_each_run_gets_a_new_id(self, engine, competitor, competitor_posts):
        first = engine.analyze(request_for("strategy", competitor, competitor_posts))
        second = engine.analyze(request_for("strategy", competitor, competitor_posts))

        assert first.result.id != second.result.id

    def test_supported_modes(self):
        assert CompetitiveIntelligenceEngine.supported_modes() == [
            "content_gap", "sentiment", "strategy", "performance", "comprehensive"
        ]


class TestScenarios:
    """End-to-end scenarios over small corpora."""

    def test_marketing_gap_against_empty_user_topics(self, engine, competitor):
        posts = [make_post(f"Our marketing update number {i}") for i in range(10)]
        outcome = engine.analyze(request_for("content_gap", competitor, posts, []))
        results = outcome.result.results

        assert "marketing" in results.content_gaps.topics
        assert results.content_overlaps.competitive_intensity == 0
        assert outcome.recommendations[0].title == "Explore marketing Content"

    def test_fourteen_evenly_spaced_posts(self, engine, competitor):
        step = timedelta(days=7) / 13
        posts = [make_post(f"post {i}", posted_at=BASE_TIME + step * i) for i in range(14)]
        results = engine.analyze(request_for("strategy", competitor, posts)).result.results

        assert results.posting_strategy.frequency.posts_per_week == pytest.approx(14.0)
        assert results.posting_strategy.consistency_score == pytest.approx(1.0)

    def test_zero_engagement_corpus(self, engine, competitor, user_posts):
        posts = [make_post(f"post {i}", posted_at=BASE_TIME + timedelta(days=3 * i)) for i in range(5)]
        outcome = engine.analyze(request_for("comprehensive", competitor, posts, user_posts))
        performance = outcome.result.results.detailed_analysis.performance_analysis

        assert performance.engagement_metrics.avg_engagement_rate == 0
        assert performance.top_performing_content == []
        assert outcome.result.results.executive_summary.threat_level == ThreatLevel.LOW

    def test_strategy_without_user_content(self, engine, competitor, competitor_posts):
        outcome = engine.analyze(request_for("strategy", competitor, competitor_posts, None))
        assert isinstance(outcome.result.results, StrategyAnalysis)

    @pytest.mark.parametrize("mode", ["sentiment", "strategy", "performance"])
    def test_empty_competitor_corpus_yields_zero_aggregates(self, engine, competitor, mode):
        outcome = engine.analyze(request_for(mode, competitor, []))
        assert outcome.recommendations == []

    def test_malformed_records_do_not_fail_the_batch(self, engine, competitor):
        posts = [make_post("great post", likes=3), "not a post", 42]
        results = engine.analyze(request_for("sentiment", competitor, posts)).result.results

        assert results.sentiment_distribution.total == 3


class TestReproducibility:
    """Tests for deterministic aggregates and large corpora."""

    @pytest.mark.parametrize("mode", ["content_gap", "sentiment", "strategy", "performance", "comprehensive"])
    def test_same_input_same_results(self, engine, competitor, competitor_posts, user_posts, mode):
        first = engine.analyze(request_for(mode, competitor, competitor_posts, user_posts))
        second = engine.analyze(request_for(mode, competitor, competitor_posts, user_posts))

        assert first.result.results.model_dump() == second.result.results.model_dump()

    def test_large_corpus_is_analyzed_in_full(self, engine, competitor):
        posts = [
            make_post(f"great post {i}", posted_at=BASE_TIME + timedelta(hours=i), likes=i + 1)
            for i in range(120)
        ]
        results = engine.analyze(request_for("sentiment", competitor, posts)).result.results

        assert results.sentiment_distribution.total == 120
        assert results.sentiment_distribution.positive == 120

    def test_large_corpus_performance_counts_every_item(self, engine, competitor):
        posts = [
            make_post(f"post {i}", posted_at=BASE_TIME + timedelta(hours=i), likes=1)
            for i in range(120)
        ]
        results = engine.analyze(request_for("performance", competitor, posts)).result.results

        assert results.engagement_metrics.total_engagement == 120

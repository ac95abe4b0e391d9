"""
Recommendation Generator.

Maps an analysis mode and its results onto a short, ranked list of
recommendation records. Each template carries a fixed priority score, effort
and impact; these are not computed from the data.
"""

import logging
from typing import Callable, Dict, List, Optional

from competitor_intel.models.analysis import (
    AnalysisPayload, ComprehensiveAnalysis, ContentGapAnalysis, PerformanceAnalysis,
    Recommendation, SentimentAnalysis, StrategyAnalysis
)
from competitor_intel.models.base import AnalysisMode, ImpactLevel, RecommendationType, SentimentLabel
from competitor_intel.models.content import CompetitorProfile

logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 5


class RecommendationGenerator:
    """Stateless mapping from analysis results to recommendation records."""

    def generate(
        self,
        mode: AnalysisMode,
        results: AnalysisPayload,
        competitor: CompetitorProfile,
        analysis_id: str
    ) -> List[Recommendation]:
        builders: Dict[AnalysisMode, Callable[..., List[Optional[Recommendation]]]] = {
            AnalysisMode.CONTENT_GAP: lambda: [self._content_topic(results, competitor, analysis_id)],
            AnalysisMode.SENTIMENT: lambda: [self._messaging_tone(results, competitor, analysis_id)],
            AnalysisMode.STRATEGY: lambda: [self._posting_time(results, competitor, analysis_id)],
            AnalysisMode.PERFORMANCE: lambda: [self._content_format(results, competitor, analysis_id)],
            AnalysisMode.COMPREHENSIVE: lambda: self._comprehensive(results, competitor, analysis_id),
        }

        candidates = [rec for rec in builders[mode]() if rec is not None]

        recommendations: List[Recommendation] = []
        seen_types = set()
        for rec in candidates:
            if rec.recommendation_type in seen_types:
                continue
            seen_types.add(rec.recommendation_type)
            recommendations.append(rec)

        recommendations.sort(key=lambda rec: rec.priority_score, reverse=True)
        recommendations = recommendations[:MAX_RECOMMENDATIONS]

        logger.debug(f"Generated {len(recommendations)} recommendations for {mode.value} analysis {analysis_id}")
        return recommendations

    def _comprehensive(
        self,
        results: ComprehensiveAnalysis,
        competitor: CompetitorProfile,
        analysis_id: str
    ) -> List[Optional[Recommendation]]:
        detailed = results.detailed_analysis
        return [
            self._content_topic(detailed.content_gaps, competitor, analysis_id),
            self._posting_time(detailed.strategy_analysis, competitor, analysis_id),
            self._content_format(detailed.performance_analysis, competitor, analysis_id),
            self._messaging_tone(detailed.sentiment_analysis, competitor, analysis_id),
        ]

    @staticmethod
    def _content_topic(
        results: ContentGapAnalysis,
        competitor: CompetitorProfile,
        analysis_id: str
    ) -> Optional[Recommendation]:
        if not results.content_gaps.topics:
            return None

        topic = results.content_gaps.topics[0]
        name = competitor.display_name
        return Recommendation(
            analysis_id=analysis_id,
            recommendation_type=RecommendationType.CONTENT_TOPIC,
            title=f"Explore {topic} Content",
            description=(
                f"{name} is actively creating content about {topic}. "
                f"This represents a content gap opportunity."
            ),
            priority_score=8,
            implementation_effort=ImpactLevel.MEDIUM,
            expected_impact=ImpactLevel.HIGH,
            metadata={"competitor_name": name, "topic": topic},
        )

    @staticmethod
    def _posting_time(
        results: StrategyAnalysis,
        competitor: CompetitorProfile,
        analysis_id: str
    ) -> Optional[Recommendation]:
        peak_hour = results.posting_strategy.best_times.peak_hour
        if peak_hour is None:
            return None

        return Recommendation(
            analysis_id=analysis_id,
            recommendation_type=RecommendationType.POSTING_TIME,
            title="Optimize Posting Schedule",
            description=(
                f"{competitor.display_name} gets best engagement posting around {peak_hour}:00. "
                f"Consider adjusting your schedule."
            ),
            priority_score=6,
            implementation_effort=ImpactLevel.LOW,
            expected_impact=ImpactLevel.MEDIUM,
            metadata={"optimal_hour": peak_hour},
        )

    @staticmethod
    def _content_format(
        results: PerformanceAnalysis,
        competitor: CompetitorProfile,
        analysis_id: str
    ) -> Optional[Recommendation]:
        if not results.top_performing_content:
            return None

        top = results.top_performing_content[0]
        content_type = top.content_type or "top-performing"
        return Recommendation(
            analysis_id=analysis_id,
            recommendation_type=RecommendationType.CONTENT_FORMAT,
            title=f"Create More {content_type} Content",
            description=(
                f"{competitor.display_name}'s best performing content is {content_type}. "
                f"Consider creating similar content formats."
            ),
            priority_score=7,
            implementation_effort=ImpactLevel.MEDIUM,
            expected_impact=ImpactLevel.HIGH,
            metadata={"content_type": top.content_type, "engagement": top.total_engagement},
        )

    @staticmethod
    def _messaging_tone(
        results: SentimentAnalysis,
        competitor: CompetitorProfile,
        analysis_id: str
    ) -> Optional[Recommendation]:
        label = results.overall_sentiment.label
        if label == SentimentLabel.NEUTRAL:
            return None

        name = competitor.display_name
        if label == SentimentLabel.POSITIVE:
            title = f"Match {name}'s Positive Messaging"
            description = (
                f"{name} keeps a consistently positive tone. "
                f"Consider a similarly upbeat voice in your posts."
            )
        else:
            title = f"Differentiate From {name}'s Negative Messaging"
            description = (
                f"{name} leans on a negative tone. "
                f"A constructive, positive voice can set your content apart."
            )

        return Recommendation(
            analysis_id=analysis_id,
            recommendation_type=RecommendationType.MESSAGING_TONE,
            title=title,
            description=description,
            priority_score=5,
            implementation_effort=ImpactLevel.LOW,
            expected_impact=ImpactLevel.MEDIUM,
            metadata={"sentiment_label": label.value, "sentiment_score": results.overall_sentiment.score},
        )

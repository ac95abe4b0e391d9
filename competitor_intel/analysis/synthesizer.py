"""
Synthesizer for comprehensive analyses.

Runs the four analyzers over the same corpora and folds their outputs into a
rule-based threat level, an opportunity score and an executive summary.
The analyzers share only immutable input, so they may run on a thread pool.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from competitor_intel.analysis.content_gap_analyzer import ContentGapAnalyzer
from competitor_intel.analysis.performance_analyzer import PerformanceAnalyzer
from competitor_intel.analysis.sentiment_analyzer import SentimentAnalyzer
from competitor_intel.analysis.strategy_analyzer import StrategyAnalyzer
from competitor_intel.models.analysis import (
    ComprehensiveAnalysis, ContentGapAnalysis, DetailedAnalysis, ExecutiveSummary,
    PerformanceAnalysis, SentimentAnalysis, StrategyAnalysis
)
from competitor_intel.models.base import ThreatLevel, TrendDirection
from competitor_intel.models.content import CompetitorProfile, ContentItem

logger = logging.getLogger(__name__)

MAX_STRATEGIC_RECOMMENDATIONS = 5


def calculate_threat_level(strategy: StrategyAnalysis, performance: PerformanceAnalysis) -> ThreatLevel:
    """Accumulate points for cadence, engagement, consistency and growth."""
    score = 0

    posts_per_week = strategy.posting_strategy.frequency.posts_per_week
    if posts_per_week > 7:
        score += 2
    elif posts_per_week > 3:
        score += 1

    engagement_rate = performance.engagement_metrics.avg_engagement_rate
    if engagement_rate > 100:
        score += 2
    elif engagement_rate > 50:
        score += 1

    if strategy.posting_strategy.consistency_score > 0.8:
        score += 1

    if performance.performance_trends.trend_direction == TrendDirection.INCREASING:
        score += 1

    if score >= 4:
        return ThreatLevel.HIGH
    if score >= 2:
        return ThreatLevel.MEDIUM
    return ThreatLevel.LOW


def calculate_opportunity_score(content_gap: ContentGapAnalysis, performance: PerformanceAnalysis) -> int:
    """0-100 estimate of how exploitable the competitor's weaknesses are."""
    score = min(len(content_gap.content_gaps.topics) * 2, 20)

    engagement_rate = performance.engagement_metrics.avg_engagement_rate
    if engagement_rate < 30:
        score += 15
    elif engagement_rate < 60:
        score += 10
    else:
        score += 5

    if performance.performance_trends.trend_direction == TrendDirection.DECREASING:
        score += 10

    return min(score, 100)


class Synthesizer:
    """Builds the comprehensive analysis from the four analyzers."""

    def __init__(
        self,
        sentiment_analyzer: Optional[SentimentAnalyzer] = None,
        strategy_analyzer: Optional[StrategyAnalyzer] = None,
        performance_analyzer: Optional[PerformanceAnalyzer] = None,
        content_gap_analyzer: Optional[ContentGapAnalyzer] = None,
        parallel: bool = False
    ):
        self.sentiment_analyzer = sentiment_analyzer or SentimentAnalyzer()
        self.strategy_analyzer = strategy_analyzer or StrategyAnalyzer()
        self.performance_analyzer = performance_analyzer or PerformanceAnalyzer()
        self.content_gap_analyzer = content_gap_analyzer or ContentGapAnalyzer()
        self.parallel = parallel

    def run(
        self,
        competitor_items: Sequence[ContentItem],
        user_items: Sequence[ContentItem],
        competitor: CompetitorProfile
    ) -> ComprehensiveAnalysis:
        if self.parallel:
            with ThreadPoolExecutor(max_workers=4, thread_name_prefix="comprehensive") as executor:
                gap_future = executor.submit(
                    self.content_gap_analyzer.analyze, competitor_items, user_items, competitor
                )
                sentiment_future = executor.submit(self.sentiment_analyzer.analyze, competitor_items, competitor)
                strategy_future = executor.submit(self.strategy_analyzer.analyze, competitor_items, competitor)
                performance_future = executor.submit(self.performance_analyzer.analyze, competitor_items, competitor)

                content_gap = gap_future.result()
                sentiment = sentiment_future.result()
                strategy = strategy_future.result()
                performance = performance_future.result()
        else:
            content_gap = self.content_gap_analyzer.analyze(competitor_items, user_items, competitor)
            sentiment = self.sentiment_analyzer.analyze(competitor_items, competitor)
            strategy = self.strategy_analyzer.analyze(competitor_items, competitor)
            performance = self.performance_analyzer.analyze(competitor_items, competitor)

        return self.synthesize(content_gap, sentiment, strategy, performance, competitor)

    def synthesize(
        self,
        content_gap: ContentGapAnalysis,
        sentiment: SentimentAnalysis,
        strategy: StrategyAnalysis,
        performance: PerformanceAnalysis,
        competitor: CompetitorProfile
    ) -> ComprehensiveAnalysis:
        threat_level = calculate_threat_level(strategy, performance)
        opportunity_score = calculate_opportunity_score(content_gap, performance)

        logger.debug(
            f"Synthesized {competitor.competitor_id}: threat {threat_level.value}, "
            f"opportunity {opportunity_score}"
        )

        return ComprehensiveAnalysis(
            executive_summary=ExecutiveSummary(
                key_findings=self._key_findings(content_gap, sentiment, strategy, performance, competitor),
                threat_level=threat_level,
                opportunity_score=opportunity_score,
            ),
            detailed_analysis=DetailedAnalysis(
                content_gaps=content_gap,
                sentiment_analysis=sentiment,
                strategy_analysis=strategy,
                performance_analysis=performance,
            ),
            strategic_recommendations=self._strategic_recommendations(
                content_gap, sentiment, strategy, performance
            ),
        )

    @staticmethod
    def _key_findings(
        content_gap: ContentGapAnalysis,
        sentiment: SentimentAnalysis,
        strategy: StrategyAnalysis,
        performance: PerformanceAnalysis,
        competitor: CompetitorProfile
    ) -> List[str]:
        # Order is part of the contract: gaps, sentiment, cadence, engagement
        return [
            f"{competitor.display_name} has {len(content_gap.content_gaps.topics)} content gap opportunities",
            f"Their content maintains a {sentiment.overall_sentiment.label.value} sentiment",
            f"They post {strategy.posting_strategy.frequency.posts_per_week} times per week on average",
            f"Their average engagement rate is {performance.engagement_metrics.avg_engagement_rate:.2f}%",
        ]

    @staticmethod
    def _strategic_recommendations(
        content_gap: ContentGapAnalysis,
        sentiment: SentimentAnalysis,
        strategy: StrategyAnalysis,
        performance: PerformanceAnalysis
    ) -> List[str]:
        recommendations = []

        gap_topics = content_gap.content_gaps.topics
        if gap_topics:
            recommendations.append(f"Target these untapped topics: {', '.join(gap_topics[:3])}")

        if strategy.posting_strategy.frequency.posts_per_week > 5:
            recommendations.append("Increase posting frequency to match competitive pace")

        if strategy.posting_strategy.consistency_score < 0.7:
            recommendations.append("Improve posting consistency for better audience retention")

        if performance.engagement_metrics.avg_engagement_rate < 30:
            recommendations.append("Focus on increasing engagement through more interactive content")

        if sentiment.overall_sentiment.score > 0.2:
            recommendations.append("Competitor uses positive messaging - consider similar tone")

        return recommendations[:MAX_STRATEGIC_RECOMMENDATIONS]

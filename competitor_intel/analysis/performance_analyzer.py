"""
Performance Analyzer.

Benchmarks a competitor's engagement: per-post averages, the top performing
posts, and a month-by-month engagement trend. Only posts that carry
engagement data take part; posts with all-zero counters are ignored.
"""

import logging
from typing import Dict, List, Sequence

from competitor_intel.models.analysis import (
    Benchmarks, CompetitivePosition, EngagementDistribution, EngagementSummary,
    MonthlyTrend, PerformanceAnalysis, PerformanceTrends, TopContent
)
from competitor_intel.models.base import TrendDirection
from competitor_intel.models.content import CompetitorProfile, ContentItem
from competitor_intel.utils.stats import mean

logger = logging.getLogger(__name__)

TOP_CONTENT_LIMIT = 5
PREVIEW_LENGTH = 100
TREND_WINDOW = 3
TREND_THRESHOLD = 0.1  # fraction of the older window's mean


class PerformanceAnalyzer:
    """Computes engagement benchmarks for a corpus."""

    def analyze(self, items: Sequence[ContentItem], competitor: CompetitorProfile) -> PerformanceAnalysis:
        engaged = [item for item in items if item.has_engagement]

        summary = self.calculate_engagement_metrics(engaged)
        top_content = self.identify_top_content(engaged)
        trends = self.calculate_performance_trends(engaged)

        logger.debug(
            f"Performance for {competitor.competitor_id}: avg engagement "
            f"{summary.avg_engagement_rate} over {len(engaged)}/{len(items)} engaged items"
        )

        return PerformanceAnalysis(
            engagement_metrics=summary,
            top_performing_content=top_content,
            performance_trends=trends,
            benchmarks=Benchmarks(
                avg_engagement_rate=summary.avg_engagement_rate,
                best_content_type=(top_content[0].content_type or "unknown") if top_content else "unknown",
                peak_performance_period=trends.best_period,
            ),
            competitive_position=CompetitivePosition(
                strength_areas=self._identify_strength_areas(summary, top_content),
                improvement_opportunities=self._identify_improvement_areas(trends),
            ),
        )

    def calculate_engagement_metrics(self, engaged: Sequence[ContentItem]) -> EngagementSummary:
        if not engaged:
            return EngagementSummary()

        count = len(engaged)
        likes = sum(item.engagement.likes for item in engaged)
        comments = sum(item.engagement.comments for item in engaged)
        shares = sum(item.engagement.shares for item in engaged)
        total = likes + comments + shares

        if total > 0:
            distribution = EngagementDistribution(
                likes_ratio=likes / total,
                comments_ratio=comments / total,
                shares_ratio=shares / total,
            )
        else:
            distribution = EngagementDistribution()

        return EngagementSummary(
            avg_engagement_rate=round(total / count, 2),
            avg_likes=round(likes / count),
            avg_comments=round(comments / count),
            avg_shares=round(shares / count),
            total_engagement=total,
            engagement_distribution=distribution,
        )

    def identify_top_content(self, engaged: Sequence[ContentItem]) -> List[TopContent]:
        ranked = sorted(engaged, key=lambda item: item.engagement.total, reverse=True)
        top = []
        for item in ranked[:TOP_CONTENT_LIMIT]:
            preview = item.text[:PREVIEW_LENGTH]
            if len(item.text) > PREVIEW_LENGTH:
                preview += "..."
            top.append(TopContent(
                content_text=preview,
                content_type=item.content_type,
                platform=item.platform,
                total_engagement=item.engagement.total,
                posted_at=item.posted_at,
            ))
        return top

    def calculate_performance_trends(self, engaged: Sequence[ContentItem]) -> PerformanceTrends:
        monthly: Dict[str, List[int]] = {}
        for item in engaged:
            if not item.has_timestamp:
                continue
            key = f"{item.posted_at.year:04d}-{item.posted_at.month:02d}"
            monthly.setdefault(key, []).append(item.engagement.total)

        trend = [
            MonthlyTrend(month=month, avg_engagement=round(mean(totals)), posts=len(totals))
            for month, totals in sorted(monthly.items())
        ]
        if not trend:
            return PerformanceTrends()

        best = trend[0]
        for entry in trend[1:]:
            if entry.avg_engagement > best.avg_engagement:
                best = entry

        return PerformanceTrends(
            monthly_trends=trend,
            best_period=best.month,
            best_avg_engagement=best.avg_engagement,
            trend_direction=self._calculate_trend_direction(trend),
        )

    @staticmethod
    def _calculate_trend_direction(trend: List[MonthlyTrend]) -> TrendDirection:
        if len(trend) < 2:
            return TrendDirection.STABLE

        recent_avg = mean([t.avg_engagement for t in trend[-TREND_WINDOW:]])
        older_avg = mean([t.avg_engagement for t in trend[:TREND_WINDOW]])
        change = recent_avg - older_avg

        if change > older_avg * TREND_THRESHOLD:
            return TrendDirection.INCREASING
        if change < -older_avg * TREND_THRESHOLD:
            return TrendDirection.DECREASING
        return TrendDirection.STABLE

    @staticmethod
    def _identify_strength_areas(summary: EngagementSummary, top_content: List[TopContent]) -> List[str]:
        strengths = []

        if summary.avg_engagement_rate > 50:
            strengths.append("High engagement rates")
        if summary.engagement_distribution.comments_ratio > 0.3:
            strengths.append("Strong conversation generation")
        if summary.engagement_distribution.shares_ratio > 0.1:
            strengths.append("Highly shareable content")

        platforms = {content.platform for content in top_content}
        if len(platforms) == 1:
            strengths.append(f"Strong {platforms.pop()} performance")

        return strengths or ["Consistent content creation"]

    @staticmethod
    def _identify_improvement_areas(trends: PerformanceTrends) -> List[str]:
        improvements = []

        if trends.trend_direction == TrendDirection.DECREASING:
            improvements.append("Engagement declining over time")
        if trends.best_avg_engagement < 20:
            improvements.append("Low overall engagement rates")

        months = trends.monthly_trends
        if len(months) > 3:
            swings = [
                abs(current.avg_engagement - previous.avg_engagement)
                for previous, current in zip(months, months[1:])
            ]
            if mean(swings) > trends.best_avg_engagement * 0.5:
                improvements.append("Inconsistent performance across months")

        return improvements or ["Focus on scaling successful content"]

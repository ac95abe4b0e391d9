"""
Sentiment Analyzer.

Lexicon-based polarity scoring. Each post is lower-cased and split on
whitespace; tokens are matched by exact membership against fixed positive
and negative word lists (no stemming, no context). The heuristic is kept
deliberately simple so results are reproducible from the input alone.
"""

import logging
import math
from typing import List, Sequence

from competitor_intel.models.analysis import (
    OverallSentiment, SentimentAnalysis, SentimentDistribution, SentimentTrend
)
from competitor_intel.models.base import SentimentLabel, TrendDirection
from competitor_intel.models.content import CompetitorProfile, ContentItem
from competitor_intel.utils.stats import clamp, mean, pearson_correlation

logger = logging.getLogger(__name__)

POSITIVE_WORDS = frozenset([
    "great", "excellent", "amazing", "wonderful", "fantastic", "love", "best", "perfect",
])
NEGATIVE_WORDS = frozenset([
    "bad", "terrible", "awful", "hate", "worst", "horrible", "disappointing",
])

# Band edges shared by the label, the distribution and the trend
POSITIVE_THRESHOLD = 0.1
NEGATIVE_THRESHOLD = -0.1


def score_text(text: str) -> float:
    """Polarity in [-1, 1]: (positive - negative) / max(word_count / 10, 1)."""
    words = text.lower().split()
    score = 0
    for word in words:
        if word in POSITIVE_WORDS:
            score += 1
        if word in NEGATIVE_WORDS:
            score -= 1
    return clamp(score / max(len(words) / 10, 1), -1.0, 1.0)


def label_for(score: float) -> SentimentLabel:
    if score > POSITIVE_THRESHOLD:
        return SentimentLabel.POSITIVE
    if score < NEGATIVE_THRESHOLD:
        return SentimentLabel.NEGATIVE
    return SentimentLabel.NEUTRAL


def direction_for(change: float) -> TrendDirection:
    if change > POSITIVE_THRESHOLD:
        return TrendDirection.INCREASING
    if change < NEGATIVE_THRESHOLD:
        return TrendDirection.DECREASING
    return TrendDirection.STABLE


class SentimentAnalyzer:
    """Scores a corpus and summarizes its sentiment posture."""

    def analyze(self, items: Sequence[ContentItem], competitor: CompetitorProfile) -> SentimentAnalysis:
        scores = [score_text(item.text) for item in items]
        average = mean(scores)
        label = label_for(average)

        distribution = SentimentDistribution(
            positive=sum(1 for s in scores if s > POSITIVE_THRESHOLD),
            neutral=sum(1 for s in scores if NEGATIVE_THRESHOLD <= s <= POSITIVE_THRESHOLD),
            negative=sum(1 for s in scores if s < NEGATIVE_THRESHOLD),
        )
        trend = self._calculate_trend(items, scores)
        correlation = self._calculate_engagement_correlation(items, scores)

        logger.debug(
            f"Sentiment for {competitor.competitor_id}: {label.value} "
            f"({average:.3f}) over {len(items)} items"
        )

        return SentimentAnalysis(
            overall_sentiment=OverallSentiment(score=average, label=label),
            sentiment_distribution=distribution,
            engagement_correlation=correlation,
            trends=trend,
            insights=self._generate_insights(competitor, label, trend),
        )

    def _calculate_trend(self, items: Sequence[ContentItem], scores: List[float]) -> SentimentTrend:
        """Compare the newest third of dated posts against the oldest third."""
        dated = [(item.posted_at, score) for item, score in zip(items, scores) if item.has_timestamp]
        if len(dated) < 2:
            return SentimentTrend(direction=TrendDirection.STABLE, change=0.0)

        # Newest first; stable sort keeps tied posts in input order
        dated.sort(key=lambda pair: pair[0], reverse=True)
        ordered = [score for _, score in dated]
        n = len(ordered)

        recent = ordered[:math.ceil(n / 3)]
        older = ordered[math.floor(n * 2 / 3):]
        change = mean(recent) - mean(older)

        return SentimentTrend(direction=direction_for(change), change=change)

    def _calculate_engagement_correlation(self, items: Sequence[ContentItem], scores: List[float]) -> float:
        paired = [(score, item.engagement.total) for item, score in zip(items, scores) if item.has_engagement]
        return pearson_correlation(
            [score for score, _ in paired],
            [float(total) for _, total in paired],
        )

    def _generate_insights(
        self,
        competitor: CompetitorProfile,
        label: SentimentLabel,
        trend: SentimentTrend
    ) -> List[str]:
        insights = [f"{competitor.display_name} maintains a {label.value} tone in their content"]
        if trend.direction == TrendDirection.INCREASING:
            insights.append("Their sentiment is becoming more positive over time")
        elif trend.direction == TrendDirection.DECREASING:
            insights.append("Their sentiment is becoming more negative over time")
        else:
            insights.append("Their sentiment remains stable")
        return insights

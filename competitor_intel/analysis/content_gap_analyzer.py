"""
Content-Gap Analyzer.

Compares the topics and formats of the competitor corpus with the user's own
corpus. Gap topics and overlap topics partition the competitor's topics.
"""

import logging
from typing import List, Optional, Sequence

from competitor_intel.analysis.extractor import extract_formats, extract_topics
from competitor_intel.models.analysis import (
    ContentGapAnalysis, ContentGaps, ContentOverlaps, GapOpportunity
)
from competitor_intel.models.base import ImpactLevel
from competitor_intel.models.content import CompetitorProfile, ContentItem

logger = logging.getLogger(__name__)

MAX_OPPORTUNITIES = 5
MAX_TOPIC_RECOMMENDATIONS = 3
MAX_FORMAT_RECOMMENDATIONS = 2


class ContentGapAnalyzer:
    """Finds topics and formats the competitor covers and the user does not."""

    def __init__(self, vocabulary: Optional[Sequence[str]] = None):
        self.vocabulary = vocabulary

    def analyze(
        self,
        competitor_items: Sequence[ContentItem],
        user_items: Sequence[ContentItem],
        competitor: CompetitorProfile
    ) -> ContentGapAnalysis:
        competitor_topics = extract_topics(competitor_items, self.vocabulary)
        user_topics = extract_topics(user_items, self.vocabulary)
        covered = set(user_topics)

        gaps = [topic for topic in competitor_topics if topic not in covered]
        overlaps = [topic for topic in competitor_topics if topic in covered]

        user_formats = set(extract_formats(user_items))
        format_gaps = [fmt for fmt in extract_formats(competitor_items) if fmt not in user_formats]

        name = competitor.display_name
        opportunities = [
            GapOpportunity(
                topic=topic,
                priority=ImpactLevel.HIGH,
                reasoning=f"{name} is actively creating content about {topic}, which you're not covering",
            )
            for topic in gaps[:MAX_OPPORTUNITIES]
        ]

        logger.debug(
            f"Content gaps vs {competitor.competitor_id}: {len(gaps)} topics, "
            f"{len(format_gaps)} formats, {len(overlaps)} overlaps"
        )

        return ContentGapAnalysis(
            competitor_topics=competitor_topics,
            user_topics=user_topics,
            content_gaps=ContentGaps(topics=gaps, formats=format_gaps, opportunities=opportunities),
            content_overlaps=ContentOverlaps(
                topics=overlaps,
                competitive_intensity=len(overlaps) / max(len(competitor_topics), 1),
            ),
            recommendations=self._generate_recommendations(gaps, format_gaps, name),
        )

    @staticmethod
    def _generate_recommendations(gaps: List[str], format_gaps: List[str], name: str) -> List[str]:
        return (
            [f"Create content about {topic} to compete with {name}" for topic in gaps[:MAX_TOPIC_RECOMMENDATIONS]]
            + [f"Experiment with {fmt} content format" for fmt in format_gaps[:MAX_FORMAT_RECOMMENDATIONS]]
        )

"""
Strategy Analyzer.

Derives a competitor's posting cadence, peak posting hour, content mix,
hashtag habits, platform footprint and cadence consistency. All figures are
computed from timestamps and text only; engagement is not used here.
"""

import logging
import re
from collections import Counter
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from competitor_intel.core.config import settings
from competitor_intel.models.analysis import (
    BestTimes, ContentMix, ContentStrategy, HashtagCount, HashtagStrategy,
    PlatformStrategy, PostingFrequency, PostingStrategy, StrategyAnalysis
)
from competitor_intel.models.content import CompetitorProfile, ContentItem
from competitor_intel.utils.stats import clamp, mean, population_stddev

logger = logging.getLogger(__name__)

HASHTAG_PATTERN = re.compile(r"#\w+")
SECONDS_PER_DAY = 60 * 60 * 24

EDUCATIONAL_KEYWORDS = ("how to", "tutorial", "guide")
PROMOTIONAL_KEYWORDS = ("sale", "offer", "discount")

# Below this many dated posts the gap statistics are too noisy to trust
MIN_ITEMS_FOR_CONSISTENCY = 7
NEUTRAL_CONSISTENCY = 0.5
TOP_HASHTAG_COUNT = 10


def _first_max(counts: Dict[str, int]) -> Optional[str]:
    """Key with the highest count; the first-seen key wins ties."""
    best = None
    for key, count in counts.items():
        if best is None or count > counts[best]:
            best = key
    return best


class StrategyAnalyzer:
    """Analyzes posting and content strategy of a corpus."""

    def __init__(self, long_form_threshold: Optional[int] = None):
        self.long_form_threshold = (
            long_form_threshold if long_form_threshold is not None else settings.LONG_FORM_THRESHOLD
        )

    def analyze(self, items: Sequence[ContentItem], competitor: CompetitorProfile) -> StrategyAnalysis:
        frequency = self.calculate_posting_frequency(items)
        best_times = self.analyze_best_times(items)
        content_mix = self.analyze_content_mix(items)
        platform_strategy = self.analyze_platform_strategy(items)

        posting_strategy = PostingStrategy(
            frequency=frequency,
            best_times=best_times,
            consistency_score=self.calculate_consistency_score(items),
        )
        content_strategy = ContentStrategy(
            content_mix=content_mix,
            average_length=self.calculate_average_content_length(items),
            hashtag_strategy=self.analyze_hashtag_strategy(items),
        )

        logger.debug(
            f"Strategy for {competitor.competitor_id}: {frequency.posts_per_week} posts/week, "
            f"consistency {posting_strategy.consistency_score}"
        )

        return StrategyAnalysis(
            posting_strategy=posting_strategy,
            content_strategy=content_strategy,
            platform_strategy=platform_strategy,
            competitive_advantages=self._identify_advantages(frequency, content_mix, platform_strategy),
            recommendations=self._generate_recommendations(frequency, content_mix, best_times),
        )

    def calculate_posting_frequency(self, items: Sequence[ContentItem]) -> PostingFrequency:
        total = len(items)
        if total == 0:
            return PostingFrequency()

        dates = self._sorted_dates(items)
        if len(dates) < 2:
            # A single dated post gives no rate; report the raw count
            return PostingFrequency(
                posts_per_week=float(total),
                posts_per_day=float(total),
                total_posts=total,
                date_range_days=0,
            )

        span_days = (dates[-1] - dates[0]).total_seconds() / SECONDS_PER_DAY
        posts_per_day = total / max(span_days, 1)

        return PostingFrequency(
            posts_per_week=round(posts_per_day * 7, 1),
            posts_per_day=round(posts_per_day, 1),
            total_posts=total,
            date_range_days=round(span_days),
        )

    def analyze_best_times(self, items: Sequence[ContentItem]) -> BestTimes:
        hours = Counter(item.posted_at.hour for item in items if item.has_timestamp)
        if not hours:
            return BestTimes()

        top = max(hours.values())
        peak_hour = min(hour for hour, count in hours.items() if count == top)

        if peak_hour < 12:
            period = "morning"
        elif peak_hour < 17:
            period = "afternoon"
        else:
            period = "evening"

        return BestTimes(
            peak_hour=peak_hour,
            hour_distribution=dict(sorted(hours.items())),
            most_active_period=period,
        )

    def analyze_content_mix(self, items: Sequence[ContentItem]) -> ContentMix:
        categories: Dict[str, int] = {}
        total_length = 0

        for item in items:
            text = item.text
            total_length += len(text)

            length_bucket = "long_form" if len(text) > self.long_form_threshold else "short_form"
            categories[length_bucket] = categories.get(length_bucket, 0) + 1

            lowered = text.lower()
            if any(keyword in lowered for keyword in EDUCATIONAL_KEYWORDS):
                topic_bucket = "educational"
            elif any(keyword in lowered for keyword in PROMOTIONAL_KEYWORDS):
                topic_bucket = "promotional"
            else:
                topic_bucket = "general"
            categories[topic_bucket] = categories.get(topic_bucket, 0) + 1

        total = len(items)
        if total == 0:
            return ContentMix()

        proportions = {category: count / total for category, count in categories.items()}
        return ContentMix(
            proportions=proportions,
            top_category=_first_max(proportions) or "general",
            average_length=round(total_length / total),
        )

    def calculate_average_content_length(self, items: Sequence[ContentItem]) -> int:
        lengths = [len(item.text) for item in items if item.text]
        return round(mean(lengths)) if lengths else 0

    def analyze_hashtag_strategy(self, items: Sequence[ContentItem]) -> HashtagStrategy:
        counts: Dict[str, int] = {}
        total_hashtags = 0

        for item in items:
            matches = HASHTAG_PATTERN.findall(item.text)
            total_hashtags += len(matches)
            for tag in matches:
                tag = tag.lower()
                counts[tag] = counts.get(tag, 0) + 1

        top = sorted(counts.items(), key=lambda pair: pair[1], reverse=True)[:TOP_HASHTAG_COUNT]

        return HashtagStrategy(
            average_hashtags_per_post=round(total_hashtags / len(items), 1) if items else 0.0,
            top_hashtags=[HashtagCount(tag=tag, count=count) for tag, count in top],
            total_unique_hashtags=len(counts),
            hashtag_diversity=len(counts) / max(total_hashtags, 1),
        )

    def analyze_platform_strategy(self, items: Sequence[ContentItem]) -> PlatformStrategy:
        platforms: Dict[str, int] = {}
        for item in items:
            platforms[item.platform] = platforms.get(item.platform, 0) + 1

        return PlatformStrategy(
            platform_distribution=platforms,
            primary_platform=_first_max(platforms),
            multi_platform=len(platforms) > 1,
            platform_focus="single" if len(platforms) <= 1 else "multi",
        )

    def calculate_consistency_score(self, items: Sequence[ContentItem]) -> float:
        """1 - coefficient of variation of the gaps between consecutive posts."""
        if len(items) < MIN_ITEMS_FOR_CONSISTENCY:
            return NEUTRAL_CONSISTENCY

        dates = self._sorted_dates(items)
        if len(dates) < MIN_ITEMS_FOR_CONSISTENCY:
            return NEUTRAL_CONSISTENCY

        gaps = [
            (later - earlier).total_seconds() / SECONDS_PER_DAY
            for earlier, later in zip(dates, dates[1:])
        ]
        average_gap = mean(gaps)
        if average_gap == 0:
            return 1.0

        score = clamp(1 - population_stddev(gaps) / average_gap, 0.0, 1.0)
        return round(score, 2)

    @staticmethod
    def _sorted_dates(items: Sequence[ContentItem]) -> List[datetime]:
        return sorted(item.posted_at for item in items if item.has_timestamp)

    @staticmethod
    def _identify_advantages(
        frequency: PostingFrequency,
        content_mix: ContentMix,
        platform_strategy: PlatformStrategy
    ) -> List[str]:
        return [
            "High posting frequency" if frequency.posts_per_week > 5 else "Moderate posting frequency",
            "Strong educational content focus" if content_mix.educational > 0.3 else "Entertainment-focused content",
            (
                f"Strong presence on {platform_strategy.primary_platform}"
                if platform_strategy.primary_platform else "Multi-platform approach"
            ),
        ]

    @staticmethod
    def _generate_recommendations(
        frequency: PostingFrequency,
        content_mix: ContentMix,
        best_times: BestTimes
    ) -> List[str]:
        cadence = "more frequently" if frequency.posts_per_week > 3 else "at similar frequency"
        recommendations = [
            f"Consider posting {cadence} to match their cadence",
            f"Focus on {content_mix.top_category} content which performs well for them",
        ]
        if best_times.peak_hour is not None:
            recommendations.append(
                f"Target posting times around {best_times.peak_hour}:00 for better engagement"
            )
        return recommendations

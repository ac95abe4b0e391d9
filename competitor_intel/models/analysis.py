"""
Analysis request, result and recommendation models.

Every analyzer returns its own typed record so that the synthesizer and the
recommendation generator read named fields. Results and recommendations are
frozen: a re-run produces a new record, never an update.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field

from competitor_intel.models.base import (
    AnalysisMode, AnalysisStatus, ImpactLevel, RecommendationType,
    SentimentLabel, ThreatLevel, TrendDirection
)
from competitor_intel.models.content import CompetitorProfile


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FrozenModel(BaseModel):
    """Base class for immutable analyzer outputs."""

    class Config:
        frozen = True


# ----------------------------------------------------------------------------
# Request
# ----------------------------------------------------------------------------

class AnalysisRequest(BaseModel):
    """Model for analysis requests.

    Content corpora are raw records as collected upstream; ``None`` means the
    corpus was not supplied at all, which is distinct from an empty list.
    """
    subject_id: str
    competitor: CompetitorProfile
    mode: str
    competitor_content: Optional[List[Any]] = None
    user_content: Optional[List[Any]] = None
    business_profile_id: Optional[str] = None


# ----------------------------------------------------------------------------
# Sentiment
# ----------------------------------------------------------------------------

class OverallSentiment(FrozenModel):
    score: float = 0.0
    label: SentimentLabel = SentimentLabel.NEUTRAL


class SentimentDistribution(FrozenModel):
    positive: int = 0
    neutral: int = 0
    negative: int = 0

    @property
    def total(self) -> int:
        return self.positive + self.neutral + self.negative


class SentimentTrend(FrozenModel):
    direction: TrendDirection = TrendDirection.STABLE
    change: float = 0.0


class SentimentAnalysis(FrozenModel):
    """Sentiment posture of a corpus."""
    overall_sentiment: OverallSentiment
    sentiment_distribution: SentimentDistribution
    engagement_correlation: float = 0.0
    trends: SentimentTrend
    insights: List[str] = Field(default_factory=list)


# ----------------------------------------------------------------------------
# Strategy
# ----------------------------------------------------------------------------

class PostingFrequency(FrozenModel):
    posts_per_week: float = 0.0
    posts_per_day: float = 0.0
    total_posts: int = 0
    date_range_days: int = 0


class BestTimes(FrozenModel):
    peak_hour: Optional[int] = None
    hour_distribution: Dict[int, int] = Field(default_factory=dict)
    most_active_period: str = "unknown"


class PostingStrategy(FrozenModel):
    frequency: PostingFrequency
    best_times: BestTimes
    consistency_score: float = Field(default=0.5, ge=0.0, le=1.0)


class ContentMix(FrozenModel):
    proportions: Dict[str, float] = Field(default_factory=dict)
    top_category: str = "general"
    average_length: int = 0

    @property
    def educational(self) -> float:
        return self.proportions.get("educational", 0.0)


class HashtagCount(FrozenModel):
    tag: str
    count: int


class HashtagStrategy(FrozenModel):
    average_hashtags_per_post: float = 0.0
    top_hashtags: List[HashtagCount] = Field(default_factory=list)
    total_unique_hashtags: int = 0
    hashtag_diversity: float = 0.0


class ContentStrategy(FrozenModel):
    content_mix: ContentMix
    average_length: int = 0
    hashtag_strategy: HashtagStrategy


class PlatformStrategy(FrozenModel):
    platform_distribution: Dict[str, int] = Field(default_factory=dict)
    primary_platform: Optional[str] = None
    multi_platform: bool = False
    platform_focus: str = "single"


class StrategyAnalysis(FrozenModel):
    """Posting cadence and content strategy of a corpus."""
    posting_strategy: PostingStrategy
    content_strategy: ContentStrategy
    platform_strategy: PlatformStrategy
    competitive_advantages: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


# ----------------------------------------------------------------------------
# Performance
# ----------------------------------------------------------------------------

class EngagementDistribution(FrozenModel):
    likes_ratio: float = 0.0
    comments_ratio: float = 0.0
    shares_ratio: float = 0.0


class EngagementSummary(FrozenModel):
    avg_engagement_rate: float = 0.0
    avg_likes: int = 0
    avg_comments: int = 0
    avg_shares: int = 0
    total_engagement: int = 0
    engagement_distribution: EngagementDistribution = Field(default_factory=EngagementDistribution)


class TopContent(FrozenModel):
    content_text: str
    content_type: Optional[str] = None
    platform: str = "unknown"
    total_engagement: int = 0
    posted_at: Optional[datetime] = None


class MonthlyTrend(FrozenModel):
    month: str
    avg_engagement: int = 0
    posts: int = 0


class PerformanceTrends(FrozenModel):
    monthly_trends: List[MonthlyTrend] = Field(default_factory=list)
    best_period: str = "unknown"
    best_avg_engagement: int = 0
    trend_direction: TrendDirection = TrendDirection.STABLE


class Benchmarks(FrozenModel):
    avg_engagement_rate: float = 0.0
    best_content_type: str = "unknown"
    peak_performance_period: str = "unknown"


class CompetitivePosition(FrozenModel):
    strength_areas: List[str] = Field(default_factory=list)
    improvement_opportunities: List[str] = Field(default_factory=list)


class PerformanceAnalysis(FrozenModel):
    """Engagement benchmarks of a corpus."""
    engagement_metrics: EngagementSummary
    top_performing_content: List[TopContent] = Field(default_factory=list)
    performance_trends: PerformanceTrends
    benchmarks: Benchmarks
    competitive_position: CompetitivePosition


# ----------------------------------------------------------------------------
# Content gap
# ----------------------------------------------------------------------------

class GapOpportunity(FrozenModel):
    topic: str
    priority: ImpactLevel = ImpactLevel.HIGH
    reasoning: str


class ContentGaps(FrozenModel):
    topics: List[str] = Field(default_factory=list)
    formats: List[str] = Field(default_factory=list)
    opportunities: List[GapOpportunity] = Field(default_factory=list)


class ContentOverlaps(FrozenModel):
    topics: List[str] = Field(default_factory=list)
    competitive_intensity: float = Field(default=0.0, ge=0.0, le=1.0)


class ContentGapAnalysis(FrozenModel):
    """Topic and format differences between competitor and user corpora."""
    competitor_topics: List[str] = Field(default_factory=list)
    user_topics: List[str] = Field(default_factory=list)
    content_gaps: ContentGaps
    content_overlaps: ContentOverlaps
    recommendations: List[str] = Field(default_factory=list)


# ----------------------------------------------------------------------------
# Comprehensive
# ----------------------------------------------------------------------------

class ExecutiveSummary(FrozenModel):
    key_findings: List[str] = Field(default_factory=list)
    threat_level: ThreatLevel = ThreatLevel.LOW
    opportunity_score: int = Field(default=0, ge=0, le=100)


class DetailedAnalysis(FrozenModel):
    content_gaps: ContentGapAnalysis
    sentiment_analysis: SentimentAnalysis
    strategy_analysis: StrategyAnalysis
    performance_analysis: PerformanceAnalysis


class ComprehensiveAnalysis(FrozenModel):
    """All four analyses plus the synthesized verdict."""
    executive_summary: ExecutiveSummary
    detailed_analysis: DetailedAnalysis
    strategic_recommendations: List[str] = Field(default_factory=list)


AnalysisPayload = Union[
    ComprehensiveAnalysis,
    ContentGapAnalysis,
    SentimentAnalysis,
    StrategyAnalysis,
    PerformanceAnalysis,
]


# ----------------------------------------------------------------------------
# Outputs
# ----------------------------------------------------------------------------

class AnalysisResult(FrozenModel):
    """One completed analysis. Created once per invocation, never mutated."""
    id: str = Field(default_factory=_new_id)
    subject_id: str
    competitor_id: str
    business_profile_id: Optional[str] = None
    mode: AnalysisMode
    results: AnalysisPayload
    confidence_score: float = Field(ge=0.0, le=1.0)
    processing_time_ms: int = Field(default=0, ge=0)
    status: AnalysisStatus = AnalysisStatus.COMPLETED
    created_at: datetime = Field(default_factory=_utcnow)


class Recommendation(FrozenModel):
    """An actionable recommendation attached to exactly one analysis."""
    id: str = Field(default_factory=_new_id)
    analysis_id: str
    recommendation_type: RecommendationType
    title: str
    description: str
    priority_score: float = Field(ge=0.0, le=10.0)
    implementation_effort: ImpactLevel
    expected_impact: ImpactLevel
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=_utcnow)


class AnalysisOutcome(FrozenModel):
    """What the engine hands to the result store."""
    result: AnalysisResult
    recommendations: List[Recommendation] = Field(default_factory=list)

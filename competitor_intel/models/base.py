"""
Base models and common types for the Competitive Content Intelligence Engine.

This module defines the enumerations shared by the analyzers, the
recommendation generator and the API layer.
"""

from enum import Enum


class AnalysisMode(str, Enum):
    """Closed set of analysis types the engine can dispatch on."""
    CONTENT_GAP = "content_gap"
    SENTIMENT = "sentiment"
    STRATEGY = "strategy"
    PERFORMANCE = "performance"
    COMPREHENSIVE = "comprehensive"

    @property
    def requires_user_corpus(self) -> bool:
        """Gap analysis compares both corpora, so it needs the user's posts."""
        return self in (AnalysisMode.CONTENT_GAP, AnalysisMode.COMPREHENSIVE)


class SentimentLabel(str, Enum):
    """Enumeration of sentiment bands."""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class TrendDirection(str, Enum):
    """Enumeration of trend directions."""
    INCREASING = "increasing"
    STABLE = "stable"
    DECREASING = "decreasing"


class ThreatLevel(str, Enum):
    """Enumeration of competitor threat levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ImpactLevel(str, Enum):
    """Enumeration of effort / impact / priority levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RecommendationType(str, Enum):
    """Enumeration of recommendation templates."""
    CONTENT_TOPIC = "content_topic"
    POSTING_TIME = "posting_time"
    CONTENT_FORMAT = "content_format"
    MESSAGING_TONE = "messaging_tone"


class AnalysisStatus(str, Enum):
    """Enumeration of persisted analysis statuses."""
    COMPLETED = "completed"

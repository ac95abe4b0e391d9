"""
Content-related data models for the Competitive Content Intelligence Engine.

This module defines the normalized content unit the analyzers work on,
its engagement counters, and the competitor identity.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class EngagementMetrics(BaseModel):
    """Model for content engagement counters."""
    likes: int = Field(default=0, ge=0)
    comments: int = Field(default=0, ge=0)
    shares: int = Field(default=0, ge=0)

    class Config:
        frozen = True

    @property
    def total(self) -> int:
        """Engagement is the sum of likes, comments and shares."""
        return self.likes + self.comments + self.shares


class ContentItem(BaseModel):
    """A single normalized post from either corpus."""
    text: str = ""
    posted_at: Optional[datetime] = None
    platform: str = "unknown"
    engagement: EngagementMetrics = Field(default_factory=EngagementMetrics)
    declared_topics: List[str] = Field(default_factory=list)
    content_type: Optional[str] = None
    media_urls: List[str] = Field(default_factory=list)

    class Config:
        frozen = True

    @property
    def has_timestamp(self) -> bool:
        return self.posted_at is not None

    @property
    def has_engagement(self) -> bool:
        # All-zero counters carry no signal and are treated as missing data
        return self.engagement.total > 0

    @property
    def has_media(self) -> bool:
        return len(self.media_urls) > 0


class CompetitorProfile(BaseModel):
    """Identity of the competitor whose content is analyzed."""
    competitor_id: str
    name: Optional[str] = None

    class Config:
        frozen = True

    @property
    def display_name(self) -> str:
        return self.name or self.competitor_id

"""
Analysis module for the Competitive Content Intelligence Engine.

This module contains the dispatching engine and the specialized analyzers
for sentiment, strategy, performance and content gaps.
"""

from competitor_intel.analysis.engine import CompetitiveIntelligenceEngine

__all__ = ["CompetitiveIntelligenceEngine"]

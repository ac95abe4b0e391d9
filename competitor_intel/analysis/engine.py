"""
Competitive Intelligence Engine.

Single dispatch point of the pipeline: validates the request, normalizes
both corpora, runs the analyzer(s) the requested mode needs, then always
runs the recommendation generator. The engine performs no I/O and keeps no
state between calls; persistence belongs to the caller.
"""

import logging
import time
from typing import Callable, Dict, List, Optional, Sequence

from competitor_intel.analysis.content_gap_analyzer import ContentGapAnalyzer
from competitor_intel.analysis.normalizer import normalize_content
from competitor_intel.analysis.performance_analyzer import PerformanceAnalyzer
from competitor_intel.analysis.recommendation_generator import RecommendationGenerator
from competitor_intel.analysis.sentiment_analyzer import SentimentAnalyzer
from competitor_intel.analysis.strategy_analyzer import StrategyAnalyzer
from competitor_intel.analysis.synthesizer import Synthesizer
from competitor_intel.core.config import settings
from competitor_intel.core.exceptions import (
    CompetitorIntelException, EngineError, InsufficientDataError,
    MissingUserCorpusError, UnsupportedModeError
)
from competitor_intel.models.analysis import (
    AnalysisOutcome, AnalysisPayload, AnalysisRequest, AnalysisResult
)
from competitor_intel.models.base import AnalysisMode
from competitor_intel.models.content import CompetitorProfile, ContentItem

logger = logging.getLogger(__name__)

# Static per-mode confidence heuristic, not a statistical interval
CONFIDENCE_SCORES: Dict[AnalysisMode, float] = {
    AnalysisMode.CONTENT_GAP: 0.88,
    AnalysisMode.SENTIMENT: 0.82,
    AnalysisMode.STRATEGY: 0.86,
    AnalysisMode.PERFORMANCE: 0.84,
    AnalysisMode.COMPREHENSIVE: 0.87,
}

Handler = Callable[[Sequence[ContentItem], Sequence[ContentItem], CompetitorProfile], AnalysisPayload]


class CompetitiveIntelligenceEngine:
    """
    Runs one competitive analysis per call.

    This engine handles:
    - Mode resolution and structural request validation
    - Normalization of competitor and user content
    - Dispatch to the sentiment, strategy, performance and content-gap analyzers
    - Synthesis of comprehensive analyses
    - Recommendation generation
    """

    def __init__(
        self,
        vocabulary: Optional[Sequence[str]] = None,
        parallel_comprehensive: Optional[bool] = None
    ):
        self.sentiment_analyzer = SentimentAnalyzer()
        self.strategy_analyzer = StrategyAnalyzer()
        self.performance_analyzer = PerformanceAnalyzer()
        self.content_gap_analyzer = ContentGapAnalyzer(vocabulary=vocabulary)
        self.synthesizer = Synthesizer(
            sentiment_analyzer=self.sentiment_analyzer,
            strategy_analyzer=self.strategy_analyzer,
            performance_analyzer=self.performance_analyzer,
            content_gap_analyzer=self.content_gap_analyzer,
            parallel=(
                parallel_comprehensive if parallel_comprehensive is not None
                else settings.PARALLEL_COMPREHENSIVE
            ),
        )
        self.recommendation_generator = RecommendationGenerator()

        self._handlers: Dict[AnalysisMode, Handler] = {
            AnalysisMode.CONTENT_GAP: lambda comp, user, who: self.content_gap_analyzer.analyze(comp, user, who),
            AnalysisMode.SENTIMENT: lambda comp, user, who: self.sentiment_analyzer.analyze(comp, who),
            AnalysisMode.STRATEGY: lambda comp, user, who: self.strategy_analyzer.analyze(comp, who),
            AnalysisMode.PERFORMANCE: lambda comp, user, who: self.performance_analyzer.analyze(comp, who),
            AnalysisMode.COMPREHENSIVE: lambda comp, user, who: self.synthesizer.run(comp, user, who),
        }

    def analyze(self, request: AnalysisRequest) -> AnalysisOutcome:
        """
        Run the analysis the request asks for.

        Args:
            request: Analysis request with mode, competitor identity and raw corpora

        Returns:
            AnalysisOutcome with the immutable result and its recommendations

        Raises:
            UnsupportedModeError: If the mode is not one of the five analysis types
            InsufficientDataError: If the competitor corpus is missing
            MissingUserCorpusError: If gap/comprehensive analysis lacks user content
            EngineError: If an analyzer fails unexpectedly
        """
        mode = self.resolve_mode(request.mode)
        self._validate_request(request, mode)

        try:
            started = time.perf_counter()

            competitor_items = self._prepare(request.competitor_content)
            user_items = self._prepare(request.user_content)

            logger.info(
                f"Starting {mode.value} analysis for competitor {request.competitor.competitor_id} "
                f"({len(competitor_items)} competitor items, {len(user_items)} user items)"
            )

            results = self._handlers[mode](competitor_items, user_items, request.competitor)
            processing_time_ms = int(round((time.perf_counter() - started) * 1000))

            result = AnalysisResult(
                subject_id=request.subject_id,
                competitor_id=request.competitor.competitor_id,
                business_profile_id=request.business_profile_id,
                mode=mode,
                results=results,
                confidence_score=CONFIDENCE_SCORES[mode],
                processing_time_ms=processing_time_ms,
            )
            recommendations = self.recommendation_generator.generate(
                mode, results, request.competitor, result.id
            )

            logger.info(
                f"Completed {mode.value} analysis {result.id} in {processing_time_ms}ms "
                f"with {len(recommendations)} recommendations"
            )
            return AnalysisOutcome(result=result, recommendations=recommendations)

        except CompetitorIntelException:
            raise
        except Exception as e:
            logger.error(f"{mode.value} analysis failed: {e}")
            raise EngineError("competitive_intelligence", f"{mode.value} analysis failed: {e}")

    @staticmethod
    def resolve_mode(mode) -> AnalysisMode:
        if isinstance(mode, AnalysisMode):
            return mode
        try:
            return AnalysisMode(mode)
        except ValueError:
            raise UnsupportedModeError(mode)

    @staticmethod
    def _validate_request(request: AnalysisRequest, mode: AnalysisMode):
        if request.competitor_content is None:
            raise InsufficientDataError(mode=mode.value)

        # An empty corpus still yields zero-valued aggregates, except for gap analysis
        if not request.competitor_content and mode.requires_user_corpus:
            raise InsufficientDataError(
                f"Competitor content is required for '{mode.value}' analysis", mode=mode.value
            )

        if mode.requires_user_corpus and request.user_content is None:
            raise MissingUserCorpusError(mode.value)

    def _prepare(self, records) -> List[ContentItem]:
        if records is None:
            return []
        return normalize_content(records)

    @staticmethod
    def supported_modes() -> List[str]:
        return [mode.value for mode in AnalysisMode]

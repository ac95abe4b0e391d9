"""
Analysis service.

Runs the synchronous engine off the event loop under a wall-clock budget and
hands the outcome to the result store. A timed-out request fails as a whole;
nothing is persisted for it.
"""

import asyncio
import logging
from typing import Optional

from competitor_intel.analysis.engine import CompetitiveIntelligenceEngine
from competitor_intel.core.config import settings
from competitor_intel.core.exceptions import AnalysisTimeoutError
from competitor_intel.models.analysis import AnalysisOutcome, AnalysisRequest
from competitor_intel.services.result_store import ResultStore

logger = logging.getLogger(__name__)


class AnalysisService:
    """Coordinates one analysis run: compute, then persist."""

    def __init__(
        self,
        engine: Optional[CompetitiveIntelligenceEngine] = None,
        store: Optional[ResultStore] = None,
        timeout_seconds: Optional[float] = None
    ):
        self.engine = engine or CompetitiveIntelligenceEngine()
        self.store = store
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else settings.ANALYSIS_TIMEOUT_SECONDS
        )

    async def run_analysis(self, request: AnalysisRequest, persist: bool = True) -> AnalysisOutcome:
        """
        Run and optionally persist one analysis.

        Raises:
            AnalysisTimeoutError: If the engine exceeds the configured budget
            CompetitorIntelException: Structural request errors from the engine
            StorageError: If the analysis record cannot be persisted
        """
        try:
            outcome = await asyncio.wait_for(
                asyncio.to_thread(self.engine.analyze, request),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.error(
                f"Analysis '{request.mode}' for competitor {request.competitor.competitor_id} "
                f"timed out after {self.timeout_seconds}s"
            )
            raise AnalysisTimeoutError(str(request.mode), self.timeout_seconds)

        if persist:
            store = self.store if self.store is not None else ResultStore()
            await store.save_outcome(outcome)

        return outcome


_analysis_service: Optional[AnalysisService] = None


def get_analysis_service() -> AnalysisService:
    """Get or create the global analysis service instance."""
    global _analysis_service
    if _analysis_service is None:
        _analysis_service = AnalysisService()
    return _analysis_service

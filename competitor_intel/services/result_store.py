"""
Result store for competitive analyses.

Persists analysis records and their recommendations to MongoDB and reads them
back. Records are written once; the store never updates an analysis.
"""

import logging
from typing import Any, Dict, List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from competitor_intel.core.database import get_database
from competitor_intel.core.exceptions import NotFoundError, StorageError, ValidationError
from competitor_intel.models.analysis import AnalysisOutcome, AnalysisResult, Recommendation

logger = logging.getLogger(__name__)

ANALYSIS_COLLECTION = "competitive_analysis_results"
RECOMMENDATION_COLLECTION = "strategic_content_recommendations"
MAX_PAGE_SIZE = 100


def analysis_document(result: AnalysisResult) -> Dict[str, Any]:
    """Flatten an analysis result into its stored shape."""
    return {
        "id": result.id,
        "user_id": result.subject_id,
        "subject_id": result.subject_id,
        "business_profile_id": result.business_profile_id,
        "competitor_id": result.competitor_id,
        "analysis_type": result.mode.value,
        "analysis_results": result.results.model_dump(mode="json"),
        "confidence_score": result.confidence_score,
        "status": result.status.value,
        "processing_time_ms": result.processing_time_ms,
        "created_at": result.created_at,
        "updated_at": result.created_at,
    }


def recommendation_document(
    recommendation: Recommendation,
    result: AnalysisResult
) -> Dict[str, Any]:
    """Flatten a recommendation; ``data_sources`` links it to its analysis."""
    document = recommendation.model_dump(mode="json")
    document.update({
        "user_id": result.subject_id,
        "business_profile_id": result.business_profile_id,
        "competitor_id": result.competitor_id,
        "data_sources": [result.id],
        "status": "pending",
        "created_at": recommendation.created_at,
        "updated_at": recommendation.created_at,
    })
    return document


class ResultStore:
    """MongoDB-backed store for analysis results and recommendations."""

    def __init__(self, database: AsyncIOMotorDatabase = None):
        self.database = database if database is not None else get_database()

    async def save_outcome(self, outcome: AnalysisOutcome) -> str:
        """
        Persist an analysis and its recommendations.

        Returns:
            The analysis id

        Raises:
            StorageError: If the analysis record cannot be written
        """
        result = outcome.result
        try:
            await self.database[ANALYSIS_COLLECTION].insert_one(analysis_document(result))
        except Exception as e:
            logger.error(f"Failed to store analysis {result.id}: {e}")
            raise StorageError("analysis insert", str(e))

        if outcome.recommendations:
            try:
                await self.database[RECOMMENDATION_COLLECTION].insert_many(
                    [recommendation_document(rec, result) for rec in outcome.recommendations]
                )
            except Exception as e:
                # The analysis itself is already stored; losing recommendations is not fatal
                logger.error(f"Failed to store recommendations for analysis {result.id}: {e}")

        logger.info(
            f"Stored {result.mode.value} analysis {result.id} for subject {result.subject_id} "
            f"with {len(outcome.recommendations)} recommendations"
        )
        return result.id

    async def get_analysis(self, analysis_id: str) -> Dict[str, Any]:
        """Fetch one stored analysis by id."""
        try:
            document = await self.database[ANALYSIS_COLLECTION].find_one(
                {"id": analysis_id}, {"_id": 0}
            )
        except Exception as e:
            logger.error(f"Failed to read analysis {analysis_id}: {e}")
            raise StorageError("analysis retrieval", str(e))

        if not document:
            raise NotFoundError("Analysis", analysis_id)
        return document

    async def get_recommendations(self, analysis_id: str) -> List[Dict[str, Any]]:
        """Fetch the recommendations attached to an analysis, highest priority first."""
        await self.get_analysis(analysis_id)
        try:
            cursor = self.database[RECOMMENDATION_COLLECTION].find(
                {"analysis_id": analysis_id}, {"_id": 0}
            ).sort("priority_score", -1)
            return await cursor.to_list(length=None)
        except Exception as e:
            logger.error(f"Failed to read recommendations for analysis {analysis_id}: {e}")
            raise StorageError("recommendation retrieval", str(e))

    async def list_analyses(
        self,
        subject_id: str,
        competitor_id: Optional[str] = None,
        mode: Optional[str] = None,
        limit: int = 20,
        skip: int = 0
    ) -> List[Dict[str, Any]]:
        """List a subject's analyses, newest first."""
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValidationError(
                f"limit must be between 1 and {MAX_PAGE_SIZE}", details={"limit": limit}
            )
        if skip < 0:
            raise ValidationError("skip must not be negative", details={"skip": skip})

        query: Dict[str, Any] = {"subject_id": subject_id}
        if competitor_id:
            query["competitor_id"] = competitor_id
        if mode:
            query["analysis_type"] = mode

        try:
            cursor = self.database[ANALYSIS_COLLECTION].find(
                query, {"_id": 0}
            ).sort("created_at", -1).skip(skip).limit(limit)
            return await cursor.to_list(length=limit)
        except Exception as e:
            logger.error(f"Failed to list analyses for subject {subject_id}: {e}")
            raise StorageError("analysis listing", str(e))

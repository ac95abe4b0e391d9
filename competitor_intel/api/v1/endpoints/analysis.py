"""
Competitive analysis API endpoints.

This module provides REST API endpoints for running a competitive analysis
against a competitor's content and for reading stored analyses and their
recommendations back.
"""

import logging
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from competitor_intel.analysis.engine import CompetitiveIntelligenceEngine
from competitor_intel.api.dependencies import get_result_store, get_service
from competitor_intel.core.config import settings
from competitor_intel.models.analysis import AnalysisRequest
from competitor_intel.models.content import CompetitorProfile
from competitor_intel.services.analysis_service import AnalysisService
from competitor_intel.services.result_store import ResultStore

logger = logging.getLogger(__name__)
router = APIRouter()


# Request/Response Models

class AnalysisCreateRequest(BaseModel):
    """Request model for running an analysis."""
    subject_id: str = Field(..., min_length=1, description="User the analysis is run for")
    competitor_id: str = Field(..., min_length=1)
    competitor_name: Optional[str] = None
    analysis_type: str = Field(..., description="content_gap, sentiment, strategy, performance or comprehensive")
    competitor_content: Optional[List[Any]] = Field(None, max_length=settings.MAX_CONTENT_ITEMS)
    user_content: Optional[List[Any]] = Field(None, max_length=settings.MAX_CONTENT_ITEMS)
    business_profile_id: Optional[str] = None
    persist: bool = True

    def to_analysis_request(self) -> AnalysisRequest:
        return AnalysisRequest(
            subject_id=self.subject_id,
            competitor=CompetitorProfile(competitor_id=self.competitor_id, name=self.competitor_name),
            mode=self.analysis_type,
            competitor_content=self.competitor_content,
            user_content=self.user_content,
            business_profile_id=self.business_profile_id,
        )


class AnalysisResponse(BaseModel):
    """Response model for a completed analysis."""
    success: bool = True
    analysis_id: str
    analysis_type: str
    results: Dict[str, Any]
    confidence_score: float
    recommendations: List[Dict[str, Any]]
    processing_time_ms: int


class AnalysisListResponse(BaseModel):
    """Response model for analysis listings."""
    items: List[Dict[str, Any]]
    count: int
    skip: int
    limit: int


# Endpoints

@router.post("/", response_model=AnalysisResponse, status_code=status.HTTP_200_OK)
async def run_analysis(
    body: AnalysisCreateRequest,
    service: AnalysisService = Depends(get_service)
):
    """
    Run a competitive analysis.

    Structural problems (unknown analysis type, missing competitor or user
    content) are returned as 400/422 errors; an analysis that exceeds the
    time budget returns 504 and is not stored.
    """
    logger.info(
        f"Analysis request: {body.analysis_type} for subject {body.subject_id} "
        f"against competitor {body.competitor_id}"
    )
    outcome = await service.run_analysis(body.to_analysis_request(), persist=body.persist)
    result = outcome.result

    return AnalysisResponse(
        analysis_id=result.id,
        analysis_type=result.mode.value,
        results=result.results.model_dump(mode="json"),
        confidence_score=result.confidence_score,
        recommendations=[rec.model_dump(mode="json") for rec in outcome.recommendations],
        processing_time_ms=result.processing_time_ms,
    )


@router.get("/modes")
async def list_modes():
    """List the supported analysis types."""
    return {"modes": CompetitiveIntelligenceEngine.supported_modes()}


@router.get("/", response_model=AnalysisListResponse)
async def list_analyses(
    subject_id: str = Query(..., min_length=1, description="User whose analyses to list"),
    competitor_id: Optional[str] = Query(None, description="Filter by competitor"),
    analysis_type: Optional[str] = Query(None, description="Filter by analysis type"),
    skip: int = Query(0, ge=0, description="Number of items to skip"),
    limit: int = Query(20, ge=1, le=100, description="Number of items to return"),
    store: ResultStore = Depends(get_result_store)
):
    """List stored analyses for a subject, newest first."""
    if analysis_type is not None:
        CompetitiveIntelligenceEngine.resolve_mode(analysis_type)

    items = await store.list_analyses(
        subject_id,
        competitor_id=competitor_id,
        mode=analysis_type,
        limit=limit,
        skip=skip,
    )
    return AnalysisListResponse(items=items, count=len(items), skip=skip, limit=limit)


@router.get("/{analysis_id}")
async def get_analysis(
    analysis_id: str,
    store: ResultStore = Depends(get_result_store)
):
    """Get one stored analysis."""
    return await store.get_analysis(analysis_id)


@router.get("/{analysis_id}/recommendations")
async def get_analysis_recommendations(
    analysis_id: str,
    store: ResultStore = Depends(get_result_store)
):
    """Get the recommendations of a stored analysis, highest priority first."""
    recommendations = await store.get_recommendations(analysis_id)
    return {"analysis_id": analysis_id, "recommendations": recommendations}

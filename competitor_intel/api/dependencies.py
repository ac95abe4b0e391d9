"""
FastAPI dependencies for the analysis API.

Routes receive the analysis service and the result store through these
functions so tests can swap them with ``app.dependency_overrides``.
"""

from competitor_intel.services.analysis_service import AnalysisService, get_analysis_service
from competitor_intel.services.result_store import ResultStore


def get_service() -> AnalysisService:
    """Analysis service shared by all requests."""
    return get_analysis_service()


def get_result_store() -> ResultStore:
    """Result store bound to the application's MongoDB database."""
    return ResultStore()

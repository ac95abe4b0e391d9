"""
Pytest configuration and fixtures for the Competitive Content Intelligence tests.

This module provides common test fixtures and configuration
for the test suite. MongoDB is replaced by mocks; no server is needed.
"""

import pytest
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock
from httpx import ASGITransport, AsyncClient

from competitor_intel.api.dependencies import get_service
from competitor_intel.core.database import db
from competitor_intel.main import app
from competitor_intel.models.content import CompetitorProfile
from competitor_intel.services.analysis_service import AnalysisService
from competitor_intel.services.result_store import (
    ANALYSIS_COLLECTION, RECOMMENDATION_COLLECTION, ResultStore
)

BASE_TIME = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def make_post(
    text: str = "",
    posted_at: Optional[datetime] = None,
    likes: int = 0,
    comments: int = 0,
    shares: int = 0,
    platform: str = "linkedin",
    **extra: Any
) -> Dict[str, Any]:
    """Build a raw competitor post the way the collector stores it."""
    post = {
        "content_text": text,
        "post_date": posted_at.isoformat() if posted_at else None,
        "platform": platform,
        "engagement_metrics": {"likes": likes, "comments": comments, "shares": shares},
    }
    post.update(extra)
    return post


def make_cursor(documents: List[Dict[str, Any]]) -> MagicMock:
    """Motor-like cursor whose chained calls return itself."""
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=documents)
    return cursor


@pytest.fixture
def competitor():
    """Competitor identity used across tests."""
    return CompetitorProfile(competitor_id="comp_123", name="Acme Corp")


@pytest.fixture
def competitor_posts():
    """Ten dated LinkedIn posts with engagement, two per day at 09:00 and 15:00."""
    posts = []
    texts = [
        "How to build a marketing plan that works #marketing #growth",
        "Our sales team had an amazing quarter #sales",
        "Leadership lessons from a great mentor",
        "Big discount on all plans this week #offer",
        "A tutorial on productivity tools #productivity",
        "Why branding matters for startups #branding",
        "The best technology trends this year",
        "Customer service is our top priority",
        "A guide to strategy for small teams #strategy",
        "Innovation happens when teams feel safe",
    ]
    for i, text in enumerate(texts):
        posted_at = BASE_TIME + timedelta(days=i // 2, hours=6 * (i % 2))
        posts.append(make_post(
            text,
            posted_at=posted_at,
            likes=20 + i * 5,
            comments=5 + i,
            shares=2,
            content_type="article" if i % 3 == 0 else "post",
        ))
    return posts


@pytest.fixture
def user_posts():
    """The user's own published posts."""
    return [
        {"content": "Marketing tips for founders", "published_at": "2024-02-10T10:00:00Z"},
        {"content": "Why sales and marketing should talk more", "published_at": "2024-02-12T10:00:00Z"},
    ]


@pytest.fixture
def mock_database():
    """MongoDB database mock with one mocked collection per name."""
    collections: Dict[str, MagicMock] = {}

    def get_collection(name: str) -> MagicMock:
        if name not in collections:
            collection = MagicMock()
            collection.insert_one = AsyncMock()
            collection.insert_many = AsyncMock()
            collection.find_one = AsyncMock(return_value=None)
            collection.find.return_value = make_cursor([])
            collection.create_index = AsyncMock()
            collections[name] = collection
        return collections[name]

    database = MagicMock()
    database.__getitem__.side_effect = get_collection
    database.command = AsyncMock(return_value={"ok": 1})
    database.collections = collections

    # Pre-create the collections the store uses so tests can configure them
    get_collection(ANALYSIS_COLLECTION)
    get_collection(RECOMMENDATION_COLLECTION)
    return database


@pytest.fixture
def result_store(mock_database):
    """Result store bound to the mocked database."""
    return ResultStore(database=mock_database)


@pytest.fixture
async def client(mock_database, result_store):
    """Create a test client with the database mocked out."""
    db.database = mock_database
    app.dependency_overrides[get_service] = lambda: AnalysisService(store=result_store)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://localhost") as ac:
        yield ac

    app.dependency_overrides.clear()
    db.database = None

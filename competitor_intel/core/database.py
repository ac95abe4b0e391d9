"""
Database connection and management for the Competitive Content Intelligence Engine.

This module handles MongoDB connection using Motor async driver
and provides database access for the result store.
"""

import logging
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from competitor_intel.core.config import settings

logger = logging.getLogger(__name__)


class Database:
    """Database connection manager."""

    client: Optional[AsyncIOMotorClient] = None
    database: Optional[AsyncIOMotorDatabase] = None


db = Database()


async def connect_to_mongo():
    """Create database connection."""
    try:
        logger.info("Connecting to MongoDB...")
        db.client = AsyncIOMotorClient(settings.MONGODB_URL)
        db.database = db.client[settings.MONGODB_DATABASE]

        await db.client.admin.command('ping')
        logger.info(f"Successfully connected to MongoDB database: {settings.MONGODB_DATABASE}")

    except Exception as e:
        logger.error(f"Failed to connect to MongoDB: {e}")
        raise


async def close_mongo_connection():
    """Close database connection."""
    if db.client:
        logger.info("Closing MongoDB connection...")
        db.client.close()
        db.client = None
        db.database = None
        logger.info("MongoDB connection closed")


def get_database() -> AsyncIOMotorDatabase:
    """Get database instance."""
    if db.database is None:
        raise RuntimeError("Database not initialized. Call connect_to_mongo() first.")
    return db.database


async def create_indexes():
    """Create database indexes for the analysis and recommendation collections."""
    database = get_database()

    # Analysis results: one record per invocation
    await database.competitive_analysis_results.create_index("id", unique=True)
    await database.competitive_analysis_results.create_index(
        [("subject_id", 1), ("competitor_id", 1), ("analysis_type", 1), ("created_at", -1)]
    )

    # Recommendations are owned by a single analysis
    await database.strategic_content_recommendations.create_index("id", unique=True)
    await database.strategic_content_recommendations.create_index("analysis_id")
    await database.strategic_content_recommendations.create_index("user_id")

    logger.info("Database indexes created successfully")

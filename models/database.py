"""Database models and connection setup."""

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING
from typing import Optional
from config.settings import settings
from utils.logger import setup_logger

logger = setup_logger(__name__)

DEFAULT_DATABASE_NAME = "holistic_planner"


class Database:
    """Database connection manager."""

    client: Optional[AsyncIOMotorClient] = None


db = Database()


async def connect_to_mongo():
    """Create database connection."""
    db.client = AsyncIOMotorClient(settings.mongodb_url, tz_aware=True)
    logger.info("Connected to MongoDB database '%s'", get_database().name)


async def close_mongo_connection():
    """Close database connection."""
    if db.client:
        db.client.close()
        db.client = None
        logger.info("Disconnected from MongoDB")


async def init_mongo():
    """Initialize MongoDB connection and all collections with indexes."""
    await connect_to_mongo()

    # Profiles are looked up by their own id
    await get_profiles_collection().create_index([("id", ASCENDING)], unique=True)

    # At most one live meal plan and timetable per user
    await get_meal_plans_collection().create_index([("user_id", ASCENDING)], unique=True)
    await get_timetables_collection().create_index([("user_id", ASCENDING)], unique=True)

    logger.info("MongoDB initialized: all collections created with indexes")


def get_database():
    """Get database instance."""
    if db.client is None:
        raise RuntimeError("MongoDB client is not connected; call init_mongo() first")
    return db.client.get_default_database(DEFAULT_DATABASE_NAME)


def get_profiles_collection():
    """Get profiles collection."""
    return get_database().profiles


def get_meal_plans_collection():
    """Get meal plans collection."""
    return get_database().meal_plans


def get_timetables_collection():
    """Get timetables collection."""
    return get_database().timetables

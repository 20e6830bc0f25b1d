"""Database models and connection setup."""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING
from typing import Optional
from config.settings import settings
from utils.logger import setup_logger

logger = setup_logger(__name__)

USERS_COLLECTION = "users"
EXERCISES_COLLECTION = "exercises"


class Database:
    """Database connection manager."""
    
    client: Optional[AsyncIOMotorClient] = None


db = Database()


async def connect_to_mongo():
    """Create database connection."""
    db.client = AsyncIOMotorClient(settings.mongo_uri)
    logger.info("Connected to MongoDB")


async def close_mongo_connection():
    """Close database connection."""
    if db.client:
        db.client.close()
        db.client = None
        logger.info("Disconnected from MongoDB")


async def init_mongo():
    """Initialize MongoDB connection and collection indexes."""
    await connect_to_mongo()
    
    database = get_database()
    
    # Log queries filter on user and date range
    await database[EXERCISES_COLLECTION].create_index(
        [("user_id", ASCENDING), ("date", ASCENDING)]
    )
    
    logger.info("MongoDB initialized: indexes created")


def get_database() -> AsyncIOMotorDatabase:
    """Get database instance named by the URI, or the configured fallback."""
    if db.client is None:
        raise RuntimeError("MongoDB client is not connected")
    return db.client.get_default_database(default=settings.database_name)


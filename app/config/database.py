"""
MongoDB database connection using Motor (async driver).

Provides database instance and connection management with lifespan events.
"""

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING

from app.config.settings import get_settings

logger = logging.getLogger(__name__)

# Global database client and database instances
_client: AsyncIOMotorClient | None = None
_database: AsyncIOMotorDatabase | None = None


async def connect_to_mongodb() -> None:
    """
    Connect to MongoDB database.

    This function is called during application startup.
    Creates a connection pool, tests the connection and ensures indexes.

    Raises:
        RuntimeError: If settings (MONGODB_URL) are missing
        Exception: If connection to MongoDB fails
    """
    global _client, _database

    try:
        current_settings = get_settings()
    except Exception as e:
        raise RuntimeError(
            "Application settings could not be initialised. "
            "MONGODB_URL must be set in the environment or .env file."
        ) from e

    try:
        logger.info("Connecting to MongoDB database %s", current_settings.MONGODB_DB_NAME)

        _client = AsyncIOMotorClient(
            current_settings.MONGODB_URL,
            serverSelectionTimeoutMS=5000,  # 5 seconds timeout
            maxPoolSize=10,
            minPoolSize=1,
        )

        _database = _client[current_settings.MONGODB_DB_NAME]

        # Test the connection
        await _client.admin.command("ping")

        await ensure_indexes(_database)

        logger.info(
            "Successfully connected to MongoDB database: %s",
            current_settings.MONGODB_DB_NAME,
        )

    except Exception as e:
        logger.error(f"Failed to connect to MongoDB: {str(e)}")
        raise


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """
    Create the indexes the collections rely on.

    Principals are unique on wallet address and email. User email is
    optional, so its index is sparse.
    """
    await db["admins"].create_index([("wallet_address", ASCENDING)], unique=True)
    await db["admins"].create_index([("email", ASCENDING)], unique=True)
    await db["users"].create_index([("wallet_address", ASCENDING)], unique=True)
    await db["users"].create_index([("email", ASCENDING)], unique=True, sparse=True)
    await db["contacts"].create_index([("wallet_address", ASCENDING)])
    logger.info("MongoDB indexes ensured")


async def close_mongodb_connection() -> None:
    """
    Close MongoDB database connection.

    This function is called during application shutdown.
    """
    global _client, _database

    if _client:
        logger.info("Closing MongoDB connection")
        _client.close()
        _client = None
        _database = None
        logger.info("MongoDB connection closed")


def get_database() -> AsyncIOMotorDatabase:
    """
    Get MongoDB database instance.

    Returns:
        AsyncIOMotorDatabase: MongoDB database instance

    Raises:
        RuntimeError: If database is not connected
    """
    if _database is None:
        raise RuntimeError(
            "Database is not connected. Call connect_to_mongodb() first."
        )
    return _database


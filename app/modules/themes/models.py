"""
Themes module models.

MongoDB models for themes collection.
"""

from typing import Optional, List
from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError
from app.shared.exceptions import DatabaseError
from app.utils.logger import get_logger

logger = get_logger(__name__)

COLLECTION = "themes"


async def create_theme(db: AsyncIOMotorDatabase, properties: dict) -> dict:
    """Insert a theme and return it with its _id."""
    try:
        result = await db[COLLECTION].insert_one(properties)
        properties["_id"] = result.inserted_id
        logger.info(f"Theme created: id={result.inserted_id}")
        return properties
    except PyMongoError as e:
        logger.error(f"Failed to create theme: {str(e)}")
        raise DatabaseError("Failed to create theme") from e


async def list_themes(db: AsyncIOMotorDatabase) -> List[dict]:
    """All themes in insertion order."""
    try:
        return await db[COLLECTION].find({}).to_list(length=None)
    except PyMongoError as e:
        logger.error(f"Failed to list themes: {str(e)}")
        raise DatabaseError("Failed to list themes") from e


async def find_theme_by_id(db: AsyncIOMotorDatabase, theme_id: ObjectId) -> Optional[dict]:
    """Find theme by ID."""
    try:
        return await db[COLLECTION].find_one({"_id": theme_id})
    except PyMongoError as e:
        logger.error(f"Failed to find theme: {str(e)}")
        raise DatabaseError("Failed to look up theme") from e


async def update_theme(
    db: AsyncIOMotorDatabase,
    theme_id: ObjectId,
    changes: dict
) -> Optional[dict]:
    """Set properties on a theme; returns the new record or None if not found."""
    try:
        if not changes:
            return await db[COLLECTION].find_one({"_id": theme_id})
        return await db[COLLECTION].find_one_and_update(
            {"_id": theme_id},
            {"$set": changes},
            return_document=ReturnDocument.AFTER
        )
    except PyMongoError as e:
        logger.error(f"Failed to update theme: {str(e)}")
        raise DatabaseError("Failed to update theme") from e


async def delete_theme(db: AsyncIOMotorDatabase, theme_id: ObjectId) -> Optional[dict]:
    """Delete a theme; returns the deleted record or None if not found."""
    try:
        return await db[COLLECTION].find_one_and_delete({"_id": theme_id})
    except PyMongoError as e:
        logger.error(f"Failed to delete theme: {str(e)}")
        raise DatabaseError("Failed to delete theme") from e

"""
Contacts module models.

MongoDB models for contacts collection.
"""

from datetime import datetime, timezone
from typing import Optional, List
from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError
from app.core.security import normalize_address
from app.shared.exceptions import DatabaseError
from app.utils.logger import get_logger

logger = get_logger(__name__)

COLLECTION = "contacts"


async def create_contact(
    db: AsyncIOMotorDatabase,
    contact_data: dict
) -> dict:
    """
    Create a contact.

    Args:
        db: Database instance
        contact_data: wallet_address (normalized), name, phone, email, address

    Returns:
        dict: Created contact record
    """
    contact_data["is_favorite"] = False
    contact_data["created_at"] = datetime.now(timezone.utc)

    try:
        result = await db[COLLECTION].insert_one(contact_data)
        contact_data["_id"] = result.inserted_id
        logger.info(f"Contact created: id={result.inserted_id}, owner={contact_data['wallet_address']}")
        return contact_data
    except PyMongoError as e:
        logger.error(f"Failed to create contact: {str(e)}")
        raise DatabaseError("Failed to create contact") from e


async def find_contacts(
    db: AsyncIOMotorDatabase,
    wallet_address: str,
    favorites_only: bool = False
) -> List[dict]:
    """
    Contacts owned by a wallet, oldest first.

    Args:
        db: Database instance
        wallet_address: Owner wallet address in any letter case
        favorites_only: Only return contacts marked favorite
    """
    query = {"wallet_address": normalize_address(wallet_address)}
    if favorites_only:
        query["is_favorite"] = True

    try:
        return await db[COLLECTION].find(query).sort("created_at", 1).to_list(length=None)
    except PyMongoError as e:
        logger.error(f"Failed to list contacts: {str(e)}")
        raise DatabaseError("Failed to list contacts") from e


async def update_contact(
    db: AsyncIOMotorDatabase,
    contact_id: ObjectId,
    changes: dict
) -> Optional[dict]:
    """Set fields on a contact; returns the new record or None if not found."""
    try:
        if not changes:
            return await db[COLLECTION].find_one({"_id": contact_id})
        return await db[COLLECTION].find_one_and_update(
            {"_id": contact_id},
            {"$set": changes},
            return_document=ReturnDocument.AFTER
        )
    except PyMongoError as e:
        logger.error(f"Failed to update contact: {str(e)}")
        raise DatabaseError("Failed to update contact") from e


async def delete_contact(
    db: AsyncIOMotorDatabase,
    contact_id: ObjectId
) -> Optional[dict]:
    """Delete a contact; returns the deleted record or None if not found."""
    try:
        return await db[COLLECTION].find_one_and_delete({"_id": contact_id})
    except PyMongoError as e:
        logger.error(f"Failed to delete contact: {str(e)}")
        raise DatabaseError("Failed to delete contact") from e

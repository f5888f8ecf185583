"""
Admins module models.

MongoDB models for admins collection.
"""

from datetime import datetime, timezone
from typing import Optional, List
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError
from app.core.security import normalize_address
from app.shared.exceptions import DatabaseError, DuplicateResourceError
from app.utils.logger import get_logger

logger = get_logger(__name__)

COLLECTION = "admins"


async def create_admin(
    db: AsyncIOMotorDatabase,
    admin_data: dict
) -> dict:
    """
    Create a new admin record.

    Args:
        db: Database instance
        admin_data: wallet_address (normalized), name, email, upi_id

    Returns:
        dict: Created admin record

    Raises:
        DuplicateResourceError: If wallet address or email is already taken
        DatabaseError: If the store fails
    """
    now = datetime.now(timezone.utc)
    admin_data.setdefault("profile_pic", None)
    admin_data["created_at"] = now
    admin_data["updated_at"] = now

    try:
        result = await db[COLLECTION].insert_one(admin_data)
        admin_data["_id"] = result.inserted_id
        logger.info(f"Admin created: id={result.inserted_id}, wallet={admin_data['wallet_address']}")
        return admin_data
    except DuplicateKeyError as e:
        logger.warning(f"Duplicate admin rejected: {str(e)}")
        raise DuplicateResourceError("Admin already exists!") from e
    except PyMongoError as e:
        logger.error(f"Failed to create admin: {str(e)}")
        raise DatabaseError("Failed to create admin") from e


async def find_admin_by_wallet(
    db: AsyncIOMotorDatabase,
    wallet_address: str
) -> Optional[dict]:
    """Find admin by wallet address (any letter case)."""
    try:
        return await db[COLLECTION].find_one({"wallet_address": normalize_address(wallet_address)})
    except PyMongoError as e:
        logger.error(f"Failed to find admin by wallet: {str(e)}")
        raise DatabaseError("Failed to look up admin") from e


async def find_admin_by_email(
    db: AsyncIOMotorDatabase,
    email: str
) -> Optional[dict]:
    """Find admin by email."""
    try:
        return await db[COLLECTION].find_one({"email": email})
    except PyMongoError as e:
        logger.error(f"Failed to find admin by email: {str(e)}")
        raise DatabaseError("Failed to look up admin") from e


async def list_admins(db: AsyncIOMotorDatabase) -> List[dict]:
    """List all admins in creation order."""
    try:
        return await db[COLLECTION].find({}).sort("created_at", 1).to_list(length=None)
    except PyMongoError as e:
        logger.error(f"Failed to list admins: {str(e)}")
        raise DatabaseError("Failed to list admins") from e


async def update_admin(
    db: AsyncIOMotorDatabase,
    wallet_address: str,
    changes: dict
) -> Optional[dict]:
    """
    Set fields on an admin and return the new record.

    Args:
        db: Database instance
        wallet_address: Wallet address in any letter case
        changes: Fields to set

    Returns:
        dict: Updated admin record or None if not found
    """
    changes["updated_at"] = datetime.now(timezone.utc)

    try:
        return await db[COLLECTION].find_one_and_update(
            {"wallet_address": normalize_address(wallet_address)},
            {"$set": changes},
            return_document=ReturnDocument.AFTER
        )
    except DuplicateKeyError as e:
        logger.warning(f"Admin update hit unique index: {str(e)}")
        raise DuplicateResourceError("Email already registered!") from e
    except PyMongoError as e:
        logger.error(f"Failed to update admin: {str(e)}")
        raise DatabaseError("Failed to update admin") from e


async def delete_admin(
    db: AsyncIOMotorDatabase,
    wallet_address: str
) -> Optional[dict]:
    """Delete admin permanently; returns the deleted record or None."""
    try:
        deleted = await db[COLLECTION].find_one_and_delete(
            {"wallet_address": normalize_address(wallet_address)}
        )
        if deleted:
            logger.info(f"Admin deleted: wallet={deleted['wallet_address']}")
        return deleted
    except PyMongoError as e:
        logger.error(f"Failed to delete admin: {str(e)}")
        raise DatabaseError("Failed to delete admin") from e

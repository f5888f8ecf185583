"""
Users module models.

MongoDB models for users collection. Transactions and KYC documents are
embedded arrays on the user record.
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

COLLECTION = "users"


def default_balances() -> dict:
    """Zero balances; nothing fetches on-chain balances into them."""
    return {"eth": "0", "usdc_eth": "0", "matic": "0", "usdc_polygon": "0"}


async def create_user(
    db: AsyncIOMotorDatabase,
    user_data: dict
) -> dict:
    """
    Create a new user record.

    Args:
        db: Database instance
        user_data: Profile fields; wallet_address already normalized

    Returns:
        dict: Created user record

    Raises:
        DuplicateResourceError: If wallet address or email is already taken
        DatabaseError: If the store fails
    """
    now = datetime.now(timezone.utc)
    user_data.setdefault("profile_pic", None)
    user_data["kyc_status"] = False
    user_data["documents"] = []
    user_data["balances"] = default_balances()
    user_data["transactions"] = []
    user_data["created_at"] = now
    user_data["updated_at"] = now

    try:
        result = await db[COLLECTION].insert_one(user_data)
        user_data["_id"] = result.inserted_id
        logger.info(f"User created: id={result.inserted_id}, wallet={user_data['wallet_address']}")
        return user_data
    except DuplicateKeyError as e:
        logger.warning(f"Duplicate user rejected: {str(e)}")
        raise DuplicateResourceError("User already exists!") from e
    except PyMongoError as e:
        logger.error(f"Failed to create user: {str(e)}")
        raise DatabaseError("Failed to create user") from e


async def find_user_by_wallet(
    db: AsyncIOMotorDatabase,
    wallet_address: str
) -> Optional[dict]:
    """
    Find user by wallet address.

    Args:
        db: Database instance
        wallet_address: Wallet address in any letter case

    Returns:
        dict: User record or None if not found
    """
    try:
        return await db[COLLECTION].find_one({"wallet_address": normalize_address(wallet_address)})
    except PyMongoError as e:
        logger.error(f"Failed to find user by wallet: {str(e)}")
        raise DatabaseError("Failed to look up user") from e


async def find_user_by_email(
    db: AsyncIOMotorDatabase,
    email: str
) -> Optional[dict]:
    """Find user by email."""
    try:
        return await db[COLLECTION].find_one({"email": email})
    except PyMongoError as e:
        logger.error(f"Failed to find user by email: {str(e)}")
        raise DatabaseError("Failed to look up user") from e


async def update_user(
    db: AsyncIOMotorDatabase,
    wallet_address: str,
    update: dict
) -> Optional[dict]:
    """
    Apply a MongoDB update to a user and return the new record.

    Args:
        db: Database instance
        wallet_address: Wallet address in any letter case
        update: Update document ($set, $push, ...)

    Returns:
        dict: Updated user record or None if not found
    """
    update.setdefault("$set", {})["updated_at"] = datetime.now(timezone.utc)

    try:
        return await db[COLLECTION].find_one_and_update(
            {"wallet_address": normalize_address(wallet_address)},
            update,
            return_document=ReturnDocument.AFTER
        )
    except DuplicateKeyError as e:
        logger.warning(f"User update hit unique index: {str(e)}")
        raise DuplicateResourceError("Email already registered!") from e
    except PyMongoError as e:
        logger.error(f"Failed to update user: {str(e)}")
        raise DatabaseError("Failed to update user") from e


async def delete_user(
    db: AsyncIOMotorDatabase,
    wallet_address: str
) -> Optional[dict]:
    """
    Delete user record permanently.

    Returns:
        dict: Deleted user record or None if not found
    """
    try:
        deleted = await db[COLLECTION].find_one_and_delete(
            {"wallet_address": normalize_address(wallet_address)}
        )
        if deleted:
            logger.info(f"User deleted: wallet={deleted['wallet_address']}")
        return deleted
    except PyMongoError as e:
        logger.error(f"Failed to delete user: {str(e)}")
        raise DatabaseError("Failed to delete user") from e


async def list_users(db: AsyncIOMotorDatabase) -> List[dict]:
    """
    List all users, newest first.

    Returns:
        list: User records
    """
    try:
        cursor = db[COLLECTION].find({}).sort("created_at", -1)
        return await cursor.to_list(length=None)
    except PyMongoError as e:
        logger.error(f"Failed to list users: {str(e)}")
        raise DatabaseError("Failed to list users") from e

"""
Transactions module models.

Transactions live in the transactions array of a user record; every
operation here reads or writes the users collection.
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

COLLECTION = "users"


async def push_transaction(
    db: AsyncIOMotorDatabase,
    wallet_address: str,
    transaction: dict
) -> Optional[dict]:
    """
    Append a transaction to a user's history.

    Args:
        db: Database instance
        wallet_address: Owner wallet address in any letter case
        transaction: type, amount, from, to, note, status

    Returns:
        dict: Updated user record or None if the user does not exist
    """
    transaction["_id"] = ObjectId()
    transaction["timestamp"] = datetime.now(timezone.utc)

    try:
        return await db[COLLECTION].find_one_and_update(
            {"wallet_address": normalize_address(wallet_address)},
            {"$push": {"transactions": transaction}},
            return_document=ReturnDocument.AFTER
        )
    except PyMongoError as e:
        logger.error(f"Failed to save transaction: {str(e)}")
        raise DatabaseError("Failed to save transaction") from e


async def set_transaction_status(
    db: AsyncIOMotorDatabase,
    wallet_address: str,
    transaction_id: ObjectId,
    status: str
) -> Optional[dict]:
    """
    Change the status of one embedded transaction.

    Returns:
        dict: Updated user record or None if user or transaction is missing
    """
    wallet_address = normalize_address(wallet_address)

    try:
        result = await db[COLLECTION].update_one(
            {"wallet_address": wallet_address, "transactions._id": transaction_id},
            {"$set": {"transactions.$.status": status}}
        )
        if result.matched_count == 0:
            return None
        return await db[COLLECTION].find_one({"wallet_address": wallet_address})
    except PyMongoError as e:
        logger.error(f"Failed to update transaction status: {str(e)}")
        raise DatabaseError("Failed to update transaction") from e


async def find_transactions(
    db: AsyncIOMotorDatabase,
    wallet_address: str
) -> Optional[List[dict]]:
    """
    Get a user's transactions in insertion order.

    Returns:
        list: Transactions, or None if the user does not exist
    """
    try:
        user = await db[COLLECTION].find_one(
            {"wallet_address": normalize_address(wallet_address)},
            {"transactions": 1}
        )
    except PyMongoError as e:
        logger.error(f"Failed to load transactions: {str(e)}")
        raise DatabaseError("Failed to load transactions") from e

    if user is None:
        return None
    return user.get("transactions", [])


async def list_all_transactions(db: AsyncIOMotorDatabase) -> List[dict]:
    """Transactions of every user, flattened."""
    try:
        users = await db[COLLECTION].find({}, {"transactions": 1}).to_list(length=None)
    except PyMongoError as e:
        logger.error(f"Failed to load transactions: {str(e)}")
        raise DatabaseError("Failed to load transactions") from e

    return [transaction for user in users for transaction in user.get("transactions", [])]

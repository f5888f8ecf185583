"""
Transactions module service layer.

Business logic for recording and querying user transactions.
"""

from typing import List, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from app.config.settings import get_settings
from app.modules.transactions import models as transaction_models
from app.modules.transactions.schemas import (
    TransactionCountResponse,
    TransactionCreate,
    TransactionResponse,
    TransactionStatus,
)
from app.modules.users.schemas import UserResponse
from app.modules.users.service import to_user_response
from app.shared.exceptions import TransactionNotFoundError, UserNotFoundError
from app.shared.models import document_to_dict, parse_object_id
from app.utils.logger import get_logger

logger = get_logger(__name__)


def to_transaction_responses(transactions: List[dict]) -> List[TransactionResponse]:
    """Convert stored transactions to their API representation."""
    return [TransactionResponse.model_validate(document_to_dict(tx)) for tx in transactions]


async def _get_transactions(db: AsyncIOMotorDatabase, wallet_address: str) -> List[dict]:
    transactions = await transaction_models.find_transactions(db, wallet_address)
    if transactions is None:
        raise UserNotFoundError()
    return transactions


async def save_transaction(
    db: AsyncIOMotorDatabase,
    payload: TransactionCreate
) -> UserResponse:
    """
    Record a transaction on a user.

    Args:
        db: Database instance
        payload: Transaction data

    Returns:
        UserResponse: User with the transaction appended

    Raises:
        UserNotFoundError: If no user owns payload.wallet_address
    """
    transaction = {
        "type": payload.type,
        "amount": payload.amount,
        "from": payload.from_,
        "to": payload.to,
        "note": payload.note,
        "status": TransactionStatus(payload.status).value,
    }

    updated = await transaction_models.push_transaction(db, payload.wallet_address, transaction)
    if not updated:
        raise UserNotFoundError()

    logger.info(f"Transaction saved: wallet={updated['wallet_address']}, id={transaction['_id']}")
    return to_user_response(updated)


async def update_transaction_status(
    db: AsyncIOMotorDatabase,
    wallet_address: str,
    transaction_id: str,
    status: TransactionStatus
) -> UserResponse:
    """
    Set the status of one transaction. Any status may follow any other.

    Raises:
        ValidationError: If transaction_id is not an ObjectId
        TransactionNotFoundError: If user or transaction is missing
    """
    oid = parse_object_id(transaction_id, "transaction id")

    updated = await transaction_models.set_transaction_status(
        db, wallet_address, oid, TransactionStatus(status).value
    )
    if not updated:
        raise TransactionNotFoundError()

    logger.info(f"Transaction status updated: id={transaction_id}, status={TransactionStatus(status).value}")
    return to_user_response(updated)


async def get_history(db: AsyncIOMotorDatabase, wallet_address: str) -> List[TransactionResponse]:
    """All of a user's transactions, oldest first."""
    return to_transaction_responses(await _get_transactions(db, wallet_address))


async def get_recent(
    db: AsyncIOMotorDatabase,
    wallet_address: str,
    limit: Optional[int] = None
) -> List[TransactionResponse]:
    """
    The last `limit` transactions, oldest first.

    Args:
        db: Database instance
        wallet_address: Owner wallet address
        limit: How many to return (default RECENT_TRANSACTIONS_LIMIT)
    """
    if limit is None:
        limit = get_settings().RECENT_TRANSACTIONS_LIMIT

    transactions = await _get_transactions(db, wallet_address)
    return to_transaction_responses(transactions[-limit:])


async def get_by_status(
    db: AsyncIOMotorDatabase,
    wallet_address: str,
    status: Optional[TransactionStatus] = None
) -> List[TransactionResponse]:
    """Transactions with the given status; all of them when status is None."""
    transactions = await _get_transactions(db, wallet_address)
    if status is not None:
        wanted = TransactionStatus(status).value
        transactions = [tx for tx in transactions if tx.get("status") == wanted]
    return to_transaction_responses(transactions)


async def get_by_type(
    db: AsyncIOMotorDatabase,
    wallet_address: str,
    transaction_type: Optional[str] = None
) -> List[TransactionResponse]:
    """Transactions with the given type; all of them when type is None."""
    transactions = await _get_transactions(db, wallet_address)
    if transaction_type:
        transactions = [tx for tx in transactions if tx.get("type") == transaction_type]
    return to_transaction_responses(transactions)


async def count_by_status(
    db: AsyncIOMotorDatabase,
    wallet_address: str
) -> TransactionCountResponse:
    """Count one user's transactions by status."""
    return TransactionCountResponse.from_transactions(await _get_transactions(db, wallet_address))


async def count_all_by_status(db: AsyncIOMotorDatabase) -> TransactionCountResponse:
    """Count every user's transactions by status."""
    return TransactionCountResponse.from_transactions(
        await transaction_models.list_all_transactions(db)
    )

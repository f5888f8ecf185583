"""
Auth module models.

Principal lookup by wallet address across the admins and users collections.
"""

from enum import Enum
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError
from app.core.security import normalize_address
from app.shared.exceptions import DatabaseError
from app.utils.logger import get_logger

logger = get_logger(__name__)


class PrincipalKind(str, Enum):
    """Kinds of wallet-identified principals."""
    ADMIN = "admin"
    USER = "user"

    @property
    def collection(self) -> str:
        """Collection holding principals of this kind."""
        return "admins" if self is PrincipalKind.ADMIN else "users"


async def find_principal_by_wallet(
    db: AsyncIOMotorDatabase,
    kind: PrincipalKind,
    wallet_address: str
) -> Optional[dict]:
    """
    Find a principal by wallet address.

    Always reads the store; nothing is cached between requests.

    Args:
        db: Database instance
        kind: Admin or user
        wallet_address: Wallet address in any letter case

    Returns:
        dict: Principal record or None if not found

    Raises:
        DatabaseError: If the store is unavailable
    """
    try:
        return await db[kind.collection].find_one(
            {"wallet_address": normalize_address(wallet_address)}
        )
    except PyMongoError as e:
        logger.error(f"Failed to look up {kind.value} by wallet: {str(e)}")
        raise DatabaseError(f"Failed to look up {kind.value}") from e

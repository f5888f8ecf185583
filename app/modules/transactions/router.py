"""
Transactions module router.

API endpoints for a user's embedded transaction history. These routes are
not wallet-authenticated.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from app.config.database import get_database
from app.core.dependencies import WalletAddressPath
from app.core.responses import success_response
from app.modules.transactions import service as transaction_service
from app.modules.transactions.schemas import (
    TransactionCreate,
    TransactionListResponse,
    TransactionStatus,
    TransactionStatusUpdate,
)
from app.utils.validators import WALLET_ADDRESS_REGEX

router = APIRouter(prefix="/user", tags=["Transactions"])


@router.post(
    "/transaction",
    status_code=status.HTTP_201_CREATED,
    response_description="Transaction saved successfully"
)
async def save_transaction(
    payload: TransactionCreate,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Record a transaction on a user.

    Args:
        payload: walletAddress, type, amount, from, to, note, status
        db: Database instance

    Returns:
        Standardized response with the updated user
    """
    user = await transaction_service.save_transaction(db, payload)

    return success_response(
        status_code=status.HTTP_201_CREATED,
        message="Transaction saved successfully!",
        data=user.to_response()
    )


@router.put(
    "/transaction/{walletAddress}",
    status_code=status.HTTP_200_OK,
    response_description="Transaction status updated successfully"
)
async def update_transaction_status(
    wallet_address: WalletAddressPath,
    payload: TransactionStatusUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Change the status of one transaction."""
    user = await transaction_service.update_transaction_status(
        db, wallet_address, payload.transaction_id, payload.status
    )

    return success_response(
        status_code=status.HTTP_200_OK,
        message="Transaction status updated successfully!",
        data=user.to_response()
    )


@router.get(
    "/transactions/history/{walletAddress}",
    status_code=status.HTTP_200_OK,
    response_description="Transaction history retrieved"
)
async def get_transaction_history(
    wallet_address: WalletAddressPath,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Complete transaction history of a user."""
    transactions = await transaction_service.get_history(db, wallet_address)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="Transaction history retrieved successfully",
        data=TransactionListResponse(transactions=transactions).to_response()
    )


@router.get(
    "/transactions/recent",
    status_code=status.HTTP_200_OK,
    response_description="Recent transactions retrieved"
)
async def get_recent_transactions(
    wallet_address: str = Query(..., alias="walletAddress", pattern=WALLET_ADDRESS_REGEX),
    limit: Optional[int] = Query(None, ge=1, description="How many transactions to return"),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Most recent transactions of a user."""
    transactions = await transaction_service.get_recent(db, wallet_address, limit)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="Recent transactions retrieved successfully",
        data=TransactionListResponse(transactions=transactions).to_response()
    )


@router.get(
    "/transactions/status/{walletAddress}",
    status_code=status.HTTP_200_OK,
    response_description="Transactions retrieved"
)
async def get_transactions_by_status(
    wallet_address: WalletAddressPath,
    transaction_status: Optional[TransactionStatus] = Query(None, alias="status"),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Transactions of a user filtered by status."""
    transactions = await transaction_service.get_by_status(db, wallet_address, transaction_status)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="Transactions retrieved successfully",
        data=TransactionListResponse(transactions=transactions).to_response()
    )


@router.get(
    "/transactions/type/{walletAddress}",
    status_code=status.HTTP_200_OK,
    response_description="Transactions retrieved"
)
async def get_transactions_by_type(
    wallet_address: WalletAddressPath,
    transaction_type: Optional[str] = Query(None, alias="type", description="e.g. sent or received"),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Transactions of a user filtered by type."""
    transactions = await transaction_service.get_by_type(db, wallet_address, transaction_type)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="Transactions retrieved successfully",
        data=TransactionListResponse(transactions=transactions).to_response()
    )


@router.get(
    "/transactions/count/{walletAddress}",
    status_code=status.HTTP_200_OK,
    response_description="Transaction counts retrieved"
)
async def get_transaction_counts(
    wallet_address: WalletAddressPath,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Count a user's transactions by status."""
    counts = await transaction_service.count_by_status(db, wallet_address)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="Transaction counts retrieved successfully",
        data=counts.to_response()
    )

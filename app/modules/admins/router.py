"""
Admins module router.

API endpoints for admin management and admin operations on users. Every
route authenticates the calling admin before touching the store.
"""

from typing import Optional
from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from app.config.database import get_database
from app.core.dependencies import WalletAddressPath, get_form_admin, get_query_admin
from app.core.responses import success_response
from app.modules.admins import service as admin_service
from app.modules.admins.schemas import AdminCreate, AdminUpdate, KycStatusUpdate
from app.modules.auth import service as auth_service
from app.modules.auth.models import PrincipalKind
from app.modules.auth.schemas import WalletCredentials
from app.modules.transactions import service as transaction_service
from app.modules.users import service as user_service
from app.utils.logger import get_logger
from app.utils.validators import WALLET_ADDRESS_REGEX

logger = get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["Admins"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_description="Admin created successfully"
)
async def create_admin(
    payload: AdminCreate,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Create a new admin.

    Args:
        payload: Acting admin credentials plus the new admin's
            adminWalletAddress, name, email and upiId
        db: Database instance

    Returns:
        Standardized response with the created admin
    """
    admin = await auth_service.authenticate(db, PrincipalKind.ADMIN, payload.wallet_address, payload.signature)
    created = await admin_service.create_admin(db, admin, payload)

    return success_response(
        status_code=status.HTTP_201_CREATED,
        message="Admin created successfully!",
        data=created.to_response()
    )


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_description="Admins retrieved successfully"
)
async def list_admins(
    admin: dict = Depends(get_query_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """List all admins."""
    admins = await admin_service.list_admins(db)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="Admins retrieved successfully",
        data=[item.to_response() for item in admins]
    )


@router.get(
    "/by-wallet",
    status_code=status.HTTP_200_OK,
    response_description="Admin retrieved successfully"
)
async def get_admin_by_wallet(admin: dict = Depends(get_query_admin)):
    """The calling admin's own record."""
    return success_response(
        status_code=status.HTTP_200_OK,
        message="Admin retrieved successfully",
        data=admin_service.to_admin_response(admin).to_response()
    )


@router.put(
    "",
    status_code=status.HTTP_200_OK,
    response_description="Admin updated successfully"
)
async def update_admin(
    payload: AdminUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Update the calling admin's name and email."""
    admin = await auth_service.authenticate(db, PrincipalKind.ADMIN, payload.wallet_address, payload.signature)
    updated = await admin_service.update_admin(db, admin, payload)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="Admin updated successfully!",
        data=updated.to_response()
    )


@router.delete(
    "",
    status_code=status.HTTP_200_OK,
    response_description="Admin deleted successfully"
)
async def delete_admin(
    credentials: WalletCredentials,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Delete the calling admin's own record."""
    admin = await auth_service.authenticate(db, PrincipalKind.ADMIN, credentials.wallet_address, credentials.signature)
    await admin_service.delete_admin(db, admin)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="Admin deleted successfully!"
    )


@router.post(
    "/profile-pic",
    status_code=status.HTTP_200_OK,
    response_description="Profile picture uploaded successfully"
)
async def upload_profile_pic(
    profile_pic: Optional[UploadFile] = File(None, alias="profilePic"),
    admin: dict = Depends(get_form_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Upload the calling admin's profile picture (multipart: walletAddress, signature, profilePic)."""
    updated = await admin_service.update_profile_pic(db, admin, profile_pic)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="Profile picture uploaded successfully!",
        data=updated.to_response()
    )


@router.put(
    "/user/kyc/{walletAddress}",
    status_code=status.HTTP_200_OK,
    response_description="KYC status updated successfully"
)
async def update_user_kyc_status(
    wallet_address: WalletAddressPath,
    payload: KycStatusUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Set a user's KYC status.

    An unknown user is a 404; no user record is created.
    """
    await auth_service.authenticate(db, PrincipalKind.ADMIN, payload.wallet_address, payload.signature)
    user = await user_service.set_kyc_status(db, wallet_address, payload.kyc_status)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="KYC status updated successfully!",
        data=user.to_response()
    )


@router.get(
    "/users",
    status_code=status.HTTP_200_OK,
    response_description="Users retrieved successfully"
)
async def list_users(
    admin: dict = Depends(get_query_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """List all users."""
    users = await user_service.list_users(db)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="Users retrieved successfully",
        data=[user.to_response() for user in users]
    )


@router.delete(
    "/user",
    status_code=status.HTTP_200_OK,
    response_description="User deleted successfully"
)
async def delete_user(
    credentials: WalletCredentials,
    user_wallet_address: str = Query(..., alias="userWalletAddress", pattern=WALLET_ADDRESS_REGEX),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Delete a user; the target wallet comes from ?userWalletAddress=."""
    admin = await auth_service.authenticate(db, PrincipalKind.ADMIN, credentials.wallet_address, credentials.signature)
    await user_service.delete_user(db, user_wallet_address)

    logger.info(f"Admin {admin['wallet_address']} deleted user {user_wallet_address.lower()}")
    return success_response(
        status_code=status.HTTP_200_OK,
        message="User deleted successfully!"
    )


@router.get(
    "/transactions/count",
    status_code=status.HTTP_200_OK,
    response_description="Transaction counts retrieved"
)
async def get_all_transaction_counts(
    admin: dict = Depends(get_query_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Count every user's transactions by status, plus those with an unknown status."""
    counts = await transaction_service.count_all_by_status(db)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="Transaction counts retrieved successfully",
        data=counts.to_response()
    )

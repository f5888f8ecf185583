"""
Users module router.

API endpoints for user registration, profile and KYC documents.
"""

import mimetypes
from typing import Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import Response
from motor.motor_asyncio import AsyncIOMotorDatabase
from app.config.database import get_database
from app.core.dependencies import WalletAddressPath, get_form_user, get_query_user
from app.core.responses import success_response
from app.modules.auth import service as auth_service
from app.modules.auth.models import PrincipalKind
from app.modules.users import service as user_service
from app.modules.users.schemas import DocumentType, UserProfileUpdate, UserRegister
from app.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/user", tags=["Users"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_description="User registered successfully"
)
async def register_user(
    payload: UserRegister,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Register a user.

    The signature over the challenge message proves the caller controls
    walletAddress.

    Args:
        payload: Credentials plus optional name, email, upiId, mobile
        db: Database instance

    Returns:
        Standardized response with the created user
    """
    user = await user_service.register_user(db, payload)

    return success_response(
        status_code=status.HTTP_201_CREATED,
        message="User profile created successfully!",
        data=user.to_response()
    )


@router.put(
    "",
    status_code=status.HTTP_200_OK,
    response_description="User profile updated successfully"
)
async def update_user_profile(
    payload: UserProfileUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Update the caller's profile.

    Only name, email, upiId and mobile can change here.
    """
    user = await auth_service.authenticate(db, PrincipalKind.USER, payload.wallet_address, payload.signature)
    updated = await user_service.update_profile(db, user, payload)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="User profile updated successfully!",
        data=updated.to_response()
    )


@router.post(
    "/profile-pic",
    status_code=status.HTTP_200_OK,
    response_description="Profile picture updated successfully"
)
async def upload_profile_pic(
    profile_pic: Optional[UploadFile] = File(None, alias="profilePic"),
    user: dict = Depends(get_form_user),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Upload the caller's profile picture (multipart: walletAddress, signature, profilePic)."""
    updated = await user_service.update_profile_pic(db, user, profile_pic)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="Profile picture updated successfully!",
        data=updated.to_response()
    )


@router.post(
    "/document",
    status_code=status.HTTP_200_OK,
    response_description="Document uploaded successfully"
)
async def upload_document(
    document_type: DocumentType = Form(..., alias="documentType"),
    document: Optional[UploadFile] = File(None),
    user: dict = Depends(get_form_user),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Upload a KYC document.

    The file is encrypted before it touches the disk.

    Args:
        document_type: PAN, AADHAR or DL
        document: Uploaded file
        user: Authenticated user
        db: Database instance

    Returns:
        Standardized response with the updated user
    """
    updated = await user_service.upload_document(db, user, document, document_type)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="Document uploaded successfully!",
        data=updated.to_response()
    )


@router.get(
    "/document/{document_index}",
    status_code=status.HTTP_200_OK,
    response_description="Decrypted document content"
)
async def download_document(
    document_index: int,
    user: dict = Depends(get_query_user)
):
    """Return one of the caller's documents, decrypted."""
    content, extension = await user_service.get_document(user, document_index)
    media_type = mimetypes.guess_type(f"document{extension}")[0] or "application/octet-stream"

    return Response(content=content, media_type=media_type)


@router.get(
    "/wallet/{walletAddress}",
    status_code=status.HTTP_200_OK,
    response_description="User retrieved successfully"
)
async def get_user_by_wallet(
    wallet_address: WalletAddressPath,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Get a user's public profile by wallet address."""
    user = await user_service.get_user_by_wallet(db, wallet_address)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="User retrieved successfully",
        data=user.to_response()
    )

"""
Admins module service layer.

Business logic for admin management. Callers have already passed the
wallet authentication gate; the acting admin record is handed in.
"""

from typing import List, Optional
from fastapi import UploadFile
from motor.motor_asyncio import AsyncIOMotorDatabase
from app.core.security import normalize_address
from app.modules.admins import models as admin_models
from app.modules.admins.schemas import AdminCreate, AdminResponse, AdminUpdate
from app.shared.exceptions import AdminNotFoundError, DuplicateResourceError
from app.shared.models import document_to_dict
from app.utils import uploads
from app.utils.logger import get_logger

logger = get_logger(__name__)


def to_admin_response(admin: dict) -> AdminResponse:
    """Convert a stored admin record to its API representation."""
    return AdminResponse.model_validate(document_to_dict(admin))


async def create_admin(
    db: AsyncIOMotorDatabase,
    acting_admin: dict,
    payload: AdminCreate
) -> AdminResponse:
    """
    Create a new admin.

    Args:
        db: Database instance
        acting_admin: Authenticated admin performing the creation
        payload: New admin's wallet, name, email and UPI id

    Returns:
        AdminResponse: Created admin

    Raises:
        DuplicateResourceError: If the wallet or email is already registered
    """
    wallet_address = normalize_address(payload.admin_wallet_address)

    if await admin_models.find_admin_by_wallet(db, wallet_address):
        raise DuplicateResourceError("Admin already exists!")

    if await admin_models.find_admin_by_email(db, payload.email):
        raise DuplicateResourceError("Email already registered!")

    admin = await admin_models.create_admin(db, {
        "wallet_address": wallet_address,
        "name": payload.name,
        "email": payload.email,
        "upi_id": payload.upi_id,
    })

    logger.info(f"Admin {acting_admin['wallet_address']} created admin {wallet_address}")
    return to_admin_response(admin)


async def list_admins(db: AsyncIOMotorDatabase) -> List[AdminResponse]:
    """List all admins."""
    admins = await admin_models.list_admins(db)
    return [to_admin_response(admin) for admin in admins]


async def update_admin(
    db: AsyncIOMotorDatabase,
    admin: dict,
    payload: AdminUpdate
) -> AdminResponse:
    """
    Update the acting admin's name and email.

    Raises:
        DuplicateResourceError: If the email belongs to another admin
        AdminNotFoundError: If the admin vanished meanwhile
    """
    changes = payload.model_dump(include={"name", "email"}, exclude_none=True)

    if "email" in changes:
        holder = await admin_models.find_admin_by_email(db, changes["email"])
        if holder and holder["_id"] != admin["_id"]:
            raise DuplicateResourceError("Email already registered!")

    updated = await admin_models.update_admin(db, admin["wallet_address"], changes)
    if not updated:
        raise AdminNotFoundError()
    return to_admin_response(updated)


async def delete_admin(
    db: AsyncIOMotorDatabase,
    admin: dict
) -> AdminResponse:
    """Delete the acting admin's own record."""
    deleted = await admin_models.delete_admin(db, admin["wallet_address"])
    if not deleted:
        raise AdminNotFoundError()
    return to_admin_response(deleted)


async def update_profile_pic(
    db: AsyncIOMotorDatabase,
    admin: dict,
    file: Optional[UploadFile]
) -> AdminResponse:
    """Store a new profile picture for the acting admin."""
    path = await uploads.store_image(file)

    updated = await admin_models.update_admin(db, admin["wallet_address"], {"profile_pic": path})
    if not updated:
        raise AdminNotFoundError()
    return to_admin_response(updated)

"""
Contacts module router.

API endpoints for a user's address book. Only creation is
wallet-authenticated; reads, updates and deletes are open.
"""

from fastapi import APIRouter, Depends, Path, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from app.config.database import get_database
from app.core.dependencies import WalletAddressPath
from app.core.responses import success_response
from app.modules.auth import service as auth_service
from app.modules.auth.models import PrincipalKind
from app.modules.contacts import service as contact_service
from app.modules.contacts.schemas import ContactCreate, ContactListResponse, ContactUpdate

router = APIRouter(prefix="/contacts", tags=["Contacts"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_description="Contact created successfully"
)
async def create_contact(
    payload: ContactCreate,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Add a contact for the calling user.

    Args:
        payload: Credentials plus name, phone, email and optional address
        db: Database instance

    Returns:
        Standardized response with the created contact
    """
    owner = await auth_service.authenticate(db, PrincipalKind.USER, payload.wallet_address, payload.signature)
    contact = await contact_service.create_contact(db, owner, payload)

    return success_response(
        status_code=status.HTTP_201_CREATED,
        message="Contact created successfully!",
        data=contact.to_response()
    )


@router.get(
    "/favorites/{walletAddress}",
    status_code=status.HTTP_200_OK,
    response_description="Favorite contacts retrieved"
)
async def get_favorite_contacts(
    wallet_address: WalletAddressPath,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Contacts of a wallet marked as favorite."""
    contacts = await contact_service.list_contacts(db, wallet_address, favorites_only=True)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="Favorite contacts retrieved successfully",
        data=ContactListResponse(contacts=contacts).to_response()
    )


@router.get(
    "/{walletAddress}",
    status_code=status.HTTP_200_OK,
    response_description="Contacts retrieved"
)
async def get_contacts(
    wallet_address: WalletAddressPath,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """All contacts of a wallet."""
    contacts = await contact_service.list_contacts(db, wallet_address)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="Contacts retrieved successfully",
        data=ContactListResponse(contacts=contacts).to_response()
    )


@router.put(
    "/{contactId}",
    status_code=status.HTTP_200_OK,
    response_description="Contact updated successfully"
)
async def update_contact(
    payload: ContactUpdate,
    contact_id: str = Path(..., alias="contactId"),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Update name, phone, email, address or isFavorite of a contact."""
    contact = await contact_service.update_contact(db, contact_id, payload)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="Contact updated successfully!",
        data=contact.to_response()
    )


@router.delete(
    "/{contactId}",
    status_code=status.HTTP_200_OK,
    response_description="Contact deleted successfully"
)
async def delete_contact(
    contact_id: str = Path(..., alias="contactId"),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Delete a contact."""
    await contact_service.delete_contact(db, contact_id)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="Contact deleted successfully!"
    )

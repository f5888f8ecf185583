"""
Contacts module service layer.

Business logic for a user's address book.
"""

from typing import List
from motor.motor_asyncio import AsyncIOMotorDatabase
from app.modules.contacts import models as contact_models
from app.modules.contacts.schemas import ContactCreate, ContactResponse, ContactUpdate
from app.shared.exceptions import ContactNotFoundError
from app.shared.models import document_to_dict, parse_object_id
from app.utils.logger import get_logger

logger = get_logger(__name__)


def to_contact_response(contact: dict) -> ContactResponse:
    """Convert a stored contact to its API representation."""
    return ContactResponse.model_validate(document_to_dict(contact))


async def create_contact(
    db: AsyncIOMotorDatabase,
    owner: dict,
    payload: ContactCreate
) -> ContactResponse:
    """
    Add a contact to the authenticated user's address book.

    Args:
        db: Database instance
        owner: Authenticated user record
        payload: Contact fields

    Returns:
        ContactResponse: Created contact
    """
    contact = await contact_models.create_contact(db, {
        "wallet_address": owner["wallet_address"],
        "name": payload.name,
        "phone": payload.phone,
        "email": payload.email,
        "address": payload.address,
    })
    return to_contact_response(contact)


async def list_contacts(
    db: AsyncIOMotorDatabase,
    wallet_address: str,
    favorites_only: bool = False
) -> List[ContactResponse]:
    """Contacts of a wallet, optionally favorites only."""
    contacts = await contact_models.find_contacts(db, wallet_address, favorites_only)
    return [to_contact_response(contact) for contact in contacts]


async def update_contact(
    db: AsyncIOMotorDatabase,
    contact_id: str,
    payload: ContactUpdate
) -> ContactResponse:
    """
    Update a contact.

    Raises:
        ValidationError: If contact_id is not an ObjectId
        ContactNotFoundError: If contact not found
    """
    oid = parse_object_id(contact_id, "contact id")
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)

    updated = await contact_models.update_contact(db, oid, changes)
    if not updated:
        raise ContactNotFoundError()

    logger.info(f"Contact updated: id={contact_id}, fields={sorted(changes)}")
    return to_contact_response(updated)


async def delete_contact(
    db: AsyncIOMotorDatabase,
    contact_id: str
) -> None:
    """
    Delete a contact.

    Raises:
        ValidationError: If contact_id is not an ObjectId
        ContactNotFoundError: If contact not found
    """
    oid = parse_object_id(contact_id, "contact id")

    deleted = await contact_models.delete_contact(db, oid)
    if not deleted:
        raise ContactNotFoundError()

    logger.info(f"Contact deleted: id={contact_id}")

"""
Users module service layer.

Business logic for user registration, profile maintenance and KYC
documents, plus the user operations exposed to admins.
"""

from typing import List, Optional, Tuple
from fastapi import UploadFile
from motor.motor_asyncio import AsyncIOMotorDatabase
from app.core.security import normalize_address
from app.modules.auth import service as auth_service
from app.modules.users import models as user_models
from app.modules.users.schemas import (
    DocumentType,
    UserProfileUpdate,
    UserRegister,
    UserResponse,
)
from app.shared.exceptions import (
    ConfigurationError,
    DocumentNotFoundError,
    DuplicateResourceError,
    InternalServerError,
    UserNotFoundError,
)
from app.shared.models import document_to_dict
from app.utils import uploads
from app.utils.encryption import DecryptionError, DocumentEncryption, EncryptionKeyError
from app.utils.logger import get_logger

logger = get_logger(__name__)


def to_user_response(user: dict) -> UserResponse:
    """Convert a stored user record to its API representation."""
    return UserResponse.model_validate(document_to_dict(user))


def _get_encryption() -> DocumentEncryption:
    try:
        return DocumentEncryption()
    except EncryptionKeyError as e:
        logger.error(f"Document encryption unavailable: {str(e)}")
        raise ConfigurationError("Document encryption is not configured") from e


async def _ensure_email_available(
    db: AsyncIOMotorDatabase,
    email: Optional[str],
    wallet_address: Optional[str] = None
) -> None:
    """Reject an email held by a user other than wallet_address."""
    if not email:
        return

    holder = await user_models.find_user_by_email(db, email)
    if holder and (wallet_address is None or holder["wallet_address"] != normalize_address(wallet_address)):
        raise DuplicateResourceError("Email already registered!")


async def register_user(
    db: AsyncIOMotorDatabase,
    payload: UserRegister
) -> UserResponse:
    """
    Register a new user.

    The caller proves control of the wallet with a signature; no principal
    lookup happens because the user does not exist yet.

    Args:
        db: Database instance
        payload: Registration data with credentials

    Returns:
        UserResponse: Created user

    Raises:
        MissingCredentialsError: If address or signature is absent
        SignatureMismatchError: If the signature was not made by the address
        DuplicateResourceError: If the wallet or email is already registered
    """
    wallet_address = auth_service.verify_wallet_credentials(payload.wallet_address, payload.signature)

    if await user_models.find_user_by_wallet(db, wallet_address):
        raise DuplicateResourceError("User already exists!")

    await _ensure_email_available(db, payload.email)

    user_data = payload.model_dump(include={"name", "email", "upi_id", "mobile"}, exclude_none=True)
    user_data["wallet_address"] = wallet_address

    user = await user_models.create_user(db, user_data)
    return to_user_response(user)


async def get_user_by_wallet(
    db: AsyncIOMotorDatabase,
    wallet_address: str
) -> UserResponse:
    """
    Get user by wallet address.

    Raises:
        UserNotFoundError: If user not found
    """
    user = await user_models.find_user_by_wallet(db, wallet_address)
    if not user:
        raise UserNotFoundError()
    return to_user_response(user)


async def update_profile(
    db: AsyncIOMotorDatabase,
    user: dict,
    payload: UserProfileUpdate
) -> UserResponse:
    """
    Update the authenticated user's editable profile fields.

    Args:
        db: Database instance
        user: Authenticated user record
        payload: Update request

    Returns:
        UserResponse: Updated user
    """
    changes = payload.profile_changes()
    await _ensure_email_available(db, changes.get("email"), user["wallet_address"])

    updated = await user_models.update_user(db, user["wallet_address"], {"$set": changes})
    if not updated:
        raise UserNotFoundError()

    logger.info(f"User profile updated: wallet={user['wallet_address']}, fields={sorted(changes)}")
    return to_user_response(updated)


async def update_profile_pic(
    db: AsyncIOMotorDatabase,
    user: dict,
    file: Optional[UploadFile]
) -> UserResponse:
    """Store a new profile picture for the authenticated user."""
    path = await uploads.store_image(file)

    updated = await user_models.update_user(db, user["wallet_address"], {"$set": {"profile_pic": path}})
    if not updated:
        raise UserNotFoundError()
    return to_user_response(updated)


async def upload_document(
    db: AsyncIOMotorDatabase,
    user: dict,
    file: Optional[UploadFile],
    document_type: DocumentType
) -> UserResponse:
    """
    Encrypt and store a KYC document for the authenticated user.

    Args:
        db: Database instance
        user: Authenticated user record
        file: Uploaded document
        document_type: PAN, AADHAR or DL

    Returns:
        UserResponse: User with the document appended

    Raises:
        ConfigurationError: If no encryption key is configured
        InvalidFileTypeError: If the extension is not allowed
    """
    encryption = _get_encryption()

    content = await uploads.read_upload(file, "document")
    extension = uploads.get_extension(file.filename)
    uploads.check_document_extension(extension)

    ciphertext, iv_hex = encryption.encrypt(content)
    path = await uploads.save_file(ciphertext, extension)

    document = {
        "path": path,
        "type": DocumentType(document_type).value,
        "iv": iv_hex,
        "extension": extension,
    }
    updated = await user_models.update_user(db, user["wallet_address"], {"$push": {"documents": document}})
    if not updated:
        raise UserNotFoundError()

    logger.info(f"Document stored: wallet={user['wallet_address']}, type={document['type']}")
    return to_user_response(updated)


async def get_document(user: dict, index: int) -> Tuple[bytes, str]:
    """
    Decrypt one of the authenticated user's documents.

    Args:
        user: Authenticated user record
        index: Position in the user's document list

    Returns:
        tuple: (plain content, extension)

    Raises:
        DocumentNotFoundError: If index is out of range or the file is gone
    """
    documents = user.get("documents", [])
    if index < 0 or index >= len(documents):
        raise DocumentNotFoundError()

    document = documents[index]
    encryption = _get_encryption()

    try:
        ciphertext = await uploads.read_file(document["path"])
    except FileNotFoundError as e:
        logger.error(f"Document file missing: path={document['path']}")
        raise DocumentNotFoundError("Document file not found!") from e

    try:
        content = encryption.decrypt(ciphertext, document["iv"])
    except DecryptionError as e:
        raise InternalServerError("Failed to decrypt document") from e

    return content, document["extension"]


async def list_users(db: AsyncIOMotorDatabase) -> List[UserResponse]:
    """List all users."""
    users = await user_models.list_users(db)
    return [to_user_response(user) for user in users]


async def set_kyc_status(
    db: AsyncIOMotorDatabase,
    wallet_address: str,
    kyc_status: bool
) -> UserResponse:
    """
    Set a user's KYC status.

    Never creates a user; an unknown wallet is reported as not found.

    Raises:
        UserNotFoundError: If user not found
    """
    updated = await user_models.update_user(db, wallet_address, {"$set": {"kyc_status": kyc_status}})
    if not updated:
        raise UserNotFoundError()

    logger.info(f"KYC status set: wallet={updated['wallet_address']}, kyc_status={kyc_status}")
    return to_user_response(updated)


async def delete_user(
    db: AsyncIOMotorDatabase,
    wallet_address: str
) -> UserResponse:
    """
    Delete a user permanently.

    Raises:
        UserNotFoundError: If user not found
    """
    deleted = await user_models.delete_user(db, wallet_address)
    if not deleted:
        raise UserNotFoundError()
    return to_user_response(deleted)

"""
Auth module service layer.

Wallet authentication gate shared by every privileged handler. A request is
authenticated by proving control of a wallet (a signature over the fixed
challenge message) and by that wallet belonging to a stored principal.

Order of checks, first failure wins:
    1. wallet address and signature present      -> MissingCredentialsError (400)
    2. recovered signer equals claimed address    -> SignatureMismatchError (403)
    3. principal with that address exists         -> AdminNotFoundError / UserNotFoundError (404)

There is no session and no nonce. Every call re-verifies from scratch, and a
captured signature remains valid for as long as the challenge text is
unchanged.
"""

from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from app.core.security import (
    addresses_match,
    get_challenge_message,
    normalize_address,
    recover_signer,
)
from app.modules.auth import models as auth_models
from app.modules.auth.models import PrincipalKind
from app.shared.exceptions import (
    AdminNotFoundError,
    MissingCredentialsError,
    SignatureMismatchError,
    UserNotFoundError,
)
from app.utils.logger import get_logger

logger = get_logger(__name__)


def verify_wallet_credentials(
    wallet_address: Optional[str],
    signature: Optional[str]
) -> str:
    """
    Check that the signature over the challenge was made by wallet_address.

    Args:
        wallet_address: Claimed wallet address
        signature: Signature over the challenge message

    Returns:
        str: Verified wallet address, lowercased

    Raises:
        MissingCredentialsError: If either value is absent or empty
        SignatureMismatchError: If the signer differs from the claimed address
        MalformedSignatureError: If the signature cannot be recovered
    """
    if not wallet_address or not signature:
        raise MissingCredentialsError()

    signer = recover_signer(get_challenge_message(), signature)

    if not addresses_match(signer, wallet_address):
        logger.warning(f"Signature mismatch: claimed={normalize_address(wallet_address)}")
        raise SignatureMismatchError()

    return normalize_address(signer)


async def resolve_principal(
    db: AsyncIOMotorDatabase,
    kind: PrincipalKind,
    wallet_address: str
) -> dict:
    """
    Load the principal owning a wallet address.

    Args:
        db: Database instance
        kind: Admin or user
        wallet_address: Wallet address in any letter case

    Returns:
        dict: Principal record

    Raises:
        AdminNotFoundError: If kind is admin and no admin has the address
        UserNotFoundError: If kind is user and no user has the address
    """
    principal = await auth_models.find_principal_by_wallet(db, kind, wallet_address)

    if not principal:
        logger.warning(f"{kind.value.capitalize()} not found: wallet={normalize_address(wallet_address)}")
        if kind is PrincipalKind.ADMIN:
            raise AdminNotFoundError()
        raise UserNotFoundError()

    return principal


async def authenticate(
    db: AsyncIOMotorDatabase,
    kind: PrincipalKind,
    wallet_address: Optional[str],
    signature: Optional[str]
) -> dict:
    """
    Authenticate a request as a principal of the given kind.

    Args:
        db: Database instance
        kind: Admin or user
        wallet_address: Claimed wallet address
        signature: Signature over the challenge message

    Returns:
        dict: Authenticated principal record

    Raises:
        MissingCredentialsError: 400
        SignatureMismatchError: 403 (MalformedSignatureError included)
        AdminNotFoundError / UserNotFoundError: 404
    """
    verified_address = verify_wallet_credentials(wallet_address, signature)

    # Look up by the recovered address, never by anything unverified
    principal = await resolve_principal(db, kind, verified_address)

    logger.info(f"{kind.value.capitalize()} authenticated: wallet={verified_address}")
    return principal

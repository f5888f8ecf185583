"""
Core dependencies for FastAPI routes.

Provides wallet credential extraction and authentication dependencies for
routes whose credentials travel in the query string or in a multipart form.
JSON-body routes read the same WalletCredentials fields from their request
schema and call the gate directly.
"""

from typing import Annotated, Optional
from fastapi import Depends, Form, Path, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from app.config.database import get_database
from app.modules.auth import service as auth_service
from app.modules.auth.models import PrincipalKind
from app.modules.auth.schemas import WalletCredentials
from app.shared.exceptions import ValidationError
from app.utils.validators import WALLET_ADDRESS_REGEX, is_wallet_address

# Wallet address taken from the URL path; a malformed value is a 400
WalletAddressPath = Annotated[
    str,
    Path(alias="walletAddress", pattern=WALLET_ADDRESS_REGEX, description="Wallet address (0x + 40 hex)")
]


def _build_credentials(wallet_address: Optional[str], signature: Optional[str]) -> WalletCredentials:
    """Build credentials, reporting a malformed address as a validation failure."""
    if wallet_address and not is_wallet_address(wallet_address):
        raise ValidationError("Valid wallet address is required.")
    return WalletCredentials(wallet_address=wallet_address, signature=signature)


async def query_credentials(
    wallet_address: Optional[str] = Query(None, alias="walletAddress", description="Signer wallet address"),
    signature: Optional[str] = Query(None, description="Signature over the challenge message")
) -> WalletCredentials:
    """
    Wallet credentials from ?walletAddress=&signature= (GET-style reads).

    Returns:
        WalletCredentials: Possibly empty credentials
    """
    return _build_credentials(wallet_address, signature)


async def form_credentials(
    wallet_address: Optional[str] = Form(None, alias="walletAddress"),
    signature: Optional[str] = Form(None)
) -> WalletCredentials:
    """
    Wallet credentials from multipart form fields (file uploads).

    Returns:
        WalletCredentials: Possibly empty credentials
    """
    return _build_credentials(wallet_address, signature)


async def get_query_admin(
    credentials: WalletCredentials = Depends(query_credentials),
    db: AsyncIOMotorDatabase = Depends(get_database)
) -> dict:
    """
    Authenticated admin from query string credentials.

    Example:
        @router.get("/users")
        async def list_users(admin: dict = Depends(get_query_admin)):
            ...
    """
    return await auth_service.authenticate(
        db, PrincipalKind.ADMIN, credentials.wallet_address, credentials.signature
    )


async def get_query_user(
    credentials: WalletCredentials = Depends(query_credentials),
    db: AsyncIOMotorDatabase = Depends(get_database)
) -> dict:
    """Authenticated user from query string credentials."""
    return await auth_service.authenticate(
        db, PrincipalKind.USER, credentials.wallet_address, credentials.signature
    )


async def get_form_admin(
    credentials: WalletCredentials = Depends(form_credentials),
    db: AsyncIOMotorDatabase = Depends(get_database)
) -> dict:
    """Authenticated admin from multipart form credentials."""
    return await auth_service.authenticate(
        db, PrincipalKind.ADMIN, credentials.wallet_address, credentials.signature
    )


async def get_form_user(
    credentials: WalletCredentials = Depends(form_credentials),
    db: AsyncIOMotorDatabase = Depends(get_database)
) -> dict:
    """Authenticated user from multipart form credentials."""
    return await auth_service.authenticate(
        db, PrincipalKind.USER, credentials.wallet_address, credentials.signature
    )

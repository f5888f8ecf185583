"""
Auth module router.

API endpoints for wallet authentication. There is no login state: these
endpoints only confirm that a signature is good and return the principal,
and every privileged endpoint repeats the same check.
"""

from fastapi import APIRouter, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from app.config.database import get_database
from app.core.responses import success_response
from app.core.security import get_challenge_message
from app.modules.admins.service import to_admin_response
from app.modules.auth import service as auth_service
from app.modules.auth.models import PrincipalKind
from app.modules.auth.schemas import ChallengeResponse, WalletCredentials
from app.modules.users.service import to_user_response

router = APIRouter(tags=["Authentication"])


@router.get(
    "/auth/challenge",
    status_code=status.HTTP_200_OK,
    response_description="Challenge message to sign"
)
async def get_challenge():
    """
    Get the message wallets must sign.

    The message is fixed; sign it with personal_sign and send the signature
    together with the wallet address on every privileged request.
    """
    return success_response(
        status_code=status.HTTP_200_OK,
        message="Challenge retrieved successfully",
        data=ChallengeResponse(message=get_challenge_message()).to_response()
    )


@router.post(
    "/auth/wallet",
    status_code=status.HTTP_200_OK,
    response_description="User authenticated successfully"
)
async def authenticate_user(
    credentials: WalletCredentials,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Authenticate a user with a wallet signature.

    Args:
        credentials: walletAddress and signature
        db: Database instance

    Returns:
        Standardized response with the user record

    Raises:
        MissingCredentialsError: 400
        SignatureMismatchError: 403
        UserNotFoundError: 404
    """
    user = await auth_service.authenticate(
        db, PrincipalKind.USER, credentials.wallet_address, credentials.signature
    )

    return success_response(
        status_code=status.HTTP_200_OK,
        message="User authenticated successfully!",
        data=to_user_response(user).to_response()
    )


@router.post(
    "/admin/auth/wallet",
    status_code=status.HTTP_200_OK,
    response_description="Admin authenticated successfully"
)
async def authenticate_admin(
    credentials: WalletCredentials,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Authenticate an admin with a wallet signature."""
    admin = await auth_service.authenticate(
        db, PrincipalKind.ADMIN, credentials.wallet_address, credentials.signature
    )

    return success_response(
        status_code=status.HTTP_200_OK,
        message="Admin authenticated successfully!",
        data=to_admin_response(admin).to_response()
    )

"""
Themes module router.

API endpoints for UI theme ("CSS") records.
"""

from fastapi import APIRouter, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from app.config.database import get_database
from app.core.responses import success_response
from app.modules.auth import service as auth_service
from app.modules.auth.models import PrincipalKind
from app.modules.auth.schemas import WalletCredentials
from app.modules.themes import service as theme_service
from app.modules.themes.schemas import ThemeCreate, ThemeUpdate

router = APIRouter(prefix="/css", tags=["Themes"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_description="CSS properties saved successfully"
)
async def create_theme(
    payload: ThemeCreate,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Create a theme.

    Args:
        payload: Admin credentials plus CSS properties (color and fontSize required)
        db: Database instance

    Returns:
        Standardized response with the created theme
    """
    await auth_service.authenticate(db, PrincipalKind.ADMIN, payload.wallet_address, payload.signature)
    theme = await theme_service.create_theme(db, payload)

    return success_response(
        status_code=status.HTTP_201_CREATED,
        message="CSS properties saved successfully",
        data=theme.to_response()
    )


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_description="Themes retrieved"
)
async def list_themes(db: AsyncIOMotorDatabase = Depends(get_database)):
    """List all themes."""
    themes = await theme_service.list_themes(db)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="CSS properties retrieved successfully",
        data=[theme.to_response() for theme in themes]
    )


@router.get(
    "/{theme_id}",
    status_code=status.HTTP_200_OK,
    response_description="Theme retrieved"
)
async def get_theme(
    theme_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Get a theme by ID."""
    theme = await theme_service.get_theme(db, theme_id)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="CSS properties retrieved successfully",
        data=theme.to_response()
    )


@router.put(
    "/{theme_id}",
    status_code=status.HTTP_200_OK,
    response_description="CSS properties updated successfully"
)
async def update_theme(
    theme_id: str,
    payload: ThemeUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Update some properties of a theme."""
    await auth_service.authenticate(db, PrincipalKind.ADMIN, payload.wallet_address, payload.signature)
    theme = await theme_service.update_theme(db, theme_id, payload)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="CSS properties updated successfully",
        data=theme.to_response()
    )


@router.delete(
    "/{theme_id}",
    status_code=status.HTTP_200_OK,
    response_description="CSS properties deleted successfully"
)
async def delete_theme(
    theme_id: str,
    credentials: WalletCredentials,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Delete a theme."""
    await auth_service.authenticate(db, PrincipalKind.ADMIN, credentials.wallet_address, credentials.signature)
    await theme_service.delete_theme(db, theme_id)

    return success_response(
        status_code=status.HTTP_200_OK,
        message="CSS properties deleted successfully!"
    )

"""
Themes module service layer.

Business logic for UI theme ("CSS") records. Mutations are made by
authenticated admins; reads are public.
"""

from typing import List
from motor.motor_asyncio import AsyncIOMotorDatabase
from app.modules.themes import models as theme_models
from app.modules.themes.schemas import ThemeCreate, ThemeResponse, ThemeUpdate
from app.shared.exceptions import ThemeNotFoundError
from app.shared.models import document_to_dict, parse_object_id
from app.utils.logger import get_logger

logger = get_logger(__name__)


def to_theme_response(theme: dict) -> ThemeResponse:
    """Convert a stored theme to its API representation."""
    return ThemeResponse.model_validate(document_to_dict(theme))


async def create_theme(db: AsyncIOMotorDatabase, payload: ThemeCreate) -> ThemeResponse:
    """Create a theme from the request's CSS properties."""
    theme = await theme_models.create_theme(db, payload.stored_properties())
    return to_theme_response(theme)


async def list_themes(db: AsyncIOMotorDatabase) -> List[ThemeResponse]:
    """List all themes."""
    return [to_theme_response(theme) for theme in await theme_models.list_themes(db)]


async def get_theme(db: AsyncIOMotorDatabase, theme_id: str) -> ThemeResponse:
    """
    Get theme by ID.

    Raises:
        ValidationError: If theme_id is not an ObjectId
        ThemeNotFoundError: If theme not found
    """
    theme = await theme_models.find_theme_by_id(db, parse_object_id(theme_id, "theme id"))
    if not theme:
        raise ThemeNotFoundError()
    return to_theme_response(theme)


async def update_theme(
    db: AsyncIOMotorDatabase,
    theme_id: str,
    payload: ThemeUpdate
) -> ThemeResponse:
    """
    Update the properties present in the request.

    Raises:
        ValidationError: If theme_id is not an ObjectId
        ThemeNotFoundError: If theme not found
    """
    oid = parse_object_id(theme_id, "theme id")
    changes = payload.stored_properties(exclude_unset=True)

    theme = await theme_models.update_theme(db, oid, changes)
    if not theme:
        raise ThemeNotFoundError()

    logger.info(f"Theme updated: id={theme_id}, properties={sorted(changes)}")
    return to_theme_response(theme)


async def delete_theme(db: AsyncIOMotorDatabase, theme_id: str) -> None:
    """
    Delete a theme.

    Raises:
        ValidationError: If theme_id is not an ObjectId
        ThemeNotFoundError: If theme not found
    """
    deleted = await theme_models.delete_theme(db, parse_object_id(theme_id, "theme id"))
    if not deleted:
        raise ThemeNotFoundError()

    logger.info(f"Theme deleted: id={theme_id}")

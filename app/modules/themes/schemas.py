"""
Themes module schemas.

A theme is a flat record of CSS properties plus an optional map of
responsive overrides. JSON uses the CSS-in-JS spelling (backgroundColor,
zIndex, ...); stored keys are snake_case.
"""

from typing import Optional, Dict, Any
from pydantic import Field
from app.modules.auth.schemas import WalletCredentials
from app.shared.models import CamelModel


class ThemeProperties(CamelModel):
    """CSS properties of a theme. All optional here."""

    color: Optional[str] = None
    background_color: Optional[str] = None
    background_image: Optional[str] = None
    background_size: Optional[str] = None
    background_repeat: Optional[str] = None
    background_position: Optional[str] = None

    font_size: Optional[str] = None
    font_family: Optional[str] = None
    font_weight: Optional[str] = None
    font_style: Optional[str] = None
    line_height: Optional[str] = None
    letter_spacing: Optional[str] = None
    text_decoration: Optional[str] = None
    text_transform: Optional[str] = None

    margin: Optional[str] = None
    padding: Optional[str] = None

    border: Optional[str] = None
    border_width: Optional[str] = None
    border_color: Optional[str] = None
    border_style: Optional[str] = None
    border_radius: Optional[str] = None
    box_shadow: Optional[str] = None

    display: Optional[str] = None
    position: Optional[str] = None
    top: Optional[str] = None
    right: Optional[str] = None
    bottom: Optional[str] = None
    left: Optional[str] = None
    z_index: Optional[int] = None
    overflow: Optional[str] = None
    width: Optional[str] = None
    height: Optional[str] = None
    min_width: Optional[str] = None
    min_height: Optional[str] = None
    max_width: Optional[str] = None
    max_height: Optional[str] = None
    float_: Optional[str] = Field(None, alias="float")
    clear: Optional[str] = None

    flex: Optional[str] = None
    flex_direction: Optional[str] = None
    flex_wrap: Optional[str] = None
    justify_content: Optional[str] = None
    align_items: Optional[str] = None
    align_self: Optional[str] = None

    grid_template_columns: Optional[str] = None
    grid_template_rows: Optional[str] = None
    grid_area: Optional[str] = None
    grid_column: Optional[str] = None
    grid_row: Optional[str] = None

    opacity: Optional[float] = None
    cursor: Optional[str] = None
    transition: Optional[str] = None
    transform: Optional[str] = None
    overflow_x: Optional[str] = None
    overflow_y: Optional[str] = None
    visibility: Optional[str] = None
    white_space: Optional[str] = None
    word_wrap: Optional[str] = None
    box_sizing: Optional[str] = None

    responsive: Optional[Dict[str, str]] = Field(None, description="Breakpoint -> CSS text")

    def stored_properties(self, exclude_unset: bool = False) -> Dict[str, Any]:
        """
        Properties as stored: snake_case keys, None values dropped.

        Args:
            exclude_unset: Only include properties the client sent
        """
        data = self.model_dump(
            include=set(ThemeProperties.model_fields),
            exclude_none=True,
            exclude_unset=exclude_unset,
        )
        if "float_" in data:
            data["float"] = data.pop("float_")
        return data


class ThemeCreate(ThemeProperties, WalletCredentials):
    """Create a theme; color and fontSize are required."""
    color: str = Field(..., min_length=1)
    font_size: str = Field(..., min_length=1)

    model_config = {
        "json_schema_extra": {
            "example": {
                "walletAddress": "0x90F79bf6EB2c4f870365E785982E1f101E93b906",
                "signature": "0x5f3c...1b",
                "color": "#1a1a1a",
                "fontSize": "16px",
                "backgroundColor": "#ffffff",
                "zIndex": 10,
                "responsive": {"md": "font-size: 18px"}
            }
        }
    }


class ThemeUpdate(ThemeProperties, WalletCredentials):
    """Partial theme update; omitted properties are left unchanged."""
    color: Optional[str] = Field(None, min_length=1)
    font_size: Optional[str] = Field(None, min_length=1)


class ThemeResponse(ThemeProperties):
    """Theme response model."""
    id: str = Field(..., description="Theme ID")

    def to_response(self) -> Dict[str, Any]:
        """camelCase JSON without unset properties."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

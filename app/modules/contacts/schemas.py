"""
Contacts module schemas.

Pydantic models for request/response validation.
"""

from datetime import datetime
from typing import Optional, List
from pydantic import EmailStr, Field, field_validator
from app.modules.auth.schemas import WalletCredentials
from app.shared.models import CamelModel
from app.utils.validators import validate_email_lowercase, validate_non_empty_string


class ContactCreate(WalletCredentials):
    """
    Request to add a contact to the caller's address book.

    The contact is owned by the authenticated walletAddress.
    """
    name: str = Field(..., min_length=1, description="Contact name")
    phone: str = Field(..., min_length=1, description="Phone number")
    email: EmailStr = Field(..., description="Email address")
    address: Optional[str] = Field(None, description="Postal address")

    @field_validator("name", "phone")
    @classmethod
    def validate_strings(cls, v: str) -> str:
        return validate_non_empty_string(v)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return validate_email_lowercase(v)

    model_config = {
        "json_schema_extra": {
            "example": {
                "walletAddress": "0x90F79bf6EB2c4f870365E785982E1f101E93b906",
                "signature": "0x5f3c...1b",
                "name": "Meera",
                "phone": "+91 98765 43210",
                "email": "meera@example.com",
                "address": "12 Lake Road, Pune"
            }
        }
    }


class ContactUpdate(CamelModel):
    """Partial contact update; omitted fields are left unchanged."""
    name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    is_favorite: Optional[bool] = None

    @field_validator("name", "phone")
    @classmethod
    def validate_strings(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            return validate_non_empty_string(v)
        return v

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            return validate_email_lowercase(v)
        return v


class ContactResponse(CamelModel):
    """Contact response model."""
    id: str = Field(..., description="Contact ID")
    wallet_address: str = Field(..., description="Owner wallet address (lowercase)")
    name: str
    phone: str
    email: str
    address: Optional[str] = None
    is_favorite: bool = False
    created_at: Optional[datetime] = None


class ContactListResponse(CamelModel):
    """List of contacts."""
    contacts: List[ContactResponse] = Field(default_factory=list)

"""
Admins module schemas.

Pydantic models for request/response validation. Every request body of an
admin operation carries the acting admin's credentials.
"""

from datetime import datetime
from typing import Optional
from pydantic import EmailStr, Field, field_validator
from app.modules.auth.schemas import WalletCredentials
from app.shared.models import CamelModel
from app.utils.validators import (
    validate_email_lowercase,
    validate_non_empty_string,
    validate_wallet_address,
)


class AdminCreate(WalletCredentials):
    """
    Request to create another admin.

    walletAddress/signature authenticate the acting admin;
    adminWalletAddress is the wallet of the admin being created.
    """
    admin_wallet_address: str = Field(..., description="Wallet address of the new admin")
    name: str = Field(..., min_length=1, description="Name")
    email: EmailStr = Field(..., description="Email address")
    upi_id: str = Field(..., min_length=1, description="UPI payment id")

    @field_validator("admin_wallet_address")
    @classmethod
    def check_admin_wallet_address(cls, v: str) -> str:
        return validate_wallet_address(v)

    @field_validator("name", "upi_id")
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
                "adminWalletAddress": "0x15d34AAf54267DB7D7c367839AAf71A00a2C6A65",
                "name": "Ravi",
                "email": "ravi@example.com",
                "upiId": "ravi@okbank"
            }
        }
    }


class AdminUpdate(WalletCredentials):
    """Update of the acting admin's own name and email."""
    name: Optional[str] = Field(None, min_length=1, description="Name")
    email: Optional[EmailStr] = Field(None, description="Email address")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            return validate_non_empty_string(v, "Name")
        return v

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            return validate_email_lowercase(v)
        return v


class KycStatusUpdate(WalletCredentials):
    """Set a user's KYC status."""
    kyc_status: bool = Field(..., description="New KYC status")


class AdminResponse(CamelModel):
    """Admin response model."""
    id: str = Field(..., description="Admin ID")
    wallet_address: str = Field(..., description="Wallet address (lowercase)")
    name: str = Field(..., description="Name")
    email: str = Field(..., description="Email address")
    upi_id: str = Field(..., description="UPI payment id")
    profile_pic: Optional[str] = Field(None, description="Profile picture path")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

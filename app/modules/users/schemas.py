"""
Users module schemas.

Pydantic models for request/response validation.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, List
from pydantic import EmailStr, Field, field_validator
from app.modules.auth.schemas import WalletCredentials
from app.modules.transactions.schemas import TransactionResponse
from app.shared.models import CamelModel
from app.utils.validators import validate_email_lowercase, validate_non_empty_string


class DocumentType(str, Enum):
    """Accepted KYC document kinds."""
    PAN = "PAN"
    AADHAR = "AADHAR"
    DL = "DL"


class UserProfileFields(CamelModel):
    """Optional profile fields shared by registration and update."""
    name: Optional[str] = Field(None, min_length=1, description="Display name")
    email: Optional[EmailStr] = Field(None, description="Email address")
    upi_id: Optional[str] = Field(None, min_length=1, description="UPI payment id")
    mobile: Optional[str] = Field(None, min_length=1, description="Mobile number")

    @field_validator("name", "upi_id", "mobile")
    @classmethod
    def validate_strings(cls, v: Optional[str]) -> Optional[str]:
        """Reject whitespace-only values."""
        if v is not None:
            return validate_non_empty_string(v)
        return v

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            return validate_email_lowercase(v)
        return v


class UserRegister(UserProfileFields, WalletCredentials):
    """
    User registration request.

    The signature proves control of walletAddress; there is no user record
    yet, so only the signature check of the gate applies.
    """

    model_config = {
        "json_schema_extra": {
            "example": {
                "walletAddress": "0x90F79bf6EB2c4f870365E785982E1f101E93b906",
                "signature": "0x5f3c...1b",
                "name": "Asha",
                "email": "asha@example.com",
                "upiId": "asha@okbank",
                "mobile": "9876543210"
            }
        }
    }


class UserProfileUpdate(UserProfileFields, WalletCredentials):
    """
    Profile update request.

    Only name, email, upiId and mobile are writable; the identity key, KYC
    status, documents, balances and transactions are not.
    """

    def profile_changes(self) -> dict:
        """Stored-field changes carried by this request."""
        return self.model_dump(include={"name", "email", "upi_id", "mobile"}, exclude_none=True)


class BalancesResponse(CamelModel):
    """Token balances; placeholders, never fetched on-chain."""
    eth: str = "0"
    usdc_eth: str = "0"
    matic: str = "0"
    usdc_polygon: str = "0"


class DocumentResponse(CamelModel):
    """Stored KYC document reference. The IV is not exposed."""
    path: str = Field(..., description="Storage path of the encrypted file")
    type: DocumentType = Field(..., description="Document kind")
    extension: str = Field(..., description="Original file extension")


class UserResponse(CamelModel):
    """User response model."""
    id: str = Field(..., description="User ID")
    wallet_address: str = Field(..., description="Wallet address (lowercase)")
    name: Optional[str] = Field(None, description="Display name")
    email: Optional[str] = Field(None, description="Email address")
    upi_id: Optional[str] = Field(None, description="UPI payment id")
    mobile: Optional[str] = Field(None, description="Mobile number")
    profile_pic: Optional[str] = Field(None, description="Profile picture path")
    kyc_status: bool = Field(False, description="KYC approved by an admin")
    documents: List[DocumentResponse] = Field(default_factory=list)
    balances: BalancesResponse = Field(default_factory=BalancesResponse)
    transactions: List[TransactionResponse] = Field(default_factory=list)
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "507f1f77bcf86cd799439011",
                "walletAddress": "0x90f79bf6eb2c4f870365e785982e1f101e93b906",
                "name": "Asha",
                "email": "asha@example.com",
                "upiId": "asha@okbank",
                "mobile": "9876543210",
                "profilePic": "uploads/1718000000000.png",
                "kycStatus": False,
                "documents": [],
                "balances": {"eth": "0", "usdcEth": "0", "matic": "0", "usdcPolygon": "0"},
                "transactions": [],
                "createdAt": "2025-11-02T10:30:00Z",
                "updatedAt": "2025-11-02T10:30:00Z"
            }
        }
    }

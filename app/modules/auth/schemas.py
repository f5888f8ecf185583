"""
Auth module schemas.

Pydantic models for wallet credentials. Request schemas of privileged
operations extend WalletCredentials so the gate always receives credentials
the same way, whether they arrived in a JSON body, a form or a query string.
"""

from typing import Optional
from pydantic import Field, field_validator
from app.shared.models import CamelModel
from app.utils.validators import validate_optional_wallet_address


class WalletCredentials(CamelModel):
    """
    Wallet address plus signature over the challenge message.

    Both fields are optional here; absence is reported by the gate as
    missing credentials rather than as a schema error.
    """
    wallet_address: Optional[str] = Field(None, description="Signer wallet address (0x + 40 hex)")
    signature: Optional[str] = Field(None, description="Hex signature over the challenge message")

    @field_validator("wallet_address")
    @classmethod
    def check_wallet_address(cls, v: Optional[str]) -> Optional[str]:
        """Validate address format when present."""
        return validate_optional_wallet_address(v)

    model_config = {
        "json_schema_extra": {
            "example": {
                "walletAddress": "0x90F79bf6EB2c4f870365E785982E1f101E93b906",
                "signature": "0x5f3c...1b"
            }
        }
    }


class ChallengeResponse(CamelModel):
    """Challenge message clients must sign."""
    message: str = Field(..., description="Text to sign with personal_sign")

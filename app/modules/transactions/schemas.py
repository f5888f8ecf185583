"""
Transactions module schemas.

Pydantic models for transactions embedded in user records. Stored keys are
"from" and "to", which are Python keywords, so the attributes carry a
trailing underscore and an explicit alias.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict
from pydantic import Field, field_validator
from app.shared.models import CamelModel
from app.utils.validators import validate_non_empty_string, validate_wallet_address


class TransactionStatus(str, Enum):
    """Transaction status. Any status may be changed to any other."""
    COMPLETED = "completed"
    PENDING = "pending"
    CANCELLED = "cancelled"


class TransactionCreate(CamelModel):
    """
    Schema for recording a transaction on a user.

    Attributes:
        wallet_address: Owner of the transaction history
        type: Free-form direction, usually "sent" or "received"
        amount: Transferred amount
        from_: Sender address or label
        to: Recipient address or label
        note: Optional note
        status: Initial status (defaults to pending)
    """
    wallet_address: str = Field(..., description="Wallet address owning the transaction")
    type: str = Field(..., description="Transaction type, e.g. sent or received")
    amount: float = Field(..., description="Transferred amount")
    from_: str = Field(..., alias="from", description="Sender")
    to: str = Field(..., description="Recipient")
    note: Optional[str] = Field(None, description="Optional note")
    status: TransactionStatus = Field(TransactionStatus.PENDING.value, description="Transaction status")

    @field_validator("wallet_address")
    @classmethod
    def check_wallet_address(cls, v: str) -> str:
        return validate_wallet_address(v)

    @field_validator("type", "from_", "to")
    @classmethod
    def check_not_empty(cls, v: str) -> str:
        return validate_non_empty_string(v)

    model_config = {
        "json_schema_extra": {
            "example": {
                "walletAddress": "0x90F79bf6EB2c4f870365E785982E1f101E93b906",
                "type": "sent",
                "amount": 12.5,
                "from": "0x90F79bf6EB2c4f870365E785982E1f101E93b906",
                "to": "0x15d34AAf54267DB7D7c367839AAf71A00a2C6A65",
                "note": "Dinner",
                "status": "pending"
            }
        }
    }


class TransactionStatusUpdate(CamelModel):
    """Schema for changing the status of one transaction."""
    transaction_id: str = Field(..., description="Embedded transaction id")
    status: TransactionStatus = Field(..., description="New status")


class TransactionResponse(CamelModel):
    """Transaction as returned by the API."""
    id: str = Field(..., description="Transaction ID")
    type: str = Field(..., description="Transaction type")
    amount: float = Field(..., description="Transferred amount")
    from_: str = Field(..., alias="from", description="Sender")
    to: str = Field(..., description="Recipient")
    timestamp: Optional[datetime] = Field(None, description="Time recorded")
    note: Optional[str] = Field(None, description="Optional note")
    status: str = Field(..., description="Transaction status")


class TransactionListResponse(CamelModel):
    """List of transactions."""
    transactions: List[TransactionResponse] = Field(default_factory=list)


class TransactionCountResponse(CamelModel):
    """
    Transaction counts by status.

    "unknown" counts stored transactions whose status is none of the
    known values.
    """
    completed: int = 0
    pending: int = 0
    cancelled: int = 0
    unknown: int = 0

    @classmethod
    def from_transactions(cls, transactions: List[Dict]) -> "TransactionCountResponse":
        """Tally raw stored transactions."""
        counts = cls()
        for transaction in transactions:
            status = transaction.get("status")
            if status in (s.value for s in TransactionStatus):
                setattr(counts, status, getattr(counts, status) + 1)
            else:
                counts.unknown += 1
        return counts

"""
Custom Pydantic validators for application models.

Provides reusable validators for common validation scenarios.
"""

import re
from typing import Optional

# 0x followed by 40 hex digits; checksum casing is not enforced
WALLET_ADDRESS_REGEX = r"^0x[0-9a-fA-F]{40}$"
WALLET_ADDRESS_PATTERN = re.compile(WALLET_ADDRESS_REGEX)


def is_wallet_address(value: str) -> bool:
    """Check whether value looks like an Ethereum address."""
    return bool(WALLET_ADDRESS_PATTERN.match(value))


def validate_wallet_address(value: str) -> str:
    """
    Validate Ethereum wallet address format.

    Args:
        value: Address to validate

    Returns:
        str: The address, unchanged

    Raises:
        ValueError: If the address is not 0x + 40 hex characters

    Example:
        >>> validate_wallet_address("0x90F79bf6EB2c4f870365E785982E1f101E93b906")
        "0x90F79bf6EB2c4f870365E785982E1f101E93b906"
        >>> validate_wallet_address("0x123")
        ValueError: Valid wallet address is required.
    """
    if not is_wallet_address(value):
        raise ValueError("Valid wallet address is required.")
    return value


def validate_optional_wallet_address(value: Optional[str]) -> Optional[str]:
    """
    Validate a wallet address only when one was supplied.

    Empty values pass through so the authentication gate can report them
    as missing credentials.
    """
    if value is None or value == "":
        return value
    return validate_wallet_address(value)


def validate_email_lowercase(email: str) -> str:
    """
    Convert email to lowercase for consistency.

    Example:
        >>> validate_email_lowercase("User@Example.COM")
        "user@example.com"
    """
    return email.lower().strip()


def validate_non_empty_string(value: str, field_name: str = "Field") -> str:
    """
    Validate that string is not empty or whitespace-only.

    Args:
        value: String to validate
        field_name: Name of the field (for error message)

    Returns:
        str: Validated string (stripped)

    Raises:
        ValueError: If string is empty or whitespace-only
    """
    stripped = value.strip()
    if not stripped:
        raise ValueError(f"{field_name} cannot be empty")
    return stripped

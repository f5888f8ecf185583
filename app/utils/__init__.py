"""Utility functions package."""

from app.utils.logger import setup_logging, get_logger, app_logger
from app.utils.validators import (
    is_wallet_address,
    validate_wallet_address,
    validate_optional_wallet_address,
    validate_email_lowercase,
    validate_non_empty_string,
)

__all__ = [
    # Logger
    "setup_logging",
    "get_logger",
    "app_logger",
    # Validators
    "is_wallet_address",
    "validate_wallet_address",
    "validate_optional_wallet_address",
    "validate_email_lowercase",
    "validate_non_empty_string",
]

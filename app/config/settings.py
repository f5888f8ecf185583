"""
Application settings using Pydantic Settings.

Loads configuration from environment variables with validation.
"""

import re
from typing import Annotated, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode


DEFAULT_CHALLENGE_MESSAGE = "Please sign this message to verify your identity."


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are loaded from .env file or environment variables.
    Only MONGODB_URL is mandatory; everything else has a working default.
    """

    # App Configuration
    APP_NAME: str = Field(default="Guda Wallet Backend")
    APP_VERSION: str = Field(default="1.0.0")
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=True)

    # Server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3000)

    # Database
    MONGODB_URL: str = Field(..., description="MongoDB connection string")
    MONGODB_DB_NAME: str = Field(default="guda", description="MongoDB database name")

    # Wallet authentication
    AUTH_CHALLENGE_MESSAGE: str = Field(
        default=DEFAULT_CHALLENGE_MESSAGE,
        description="Fixed message every wallet signs to prove key ownership"
    )

    # Document encryption (AES-256, hex encoded)
    DOCUMENT_ENCRYPTION_KEY: Optional[str] = Field(
        default=None,
        description="64 hex characters; required for KYC document upload/download"
    )

    # File Uploads
    UPLOAD_DIR: str = Field(default="uploads")
    MAX_UPLOAD_SIZE_MB: int = Field(default=5)
    ALLOWED_IMAGE_TYPES: Annotated[List[str], NoDecode] = Field(
        default=["image/jpeg", "image/png", "image/gif", "image/webp"]
    )
    ALLOWED_DOCUMENT_EXTENSIONS: Annotated[List[str], NoDecode] = Field(default=[".pdf", ".png", ".jpg", ".jpeg"])

    # Transactions
    RECENT_TRANSACTIONS_LIMIT: int = Field(default=10)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE_PATH: str = Field(default="logs/app.log")

    # CORS
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(default=["*"])

    @field_validator("CORS_ORIGINS", "ALLOWED_IMAGE_TYPES", mode="before")
    @classmethod
    def parse_comma_separated(cls, v) -> List[str]:
        """Parse a list setting from comma-separated string or list."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        elif isinstance(v, list):
            return v
        return []

    @field_validator("ALLOWED_DOCUMENT_EXTENSIONS", mode="before")
    @classmethod
    def parse_document_extensions(cls, v) -> List[str]:
        """Parse extensions and make sure each one starts with a dot."""
        if isinstance(v, str):
            v = [item.strip() for item in v.split(",") if item.strip()]
        elif not isinstance(v, list):
            return []
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in v]

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port is in the TCP range."""
        if not 0 < v < 65536:
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @field_validator("MAX_UPLOAD_SIZE_MB", "RECENT_TRANSACTIONS_LIMIT")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate size and limit settings are positive."""
        if v <= 0:
            raise ValueError("Value must be positive")
        return v

    @field_validator("DOCUMENT_ENCRYPTION_KEY")
    @classmethod
    def validate_encryption_key(cls, v: Optional[str]) -> Optional[str]:
        """Validate the document key is 32 bytes of hex."""
        if v is None or v == "":
            return None
        if not re.fullmatch(r"[0-9a-fA-F]{64}", v):
            raise ValueError("DOCUMENT_ENCRYPTION_KEY must be 64 hexadecimal characters")
        return v.lower()

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }


def get_settings() -> Optional[Settings]:
    """Get settings instance (lazy loading)."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


# Try to initialize settings on import
try:
    settings: Optional[Settings] = Settings()
except Exception as e:
    # Missing MONGODB_URL (or a bad value) leaves settings unset;
    # connect_to_mongodb() refuses to start in that case.
    print(f"Warning: Could not load settings: {str(e)}")
    print("Please create .env file with required configuration")
    settings = None

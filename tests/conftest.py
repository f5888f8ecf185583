"""
Pytest configuration and shared fixtures.

Provides fixtures for an in-memory database, the HTTP client, deterministic
wallets and seeded admin/user records.
"""

import os
import tempfile
from pathlib import Path

# Settings are read on import, so the environment must be ready first
os.environ.setdefault("MONGODB_URL", "mongodb://localhost:27017")
os.environ["MONGODB_DB_NAME"] = "guda_test"
os.environ["DOCUMENT_ENCRYPTION_KEY"] = "ab" * 32
os.environ["LOG_FILE_PATH"] = str(Path(tempfile.gettempdir()) / "guda-tests" / "app.log")
os.environ.pop("AUTH_CHALLENGE_MESSAGE", None)

import pytest
from typing import AsyncGenerator, Optional
from eth_account import Account
from eth_account.messages import encode_defunct
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.main import app
from app.config.database import get_database
from app.config.settings import settings
from app.core.security import get_challenge_message
from app.modules.admins import models as admin_models
from app.modules.users import models as user_models

if settings is None:
    pytest.exit("Failed to load settings for tests.")

ADMIN_KEY = "0x" + "11" * 32
USER_KEY = "0x" + "22" * 32
STRANGER_KEY = "0x" + "33" * 32


def sign_challenge(account, message: Optional[str] = None) -> str:
    """Sign the challenge (or another message) the way a wallet's personal_sign does."""
    signable = encode_defunct(text=message if message is not None else get_challenge_message())
    signed = Account.sign_message(signable, private_key=account.key)
    return "0x" + bytes(signed.signature).hex()


def credentials_for(account) -> dict:
    """walletAddress/signature pair for an account."""
    return {"walletAddress": account.address, "signature": sign_challenge(account)}


@pytest.fixture(scope="function")
async def test_db() -> AsyncGenerator[AsyncIOMotorDatabase, None]:
    """
    Fresh in-memory database per test.

    Yields:
        Motor-compatible database backed by mongomock
    """
    client = AsyncMongoMockClient()
    yield client[settings.MONGODB_DB_NAME]


@pytest.fixture(autouse=True)
def upload_dir(tmp_path, monkeypatch) -> Path:
    """Keep uploaded files inside the test's temporary directory."""
    target = tmp_path / "uploads"
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(target))
    return target


@pytest.fixture(scope="function")
async def test_client(test_db: AsyncIOMotorDatabase) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client talking to the app with the in-memory database injected.

    Yields:
        AsyncClient: HTTP client for testing API endpoints
    """
    app.dependency_overrides[get_database] = lambda: test_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_account():
    return Account.from_key(ADMIN_KEY)


@pytest.fixture
def user_account():
    return Account.from_key(USER_KEY)


@pytest.fixture
def stranger_account():
    """A wallet that is neither admin nor user."""
    return Account.from_key(STRANGER_KEY)


@pytest.fixture
def admin_credentials(admin_account) -> dict:
    return credentials_for(admin_account)


@pytest.fixture
def user_credentials(user_account) -> dict:
    return credentials_for(user_account)


@pytest.fixture
async def seeded_admin(test_db: AsyncIOMotorDatabase, admin_account) -> dict:
    """
    Admin record for admin_account.

    Returns:
        dict: Stored admin document
    """
    return await admin_models.create_admin(test_db, {
        "wallet_address": admin_account.address.lower(),
        "name": "Root Admin",
        "email": "root@example.com",
        "upi_id": "root@okbank",
    })


@pytest.fixture
async def seeded_user(test_db: AsyncIOMotorDatabase, user_account) -> dict:
    """
    User record for user_account.

    Returns:
        dict: Stored user document
    """
    return await user_models.create_user(test_db, {
        "wallet_address": user_account.address.lower(),
        "name": "Asha",
        "email": "asha@example.com",
        "upi_id": "asha@okbank",
        "mobile": "9876543210",
    })


@pytest.fixture
def sign():
    """The signing helper, for tests that need custom signatures."""
    return sign_challenge

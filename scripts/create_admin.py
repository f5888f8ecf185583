#!/usr/bin/env python3
"""
Create the first admin directly in the database.

Creating an admin over HTTP requires the signature of an existing admin,
so a fresh deployment needs one seeded here.

Usage:
    python scripts/create_admin.py --wallet 0xABC... --name "Ravi" \
        --email ravi@example.com --upi-id ravi@okbank
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add backend directory to Python path for imports
backend_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(backend_dir))

from motor.motor_asyncio import AsyncIOMotorClient
from app.config.database import ensure_indexes
from app.config.settings import settings
from app.core.security import normalize_address
from app.modules.admins import models as admin_models
from app.shared.exceptions import AppException
from app.utils.validators import is_wallet_address


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed an admin record")
    parser.add_argument("--wallet", required=True, help="Admin wallet address (0x + 40 hex)")
    parser.add_argument("--name", required=True, help="Admin name")
    parser.add_argument("--email", required=True, help="Admin email")
    parser.add_argument("--upi-id", required=True, help="Admin UPI id")
    return parser.parse_args(argv)


async def create_admin(args: argparse.Namespace) -> bool:
    """Insert the admin unless the wallet already belongs to one."""
    if settings is None:
        print("❌ Settings not loaded. Check your .env file.")
        return False

    if not is_wallet_address(args.wallet):
        print(f"❌ Not a wallet address: {args.wallet}")
        return False

    print("Connecting to MongoDB...")
    print(f"Database: {settings.MONGODB_DB_NAME}")

    client = AsyncIOMotorClient(settings.MONGODB_URL, serverSelectionTimeoutMS=5000)

    try:
        await client.admin.command("ping")
        print("✅ MongoDB connection successful!")

        db = client[settings.MONGODB_DB_NAME]
        await ensure_indexes(db)

        existing = await admin_models.find_admin_by_wallet(db, args.wallet)
        if existing:
            print("⚠️  An admin with this wallet already exists.")
            print(f"   ID: {existing['_id']}")
            return True

        admin = await admin_models.create_admin(db, {
            "wallet_address": normalize_address(args.wallet),
            "name": args.name.strip(),
            "email": args.email.strip().lower(),
            "upi_id": args.upi_id.strip(),
        })
        print("✅ Admin created!")
        print(f"   ID: {admin['_id']}")
        print(f"   Wallet: {admin['wallet_address']}")
        return True

    except AppException as e:
        print(f"❌ Could not create admin: {e.message}")
        return False

    finally:
        client.close()


if __name__ == "__main__":
    success = asyncio.run(create_admin(parse_args()))
    sys.exit(0 if success else 1)

"""
Test suite for admins module.

Tests admin management and admin operations on users.
"""

import pytest
from httpx import AsyncClient
from motor.motor_asyncio import AsyncIOMotorDatabase

NEW_ADMIN_WALLET = "0x15d34AAf54267DB7D7c367839AAf71A00a2C6A65"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class TestAdminManagement:
    """Test create/list/get/update/delete of admins."""

    @pytest.mark.asyncio
    async def test_create_admin_returns_201(
        self,
        test_client: AsyncClient,
        test_db: AsyncIOMotorDatabase,
        seeded_admin: dict,
        admin_credentials: dict
    ):
        payload = {
            **admin_credentials,
            "adminWalletAddress": NEW_ADMIN_WALLET,
            "name": "Ravi",
            "email": "Ravi@Example.com",
            "upiId": "ravi@okbank"
        }
        response = await test_client.post("/api/admin", json=payload)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["walletAddress"] == NEW_ADMIN_WALLET.lower()
        assert data["email"] == "ravi@example.com"
        assert await test_db["admins"].count_documents({}) == 2

    @pytest.mark.asyncio
    async def test_create_admin_duplicate_wallet_returns_400(
        self,
        test_client: AsyncClient,
        seeded_admin: dict,
        admin_credentials: dict,
        admin_account
    ):
        payload = {
            **admin_credentials,
            "adminWalletAddress": admin_account.address,
            "name": "Again",
            "email": "again@example.com",
            "upiId": "again@okbank"
        }
        response = await test_client.post("/api/admin", json=payload)

        assert response.status_code == 400
        assert response.json()["message"] == "Admin already exists!"

    @pytest.mark.asyncio
    async def test_create_admin_duplicate_email_returns_400(
        self,
        test_client: AsyncClient,
        seeded_admin: dict,
        admin_credentials: dict
    ):
        payload = {
            **admin_credentials,
            "adminWalletAddress": NEW_ADMIN_WALLET,
            "name": "Ravi",
            "email": "root@example.com",
            "upiId": "ravi@okbank"
        }
        response = await test_client.post("/api/admin", json=payload)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "DUPLICATE_RESOURCE"

    @pytest.mark.asyncio
    async def test_create_admin_requires_admin_signature(
        self,
        test_client: AsyncClient,
        test_db: AsyncIOMotorDatabase,
        seeded_user: dict,
        user_credentials: dict
    ):
        """A registered user cannot create admins."""
        payload = {
            **user_credentials,
            "adminWalletAddress": NEW_ADMIN_WALLET,
            "name": "Ravi",
            "email": "ravi@example.com",
            "upiId": "ravi@okbank"
        }
        response = await test_client.post("/api/admin", json=payload)

        assert response.status_code == 404
        assert await test_db["admins"].count_documents({}) == 0

    @pytest.mark.asyncio
    async def test_create_admin_with_invalid_email_returns_400(
        self,
        test_client: AsyncClient,
        seeded_admin: dict,
        admin_credentials: dict
    ):
        payload = {
            **admin_credentials,
            "adminWalletAddress": NEW_ADMIN_WALLET,
            "name": "Ravi",
            "email": "not-an-email",
            "upiId": "ravi@okbank"
        }
        response = await test_client.post("/api/admin", json=payload)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_FAILED"

    @pytest.mark.asyncio
    async def test_list_admins_with_query_credentials(
        self,
        test_client: AsyncClient,
        seeded_admin: dict,
        admin_credentials: dict
    ):
        response = await test_client.get("/api/admin", params=admin_credentials)

        assert response.status_code == 200
        admins = response.json()["data"]
        assert len(admins) == 1
        assert admins[0]["walletAddress"] == seeded_admin["wallet_address"]

    @pytest.mark.asyncio
    async def test_list_admins_without_credentials_returns_400(self, test_client: AsyncClient):
        response = await test_client.get("/api/admin")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MISSING_CREDENTIALS"

    @pytest.mark.asyncio
    async def test_get_admin_by_wallet_returns_own_record(
        self,
        test_client: AsyncClient,
        seeded_admin: dict,
        admin_credentials: dict
    ):
        response = await test_client.get("/api/admin/by-wallet", params=admin_credentials)

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Root Admin"

    @pytest.mark.asyncio
    async def test_update_admin_changes_name_and_email(
        self,
        test_client: AsyncClient,
        seeded_admin: dict,
        admin_credentials: dict
    ):
        response = await test_client.put(
            "/api/admin",
            json={**admin_credentials, "name": "Renamed", "email": "renamed@example.com"}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Renamed"
        assert data["email"] == "renamed@example.com"
        assert data["upiId"] == "root@okbank"

    @pytest.mark.asyncio
    async def test_update_admin_with_bad_signature_changes_nothing(
        self,
        test_client: AsyncClient,
        test_db: AsyncIOMotorDatabase,
        seeded_admin: dict,
        admin_account,
        stranger_account,
        sign
    ):
        response = await test_client.put(
            "/api/admin",
            json={"walletAddress": admin_account.address, "signature": sign(stranger_account), "name": "Hacked"}
        )

        assert response.status_code == 403
        stored = await test_db["admins"].find_one({"_id": seeded_admin["_id"]})
        assert stored["name"] == "Root Admin"

    @pytest.mark.asyncio
    async def test_delete_admin_removes_own_record(
        self,
        test_client: AsyncClient,
        test_db: AsyncIOMotorDatabase,
        seeded_admin: dict,
        admin_credentials: dict
    ):
        response = await test_client.request("DELETE", "/api/admin", json=admin_credentials)

        assert response.status_code == 200
        assert response.json()["message"] == "Admin deleted successfully!"
        assert await test_db["admins"].count_documents({}) == 0

    @pytest.mark.asyncio
    async def test_upload_profile_pic_stores_file(
        self,
        test_client: AsyncClient,
        seeded_admin: dict,
        admin_credentials: dict,
        upload_dir
    ):
        response = await test_client.post(
            "/api/admin/profile-pic",
            data=admin_credentials,
            files={"profilePic": ("me.png", PNG_BYTES, "image/png")}
        )

        assert response.status_code == 200
        path = response.json()["data"]["profilePic"]
        assert path.endswith(".png")
        assert len(list(upload_dir.iterdir())) == 1

    @pytest.mark.asyncio
    async def test_upload_profile_pic_rejects_non_image(
        self,
        test_client: AsyncClient,
        seeded_admin: dict,
        admin_credentials: dict
    ):
        response = await test_client.post(
            "/api/admin/profile-pic",
            data=admin_credentials,
            files={"profilePic": ("notes.txt", b"hello", "text/plain")}
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_FILE_TYPE"

    @pytest.mark.asyncio
    async def test_upload_profile_pic_with_failed_auth_writes_no_file(
        self,
        test_client: AsyncClient,
        seeded_admin: dict,
        admin_account,
        stranger_account,
        sign,
        upload_dir
    ):
        response = await test_client.post(
            "/api/admin/profile-pic",
            data={"walletAddress": admin_account.address, "signature": sign(stranger_account)},
            files={"profilePic": ("me.png", PNG_BYTES, "image/png")}
        )

        assert response.status_code == 403
        assert not upload_dir.exists() or not any(upload_dir.iterdir())


class TestAdminUserOperations:
    """Test admin operations on users."""

    @pytest.mark.asyncio
    async def test_set_kyc_status(
        self,
        test_client: AsyncClient,
        seeded_admin: dict,
        seeded_user: dict,
        admin_credentials: dict,
        user_account
    ):
        response = await test_client.put(
            f"/api/admin/user/kyc/{user_account.address}",
            json={**admin_credentials, "kycStatus": True}
        )

        assert response.status_code == 200
        assert response.json()["data"]["kycStatus"] is True

    @pytest.mark.asyncio
    async def test_set_kyc_status_on_unknown_user_returns_404_and_creates_nothing(
        self,
        test_client: AsyncClient,
        test_db: AsyncIOMotorDatabase,
        seeded_admin: dict,
        admin_credentials: dict
    ):
        response = await test_client.put(
            f"/api/admin/user/kyc/{NEW_ADMIN_WALLET}",
            json={**admin_credentials, "kycStatus": True}
        )

        assert response.status_code == 404
        assert response.json()["message"] == "User not found!"
        assert await test_db["users"].count_documents({}) == 0

    @pytest.mark.asyncio
    async def test_set_kyc_status_requires_admin(
        self,
        test_client: AsyncClient,
        test_db: AsyncIOMotorDatabase,
        seeded_user: dict,
        user_credentials: dict,
        user_account
    ):
        """A user cannot approve their own KYC."""
        response = await test_client.put(
            f"/api/admin/user/kyc/{user_account.address}",
            json={**user_credentials, "kycStatus": True}
        )

        assert response.status_code == 404
        stored = await test_db["users"].find_one({"_id": seeded_user["_id"]})
        assert stored["kyc_status"] is False

    @pytest.mark.asyncio
    async def test_list_users(
        self,
        test_client: AsyncClient,
        seeded_admin: dict,
        seeded_user: dict,
        admin_credentials: dict
    ):
        response = await test_client.get("/api/admin/users", params=admin_credentials)

        assert response.status_code == 200
        users = response.json()["data"]
        assert [user["walletAddress"] for user in users] == [seeded_user["wallet_address"]]

    @pytest.mark.asyncio
    async def test_delete_user(
        self,
        test_client: AsyncClient,
        test_db: AsyncIOMotorDatabase,
        seeded_admin: dict,
        seeded_user: dict,
        admin_credentials: dict,
        user_account
    ):
        response = await test_client.request(
            "DELETE",
            "/api/admin/user",
            params={"userWalletAddress": user_account.address},
            json=admin_credentials
        )

        assert response.status_code == 200
        assert response.json()["message"] == "User deleted successfully!"
        assert await test_db["users"].count_documents({}) == 0

    @pytest.mark.asyncio
    async def test_delete_unknown_user_returns_404(
        self,
        test_client: AsyncClient,
        seeded_admin: dict,
        admin_credentials: dict
    ):
        response = await test_client.request(
            "DELETE",
            "/api/admin/user",
            params={"userWalletAddress": NEW_ADMIN_WALLET},
            json=admin_credentials
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_transaction_counts_across_users(
        self,
        test_client: AsyncClient,
        test_db: AsyncIOMotorDatabase,
        seeded_admin: dict,
        seeded_user: dict,
        admin_credentials: dict
    ):
        await test_db["users"].update_one(
            {"_id": seeded_user["_id"]},
            {"$set": {"transactions": [
                {"type": "sent", "amount": 1.0, "from": "a", "to": "b", "status": "completed"},
                {"type": "sent", "amount": 2.0, "from": "a", "to": "b", "status": "pending"},
                {"type": "received", "amount": 3.0, "from": "b", "to": "a", "status": "pending"},
                {"type": "sent", "amount": 4.0, "from": "a", "to": "b", "status": "refunded"},
            ]}}
        )

        response = await test_client.get("/api/admin/transactions/count", params=admin_credentials)

        assert response.status_code == 200
        assert response.json()["data"] == {"completed": 1, "pending": 2, "cancelled": 0, "unknown": 1}

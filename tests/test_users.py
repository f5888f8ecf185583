"""
Test suite for users module.

Tests registration, profile updates, profile pictures and encrypted KYC
documents.
"""

from pathlib import Path

import pytest
from httpx import AsyncClient
from motor.motor_asyncio import AsyncIOMotorDatabase

PDF_BYTES = b"%PDF-1.4\n% test document\n" + b"x" * 100
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class TestUserRegistration:
    """Test POST /api/user."""

    @pytest.mark.asyncio
    async def test_register_with_valid_signature(
        self,
        test_client: AsyncClient,
        test_db: AsyncIOMotorDatabase,
        user_credentials: dict,
        user_account
    ):
        response = await test_client.post(
            "/api/user",
            json={**user_credentials, "name": "Asha", "email": "Asha@Example.com", "upiId": "asha@okbank"}
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["walletAddress"] == user_account.address.lower()
        assert data["email"] == "asha@example.com"
        assert data["kycStatus"] is False
        assert data["documents"] == []
        assert data["transactions"] == []
        assert data["balances"] == {"eth": "0", "usdcEth": "0", "matic": "0", "usdcPolygon": "0"}
        assert await test_db["users"].count_documents({}) == 1

    @pytest.mark.asyncio
    async def test_register_with_only_credentials(
        self,
        test_client: AsyncClient,
        user_credentials: dict
    ):
        response = await test_client.post("/api/user", json=user_credentials)

        assert response.status_code == 201
        assert response.json()["data"]["name"] is None

    @pytest.mark.asyncio
    async def test_register_existing_wallet_returns_400(
        self,
        test_client: AsyncClient,
        seeded_user: dict,
        user_credentials: dict
    ):
        response = await test_client.post("/api/user", json=user_credentials)

        assert response.status_code == 400
        assert response.json()["message"] == "User already exists!"

    @pytest.mark.asyncio
    async def test_register_with_taken_email_returns_400(
        self,
        test_client: AsyncClient,
        seeded_user: dict,
        stranger_account,
        sign
    ):
        response = await test_client.post(
            "/api/user",
            json={
                "walletAddress": stranger_account.address,
                "signature": sign(stranger_account),
                "email": "asha@example.com"
            }
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "DUPLICATE_RESOURCE"

    @pytest.mark.asyncio
    async def test_register_for_someone_elses_wallet_returns_403(
        self,
        test_client: AsyncClient,
        test_db: AsyncIOMotorDatabase,
        user_account,
        stranger_account,
        sign
    ):
        response = await test_client.post(
            "/api/user",
            json={"walletAddress": user_account.address, "signature": sign(stranger_account)}
        )

        assert response.status_code == 403
        assert await test_db["users"].count_documents({}) == 0


class TestUserProfile:
    """Test profile reads and updates."""

    @pytest.mark.asyncio
    async def test_get_user_by_wallet_is_public(
        self,
        test_client: AsyncClient,
        seeded_user: dict,
        user_account
    ):
        response = await test_client.get(f"/api/user/wallet/{user_account.address}")

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Asha"

    @pytest.mark.asyncio
    async def test_get_unknown_user_returns_404(self, test_client: AsyncClient, stranger_account):
        response = await test_client.get(f"/api/user/wallet/{stranger_account.address}")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_get_user_with_malformed_address_returns_400(self, test_client: AsyncClient):
        response = await test_client.get("/api/user/wallet/0x1234")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_FAILED"

    @pytest.mark.asyncio
    async def test_update_profile(
        self,
        test_client: AsyncClient,
        seeded_user: dict,
        user_credentials: dict
    ):
        response = await test_client.put(
            "/api/user",
            json={**user_credentials, "name": "Asha K", "mobile": "9000000000"}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Asha K"
        assert data["mobile"] == "9000000000"
        assert data["email"] == "asha@example.com"

    @pytest.mark.asyncio
    async def test_update_profile_cannot_touch_kyc_or_balances(
        self,
        test_client: AsyncClient,
        test_db: AsyncIOMotorDatabase,
        seeded_user: dict,
        user_credentials: dict
    ):
        response = await test_client.put(
            "/api/user",
            json={
                **user_credentials,
                "kycStatus": True,
                "balances": {"eth": "1000"},
                "walletAddress": user_credentials["walletAddress"]
            }
        )

        assert response.status_code == 200
        stored = await test_db["users"].find_one({"_id": seeded_user["_id"]})
        assert stored["kyc_status"] is False
        assert stored["balances"]["eth"] == "0"

    @pytest.mark.asyncio
    async def test_update_profile_for_unregistered_wallet_returns_404(
        self,
        test_client: AsyncClient,
        user_credentials: dict
    ):
        response = await test_client.put("/api/user", json={**user_credentials, "name": "Ghost"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_upload_profile_pic(
        self,
        test_client: AsyncClient,
        seeded_user: dict,
        user_credentials: dict,
        upload_dir
    ):
        response = await test_client.post(
            "/api/user/profile-pic",
            data=user_credentials,
            files={"profilePic": ("me.png", PNG_BYTES, "image/png")}
        )

        assert response.status_code == 200
        path = Path(response.json()["data"]["profilePic"])
        assert path.parent == upload_dir
        assert path.read_bytes() == PNG_BYTES

    @pytest.mark.asyncio
    async def test_upload_profile_pic_without_file_returns_400(
        self,
        test_client: AsyncClient,
        seeded_user: dict,
        user_credentials: dict
    ):
        response = await test_client.post("/api/user/profile-pic", data=user_credentials)

        assert response.status_code == 400


class TestUserDocuments:
    """Test encrypted KYC document upload and download."""

    @pytest.mark.asyncio
    async def test_upload_document_is_encrypted_at_rest(
        self,
        test_client: AsyncClient,
        test_db: AsyncIOMotorDatabase,
        seeded_user: dict,
        user_credentials: dict
    ):
        response = await test_client.post(
            "/api/user/document",
            data={**user_credentials, "documentType": "PAN"},
            files={"document": ("pan.pdf", PDF_BYTES, "application/pdf")}
        )

        assert response.status_code == 200
        documents = response.json()["data"]["documents"]
        assert len(documents) == 1
        assert documents[0]["type"] == "PAN"
        assert documents[0]["extension"] == ".pdf"
        assert "iv" not in documents[0]

        stored = await test_db["users"].find_one({"_id": seeded_user["_id"]})
        document = stored["documents"][0]
        assert len(document["iv"]) == 32
        assert Path(document["path"]).read_bytes() != PDF_BYTES

    @pytest.mark.asyncio
    async def test_each_document_gets_its_own_iv(
        self,
        test_client: AsyncClient,
        test_db: AsyncIOMotorDatabase,
        seeded_user: dict,
        user_credentials: dict
    ):
        for document_type in ("PAN", "DL"):
            await test_client.post(
                "/api/user/document",
                data={**user_credentials, "documentType": document_type},
                files={"document": (f"{document_type}.pdf", PDF_BYTES, "application/pdf")}
            )

        stored = await test_db["users"].find_one({"_id": seeded_user["_id"]})
        ivs = {document["iv"] for document in stored["documents"]}
        assert len(ivs) == 2

    @pytest.mark.asyncio
    async def test_download_document_returns_original_bytes(
        self,
        test_client: AsyncClient,
        seeded_user: dict,
        user_credentials: dict
    ):
        await test_client.post(
            "/api/user/document",
            data={**user_credentials, "documentType": "AADHAR"},
            files={"document": ("aadhar.pdf", PDF_BYTES, "application/pdf")}
        )

        response = await test_client.get("/api/user/document/0", params=user_credentials)

        assert response.status_code == 200
        assert response.content == PDF_BYTES
        assert response.headers["content-type"] == "application/pdf"

    @pytest.mark.asyncio
    async def test_download_missing_document_returns_404(
        self,
        test_client: AsyncClient,
        seeded_user: dict,
        user_credentials: dict
    ):
        response = await test_client.get("/api/user/document/3", params=user_credentials)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "DOCUMENT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_download_document_with_file_gone_returns_404(
        self,
        test_client: AsyncClient,
        test_db: AsyncIOMotorDatabase,
        seeded_user: dict,
        user_credentials: dict
    ):
        await test_client.post(
            "/api/user/document",
            data={**user_credentials, "documentType": "PAN"},
            files={"document": ("pan.pdf", PDF_BYTES, "application/pdf")}
        )
        stored = await test_db["users"].find_one({"_id": seeded_user["_id"]})
        Path(stored["documents"][0]["path"]).unlink()

        response = await test_client.get("/api/user/document/0", params=user_credentials)

        assert response.status_code == 404
        assert response.json()["message"] == "Document file not found!"

    @pytest.mark.asyncio
    async def test_upload_document_with_unknown_type_returns_400(
        self,
        test_client: AsyncClient,
        seeded_user: dict,
        user_credentials: dict
    ):
        response = await test_client.post(
            "/api/user/document",
            data={**user_credentials, "documentType": "PASSPORT"},
            files={"document": ("passport.pdf", PDF_BYTES, "application/pdf")}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_upload_document_with_disallowed_extension_returns_400(
        self,
        test_client: AsyncClient,
        seeded_user: dict,
        user_credentials: dict,
        upload_dir
    ):
        response = await test_client.post(
            "/api/user/document",
            data={**user_credentials, "documentType": "PAN"},
            files={"document": ("pan.exe", b"MZ", "application/octet-stream")}
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_FILE_TYPE"
        assert not upload_dir.exists() or not any(upload_dir.iterdir())

    @pytest.mark.asyncio
    async def test_upload_document_without_encryption_key_returns_500(
        self,
        test_client: AsyncClient,
        seeded_user: dict,
        user_credentials: dict,
        monkeypatch
    ):
        from app.config.settings import settings

        monkeypatch.setattr(settings, "DOCUMENT_ENCRYPTION_KEY", None)

        response = await test_client.post(
            "/api/user/document",
            data={**user_credentials, "documentType": "PAN"},
            files={"document": ("pan.pdf", PDF_BYTES, "application/pdf")}
        )

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "CONFIGURATION_ERROR"

    @pytest.mark.asyncio
    async def test_other_user_cannot_download_document(
        self,
        test_client: AsyncClient,
        seeded_user: dict,
        user_credentials: dict,
        stranger_account,
        sign
    ):
        """The caller only ever sees their own documents."""
        await test_client.post(
            "/api/user/document",
            data={**user_credentials, "documentType": "PAN"},
            files={"document": ("pan.pdf", PDF_BYTES, "application/pdf")}
        )

        response = await test_client.get(
            "/api/user/document/0",
            params={"walletAddress": user_credentials["walletAddress"], "signature": sign(stranger_account)}
        )

        assert response.status_code == 403

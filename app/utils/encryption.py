"""
Encryption Utilities

Encryption/decryption for uploaded KYC documents.
Uses AES-256-CBC with PKCS7 padding from the cryptography library.

**SECURITY NOTES:**
- The key comes from DOCUMENT_ENCRYPTION_KEY (64 hex characters)
- NEVER hardcode the key; a lost key makes stored documents unreadable
- Every document gets its own random IV, stored next to the file path
"""

import os
from typing import Optional, Tuple
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from app.config.settings import get_settings
from app.utils.logger import get_logger

logger = get_logger(__name__)

KEY_SIZE_BYTES = 32
IV_SIZE_BYTES = 16


class EncryptionError(Exception):
    """Base exception for encryption errors"""
    pass


class EncryptionKeyError(EncryptionError):
    """Encryption key not configured or invalid"""
    pass


class DecryptionError(EncryptionError):
    """Failed to decrypt data (invalid key, IV or corrupted data)"""
    pass


class DocumentEncryption:
    """
    Document encryption/decryption service.

    Usage:
        encryption = DocumentEncryption()

        ciphertext, iv = encryption.encrypt(pdf_bytes)
        original = encryption.decrypt(ciphertext, iv)
    """

    def __init__(self, key_hex: Optional[str] = None):
        """
        Initialize encryption service.

        Args:
            key_hex: 64 hex characters (optional).
                     If not provided, loads DOCUMENT_ENCRYPTION_KEY from settings

        Raises:
            EncryptionKeyError: If key is missing or invalid
        """
        if key_hex is None:
            key_hex = get_settings().DOCUMENT_ENCRYPTION_KEY

        if not key_hex:
            raise EncryptionKeyError(
                "Document encryption key not configured. "
                "Set DOCUMENT_ENCRYPTION_KEY in environment variables. "
                "Generate key with: python -c \"import secrets; print(secrets.token_hex(32))\""
            )

        try:
            key = bytes.fromhex(key_hex)
        except ValueError as e:
            raise EncryptionKeyError(f"Invalid encryption key format: {str(e)}") from e

        if len(key) != KEY_SIZE_BYTES:
            raise EncryptionKeyError(
                f"Invalid encryption key length: expected {KEY_SIZE_BYTES} bytes, got {len(key)}"
            )

        self._key = key
        logger.debug("Document encryption service initialized")

    def encrypt(self, data: bytes) -> Tuple[bytes, str]:
        """
        Encrypt raw document bytes.

        Args:
            data: Plain document content

        Returns:
            tuple: (ciphertext, hex encoded IV)
        """
        iv = os.urandom(IV_SIZE_BYTES)

        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(data) + padder.finalize()

        encryptor = Cipher(algorithms.AES(self._key), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()

        return ciphertext, iv.hex()

    def decrypt(self, ciphertext: bytes, iv_hex: str) -> bytes:
        """
        Decrypt document bytes.

        Args:
            ciphertext: Encrypted content
            iv_hex: Hex encoded IV stored with the document

        Returns:
            bytes: Plain document content

        Raises:
            DecryptionError: If IV, key or data do not line up
        """
        try:
            iv = bytes.fromhex(iv_hex)
            decryptor = Cipher(algorithms.AES(self._key), modes.CBC(iv)).decryptor()
            padded = decryptor.update(ciphertext) + decryptor.finalize()

            unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
            return unpadder.update(padded) + unpadder.finalize()
        except ValueError as e:
            logger.error("Document decryption failed: wrong key or corrupted data")
            raise DecryptionError(
                "Failed to decrypt document. The encryption key may be incorrect, "
                "or the data may be corrupted."
            ) from e


def generate_encryption_key() -> str:
    """
    Generate a new document encryption key.

    Returns:
        str: 64 hex characters
    """
    return os.urandom(KEY_SIZE_BYTES).hex()

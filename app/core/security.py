"""
Wallet signature verification.

Recovers the Ethereum address that signed the fixed challenge message using
the personal-message (EIP-191) convention wallets apply when asked to sign
text. Pure functions, no I/O.
"""

from typing import Union
from eth_account import Account
from eth_account.messages import encode_defunct
from app.config.settings import DEFAULT_CHALLENGE_MESSAGE, settings
from app.shared.exceptions import MalformedSignatureError


def get_challenge_message() -> str:
    """
    Get the challenge message every principal signs.

    The message is the same for admins and users and does not change per
    request, so a captured signature stays valid until the setting changes.

    Returns:
        str: Challenge message
    """
    if settings and settings.AUTH_CHALLENGE_MESSAGE:
        return settings.AUTH_CHALLENGE_MESSAGE
    return DEFAULT_CHALLENGE_MESSAGE


def normalize_address(address: str) -> str:
    """Lowercase form of a hex wallet address."""
    return address.lower()


def addresses_match(first: str, second: str) -> bool:
    """Compare two hex addresses case-insensitively."""
    return normalize_address(first) == normalize_address(second)


def recover_signer(message: str, signature: Union[str, bytes]) -> str:
    """
    Recover the address that signed a text message.

    Args:
        message: Plain text that was signed
        signature: 65-byte signature, as raw bytes or hex (with or without 0x)

    Returns:
        str: Checksummed signer address

    Raises:
        MalformedSignatureError: If the signature cannot be decoded or recovered

    Example:
        >>> recover_signer("Please sign this message to verify your identity.", "0x5f3c...1b")
        "0x19E7E376E7C213B7E7e7e46cc70A5dD086DAff2A"
    """
    signable = encode_defunct(text=message)

    try:
        return Account.recover_message(signable, signature=signature)
    except Exception as e:
        # eth_account raises ValueError, TypeError, binascii.Error or
        # eth_keys validation errors depending on how the input is broken
        raise MalformedSignatureError(f"Signature is malformed: {e}") from e

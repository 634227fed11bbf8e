"""
ECDSA signature helpers for Scrooge Ledger.

Addresses are hex-encoded SECP256k1 public keys. An output's address is the
claim condition that a spending input's signature must satisfy.
"""

import hashlib
from typing import Tuple

from ecdsa import SigningKey, VerifyingKey, SECP256k1, BadSignatureError, MalformedPointError

CURVE = SECP256k1
HASH_FUNCTION = hashlib.sha256


def generate_keypair() -> Tuple[SigningKey, str]:
    """
    Generate a new signing key and its address.

    Returns:
        Tuple of (signing_key, address) where address is the hex public key
    """
    signing_key = SigningKey.generate(curve=CURVE)
    return signing_key, address_of(signing_key)


def address_of(signing_key: SigningKey) -> str:
    """Return the hex-encoded public key for a signing key."""
    return signing_key.get_verifying_key().to_string().hex()


def sign_message(signing_key: SigningKey, message: bytes) -> bytes:
    """
    Sign a message with RFC 6979 deterministic ECDSA.

    Args:
        signing_key: Private key of the output owner
        message: Exact bytes to sign

    Returns:
        bytes: Raw (r || s) signature
    """
    return signing_key.sign_deterministic(message, hashfunc=HASH_FUNCTION)


def verify_signature(address: str, message: bytes, signature: bytes) -> bool:
    """
    Verify an ECDSA signature against an address.

    Args:
        address: Hex-encoded public key
        message: Bytes that were signed
        signature: Raw (r || s) signature

    Returns:
        bool: True only if the signature is valid; malformed keys or
              signatures yield False
    """
    if not signature:
        return False
    try:
        verifying_key = VerifyingKey.from_string(bytes.fromhex(address), curve=CURVE)
        return verifying_key.verify(signature, message, hashfunc=HASH_FUNCTION)
    except (BadSignatureError, MalformedPointError, ValueError):
        return False

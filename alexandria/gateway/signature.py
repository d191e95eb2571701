"""HMAC-SHA512 webhook signatures."""

from __future__ import annotations

import hashlib
import hmac
from typing import Optional


def compute_signature(raw_body: bytes, secret_key: str) -> str:
    """Hex HMAC-SHA512 of the raw request body keyed with the gateway secret."""
    return hmac.new(secret_key.encode("utf-8"), raw_body, hashlib.sha512).hexdigest()


def verify_signature(raw_body: bytes, signature: Optional[str], secret_key: str) -> bool:
    """Check a webhook signature in constant time.

    Args:
        raw_body: Request body exactly as received
        signature: Value of the signature header, if any
        secret_key: Gateway secret key

    Returns:
        True when the signature matches
    """
    if not signature or not secret_key:
        return False
    return hmac.compare_digest(compute_signature(raw_body, secret_key), signature.strip().lower())

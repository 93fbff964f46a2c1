"""HMAC-SHA256 signatures for LINE webhook requests."""

from __future__ import annotations

import base64
import hashlib
import hmac
from typing import Optional


def compute_signature(raw_body: bytes, channel_secret: str) -> str:
    """Base64 HMAC-SHA256 of the raw request body keyed by the channel secret."""
    digest = hmac.new(
        channel_secret.encode("utf-8"), raw_body, hashlib.sha256
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_signature(
    raw_body: bytes, signature: Optional[str], channel_secret: str
) -> bool:
    """
    Check the X-Line-Signature header against the raw body.

    Must be given the bytes exactly as received: re-serialized JSON changes the
    digest. A missing signature never verifies.
    """
    if not signature:
        return False
    expected = compute_signature(raw_body, channel_secret)
    return hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8"))

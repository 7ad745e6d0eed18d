"""Bearer token hashing for the session registry.

SECURITY:
- Tokens are HMAC-SHA256 hashed with a secret pepper
- Raw tokens are NEVER stored in database
- Hashing is deterministic so a presented token can be looked up directly
"""

import base64
import hashlib
import hmac


def hash_token(raw_token: str, pepper: str) -> str:
    """Hash token using HMAC-SHA256 with pepper.

    Args:
        raw_token: Full bearer token string
        pepper: Server-side secret key

    Returns:
        Base64url-encoded HMAC-SHA256 hash (no padding)

    Raises:
        ValueError: If pepper is empty
    """
    if not pepper:
        raise ValueError("Token pepper is required for token hashing")

    digest = hmac.new(
        key=pepper.encode("utf-8"),
        msg=raw_token.encode("utf-8"),
        digestmod=hashlib.sha256,
    ).digest()

    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")

"""Signed bearer tokens (JWT, HS256).

Tokens are self-contained: verification checks signature and expiry only and
never touches the database. The signing secret comes from ``Settings`` and is
fixed for the life of the process.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt

from notes_api.errors import AuthError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
DEFAULT_TTL_DAYS = 7

_REQUIRED_CLAIMS = ["sub", "iat", "exp"]


@dataclass(frozen=True)
class TokenClaims:
    """Identity claims carried inside a verified token."""

    user_id: str
    tenant_id: str
    role: str
    email: str
    issued_at: datetime
    expires_at: datetime

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "TokenClaims":
        return cls(
            user_id=str(payload["sub"]),
            tenant_id=str(payload["tenant_id"]),
            role=str(payload["role"]),
            email=str(payload["email"]),
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )


class TokenService:
    """Issues and verifies identity tokens."""

    def __init__(self, secret: str, ttl_days: int = DEFAULT_TTL_DAYS):
        if not secret:
            raise ValueError("TokenService requires a non-empty signing secret")
        self._secret = secret
        self.ttl = timedelta(days=ttl_days)

    def issue(
        self,
        *,
        user_id: str,
        tenant_id: str,
        role: str,
        email: str,
        now: Optional[datetime] = None,
    ) -> str:
        """Sign a token valid for ``ttl`` from ``now``.

        Args:
            now: Issue time override (defaults to current UTC time)
        """
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "tenant_id": tenant_id,
            "role": role,
            "email": email,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.ttl).timestamp()),
            # Unique per token so two logins in the same second hash differently
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def expires_at(self, now: Optional[datetime] = None) -> datetime:
        return (now or datetime.now(timezone.utc)) + self.ttl

    def verify(self, token: str) -> TokenClaims:
        """Verify signature and expiry.

        Raises:
            AuthError: "Invalid or expired token" for any bad, malformed,
                incomplete or expired token
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": _REQUIRED_CLAIMS},
            )
            return TokenClaims.from_payload(payload)
        except jwt.ExpiredSignatureError:
            logger.info("Token rejected", extra={"event": "token.verify.failed", "reason": "expired"})
            raise AuthError("Invalid or expired token")
        except (jwt.PyJWTError, KeyError, TypeError, ValueError) as e:
            logger.info(
                "Token rejected",
                extra={"event": "token.verify.failed", "reason": type(e).__name__},
            )
            raise AuthError("Invalid or expired token")

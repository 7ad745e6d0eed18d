"""Authentication service - login and logout entry points.

FLOW (login):
1. Look up the user by email
2. Verify the password against the stored bcrypt hash
3. Issue a signed token carrying user id, tenant id, role and email
4. Record a session (HMAC of the token) expiring with the token
5. Return the user (no password hash), their tenant and the raw token

SECURITY:
- Unknown email, missing hash and wrong password share one error message
- Unexpected failures surface as a generic "Authentication failed"
- Logout never fails visibly
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from notes_api.auth.passwords import verify_password
from notes_api.auth.sessions import SessionRegistry
from notes_api.auth.tokens import TokenService
from notes_api.config import Settings
from notes_api.db.models import Tenant, User
from notes_api.db.repo_users import UserRepository
from notes_api.errors import AuthError
from notes_api.observability.metrics import log_login_failed, log_login_succeeded

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@dataclass
class LoginResult:
    """Successful login outcome."""

    user: User
    tenant: Tenant
    token: str


class AuthenticationService:
    """Orchestrates credential checks, token issuance and session recording."""

    def __init__(self, db: Session, settings: Settings):
        self.users = UserRepository(db)
        self.tokens = TokenService(settings.jwt_secret, ttl_days=settings.token_ttl_days)
        self.sessions = SessionRegistry(db, settings.token_pepper)

    def authenticate(self, email: str, password: str, now: Optional[datetime] = None) -> LoginResult:
        """Verify credentials and open a session.

        Args:
            email: Login email (exact match)
            password: Plaintext password
            now: Issue time override (defaults to current UTC time)

        Returns:
            LoginResult with user, tenant and raw token

        Raises:
            AuthError: "Invalid credentials" on any credential mismatch,
                "Authentication failed" on unexpected errors
        """
        try:
            user = self.users.get_by_email(email)
            if user is None:
                log_login_failed("unknown_email")
                raise AuthError(INVALID_CREDENTIALS)
            if not user.password_hash:
                log_login_failed("no_password")
                raise AuthError(INVALID_CREDENTIALS)
            if not verify_password(password, user.password_hash):
                log_login_failed("bad_password")
                raise AuthError(INVALID_CREDENTIALS)

            issued_at = now or datetime.now(timezone.utc)
            token = self.tokens.issue(
                user_id=user.id,
                tenant_id=user.tenant_id,
                role=user.role,
                email=user.email,
                now=issued_at,
            )
            self.sessions.record(
                user_id=user.id,
                raw_token=token,
                expires_at=self.tokens.expires_at(issued_at),
            )
        except AuthError:
            raise
        except Exception as e:
            logger.error(
                "Authentication failed unexpectedly",
                extra={"event": "auth.login.error", "error_type": type(e).__name__},
                exc_info=True,
            )
            raise AuthError("Authentication failed")

        log_login_succeeded(user.id, user.tenant_id)
        return LoginResult(user=user, tenant=user.tenant, token=token)

    def logout(self, token: Optional[str]) -> None:
        """Delete the session record for ``token``. Best effort: never raises."""
        if not token:
            return
        try:
            self.sessions.revoke(token)
        except Exception as e:
            logger.warning(
                "Logout session cleanup failed",
                extra={"event": "auth.logout.error", "error_type": type(e).__name__},
            )

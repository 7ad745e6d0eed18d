"""Request authenticator for protected endpoints.

FLOW:
1. Extract the bearer token (Authorization header, then ``auth-token`` cookie)
2. Verify signature and expiry with the TokenService
3. Optionally require a live session record (ENFORCE_SESSION_REVOCATION)
4. Re-fetch the user (joined with tenant) by the token's subject
5. Return AuthContext(user, tenant, token, claims)

Every failure raises ``AuthError`` (401), rendered by the app's handler.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from notes_api.auth.sessions import SessionRegistry
from notes_api.auth.tokens import TokenClaims, TokenService
from notes_api.config import Settings
from notes_api.context import tenant_id_var, user_id_var
from notes_api.db.models import Tenant, User
from notes_api.db.repo_users import UserRepository
from notes_api.db.session import get_db
from notes_api.errors import AuthError
from notes_api.observability.metrics import log_request_rejected

logger = logging.getLogger(__name__)

AUTH_COOKIE_NAME = "auth-token"

# Declared for OpenAPI docs only; extraction is done by extract_token()
bearer_scheme = HTTPBearer(auto_error=False, description="Bearer token issued by /api/auth/login")


@dataclass
class AuthContext:
    """Identity of an authenticated request."""

    user: User
    tenant: Tenant
    token: str
    claims: TokenClaims

    @property
    def user_id(self) -> str:
        return self.user.id

    @property
    def tenant_id(self) -> str:
        return self.user.tenant_id


def extract_token(request: Request) -> Optional[str]:
    """Return the bearer token of a request, or None.

    A Bearer Authorization header takes priority; otherwise (no header, or
    another scheme) the ``auth-token`` cookie is used.
    """
    header = request.headers.get("authorization")
    if header:
        scheme, _, credentials = header.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()

    cookie = request.cookies.get(AUTH_COOKIE_NAME)
    return cookie or None


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _load_identity(db: Session, settings: Settings, token: str, claims: TokenClaims) -> User:
    if settings.enforce_session_revocation:
        if not SessionRegistry(db, settings.token_pepper).is_active(token):
            raise AuthError("Session expired or revoked")

    user = UserRepository(db).get_by_id(claims.user_id)
    if user is None:
        raise AuthError("User not found")
    return user


async def get_auth_context(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    _credentials=Depends(bearer_scheme),
) -> AuthContext:
    """Authenticate the request or raise AuthError.

    Store lookups run in the threadpool so the event loop is never blocked.
    """
    token = extract_token(request)
    if not token:
        log_request_rejected("missing_token", request.url.path)
        raise AuthError("Missing or invalid authorization header")

    try:
        claims = TokenService(settings.jwt_secret, ttl_days=settings.token_ttl_days).verify(token)
    except AuthError:
        log_request_rejected("invalid_token", request.url.path)
        raise AuthError("Invalid token")

    try:
        user = await run_in_threadpool(_load_identity, db, settings, token, claims)
    except AuthError as e:
        log_request_rejected(e.message, request.url.path)
        raise

    tenant_id_var.set(user.tenant_id)
    user_id_var.set(user.id)
    request.state.tenant_id = user.tenant_id
    request.state.user_id = user.id

    return AuthContext(user=user, tenant=user.tenant, token=token, claims=claims)

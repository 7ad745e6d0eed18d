"""Auth endpoints.

Endpoints:
- POST /api/auth/login: Email/password login (returns bearer token)
- POST /api/auth/logout: Best-effort session revocation
- GET /api/auth/me: Current user, tenant and note quota usage

SECURITY:
- Passwords never logged
- Unknown email and wrong password return the same 401 message
- Token also set as an HttpOnly ``auth-token`` cookie
"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from notes_api.auth.request_auth import (
    AUTH_COOKIE_NAME,
    AuthContext,
    extract_token,
    get_auth_context,
    get_settings,
)
from notes_api.auth.service import AuthenticationService
from notes_api.config import Settings
from notes_api.db.session import get_db
from notes_api.errors import ValidationError
from notes_api.quota import QuotaEngine
from notes_api.schemas import ApiResponse, LoginRequest, TenantOut, UserOut, ok

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/login", response_model=ApiResponse)
def login(
    payload: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Exchange email/password for a bearer token.

    Returns:
        {user, tenant, token}

    Raises:
        ValidationError 400: email or password missing
        AuthError 401: invalid credentials
    """
    if not payload.email or not payload.password:
        raise ValidationError("Email and password are required")

    result = AuthenticationService(db, settings).authenticate(payload.email, payload.password)

    response.set_cookie(
        AUTH_COOKIE_NAME,
        result.token,
        max_age=settings.token_ttl_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )

    return ok(
        {
            "user": UserOut.model_validate(result.user),
            "tenant": TenantOut.model_validate(result.tenant),
            "token": result.token,
        },
        "Login successful",
    )


@router.post("/logout", response_model=ApiResponse)
def logout(
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Revoke the presented token's session record. Always succeeds."""
    AuthenticationService(db, settings).logout(extract_token(request))
    response.delete_cookie(AUTH_COOKIE_NAME)
    return ok(None, "Logged out successfully")


@router.get("/me", response_model=ApiResponse)
def me(
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> dict:
    usage = QuotaEngine(db, free_limit=settings.free_plan_note_limit).usage(auth.tenant)
    return ok(
        {
            "user": UserOut.model_validate(auth.user),
            "tenant": TenantOut.model_validate(auth.tenant),
            "usage": usage.to_dict(),
        }
    )

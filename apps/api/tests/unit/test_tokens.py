"""Tests for JWT issuance and verification.

Test Coverage:
T1: Claims round-trip through issue/verify
T2: Fixed 7-day lifetime
T3: Expired, forged, malformed and incomplete tokens are rejected uniformly
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from notes_api.auth.tokens import TokenService
from notes_api.errors import AuthError

SECRET = "unit-test-secret-0123456789abcdef0123"


@pytest.fixture
def service() -> TokenService:
    return TokenService(SECRET)


def _issue(service: TokenService, now=None) -> str:
    return service.issue(
        user_id="user-1",
        tenant_id="tenant-1",
        role="admin",
        email="admin@acme.test",
        now=now,
    )


def test_issue_and_verify_round_trip(service: TokenService) -> None:
    claims = service.verify(_issue(service))

    assert claims.user_id == "user-1"
    assert claims.tenant_id == "tenant-1"
    assert claims.role == "admin"
    assert claims.email == "admin@acme.test"


def test_lifetime_is_seven_days(service: TokenService) -> None:
    issued_at = datetime.now(timezone.utc).replace(microsecond=0)
    claims = service.verify(_issue(service, now=issued_at))

    assert claims.issued_at == issued_at
    assert claims.expires_at - claims.issued_at == timedelta(days=7)


def test_token_accepted_just_before_expiry(service: TokenService) -> None:
    almost_expired = datetime.now(timezone.utc) - timedelta(days=7) + timedelta(minutes=5)
    service.verify(_issue(service, now=almost_expired))


def test_expired_token_rejected(service: TokenService) -> None:
    issued_long_ago = datetime.now(timezone.utc) - timedelta(days=7, minutes=1)

    with pytest.raises(AuthError) as exc_info:
        service.verify(_issue(service, now=issued_long_ago))

    assert exc_info.value.message == "Invalid or expired token"
    assert exc_info.value.status_code == 401


def test_token_signed_with_other_secret_rejected(service: TokenService) -> None:
    forged = TokenService("some-other-secret-value-0123456789").issue(
        user_id="user-1", tenant_id="tenant-1", role="admin", email="admin@acme.test"
    )

    with pytest.raises(AuthError, match="Invalid or expired token"):
        service.verify(forged)


@pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c"])
def test_malformed_token_rejected(service: TokenService, token: str) -> None:
    with pytest.raises(AuthError, match="Invalid or expired token"):
        service.verify(token)


def test_token_missing_identity_claims_rejected(service: TokenService) -> None:
    now = datetime.now(timezone.utc)
    incomplete = jwt.encode(
        {"sub": "user-1", "iat": int(now.timestamp()), "exp": int((now + timedelta(days=1)).timestamp())},
        SECRET,
        algorithm="HS256",
    )

    with pytest.raises(AuthError, match="Invalid or expired token"):
        service.verify(incomplete)


def test_empty_secret_refused() -> None:
    with pytest.raises(ValueError):
        TokenService("")


def test_tokens_issued_in_same_second_differ(service: TokenService) -> None:
    now = datetime.now(timezone.utc)
    assert _issue(service, now=now) != _issue(service, now=now)

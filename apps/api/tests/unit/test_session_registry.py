"""Tests for the session registry (hashed token bookkeeping)."""

from datetime import datetime, timedelta, timezone

from notes_api.auth.sessions import SessionRegistry
from notes_api.db.models import UserSession
from notes_api.db.repo_users import UserRepository


def _user_id(db_session) -> str:
    return UserRepository(db_session).get_by_email("user@acme.test").id


def test_record_stores_hash_not_raw_token(db_session, seeded) -> None:
    registry = SessionRegistry(db_session, pepper="pepper")
    expires = datetime.now(timezone.utc) + timedelta(days=7)

    registry.record(user_id=_user_id(db_session), raw_token="raw-token-value", expires_at=expires)

    stored = db_session.query(UserSession).one()
    assert stored.token_hash == registry.token_hash("raw-token-value")
    assert stored.token_hash != "raw-token-value"
    assert registry.is_active("raw-token-value")


def test_revoke_removes_record_and_is_repeatable(db_session, seeded) -> None:
    registry = SessionRegistry(db_session, pepper="pepper")
    registry.record(
        user_id=_user_id(db_session),
        raw_token="to-revoke",
        expires_at=datetime.now(timezone.utc) + timedelta(days=1),
    )

    assert registry.revoke("to-revoke") == 1
    assert registry.is_active("to-revoke") is False
    # Already gone: no error
    assert registry.revoke("to-revoke") == 0


def test_expired_record_is_not_active(db_session, seeded) -> None:
    registry = SessionRegistry(db_session, pepper="pepper")
    registry.record(
        user_id=_user_id(db_session),
        raw_token="stale",
        expires_at=datetime.now(timezone.utc) - timedelta(minutes=1),
    )

    assert registry.is_active("stale") is False


def test_purge_expired_keeps_live_sessions(db_session, seeded) -> None:
    registry = SessionRegistry(db_session, pepper="pepper")
    user_id = _user_id(db_session)
    now = datetime.now(timezone.utc)
    registry.record(user_id=user_id, raw_token="old-1", expires_at=now - timedelta(days=2))
    registry.record(user_id=user_id, raw_token="old-2", expires_at=now - timedelta(hours=1))
    registry.record(user_id=user_id, raw_token="live", expires_at=now + timedelta(days=3))

    removed = registry.purge_expired(now)

    assert removed == 2
    assert registry.is_active("live")
    assert db_session.query(UserSession).count() == 1

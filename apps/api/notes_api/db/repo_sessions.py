"""Session record repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from notes_api.db.models import UserSession


class SessionRepository:
    """Row-level access to user_sessions, keyed by token hash."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, *, user_id: str, token_hash: str, expires_at: datetime) -> UserSession:
        record = UserSession(user_id=user_id, token_hash=token_hash, expires_at=expires_at)
        self.db.add(record)
        self.db.commit()
        return record

    def delete_by_token_hash(self, token_hash: str) -> int:
        deleted = (
            self.db.query(UserSession)
            .filter(UserSession.token_hash == token_hash)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted

    def get_active(self, token_hash: str, now: datetime) -> Optional[UserSession]:
        return (
            self.db.query(UserSession)
            .filter(
                UserSession.token_hash == token_hash,
                UserSession.expires_at > now,
            )
            .first()
        )

    def delete_expired(self, cutoff: datetime) -> int:
        deleted = (
            self.db.query(UserSession)
            .filter(UserSession.expires_at < cutoff)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted

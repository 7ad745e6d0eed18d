"""Session registry - server-side bookkeeping of issued tokens.

Only HMAC hashes of tokens are stored. Token validity itself is decided by
the token signature and expiry; the registry is consulted on verification only
when ENFORCE_SESSION_REVOCATION is enabled.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from notes_api.auth.token_lifecycle import hash_token
from notes_api.db.repo_sessions import SessionRepository

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Create, revoke, look up and purge session records."""

    def __init__(self, db: Session, pepper: str):
        self.repo = SessionRepository(db)
        self._pepper = pepper

    def token_hash(self, raw_token: str) -> str:
        return hash_token(raw_token, self._pepper)

    def record(self, *, user_id: str, raw_token: str, expires_at: datetime) -> None:
        self.repo.create(
            user_id=user_id,
            token_hash=self.token_hash(raw_token),
            expires_at=expires_at,
        )
        logger.info(
            "Session recorded",
            extra={"event": "session.recorded", "session_user_id": user_id},
        )

    def revoke(self, raw_token: str) -> int:
        """Delete the session record for a token.

        Returns:
            Number of records removed (0 if already gone)
        """
        removed = self.repo.delete_by_token_hash(self.token_hash(raw_token))
        logger.info("Session revoked", extra={"event": "session.revoked", "removed": removed})
        return removed

    def is_active(self, raw_token: str, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return self.repo.get_active(self.token_hash(raw_token), now) is not None

    def purge_expired(self, cutoff: Optional[datetime] = None) -> int:
        """Delete every session that expired before ``cutoff`` (default: now)."""
        cutoff = cutoff or datetime.now(timezone.utc)
        removed = self.repo.delete_expired(cutoff)
        logger.info(
            "Expired sessions purged",
            extra={"event": "session.purged", "removed": removed, "cutoff": cutoff.isoformat()},
        )
        return removed

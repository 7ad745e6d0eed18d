"""Tenant-scoped note operations.

Every operation takes the caller's tenant id from the authenticated context,
never from the request body, and every store call is filtered by it.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from notes_api.db.models import Note
from notes_api.db.repo_notes import NoteRepository
from notes_api.errors import NotFoundError, SubscriptionLimitError, ValidationError
from notes_api.quota import QuotaEngine

logger = logging.getLogger(__name__)


def _clean(value: Optional[str]) -> str:
    return value.strip() if value else ""


class NoteService:
    def __init__(self, db: Session, free_limit: int):
        self.db = db
        self.repo = NoteRepository(db)
        self.quota = QuotaEngine(db, free_limit=free_limit)

    def list_notes(self, tenant_id: str) -> list[Note]:
        return self.repo.list_by_tenant(tenant_id)

    def get(self, note_id: str, tenant_id: str) -> Note:
        note = self.repo.get(note_id, tenant_id)
        if note is None:
            raise NotFoundError("Note not found")
        return note

    def create(
        self,
        *,
        tenant_id: str,
        user_id: str,
        title: Optional[str],
        content: Optional[str] = None,
    ) -> Note:
        """Create a note after the quota check.

        Title and content are trimmed before storage.

        Raises:
            ValidationError: title missing or blank
            SubscriptionLimitError: free plan limit reached (nothing written)
        """
        title = _clean(title)
        if not title:
            raise ValidationError("Title is required")

        try:
            self.quota.ensure_can_create_note(tenant_id)
        except SubscriptionLimitError:
            # Release the tenant row lock
            self.db.rollback()
            raise

        note = self.repo.create(
            tenant_id=tenant_id,
            user_id=user_id,
            title=title,
            content=_clean(content),
        )
        logger.info("Note created", extra={"event": "note.created", "note_id": note.id})
        return note

    def update(
        self,
        note_id: str,
        tenant_id: str,
        *,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Note:
        """Update title and/or content (last write wins).

        Raises:
            ValidationError: empty title, or neither field supplied
            NotFoundError: note absent or owned by another tenant
        """
        updates: dict = {}
        if title is not None:
            title = title.strip()
            if not title:
                raise ValidationError("Title cannot be empty")
            updates["title"] = title
        if content is not None:
            updates["content"] = content.strip()

        if not updates:
            raise ValidationError("No valid updates provided")

        updates["updated_at"] = datetime.now(timezone.utc)
        note = self.repo.update(note_id, tenant_id, updates)
        if note is None:
            raise NotFoundError("Note not found")
        logger.info("Note updated", extra={"event": "note.updated", "note_id": note_id})
        return note

    def delete(self, note_id: str, tenant_id: str) -> None:
        if not self.repo.delete(note_id, tenant_id):
            raise NotFoundError("Note not found")
        logger.info("Note deleted", extra={"event": "note.deleted", "note_id": note_id})

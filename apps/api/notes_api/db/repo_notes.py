"""Note repository.

Every read and write is scoped by ``(id, tenant_id)``; a note belonging to
another tenant is indistinguishable from a missing one.
"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from notes_api.db.models import Note


class NoteRepository:
    """Row-level access to notes."""

    def __init__(self, db: Session):
        self.db = db

    def list_by_tenant(self, tenant_id: str, limit: Optional[int] = None) -> list[Note]:
        query = (
            self.db.query(Note)
            .options(joinedload(Note.author))
            .filter(Note.tenant_id == tenant_id)
            .order_by(Note.created_at.desc(), Note.id.desc())
        )
        if limit:
            query = query.limit(limit)
        return query.all()

    def get(self, note_id: str, tenant_id: str) -> Optional[Note]:
        return (
            self.db.query(Note)
            .options(joinedload(Note.author))
            .filter(Note.id == note_id, Note.tenant_id == tenant_id)
            .first()
        )

    def count_by_tenant(self, tenant_id: str) -> int:
        return (
            self.db.query(func.count(Note.id))
            .filter(Note.tenant_id == tenant_id)
            .scalar()
        ) or 0

    def create(self, *, tenant_id: str, user_id: str, title: str, content: str = "") -> Note:
        note = Note(tenant_id=tenant_id, user_id=user_id, title=title, content=content)
        self.db.add(note)
        self.db.commit()
        return self.get(note.id, tenant_id)

    def update(self, note_id: str, tenant_id: str, updates: dict) -> Optional[Note]:
        """Conditional UPDATE ... WHERE id = ? AND tenant_id = ?.

        Returns:
            The updated note, or None if no row matched
        """
        matched = (
            self.db.query(Note)
            .filter(Note.id == note_id, Note.tenant_id == tenant_id)
            .update(updates, synchronize_session=False)
        )
        if not matched:
            self.db.rollback()
            return None
        self.db.commit()
        self.db.expire_all()
        return self.get(note_id, tenant_id)

    def delete(self, note_id: str, tenant_id: str) -> bool:
        deleted = (
            self.db.query(Note)
            .filter(Note.id == note_id, Note.tenant_id == tenant_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted > 0

"""User repository."""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from notes_api.db.models import User


class UserRepository:
    """Row-level access to users (always joined with their tenant)."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, user: User) -> User:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def get_by_email(self, email: str) -> Optional[User]:
        return (
            self.db.query(User)
            .options(joinedload(User.tenant))
            .filter(User.email == email)
            .first()
        )

    def get_by_id(self, user_id: str) -> Optional[User]:
        return (
            self.db.query(User)
            .options(joinedload(User.tenant))
            .filter(User.id == user_id)
            .first()
        )

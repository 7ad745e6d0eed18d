"""Database session management.

The engine and sessionmaker are built once by the application factory and
kept on ``app.state``; requests get a fresh Session through ``get_db``.
"""

from typing import Generator

from fastapi import Request
from sqlalchemy.orm import Session


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Get database session.

    Yields:
        Session: SQLAlchemy session bound to the app's engine
    """
    db = request.app.state.sessionmaker()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

#!/usr/bin/env python3
"""Delete expired session records.

Intended for a periodic job (cron, scheduled task).

Exit codes:
    0: OK
    2: ERROR (env/connection failure)

Environment variables:
    DATABASE_URL: Optional outside production. Defaults to sqlite:///./notes.db
"""

import argparse
import logging
import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "apps" / "api"))

from sqlalchemy.exc import SQLAlchemyError  # noqa: E402

from notes_api.auth.sessions import SessionRegistry  # noqa: E402
from notes_api.config.env import get_database_url  # noqa: E402
from notes_api.db.engine import build_engine, build_sessionmaker  # noqa: E402
from notes_api.utils import configure_plain_logging  # noqa: E402

logger = logging.getLogger("cleanup_sessions")


def main() -> None:
    parser = argparse.ArgumentParser(description="Purge expired session records")
    parser.add_argument(
        "--database-url",
        default=None,
        help="Override DATABASE_URL",
    )
    parser.add_argument(
        "--grace-hours",
        type=int,
        default=0,
        help="Keep sessions that expired less than this many hours ago (default: 0)",
    )
    args = parser.parse_args()

    configure_plain_logging(os.getenv("LOG_LEVEL", "INFO"))

    cutoff = datetime.now(timezone.utc) - timedelta(hours=args.grace_hours)
    try:
        engine = build_engine(args.database_url or get_database_url())
        with build_sessionmaker(engine)() as db:
            # pepper is irrelevant for purging by expiry
            removed = SessionRegistry(db, pepper="unused").purge_expired(cutoff)
    except (RuntimeError, ValueError, SQLAlchemyError) as e:
        logger.error("Session cleanup failed: %s", e)
        sys.exit(2)

    print(f"Removed {removed} expired sessions (cutoff {cutoff.isoformat()})")
    sys.exit(0)


if __name__ == "__main__":
    main()

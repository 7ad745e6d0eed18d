"""Tests for the tenant row locks behind quota checks and upgrades.

SQLite drops FOR UPDATE, so the lock is checked by compiling the issued query
for PostgreSQL.
"""

from unittest.mock import patch

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.orm import Query

from notes_api.db.models import Note
from notes_api.db.repo_tenants import TenantRepository
from notes_api.db.repo_users import UserRepository
from notes_api.errors import SubscriptionLimitError
from notes_api.services.notes import NoteService
from notes_api.services.subscriptions import SubscriptionService


def _postgres_sql(call) -> str:
    with patch.object(Query, "first", autospec=True, return_value=None) as first:
        call()
    query = first.call_args.args[0]
    return str(query.statement.compile(dialect=postgresql.dialect()))


def test_quota_lookup_locks_tenant_row(db_session) -> None:
    sql = _postgres_sql(lambda: TenantRepository(db_session).get_by_id_for_update("t-1"))

    assert "FOR UPDATE" in sql
    assert "tenants.id" in sql


def test_upgrade_lookup_locks_tenant_row(db_session) -> None:
    sql = _postgres_sql(lambda: TenantRepository(db_session).get_by_slug_for_update("acme"))

    assert "FOR UPDATE" in sql
    assert "tenants.slug" in sql


def test_plain_lookup_does_not_lock(db_session) -> None:
    sql = _postgres_sql(lambda: TenantRepository(db_session).get_by_slug("acme"))

    assert "FOR UPDATE" not in sql


def test_upgrade_reads_tenant_under_lock(db_session, seeded) -> None:
    admin = UserRepository(db_session).get_by_email("admin@acme.test")
    service = SubscriptionService(db_session)

    with patch.object(
        service.tenants, "get_by_slug_for_update", wraps=service.tenants.get_by_slug_for_update
    ) as locked_lookup:
        tenant = service.upgrade("acme", admin)

    locked_lookup.assert_called_once_with("acme")
    assert tenant.is_pro


@pytest.fixture
def note_service(db_session, seeded) -> NoteService:
    return NoteService(db_session, free_limit=3)


def test_rejected_create_releases_transaction(db_session, note_service) -> None:
    acme = TenantRepository(db_session).get_by_slug("acme")
    globex = TenantRepository(db_session).get_by_slug("globex")
    acme_user = UserRepository(db_session).get_by_email("user@acme.test")
    globex_user = UserRepository(db_session).get_by_email("user@globex.test")
    note_service.create(tenant_id=acme.id, user_id=acme_user.id, title="Third")

    with pytest.raises(SubscriptionLimitError):
        note_service.create(tenant_id=acme.id, user_id=acme_user.id, title="Fourth")

    # The lock-holding transaction was rolled back, not left open
    assert not db_session.in_transaction()

    note = note_service.create(tenant_id=globex.id, user_id=globex_user.id, title="Globex third")
    assert db_session.get(Note, note.id).title == "Globex third"
    assert db_session.query(Note).filter(Note.tenant_id == acme.id).count() == 3

"""
Note Quota Engine
Free plan: at most ``free_limit`` notes per tenant. Pro plan: unlimited.
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from notes_api.db.models import Tenant
from notes_api.db.repo_notes import NoteRepository
from notes_api.db.repo_tenants import TenantRepository
from notes_api.errors import NotFoundError, SubscriptionLimitError
from notes_api.observability.metrics import log_quota_exceeded

DEFAULT_FREE_LIMIT = 3


@dataclass(frozen=True)
class QuotaUsage:
    """Current note usage of a tenant."""

    notes_count: int
    notes_limit: Optional[int]  # None = unlimited

    @property
    def can_create_more(self) -> bool:
        return self.notes_limit is None or self.notes_count < self.notes_limit

    def to_dict(self) -> dict:
        return {
            "notes_count": self.notes_count,
            "notes_limit": self.notes_limit,
            "can_create_more": self.can_create_more,
        }


class QuotaEngine:
    """
    Decides whether a tenant may create another note.

    ``ensure_can_create_note`` locks the tenant row before counting so the
    count and the following insert happen under one lock. On PostgreSQL
    this makes the cap exact under concurrency; SQLite ignores the lock and
    two racing creates may overshoot by one.
    """

    def __init__(self, db: Session, free_limit: int = DEFAULT_FREE_LIMIT):
        self.tenants = TenantRepository(db)
        self.notes = NoteRepository(db)
        self.free_limit = free_limit

    def limit_for(self, tenant: Tenant) -> Optional[int]:
        return None if tenant.is_pro else self.free_limit

    def usage(self, tenant: Tenant) -> QuotaUsage:
        return QuotaUsage(
            notes_count=self.notes.count_by_tenant(tenant.id),
            notes_limit=self.limit_for(tenant),
        )

    def can_create_note(self, tenant_id: str) -> bool:
        """
        Returns:
            True for pro tenants; for free tenants True iff the current
            note count is strictly below the limit
        """
        tenant = self.tenants.get_by_id(tenant_id)
        if tenant is None:
            raise NotFoundError("Tenant not found")
        return self.usage(tenant).can_create_more

    def ensure_can_create_note(self, tenant_id: str) -> Tenant:
        """
        Lock the tenant row and check the quota.

        The caller must insert the note in the same transaction and commit
        to release the lock.

        Raises:
            NotFoundError: tenant does not exist
            SubscriptionLimitError: free plan limit reached
        """
        tenant = self.tenants.get_by_id_for_update(tenant_id)
        if tenant is None:
            raise NotFoundError("Tenant not found")

        usage = self.usage(tenant)
        if not usage.can_create_more:
            log_quota_exceeded(tenant.id, usage.notes_count, self.free_limit)
            raise SubscriptionLimitError(
                f"Free plan limited to {self.free_limit} notes. "
                "Upgrade to Pro for unlimited notes."
            )
        return tenant

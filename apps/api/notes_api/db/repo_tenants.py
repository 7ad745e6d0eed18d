"""Tenant repository."""

from typing import Optional

from sqlalchemy.orm import Session

from notes_api.db.models import PLAN_PRO, Tenant


class TenantRepository:
    """Row-level access to tenants."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, tenant: Tenant) -> Tenant:
        self.db.add(tenant)
        self.db.commit()
        self.db.refresh(tenant)
        return tenant

    def get_by_id(self, tenant_id: str) -> Optional[Tenant]:
        return self.db.query(Tenant).filter(Tenant.id == tenant_id).first()

    def get_by_slug(self, slug: str) -> Optional[Tenant]:
        return self.db.query(Tenant).filter(Tenant.slug == slug).first()

    def get_by_id_for_update(self, tenant_id: str) -> Optional[Tenant]:
        """Load the tenant row with a row lock held until commit/rollback.

        SQLite ignores FOR UPDATE; PostgreSQL serializes concurrent writers
        on the same tenant.
        """
        return (
            self.db.query(Tenant)
            .filter(Tenant.id == tenant_id)
            .with_for_update()
            .first()
        )

    def get_by_slug_for_update(self, slug: str) -> Optional[Tenant]:
        return (
            self.db.query(Tenant)
            .filter(Tenant.slug == slug)
            .with_for_update()
            .first()
        )

    def upgrade_to_pro(self, tenant: Tenant) -> Tenant:
        tenant.subscription_plan = PLAN_PRO
        self.db.commit()
        self.db.refresh(tenant)
        return tenant

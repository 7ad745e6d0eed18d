"""Subscription upgrade flow (free -> pro, one-directional)."""

import logging

from sqlalchemy.orm import Session

from notes_api.auth.guards import require_same_tenant
from notes_api.db.models import Tenant, User
from notes_api.db.repo_tenants import TenantRepository
from notes_api.errors import NotFoundError, TenantIsolationError, ValidationError
from notes_api.observability.metrics import log_subscription_upgraded

logger = logging.getLogger(__name__)


class SubscriptionService:
    def __init__(self, db: Session):
        self.tenants = TenantRepository(db)

    def upgrade(self, tenant_slug: str, caller: User) -> Tenant:
        """Move the caller's own tenant to the pro plan.

        The admin role check belongs to the route dependency; this method
        only enforces that the target tenant is the caller's.

        Raises:
            NotFoundError: unknown slug
            TenantIsolationError: slug belongs to another tenant
            ValidationError: tenant already on pro
        """
        # Row lock so concurrent upgrades see each other's result
        tenant = self.tenants.get_by_slug_for_update(tenant_slug)
        if tenant is None:
            raise NotFoundError("Tenant not found")

        try:
            require_same_tenant(caller.tenant_id, tenant.id)
        except TenantIsolationError:
            raise TenantIsolationError("You can only upgrade your own tenant subscription")

        if tenant.is_pro:
            raise ValidationError("Tenant is already on Pro plan")

        tenant = self.tenants.upgrade_to_pro(tenant)
        log_subscription_upgraded(tenant.id, tenant.slug, caller.id)
        return tenant

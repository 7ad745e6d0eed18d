"""Tenant subscription endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from notes_api.auth.guards import require_admin_context
from notes_api.auth.request_auth import AuthContext
from notes_api.db.session import get_db
from notes_api.schemas import ApiResponse, TenantOut, ok
from notes_api.services.subscriptions import SubscriptionService

router = APIRouter(prefix="/api/tenants", tags=["tenants"])


@router.post("/{slug}/upgrade", response_model=ApiResponse)
def upgrade_subscription(
    slug: str,
    auth: AuthContext = Depends(require_admin_context),
    db: Session = Depends(get_db),
) -> dict:
    """Upgrade the caller's tenant to the pro plan (admins only).

    Raises:
        AuthError 401/403: unauthenticated / not an admin
        NotFoundError 404: unknown slug
        TenantIsolationError 403: slug of another tenant
        ValidationError 400: already on pro
    """
    tenant = SubscriptionService(db).upgrade(slug, auth.user)
    return ok(TenantOut.model_validate(tenant), "Subscription upgraded to Pro successfully")

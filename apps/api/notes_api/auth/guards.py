"""Authorization guards: role and tenant checks."""

from fastapi import Depends

from notes_api.auth.request_auth import AuthContext, get_auth_context
from notes_api.db.models import User
from notes_api.errors import AuthError, TenantIsolationError
from notes_api.observability.metrics import log_admin_denied, log_tenant_isolation_violation


def require_admin(user: User) -> None:
    """Raise AuthError (403) unless ``user`` is an admin."""
    if not user.is_admin:
        log_admin_denied(user.id, user.role)
        raise AuthError("Admin access required", status_code=403)


def require_same_tenant(caller_tenant_id: str, resource_tenant_id: str) -> None:
    """Raise TenantIsolationError unless both tenant ids match.

    Every resource-scoped operation goes through this check or through a
    ``tenant_id`` filter in the repository query.
    """
    if caller_tenant_id != resource_tenant_id:
        log_tenant_isolation_violation(caller_tenant_id, resource_tenant_id)
        raise TenantIsolationError()


def require_admin_context(auth: AuthContext = Depends(get_auth_context)) -> AuthContext:
    """Dependency: authenticated caller with the admin role."""
    require_admin(auth.user)
    return auth

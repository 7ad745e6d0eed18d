"""Authentication and authorization."""

from notes_api.auth.guards import require_admin, require_admin_context, require_same_tenant
from notes_api.auth.request_auth import AuthContext, extract_token, get_auth_context
from notes_api.auth.service import AuthenticationService, LoginResult

__all__ = [
    "AuthContext",
    "AuthenticationService",
    "LoginResult",
    "extract_token",
    "get_auth_context",
    "require_admin",
    "require_admin_context",
    "require_same_tenant",
]

"""Classified application errors.

Every business-rule failure raised by the core is an ``AppError`` subclass
carrying a stable machine-readable ``code`` and the HTTP ``status_code`` it
maps to. The HTTP boundary (see ``notes_api.main``) renders these from their
own fields; anything that is not an ``AppError`` is an unclassified failure
and becomes a generic 500.
"""

from typing import Optional


class AppError(Exception):
    """Base class for classified errors."""

    code: str = "UNKNOWN_ERROR"
    status_code: int = 500
    default_message: str = "Unexpected error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class AuthError(AppError):
    """Bad, missing or expired credentials (401).

    The admin guard raises this with ``status_code=403``.
    """

    code = "AUTH_ERROR"
    status_code = 401
    default_message = "Authentication failed"


class TenantIsolationError(AppError):
    """Cross-tenant access attempt."""

    code = "TENANT_ISOLATION_ERROR"
    status_code = 403
    default_message = "Tenant access violation"


class NotFoundError(AppError):
    """Resource absent or invisible to the caller's tenant."""

    code = "NOT_FOUND"
    status_code = 404
    default_message = "Resource not found"


class ValidationError(AppError):
    """Malformed input."""

    code = "VALIDATION_ERROR"
    status_code = 400
    default_message = "Validation failed"


class SubscriptionLimitError(AppError):
    """Plan quota exceeded; the client should offer an upgrade."""

    code = "SUBSCRIPTION_LIMIT_ERROR"
    status_code = 402
    default_message = "Subscription limit reached"

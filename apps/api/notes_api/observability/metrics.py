"""Security and business events as structured logs.

Each helper emits one log line with a stable ``event`` field so log
aggregation can count and alert on it. No metrics backend is required.

Request-level metrics (status code, latency) come from the
``http.request.completed`` line written by the completion middleware in
``notes_api.main``.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


# ============================================================================
# Authentication
# ============================================================================


def log_login_succeeded(user_id: str, tenant_id: str) -> None:
    logger.info(
        "auth.login.succeeded",
        extra={
            "event": "auth.login.succeeded",
            "login_user_id": user_id,
            "login_tenant_id": tenant_id,
        },
    )


def log_login_failed(reason: str) -> None:
    """Log a rejected login attempt.

    The email is deliberately not logged; ``reason`` is an internal category
    ("unknown_email", "no_password", "bad_password") that never reaches the
    client.

    Args:
        reason: Failure category
    """
    logger.warning(
        "auth.login.failed",
        extra={"event": "auth.login.failed", "reason": reason},
    )


def log_request_rejected(reason: str, path: Optional[str] = None) -> None:
    """Log a protected request rejected by the request authenticator."""
    logger.info(
        "auth.request.rejected",
        extra={"event": "auth.request.rejected", "reason": reason, "path": path},
    )


# ============================================================================
# Authorization
# ============================================================================


def log_admin_denied(user_id: str, role: str) -> None:
    logger.warning(
        "authz.admin.denied",
        extra={"event": "authz.admin.denied", "denied_user_id": user_id, "role": role},
    )


def log_tenant_isolation_violation(caller_tenant_id: str, resource_tenant_id: str) -> None:
    """Log a cross-tenant access attempt.

    Any occurrence is worth a look: normal clients never address another
    tenant's resources.
    """
    logger.warning(
        "authz.tenant_isolation.violation",
        extra={
            "event": "authz.tenant_isolation.violation",
            "caller_tenant_id": caller_tenant_id,
            "resource_tenant_id": resource_tenant_id,
        },
    )


# ============================================================================
# Quota & Subscription
# ============================================================================


def log_quota_exceeded(tenant_id: str, current_count: int, limit: int) -> None:
    logger.info(
        "quota.notes.exceeded",
        extra={
            "event": "quota.notes.exceeded",
            "quota_tenant_id": tenant_id,
            "current_count": current_count,
            "limit": limit,
        },
    )


def log_subscription_upgraded(tenant_id: str, slug: str, upgraded_by: str) -> None:
    logger.info(
        "subscription.upgraded",
        extra={
            "event": "subscription.upgraded",
            "upgraded_tenant_id": tenant_id,
            "slug": slug,
            "upgraded_by": upgraded_by,
        },
    )

"""Request context management for observability.

Context variables for request tracking across async boundaries.
"""

from contextvars import ContextVar

# Request ID - unique per HTTP request
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Tenant ID - set once the caller is authenticated
tenant_id_var: ContextVar[str] = ContextVar("tenant_id", default="")

# User ID - set once the caller is authenticated
user_id_var: ContextVar[str] = ContextVar("user_id", default="")

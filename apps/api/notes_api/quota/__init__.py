"""Subscription quota enforcement."""

from notes_api.quota.enforcement import DEFAULT_FREE_LIMIT, QuotaEngine, QuotaUsage

__all__ = ["DEFAULT_FREE_LIMIT", "QuotaEngine", "QuotaUsage"]

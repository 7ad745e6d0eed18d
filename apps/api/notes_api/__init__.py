"""Tenant Notes API - multi-tenant notes with subscription quotas."""

__version__ = "1.0.0"

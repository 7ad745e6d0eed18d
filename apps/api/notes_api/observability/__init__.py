"""Structured log events for security and business metrics."""

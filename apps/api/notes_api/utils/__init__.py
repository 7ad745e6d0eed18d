"""Utility functions and helpers."""

from notes_api.utils.logging import JSONFormatter, configure_json_logging, configure_plain_logging
from notes_api.utils.sanitize import sanitize_obj, sanitize_str

__all__ = [
    "JSONFormatter",
    "configure_json_logging",
    "configure_plain_logging",
    "sanitize_obj",
    "sanitize_str",
]

"""Configuration loading."""

from notes_api.config.env import Settings, load_settings

__all__ = ["Settings", "load_settings"]

"""Configuration for tiranga."""

from tiranga.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]

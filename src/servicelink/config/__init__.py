"""
Configuration for servicelink.

Settings are read from SERVICELINK_* environment variables or a .env file.
"""

from servicelink.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]

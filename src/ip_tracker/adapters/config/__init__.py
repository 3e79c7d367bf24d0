"""Configuration adapters."""

from ip_tracker.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]

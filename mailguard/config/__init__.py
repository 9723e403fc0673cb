"""Configuration module."""

from .settings import DetectorSettings, Settings, get_settings

__all__ = ["DetectorSettings", "Settings", "get_settings"]

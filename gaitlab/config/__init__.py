"""
Configuration module
"""
from gaitlab.config.settings import settings, Settings

__all__ = [
    "settings",
    "Settings",
]

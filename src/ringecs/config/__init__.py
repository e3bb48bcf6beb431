"""Configuration module using Pydantic Settings.

Usage:
    from ringecs.config import WorldSettings

    settings = WorldSettings(notify=False)
"""

from ringecs.config.settings import WorldSettings

__all__ = [
    "WorldSettings",
]

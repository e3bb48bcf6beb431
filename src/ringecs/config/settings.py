"""Configuration settings using Pydantic Settings.

Provides typed world configuration with environment variable support.

Usage:
    from ringecs.config import WorldSettings

    # Load from environment variables (RINGECS_*)
    settings = WorldSettings()

    # Or override with explicit values
    world = World(WorldSettings(notify=False))
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class WorldSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for a World and its component store.

    Attributes:
        notify: Publish lifecycle notifications on every mutation. When off,
            mutations are silent (bulk loading, setup) and entity systems
            are not kept current.
        copy_on_read: Reads, mutation results and notification payloads
            are deep copies so callers and subscribers cannot mutate state
            without a notification.
        strict_names: Reject entity and component names that cannot be
            embedded in a subject as a single token.

    Environment Variables:
        RINGECS_NOTIFY
        RINGECS_COPY_ON_READ
        RINGECS_STRICT_NAMES
    """

    model_config = SettingsConfigDict(
        env_prefix="RINGECS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    notify: bool = True
    copy_on_read: bool = True
    strict_names: bool = True

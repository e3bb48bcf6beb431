"""Entity identity models.

Usage:
    entity = EntityId(42)
    token = entity_token(entity)  # "42", as it appears in "#42.@health.~"
"""

from typing import NewType

EntityId = NewType("EntityId", int)
"""Opaque, monotonically increasing entity identifier. Never reused within a world."""

MAX_ENTITY_ID = 2**63 - 1
"""Ids are kept within the signed 64-bit range."""


def entity_token(entity: EntityId) -> str:
    """Subject token for an entity id."""
    return str(int(entity))

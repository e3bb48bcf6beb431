"""Entity identity functionality: opaque ids and their subject tokens."""

from ringecs.core.identity.models import MAX_ENTITY_ID, EntityId, entity_token

__all__ = [
    "EntityId",
    "MAX_ENTITY_ID",
    "entity_token",
]

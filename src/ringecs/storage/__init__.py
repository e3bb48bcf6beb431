"""Entity/component stores and the metadata they publish with."""

from ringecs.storage.allocator import EntityAllocator
from ringecs.storage.local import ComponentStore, EntityRef
from ringecs.storage.metadata import (
    COMPONENT_ADDED,
    COMPONENT_CHANGED,
    COMPONENT_REMOVED,
    ENTITY_CREATED,
    ENTITY_DESTROYED,
    ComponentMetadata,
    EntityComponentMetadata,
    EntityMetadata,
    SubjectSet,
)
from ringecs.storage.protocol import Storage

__all__ = [
    "Storage",
    "ComponentStore",
    "EntityRef",
    "EntityAllocator",
    # Metadata
    "SubjectSet",
    "ComponentMetadata",
    "EntityMetadata",
    "EntityComponentMetadata",
    # Class-level subjects
    "ENTITY_CREATED",
    "ENTITY_DESTROYED",
    "COMPONENT_ADDED",
    "COMPONENT_CHANGED",
    "COMPONENT_REMOVED",
]

"""Precomputed notification subjects.

Building token tuples once per component name, entity and attachment keeps
the publish path free of string work. Every subject here is immutable.
"""

from __future__ import annotations

from dataclasses import dataclass

from ringecs.core.identity import EntityId, entity_token
from ringecs.core.subject import (
    ADD_SUFFIX,
    CHANGE_SUFFIX,
    COMPONENT_PREFIX,
    ENTITY_PREFIX,
    REMOVE_SUFFIX,
    Tokens,
)

ENTITY_CREATED: Tokens = (ENTITY_PREFIX, ADD_SUFFIX)
ENTITY_DESTROYED: Tokens = (ENTITY_PREFIX, REMOVE_SUFFIX)
COMPONENT_ADDED: Tokens = (COMPONENT_PREFIX, ADD_SUFFIX)
COMPONENT_CHANGED: Tokens = (COMPONENT_PREFIX, CHANGE_SUFFIX)
COMPONENT_REMOVED: Tokens = (COMPONENT_PREFIX, REMOVE_SUFFIX)


@dataclass(frozen=True, slots=True)
class SubjectSet:
    """Add/change/remove subjects for one scope."""

    add: Tokens
    change: Tokens
    remove: Tokens

    @classmethod
    def under(cls, *prefix: str) -> SubjectSet:
        return cls(
            add=(*prefix, ADD_SUFFIX),
            change=(*prefix, CHANGE_SUFFIX),
            remove=(*prefix, REMOVE_SUFFIX),
        )


@dataclass(frozen=True, slots=True)
class ComponentMetadata:
    """Subjects for one component name, any entity: `@<name>.+|~|-`."""

    name: str
    subjects: SubjectSet

    @classmethod
    def build(cls, name: str) -> ComponentMetadata:
        return cls(name=name, subjects=SubjectSet.under(COMPONENT_PREFIX, name))


@dataclass(frozen=True, slots=True)
class EntityComponentMetadata:
    """Subjects for one attachment: `#<id>.@<name>.+|~|-` plus the named variant."""

    component: str
    subjects: SubjectSet
    named: SubjectSet | None = None

    @classmethod
    def build(cls, entity: EntityId, name: str | None, component: str) -> EntityComponentMetadata:
        return cls(
            component=component,
            subjects=SubjectSet.under(ENTITY_PREFIX, entity_token(entity), COMPONENT_PREFIX, component),
            named=(
                SubjectSet.under(ENTITY_PREFIX, name, COMPONENT_PREFIX, component)
                if name is not None
                else None
            ),
        )


@dataclass(frozen=True, slots=True)
class EntityMetadata:
    """Subjects for one alive entity: `#<id>.+|~|-` plus the named variant.

    `components` holds the metadata of every attachment and is the only
    mutable part: an entry exists exactly while the component is attached.
    """

    entity: EntityId
    name: str | None
    subjects: SubjectSet
    named: SubjectSet | None
    components: dict[str, EntityComponentMetadata]

    @classmethod
    def build(cls, entity: EntityId, name: str | None) -> EntityMetadata:
        return cls(
            entity=entity,
            name=name,
            subjects=SubjectSet.under(ENTITY_PREFIX, entity_token(entity)),
            named=SubjectSet.under(ENTITY_PREFIX, name) if name is not None else None,
            components={},
        )

    def attach(self, component: str) -> EntityComponentMetadata:
        metadata = EntityComponentMetadata.build(self.entity, self.name, component)
        self.components[component] = metadata
        return metadata

    def detach(self, component: str) -> EntityComponentMetadata:
        return self.components.pop(component)

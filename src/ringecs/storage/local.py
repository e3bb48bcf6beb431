"""Local in-memory entity/component store with lifecycle notifications.

Every mutation publishes its notifications on the store's bus before the
call returns, so the whole causal chain of a change (including entity
systems reacting to it) completes synchronously.

Usage:
    store = ComponentStore(MessageBus())
    hero = store.create_entity("hero", {"health": {"hp": 110}})
    store.set_component(hero, "health", "hp", 100)
    store.get_component("hero", "health")  # {"hp": 100}

Structure:
    _components[component_name][entity] = component_value
"""

from __future__ import annotations

import copy as cp
import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from types import MappingProxyType
from typing import Any

from ringecs.bus import MessageBus
from ringecs.core.errors import (
    DuplicateComponentError,
    DuplicateNameError,
    MissingComponentError,
    UnknownEntityError,
)
from ringecs.core.identity import EntityId
from ringecs.core.subject import Tokens, validate_identifier
from ringecs.core.types import PRESENT, ComponentValue
from ringecs.storage.allocator import EntityAllocator
from ringecs.storage.metadata import (
    COMPONENT_ADDED,
    COMPONENT_CHANGED,
    COMPONENT_REMOVED,
    ENTITY_CREATED,
    ENTITY_DESTROYED,
    ComponentMetadata,
    EntityComponentMetadata,
    EntityMetadata,
)

logger = logging.getLogger(__name__)

type EntityRef = EntityId | str
"""An entity id, or the name bound to an alive entity."""

_UNSET: Any = object()


class ComponentStore:
    """Entities, their named components, and the notifications describing changes.

    Component tables are created on the first attach of a component name and
    are kept even once empty. Destroying an entity detaches all of its
    components first, publishing their removal notifications.

    Args:
        bus: Bus that receives lifecycle notifications (a private one if None).
        notify: Publish notifications on mutation. Can be suspended with muted().
        copy_on_read: Stored data, mutation results, notification payloads
            and get_component() reads are deep copies of one another.
        strict_names: Validate entity and component names against the
            subject grammar.
    """

    def __init__(
        self,
        bus: MessageBus | None = None,
        *,
        notify: bool = True,
        copy_on_read: bool = True,
        strict_names: bool = True,
    ):
        self._bus = bus if bus is not None else MessageBus()
        self._allocator = EntityAllocator()
        self._components: dict[str, dict[EntityId, ComponentValue]] = {}
        self._component_metadata: dict[str, ComponentMetadata] = {}
        self._entity_metadata: dict[EntityId, EntityMetadata] = {}
        self._name_to_entity: dict[str, EntityId] = {}
        self._entity_to_name: dict[EntityId, str] = {}
        self.notify = notify
        self.copy_on_read = copy_on_read
        self.strict_names = strict_names

    @property
    def bus(self) -> MessageBus:
        return self._bus

    # Entity resolution

    def _find(self, ref: EntityRef) -> EntityId | None:
        if isinstance(ref, str):
            return self._name_to_entity.get(ref)
        if isinstance(ref, bool) or not isinstance(ref, int):
            return None
        entity = EntityId(ref)
        return entity if self._allocator.is_alive(entity) else None

    def resolve(self, ref: EntityRef) -> EntityId:
        """Resolve an id or name to an alive entity id.

        Raises:
            UnknownEntityError: If no alive entity matches.
        """
        entity = self._find(ref)
        if entity is None:
            raise UnknownEntityError(ref)
        return entity

    def entity_exists(self, ref: EntityRef) -> bool:
        return self._find(ref) is not None

    def all_entities(self) -> tuple[EntityId, ...]:
        """Alive entities in creation order."""
        return self._allocator.alive()

    def get_entity(self, name: str) -> EntityId | None:
        return self._name_to_entity.get(name)

    def get_entity_name(self, ref: EntityRef) -> str | None:
        entity = self._find(ref)
        return None if entity is None else self._entity_to_name.get(entity)

    def __len__(self) -> int:
        return len(self._allocator)

    def __contains__(self, ref: object) -> bool:
        return isinstance(ref, (int, str)) and self._find(ref) is not None

    # Notifications

    def _publish(self, tokens: Tokens, *args: Any) -> None:
        if self.notify:
            self._bus.publish(tokens, *args)

    def _publish_attachment(
        self, metadata: EntityComponentMetadata, kind: str, entity: EntityId, value: Any
    ) -> None:
        self._publish(getattr(metadata.subjects, kind), entity, value)
        if metadata.named is not None:
            self._publish(getattr(metadata.named, kind), entity, value)

    def _snapshot(self, value: ComponentValue) -> ComponentValue:
        """Value handed out by mutations and their notifications."""
        return cp.deepcopy(value) if self.copy_on_read else value

    @contextmanager
    def muted(self) -> Iterator[ComponentStore]:
        """Suspend notifications for bulk or setup mutations.

        Example:
            >>> with store.muted():
            ...     store.add_component(entity, "tag")  # nobody is told
        """
        previous = self.notify
        self.notify = False
        try:
            yield self
        finally:
            self.notify = previous

    # Entities

    def create_entity(
        self,
        name: str | None = None,
        components: Mapping[str, Any] | None = None,
    ) -> EntityId:
        """Create an entity, attach its initial components, then announce it.

        The created notifications (`#.+`, `#<id>.+`, `#<name>.+`) are
        published once, after every initial component has been attached.

        Args:
            name: Optional unique name bound to the entity while it lives.
            components: Initial components, name -> record or PRESENT.

        Returns:
            The new entity id.

        Raises:
            DuplicateNameError: If name is bound to another entity.
            ValueError: If a name fails validation.
            TypeError: If initial component data is not a mapping or PRESENT.
        """
        components = dict(components or {})
        if self.strict_names:
            if name is not None:
                validate_identifier(name, "entity")
            for component in components:
                validate_identifier(component)
        # Bad data is rejected before anything is allocated or published
        initial = {component: self._coerce(data) for component, data in components.items()}
        if name is not None and name in self._name_to_entity:
            raise DuplicateNameError(name, self._name_to_entity[name])

        entity = self._allocator.allocate()
        if name is not None:
            self._name_to_entity[name] = entity
            self._entity_to_name[entity] = name
        metadata = EntityMetadata.build(entity, name)
        self._entity_metadata[entity] = metadata
        logger.debug("Created entity %s%s", entity, f" ({name})" if name else "")

        for component, value in initial.items():
            self.add_component(entity, component, value)

        # A subscriber may have destroyed the entity while it was being built
        if self._allocator.is_alive(entity):
            self._publish(ENTITY_CREATED, entity)
            self._publish(metadata.subjects.add, entity)
            if metadata.named is not None:
                self._publish(metadata.named.add, entity)
        return entity

    def destroy_entity(self, ref: EntityRef) -> None:
        """Destroy an entity.

        Attached components are removed first, each publishing its removal
        notifications. Then the name is unbound, the id retired, and
        `#.-`, `#<id>.-`, `#<name>.-` are published.

        Raises:
            UnknownEntityError: If the entity is not alive.
        """
        entity = self.resolve(ref)
        metadata = self._entity_metadata[entity]

        # Subscribers may attach or detach while we detach; drain until empty
        while metadata.components and self._allocator.is_alive(entity):
            component = next(iter(metadata.components))
            self.remove_component(entity, component)
        if not self._allocator.is_alive(entity):
            return

        name = self._entity_to_name.pop(entity, None)
        if name is not None:
            del self._name_to_entity[name]
        del self._entity_metadata[entity]
        self._allocator.deallocate(entity)
        logger.debug("Destroyed entity %s%s", entity, f" ({name})" if name else "")

        self._publish(ENTITY_DESTROYED, entity)
        self._publish(metadata.subjects.remove, entity)
        if metadata.named is not None:
            self._publish(metadata.named.remove, entity)

    # Components

    def _get_or_create_table(self, component: str) -> dict[EntityId, ComponentValue]:
        table = self._components.get(component)
        if table is None:
            if self.strict_names:
                validate_identifier(component)
            table = {}
            self._components[component] = table
            self._component_metadata[component] = ComponentMetadata.build(component)
        return table

    def _attached(self, entity: EntityId, component: str) -> dict[EntityId, ComponentValue]:
        table = self._components.get(component)
        if table is None or entity not in table:
            raise MissingComponentError(entity, component)
        return table

    @staticmethod
    def _coerce(data: Any) -> ComponentValue:
        if data is None or data is PRESENT:
            return PRESENT
        if isinstance(data, Mapping):
            return dict(data)
        raise TypeError(f"Component data must be a mapping or PRESENT, got {type(data).__name__}")

    def add_component(self, ref: EntityRef, component: str, data: Any = PRESENT) -> ComponentValue:
        """Attach a component to an entity.

        Publishes `@<component>.+` (entity, value), then `@.+`
        (entity, component, value), then `#<id>.@<component>.+` and its named
        variant (entity, value).

        Args:
            ref: Entity id or name.
            component: Component name.
            data: A mapping (stored as a copy) or PRESENT for a tag.

        Returns:
            The stored value, copied when copy_on_read is set.

        Raises:
            UnknownEntityError: If the entity is not alive.
            DuplicateComponentError: If the component is already attached.
        """
        entity = self.resolve(ref)
        table = self._get_or_create_table(component)
        if entity in table:
            raise DuplicateComponentError(entity, component)

        value = self._snapshot(self._coerce(data))
        table[entity] = value
        attachment = self._entity_metadata[entity].attach(component)

        payload = self._snapshot(value)
        self._publish(self._component_metadata[component].subjects.add, entity, payload)
        self._publish(COMPONENT_ADDED, entity, component, payload)
        self._publish_attachment(attachment, "add", entity, payload)
        return self._snapshot(value)

    def set_component(
        self, ref: EntityRef, component: str, patch: Mapping[str, Any] | str, value: Any = _UNSET
    ) -> ComponentValue:
        """Change fields of an attached component.

        A mapping patch is merged one level deep; a key patch sets that one
        field to value. Setting fields on a PRESENT tag turns it into a record.

        Publishes, in order: `@<component>.~` (entity, value),
        `#<id>.~` and `#<name>.~` (entity, component, value),
        `@.~` (entity, component, value), then `#<id>.@<component>.~` and its
        named variant (entity, value).

        Returns:
            The updated value, copied when copy_on_read is set.

        Raises:
            UnknownEntityError: If the entity is not alive.
            MissingComponentError: If the component is not attached.
        """
        entity = self.resolve(ref)
        table = self._attached(entity, component)

        if isinstance(patch, Mapping):
            if value is not _UNSET:
                raise TypeError("set_component() takes no value with a mapping patch")
            changes = dict(patch)
        else:
            if value is _UNSET:
                raise TypeError(f"set_component() missing value for field {patch!r}")
            changes = {patch: value}

        current = table[entity]
        if not isinstance(current, dict):
            current = {}
            table[entity] = current
        current.update(self._snapshot(changes))

        metadata = self._entity_metadata[entity]
        payload = self._snapshot(current)
        self._publish(self._component_metadata[component].subjects.change, entity, payload)
        self._publish(metadata.subjects.change, entity, component, payload)
        if metadata.named is not None:
            self._publish(metadata.named.change, entity, component, payload)
        self._publish(COMPONENT_CHANGED, entity, component, payload)
        self._publish_attachment(metadata.components[component], "change", entity, payload)
        return self._snapshot(current)

    def remove_component(self, ref: EntityRef, component: str) -> ComponentValue:
        """Detach a component from an entity.

        Publishes `@<component>.-` (entity, last value), `@.-`
        (entity, component, last value), then `#<id>.@<component>.-` and its
        named variant (entity, last value).

        Returns:
            The value the component held.

        Raises:
            UnknownEntityError: If the entity is not alive.
            MissingComponentError: If the component is not attached.
        """
        entity = self.resolve(ref)
        table = self._attached(entity, component)

        value = table.pop(entity)
        attachment = self._entity_metadata[entity].detach(component)

        self._publish(self._component_metadata[component].subjects.remove, entity, value)
        self._publish(COMPONENT_REMOVED, entity, component, value)
        self._publish_attachment(attachment, "remove", entity, value)
        return value

    def get_component(
        self,
        ref: EntityRef,
        component: str,
        key: str | None = None,
        *,
        copy: bool | None = None,
    ) -> Any:
        """Read a component, or one field of it.

        Never raises: returns None when the entity, the component or the
        field is absent.

        Args:
            ref: Entity id or name.
            component: Component name.
            key: Field to read instead of the whole record.
            copy: Return a deep copy. Defaults to the store's copy_on_read.
                Mutating an uncopied record bypasses notifications.
        """
        entity = self._find(ref)
        if entity is None:
            return None
        table = self._components.get(component)
        if table is None or entity not in table:
            return None

        value: Any = table[entity]
        if key is not None:
            if not isinstance(value, dict):
                return None
            value = value.get(key)
        if copy is None:
            copy = self.copy_on_read
        return cp.deepcopy(value) if copy else value

    def has_component(self, ref: EntityRef, component: str) -> bool:
        entity = self._find(ref)
        if entity is None:
            return False
        table = self._components.get(component)
        return table is not None and entity in table

    def component_names(self, ref: EntityRef) -> tuple[str, ...]:
        """Names of the components attached to an entity, in attach order."""
        entity = self._find(ref)
        if entity is None:
            return ()
        return tuple(self._entity_metadata[entity].components)

    def component_table(self, component: str) -> Mapping[EntityId, ComponentValue]:
        """Read-only view of one component table (empty if never created)."""
        return MappingProxyType(self._components.get(component, {}))

    def table_names(self) -> tuple[str, ...]:
        """Every component name that has had a table created."""
        return tuple(self._components)

    def query(self, *components: str) -> Iterator[EntityId]:
        """Entities holding all of the given components, in creation order.

        Example:
            >>> for entity in store.query("position", "velocity"):
            ...     pass
        """
        tables = [self._components.get(component) for component in components]
        if any(table is None for table in tables):
            return
        for entity in self._allocator.alive():
            if all(entity in table for table in tables):  # type: ignore[operator]
                yield entity

"""Storage protocol for swappable stores.

World only talks to its store through this interface, so a store with a
different layout (archetype tables, instrumentation wrappers) can be
injected:

    world = World(storage=MyStore(bus))
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import AbstractContextManager
from typing import Any, Protocol, runtime_checkable

from ringecs.bus import MessageBus
from ringecs.core.identity import EntityId
from ringecs.core.types import ComponentValue


@runtime_checkable
class Storage(Protocol):
    """Entity/component store that publishes lifecycle notifications."""

    @property
    def bus(self) -> MessageBus:
        """Bus that receives lifecycle notifications."""
        ...

    def create_entity(
        self, name: str | None = None, components: Mapping[str, Any] | None = None
    ) -> EntityId:
        """Allocate entity, attach initial components, publish created."""
        ...

    def destroy_entity(self, ref: EntityId | str) -> None:
        """Detach all components, retire the id, publish destroyed."""
        ...

    def entity_exists(self, ref: EntityId | str) -> bool:
        """Check if entity is alive."""
        ...

    def all_entities(self) -> tuple[EntityId, ...]:
        """All living entities in creation order."""
        ...

    def get_entity(self, name: str) -> EntityId | None:
        """Entity bound to name."""
        ...

    def get_entity_name(self, ref: EntityId | str) -> str | None:
        """Name bound to entity."""
        ...

    def add_component(self, ref: EntityId | str, component: str, data: Any = ...) -> ComponentValue:
        """Attach component to entity."""
        ...

    def set_component(
        self, ref: EntityId | str, component: str, patch: Mapping[str, Any] | str, value: Any = ...
    ) -> ComponentValue:
        """Change fields of an attached component."""
        ...

    def remove_component(self, ref: EntityId | str, component: str) -> ComponentValue:
        """Detach component from entity. Returns the last value."""
        ...

    def get_component(
        self, ref: EntityId | str, component: str, key: str | None = None, *, copy: bool | None = None
    ) -> Any:
        """Component value, one field of it, or None."""
        ...

    def has_component(self, ref: EntityId | str, component: str) -> bool:
        """Check if entity has component."""
        ...

    def component_names(self, ref: EntityId | str) -> tuple[str, ...]:
        """Names of components attached to entity."""
        ...

    def query(self, *components: str) -> Iterator[EntityId]:
        """Find entities with all specified components."""
        ...

    def muted(self) -> AbstractContextManager[Any]:
        """Context in which mutations publish nothing."""
        ...

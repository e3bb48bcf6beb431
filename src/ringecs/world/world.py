"""World: composition root for entities, components, systems and the bus.

Usage:
    world = World()

    # Entities and components
    hero = world.create_entity("hero", {"health": {"hp": 110}})
    world.set_component(hero, "health", "hp", 100)
    world.get_component("hero", "health")  # {"hp": 100}

    # Notifications
    world.subscribe("@health.~", lambda entity, health: ...)

    # Systems and ticks
    world.add_system(Dying(), "dying")
    world.update(dt)
    world.process()
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Iterator, Mapping
from contextlib import AbstractContextManager
from typing import Any

from ringecs.bus import MessageBus, Subject, Subscription
from ringecs.config import WorldSettings
from ringecs.core.identity import EntityId
from ringecs.core.types import PRESENT, Callback, ComponentValue
from ringecs.scheduling import ExecutionStrategy, PhasedScheduler
from ringecs.storage import ComponentStore, EntityRef, Storage
from ringecs.systems import System

logger = logging.getLogger(__name__)


class World:
    """Owns one store, one bus and the ordered list of systems.

    Collaborators can be injected the way a custom storage backend or
    execution strategy would be. When a store is injected its bus is used;
    passing a different bus alongside it is an error.

    Args:
        settings: World configuration (read from RINGECS_* env vars if None).
        bus: Message bus for notifications and user subjects.
        storage: Entity/component store publishing on the bus.
        execution: Strategy running the update and process phases.
    """

    def __init__(
        self,
        settings: WorldSettings | None = None,
        *,
        bus: MessageBus | None = None,
        storage: Storage | None = None,
        execution: ExecutionStrategy | None = None,
    ):
        self.settings = settings or WorldSettings()
        if storage is not None:
            if bus is not None and bus is not storage.bus:
                raise ValueError("The injected storage publishes on a different bus")
            self._storage = storage
            self._bus = storage.bus
        else:
            self._bus = bus or MessageBus()
            self._storage = ComponentStore(
                self._bus,
                notify=self.settings.notify,
                copy_on_read=self.settings.copy_on_read,
                strict_names=self.settings.strict_names,
            )
        self._execution = execution or PhasedScheduler()
        self._named_systems: dict[str, System] = {}
        self._closed = False

    @property
    def bus(self) -> MessageBus:
        return self._bus

    @property
    def storage(self) -> Storage:
        return self._storage

    @property
    def closed(self) -> bool:
        return self._closed

    # Message bus

    def subscribe(self, subject: Subject, callback: Callback) -> Subscription:
        """Subscribe callback to a subject on the world's bus."""
        return self._bus.subscribe(subject, callback)

    def unsubscribe(self, subject: Subject | Subscription, callback: Callback | None = None) -> bool:
        """Remove a subscription. Idempotent."""
        if isinstance(subject, Subscription):
            return self._bus.unsubscribe(subject)
        if callback is None:
            raise TypeError("unsubscribe() needs a callback unless given a Subscription")
        return self._bus.unsubscribe(subject, callback)

    def publish(self, subject: Subject, *args: Any, **kwargs: Any) -> int:
        """Publish on the world's bus. Returns the number of callbacks invoked."""
        return self._bus.publish(subject, *args, **kwargs)

    def muted(self) -> AbstractContextManager[Any]:
        """Context in which entity/component mutations publish nothing."""
        return self._storage.muted()

    # Entities

    def create_entity(
        self,
        name_or_components: str | Mapping[str, Any] | None = None,
        components: Mapping[str, Any] | None = None,
    ) -> EntityId:
        """Create an entity.

        Example:
            >>> world.create_entity()
            >>> world.create_entity({"position": {"x": 0, "y": 0}})
            >>> world.create_entity("hero", {"health": {"hp": 110}, "player": PRESENT})
        """
        name: str | None = None
        if isinstance(name_or_components, str):
            name = name_or_components
        elif name_or_components is not None:
            if components is not None:
                raise TypeError("create_entity() got components twice")
            components = name_or_components
        return self._storage.create_entity(name, components)

    def destroy_entity(self, entity: EntityRef) -> None:
        self._storage.destroy_entity(entity)

    def get_entity(self, name: str) -> EntityId | None:
        return self._storage.get_entity(name)

    def get_entity_name(self, entity: EntityRef) -> str | None:
        return self._storage.get_entity_name(entity)

    def entity_exists(self, entity: EntityRef) -> bool:
        return self._storage.entity_exists(entity)

    def entities(self) -> tuple[EntityId, ...]:
        """Alive entities in creation order."""
        return self._storage.all_entities()

    def query(self, *components: str) -> Iterator[EntityId]:
        """Entities holding all of the given components."""
        return self._storage.query(*components)

    # Components

    def add_component(self, entity: EntityRef, component: str, data: Any = PRESENT) -> ComponentValue:
        return self._storage.add_component(entity, component, data)

    def set_component(
        self, entity: EntityRef, component: str, patch: Mapping[str, Any] | str, *value: Any
    ) -> ComponentValue:
        """Merge a mapping into a component, or set one field.

        Example:
            >>> world.set_component(hero, "health", {"hp": 90, "max": 110})
            >>> world.set_component(hero, "health", "hp", 100)
        """
        return self._storage.set_component(entity, component, patch, *value)

    def remove_component(self, entity: EntityRef, component: str) -> ComponentValue:
        return self._storage.remove_component(entity, component)

    def get_component(
        self, entity: EntityRef, component: str, key: str | None = None, *, copy: bool | None = None
    ) -> Any:
        return self._storage.get_component(entity, component, key, copy=copy)

    def has_component(self, entity: EntityRef, component: str) -> bool:
        return self._storage.has_component(entity, component)

    def component_names(self, entity: EntityRef) -> tuple[str, ...]:
        return self._storage.component_names(entity)

    # Systems

    @property
    def systems(self) -> tuple[System, ...]:
        return self._execution.systems

    def add_system(self, system: System, name: str | None = None) -> System:
        """Register a system after every already added one and initialize it.

        Args:
            system: System in CONSTRUCTED state.
            name: Optional lookup name for get_system()/remove_system().

        Returns:
            The system, for chaining.

        Raises:
            ValueError: If the world is closed or the system was added before.
        """
        if self._closed:
            raise ValueError("Cannot add systems to a closed world")
        if system in self._execution.systems:
            raise ValueError(f"{system.name} is already part of this world")
        if name is not None and name in self._named_systems:
            warnings.warn(
                f"add_system() replaces the system registered as {name!r}",
                stacklevel=2,
            )
            self.remove_system(name)

        self._execution.register_system(system)
        try:
            system.attach(self)
        except BaseException:
            self._execution.unregister_system(system)
            raise
        if name is not None:
            self._named_systems[name] = system
        logger.debug("Added system %s%s", system.name, f" as {name!r}" if name else "")
        return system

    def get_system(self, name: str) -> System | None:
        return self._named_systems.get(name)

    def remove_system(self, system_or_name: System | str) -> System:
        """Unregister a system and run its destroy hook.

        Raises:
            KeyError: If no system is registered under the given name.
            ValueError: If the system is not part of this world.
        """
        if isinstance(system_or_name, str):
            system = self._named_systems.get(system_or_name)
            if system is None:
                raise KeyError(f"No system registered as {system_or_name!r}")
        else:
            system = system_or_name

        if not self._execution.unregister_system(system):
            raise ValueError(f"{system.name} is not part of this world")
        for registered, candidate in list(self._named_systems.items()):
            if candidate is system:
                del self._named_systems[registered]
        system.detach()
        logger.debug("Removed system %s", system.name)
        return system

    # Ticks

    def update(self, dt: float) -> None:
        """Run every system's update(dt), in registration order."""
        self._execution.update(dt)

    def process(self) -> None:
        """Run every system's process(), in registration order.

        Call after update(dt), once per tick.
        """
        self._execution.process()

    def tick(self, dt: float) -> None:
        """Update pass followed by process pass."""
        self.update(dt)
        self.process()

    # Teardown

    def close(self) -> None:
        """Remove every system, last added first. Idempotent."""
        if self._closed:
            return
        self._closed = True
        for system in reversed(self._execution.systems):
            # a destroy hook may already have removed a later system
            if system in self._execution.systems:
                self.remove_system(system)

    def __enter__(self) -> World:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

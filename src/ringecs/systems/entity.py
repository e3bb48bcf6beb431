"""Entity systems: live, predicate-derived sets of entities.

An EntitySystem keeps the set of entities for which `matches(entity)` is
true. The set is seeded from every alive entity when the system is added
to a world and is then kept current from lifecycle notifications:

    #.+   entity created       -> re-evaluate
    #.-   entity destroyed     -> always drop
    @.+   component added      -> re-evaluate
    @.-   component removed    -> re-evaluate
    @.~   component changed    -> re-evaluate

Each tick, `update_entity(entity, dt)` and `process_entity(entity)` run once
per member, in the order entities joined the set.

Usage:
    class Dying(EntitySystem):
        def matches(self, entity):
            hp = self.world.get_component(entity, "health", "hp")
            return hp is not None and hp <= 0

        def update_entity(self, entity, dt):
            self.world.destroy_entity(entity)

        def process_entity(self, entity):
            pass
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from ringecs.core.errors import UnimplementedBehaviorError
from ringecs.core.identity import EntityId
from ringecs.storage.metadata import (
    COMPONENT_ADDED,
    COMPONENT_CHANGED,
    COMPONENT_REMOVED,
    ENTITY_CREATED,
    ENTITY_DESTROYED,
)
from ringecs.systems.base import System


class EntitySystem(System):
    """System iterating a derived membership set.

    The membership set belongs to this system alone; it is exposed read-only
    through `entities`, `in`, `len()` and iteration.
    """

    def __init__(self) -> None:
        super().__init__()
        self._members: dict[EntityId, None] = {}

    # Membership

    @property
    def entities(self) -> tuple[EntityId, ...]:
        """Snapshot of current members in join order."""
        return tuple(self._members)

    def __contains__(self, entity: object) -> bool:
        return entity in self._members

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[EntityId]:
        return iter(tuple(self._members))

    def _recompute(self, entity: EntityId) -> None:
        world = self._require_world()
        if world.storage.entity_exists(entity) and self.matches(entity):
            self._members[entity] = None
        else:
            self._members.pop(entity, None)

    def _on_lifecycle(self, entity: EntityId, *_: Any) -> None:
        self._recompute(entity)

    def _on_entity_destroyed(self, entity: EntityId, *_: Any) -> None:
        self._members.pop(entity, None)

    def _setup(self) -> None:
        super()._setup()
        world = self._require_world()
        for entity in world.storage.all_entities():
            self._recompute(entity)

        self.subscribe(ENTITY_CREATED, self._on_lifecycle)
        self.subscribe(ENTITY_DESTROYED, self._on_entity_destroyed)
        self.subscribe(COMPONENT_ADDED, self._on_lifecycle)
        self.subscribe(COMPONENT_REMOVED, self._on_lifecycle)
        self.subscribe(COMPONENT_CHANGED, self._on_lifecycle)

    def _teardown(self) -> None:
        super()._teardown()
        self._members.clear()

    # Hooks

    def matches(self, entity: EntityId) -> bool:
        raise UnimplementedBehaviorError(self.name, "matches")

    def update_entity(self, entity: EntityId, dt: float) -> None:
        raise UnimplementedBehaviorError(self.name, "update_entity")

    def process_entity(self, entity: EntityId) -> None:
        raise UnimplementedBehaviorError(self.name, "process_entity")

    def update(self, dt: float) -> None:
        # Members that leave mid-pass are skipped, late joiners wait a tick
        for entity in tuple(self._members):
            if entity in self._members:
                self.update_entity(entity, dt)

    def process(self) -> None:
        for entity in tuple(self._members):
            if entity in self._members:
                self.process_entity(entity)

"""Entity allocation service.

EntityAllocator is a stateful service owned by one store. Ids increase
monotonically and are never handed out twice.
"""

from __future__ import annotations

from ringecs.core.identity import MAX_ENTITY_ID, EntityId


class EntityAllocator:
    """Allocates entity ids and tracks which of them are alive.

    Args:
        start: First id to hand out (default 1).
    """

    def __init__(self, start: int = 1):
        self._next_id = start
        self._alive: dict[EntityId, None] = {}

    def allocate(self) -> EntityId:
        """Allocate the next entity id and mark it alive.

        Raises:
            OverflowError: If the signed 64-bit id space is exhausted.
        """
        if self._next_id > MAX_ENTITY_ID:
            raise OverflowError("Entity id space exhausted")
        entity = EntityId(self._next_id)
        self._next_id += 1
        self._alive[entity] = None
        return entity

    def deallocate(self, entity: EntityId) -> None:
        """Mark an entity destroyed. Its id is never reused.

        Raises:
            ValueError: If the entity is not alive.
        """
        if entity not in self._alive:
            raise ValueError(f"Cannot deallocate entity {entity}: not alive")
        del self._alive[entity]

    def is_alive(self, entity: EntityId) -> bool:
        return entity in self._alive

    def alive(self) -> tuple[EntityId, ...]:
        """Alive entities in creation order."""
        return tuple(self._alive)

    def __len__(self) -> int:
        return len(self._alive)

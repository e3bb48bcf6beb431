"""Error taxonomy for the entity/component data model.

All errors are raised synchronously at the offending call and are never
retried or corrected by the store. Missing subscribers are never an error.
"""

from __future__ import annotations

from typing import Any


class RingError(Exception):
    """Base class for ringecs data model errors."""


class UnknownEntityError(RingError, KeyError):
    """Raised when operating on an entity that is not alive.

    Attributes:
        entity: The entity id or name that could not be resolved.
    """

    def __init__(self, entity: Any) -> None:
        self.entity = entity
        super().__init__(f"Entity {entity!r} does not exist")

    def __str__(self) -> str:
        return str(self.args[0])


class DuplicateNameError(RingError, ValueError):
    """Raised when creating an entity with a name bound to another entity."""

    def __init__(self, name: str, owner: Any) -> None:
        self.name = name
        self.owner = owner
        super().__init__(f"Entity name {name!r} is already bound to entity {owner}")


class DuplicateComponentError(RingError):
    """Raised when attaching a component that is already attached."""

    def __init__(self, entity: Any, component: str) -> None:
        self.entity = entity
        self.component = component
        super().__init__(f"Component {component!r} is already attached to entity {entity}")


class MissingComponentError(RingError):
    """Raised when changing or removing a component that is not attached."""

    def __init__(self, entity: Any, component: str) -> None:
        self.entity = entity
        self.component = component
        super().__init__(f"Component {component!r} is not attached to entity {entity}")


class UnimplementedBehaviorError(RingError, NotImplementedError):
    """Raised when a behavior unit is driven without a required hook."""

    def __init__(self, behavior: str, hook: str) -> None:
        self.behavior = behavior
        self.hook = hook
        super().__init__(f"{behavior}.{hook} must be implemented")

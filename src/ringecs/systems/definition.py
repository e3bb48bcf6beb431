"""Build systems from definition tables.

A SystemDefinition enumerates which hooks a behavior provides. The builders
fill in every missing hook: optional hooks become no-ops and required hooks
raise UnimplementedBehaviorError when the world drives them. Each hook
receives the built system as its first argument.

Usage:
    counter = make_system(
        SystemDefinition(
            name="counter",
            data={"ticks": 0},
            update=lambda system, dt: system.data.update(ticks=system.data["ticks"] + 1),
            process=lambda system: None,
        )
    )

    dying = make_entity_system(
        SystemDefinition(
            matches=lambda system, e: (system.world.get_component(e, "health", "hp") or 1) <= 0,
            update_entity=lambda system, e, dt: system.world.destroy_entity(e),
            process_entity=lambda system, e: None,
        )
    )
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from ringecs.core.errors import UnimplementedBehaviorError
from ringecs.core.identity import EntityId
from ringecs.systems.base import System
from ringecs.systems.entity import EntitySystem
from ringecs.systems.event import EventSystem

type Hook = Callable[..., Any]

HOOK_NAMES = (
    "initialize",
    "destroy",
    "update",
    "process",
    "matches",
    "update_entity",
    "process_entity",
)


@dataclass(frozen=True, slots=True)
class SystemDefinition:
    """Hooks and initial data of a behavior unit.

    Attributes:
        name: Display name of the built system (defaults to its class name).
        data: Initial per-instance state, deep copied into `system.data`.
        initialize: (system) -> None, run when added to a world.
        destroy: (system) -> None, run when removed from a world.
        update: (system, dt) -> None, first tick phase.
        process: (system) -> None, second tick phase.
        listeners: subject -> (system, *args) callbacks for event systems.
        matches: (system, entity) -> bool, membership predicate for entity systems.
        update_entity: (system, entity, dt) -> None, per member in the update phase.
        process_entity: (system, entity) -> None, per member in the process phase.
    """

    name: str | None = None
    data: Mapping[str, Any] = field(default_factory=dict)
    initialize: Hook | None = None
    destroy: Hook | None = None
    update: Hook | None = None
    process: Hook | None = None
    listeners: Mapping[str, Hook] = field(default_factory=dict)
    matches: Hook | None = None
    update_entity: Hook | None = None
    process_entity: Hook | None = None

    def provided_hooks(self) -> frozenset[str]:
        """Names of the hooks this definition implements."""
        return frozenset(
            f.name for f in fields(self) if f.name in HOOK_NAMES and getattr(self, f.name) is not None
        )


def _noop(system: System, *args: Any) -> None:
    return None


def _unimplemented(hook: str) -> Hook:
    def raise_unimplemented(system: System, *args: Any) -> Any:
        raise UnimplementedBehaviorError(system.name, hook)

    return raise_unimplemented


def _resolve_hooks(definition: SystemDefinition, required: frozenset[str]) -> dict[str, Hook]:
    hooks: dict[str, Hook] = {}
    for hook in HOOK_NAMES:
        provided = getattr(definition, hook)
        if provided is not None:
            hooks[hook] = provided
        elif hook in required:
            hooks[hook] = _unimplemented(hook)
        else:
            hooks[hook] = _noop
    return hooks


class _DefinedHooks:
    """Lifecycle hooks dispatched to a definition table."""

    definition: SystemDefinition
    data: dict[str, Any]
    _hooks: dict[str, Hook]

    def _bind_definition(self, definition: SystemDefinition, required: frozenset[str]) -> None:
        self.definition = definition
        self.data = copy.deepcopy(dict(definition.data))
        self._hooks = _resolve_hooks(definition, required)

    @property
    def name(self) -> str:
        return self.definition.name or type(self).__name__

    def initialize(self) -> None:
        self._hooks["initialize"](self)

    def destroy(self) -> None:
        self._hooks["destroy"](self)


class DefinedSystem(_DefinedHooks, System):
    """System built from a definition. update and process are required."""

    def __init__(self, definition: SystemDefinition) -> None:
        super().__init__()
        self._bind_definition(definition, frozenset({"update", "process"}))

    def update(self, dt: float) -> None:
        self._hooks["update"](self, dt)

    def process(self) -> None:
        self._hooks["process"](self)


class DefinedEventSystem(_DefinedHooks, EventSystem):
    """Event system built from a definition. Only listeners are needed."""

    def __init__(self, definition: SystemDefinition) -> None:
        super().__init__()
        self._bind_definition(definition, frozenset())
        self.listeners = dict(definition.listeners)

    def update(self, dt: float) -> None:
        self._hooks["update"](self, dt)

    def process(self) -> None:
        self._hooks["process"](self)


class DefinedEntitySystem(_DefinedHooks, EntitySystem):
    """Entity system built from a definition.

    matches, update_entity and process_entity are required; update and
    process, when given, run after the per-entity pass.
    """

    def __init__(self, definition: SystemDefinition) -> None:
        super().__init__()
        self._bind_definition(
            definition, frozenset({"matches", "update_entity", "process_entity"})
        )

    def matches(self, entity: EntityId) -> bool:
        return bool(self._hooks["matches"](self, entity))

    def update_entity(self, entity: EntityId, dt: float) -> None:
        self._hooks["update_entity"](self, entity, dt)

    def process_entity(self, entity: EntityId) -> None:
        self._hooks["process_entity"](self, entity)

    def update(self, dt: float) -> None:
        super().update(dt)
        self._hooks["update"](self, dt)

    def process(self) -> None:
        super().process()
        self._hooks["process"](self)


def make_system(definition: SystemDefinition | None = None, **hooks: Any) -> DefinedSystem:
    """Build a System from a definition or keyword hooks."""
    return DefinedSystem(_definition(definition, hooks))


def make_event_system(
    definition: SystemDefinition | None = None, **hooks: Any
) -> DefinedEventSystem:
    """Build an EventSystem from a definition or keyword hooks."""
    return DefinedEventSystem(_definition(definition, hooks))


def make_entity_system(
    definition: SystemDefinition | None = None, **hooks: Any
) -> DefinedEntitySystem:
    """Build an EntitySystem from a definition or keyword hooks."""
    return DefinedEntitySystem(_definition(definition, hooks))


def _definition(definition: SystemDefinition | None, hooks: dict[str, Any]) -> SystemDefinition:
    if definition is not None and hooks:
        raise TypeError("Pass either a SystemDefinition or keyword hooks, not both")
    return definition if definition is not None else SystemDefinition(**hooks)

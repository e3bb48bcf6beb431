"""Behavior units: plain, event-driven and entity systems, and their builders."""

from ringecs.systems.base import BehaviorState, System
from ringecs.systems.definition import (
    DefinedEntitySystem,
    DefinedEventSystem,
    DefinedSystem,
    SystemDefinition,
    make_entity_system,
    make_event_system,
    make_system,
)
from ringecs.systems.entity import EntitySystem
from ringecs.systems.event import EventSystem, listen

__all__ = [
    # Behavior units
    "System",
    "EventSystem",
    "EntitySystem",
    "BehaviorState",
    "listen",
    # Builders
    "SystemDefinition",
    "make_system",
    "make_event_system",
    "make_entity_system",
    "DefinedSystem",
    "DefinedEventSystem",
    "DefinedEntitySystem",
]

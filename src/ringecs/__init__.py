"""ringecs: entity component system with subject-addressed change notifications.

Usage:
    from ringecs import EntitySystem, World

    class Dying(EntitySystem):
        def matches(self, entity):
            hp = self.world.get_component(entity, "health", "hp")
            return hp is not None and hp <= 0

        def update_entity(self, entity, dt):
            self.world.destroy_entity(entity)

        def process_entity(self, entity):
            pass

    world = World()
    world.add_system(Dying(), "dying")
    hero = world.create_entity("hero", {"health": {"hp": 110}})
    world.subscribe("#hero.-", lambda entity: print("hero fell"))
    world.set_component(hero, "health", "hp", 0)  # hero joins Dying
    world.update(1 / 60)                          # hero is destroyed
    world.process()
"""

import logging

__version__ = "0.1.0"

# Core primitives
from ringecs.core import (
    PRESENT,
    DuplicateComponentError,
    DuplicateNameError,
    EntityId,
    MissingComponentError,
    RingError,
    UnimplementedBehaviorError,
    UnknownEntityError,
    canonicalize,
    parse,
)

# Message bus
from ringecs.bus import MessageBus, Subscription

# Configuration
from ringecs.config import WorldSettings

# Scheduling
from ringecs.scheduling import ExecutionStrategy, PhasedScheduler

# Storage
from ringecs.storage import ComponentStore, Storage

# Systems
from ringecs.systems import (
    BehaviorState,
    EntitySystem,
    EventSystem,
    System,
    SystemDefinition,
    listen,
    make_entity_system,
    make_event_system,
    make_system,
)

# World
from ringecs.world import World

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Core
    "EntityId",
    "PRESENT",
    "parse",
    "canonicalize",
    # Errors
    "RingError",
    "UnknownEntityError",
    "DuplicateNameError",
    "DuplicateComponentError",
    "MissingComponentError",
    "UnimplementedBehaviorError",
    # Bus
    "MessageBus",
    "Subscription",
    # Storage
    "Storage",
    "ComponentStore",
    # Systems
    "System",
    "EventSystem",
    "EntitySystem",
    "BehaviorState",
    "listen",
    "SystemDefinition",
    "make_system",
    "make_event_system",
    "make_entity_system",
    # Scheduling
    "PhasedScheduler",
    "ExecutionStrategy",
    # World
    "World",
    "WorldSettings",
]

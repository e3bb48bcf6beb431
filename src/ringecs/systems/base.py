"""Behavior unit base class.

Usage:
    class Gravity(System):
        def update(self, dt):
            for entity in self.world.query("velocity"):
                vy = self.world.get_component(entity, "velocity", "y")
                self.world.set_component(entity, "velocity", "y", vy - 9.8 * dt)

        def process(self):
            pass

    world.add_system(Gravity())

Lifecycle: CONSTRUCTED -> INITIALIZED (added to a world) -> DESTROYED
(removed from it). A destroyed system cannot be added again.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import TYPE_CHECKING, Any

from ringecs.bus import Subject, Subscription
from ringecs.core.errors import UnimplementedBehaviorError
from ringecs.core.subject import to_tokens
from ringecs.core.types import Callback

if TYPE_CHECKING:
    from ringecs.world.world import World

logger = logging.getLogger(__name__)


class BehaviorState(Enum):
    """Lifecycle state of a behavior unit."""

    CONSTRUCTED = auto()
    INITIALIZED = auto()
    DESTROYED = auto()


class System:
    """Ordered per-tick behavior with lifecycle hooks.

    Override `update(dt)` and `process()`; both are required. `initialize()`
    and `destroy()` are optional and run once when the system is added to
    and removed from a world. Subscriptions made through `self.subscribe()`
    are cancelled automatically on removal.
    """

    def __init__(self) -> None:
        self.world: World | None = None
        self.state = BehaviorState.CONSTRUCTED
        self._subscriptions: list[Subscription] = []

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def active(self) -> bool:
        return self.state is BehaviorState.INITIALIZED

    def __repr__(self) -> str:
        return f"<{self.name} {self.state.name.lower()}>"

    # Lifecycle driven by World

    def attach(self, world: World) -> None:
        """Bind to a world and run setup, then initialize().

        Raises:
            ValueError: If the system was already added to a world.
        """
        if self.state is not BehaviorState.CONSTRUCTED:
            raise ValueError(f"{self.name} cannot be added to a world while {self.state.name}")
        self.world = world
        try:
            self._setup()
            self.initialize()
        except BaseException:
            self._teardown()
            self.world = None
            raise
        self.state = BehaviorState.INITIALIZED
        logger.debug("Initialized %s", self.name)

    def detach(self) -> None:
        """Cancel subscriptions and run destroy(). Idempotent."""
        if self.state is not BehaviorState.INITIALIZED:
            return
        self.state = BehaviorState.DESTROYED
        try:
            self._teardown()
        finally:
            self.destroy()
        logger.debug("Destroyed %s", self.name)

    def _setup(self) -> None:
        """Framework setup run before initialize(). Subclasses extend this."""

    def _teardown(self) -> None:
        for subscription in self._subscriptions:
            subscription.cancel()
        self._subscriptions.clear()

    # Hooks

    def initialize(self) -> None:
        """Called once when added to a world."""

    def destroy(self) -> None:
        """Called once when removed from a world."""

    def update(self, dt: float) -> None:
        raise UnimplementedBehaviorError(self.name, "update")

    def process(self) -> None:
        raise UnimplementedBehaviorError(self.name, "process")

    # Bus convenience

    def _require_world(self) -> World:
        if self.world is None:
            raise RuntimeError(f"{self.name} is not attached to a world")
        return self.world

    def subscribe(self, subject: Subject, callback: Callback) -> Subscription:
        """Subscribe on the world's bus for as long as this system is attached."""
        subscription = self._require_world().subscribe(subject, callback)
        self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, subject: Subject | Subscription, callback: Callback | None = None) -> bool:
        """Cancel a subscription made with subscribe(). Idempotent."""
        world = self._require_world()
        if isinstance(subject, Subscription):
            handle = subject
        else:
            if callback is None:
                raise TypeError("unsubscribe() needs a callback unless given a Subscription")
            handle = Subscription(tokens=to_tokens(subject), callback=callback, bus=world.bus)
        if handle in self._subscriptions:
            self._subscriptions.remove(handle)
        return world.unsubscribe(handle)

    def publish(self, subject: Subject, *args: Any, **kwargs: Any) -> int:
        return self._require_world().publish(subject, *args, **kwargs)

"""Event systems: behavior units driven by bus notifications.

Usage:
    class DeathWatch(EventSystem):
        @listen("@health.~")
        def on_health_changed(self, entity, health):
            if health["hp"] <= 0:
                self.world.add_component(entity, "dead")

    # or with a listeners mapping (callables receive the system first)
    class Announcer(EventSystem):
        listeners = {"#.+": "on_spawn", "#.-": lambda system, entity: ...}

Declared listeners are subscribed when the system is added to a world and
unsubscribed when it is removed. update() and process() are optional.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from ringecs.core.types import Callback
from ringecs.systems.base import System

LISTEN_ATTR = "__ringecs_listen__"


def listen(*subjects: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Mark an EventSystem method as the subscriber for one or more subjects.

    Usage:
        @listen("+#", "-#")
        def on_entity_lifecycle(self, entity): ...
    """
    if not subjects:
        raise ValueError("listen() needs at least one subject")

    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        existing = getattr(fn, LISTEN_ATTR, ())
        setattr(fn, LISTEN_ATTR, (*existing, *subjects))
        return fn

    return decorator


class EventSystem(System):
    """System whose declared listeners are wired to the world's bus."""

    listeners: Mapping[str, Callback | str] = {}

    def _declared_listeners(self) -> Iterator[tuple[str, Callback]]:
        # @listen methods, base classes first, in definition order
        decorated: dict[str, tuple[str, ...]] = {}
        for klass in reversed(type(self).__mro__):
            for attr, member in vars(klass).items():
                subjects = getattr(member, LISTEN_ATTR, None)
                if subjects:
                    decorated[attr] = subjects
                elif attr in decorated:
                    del decorated[attr]
        for attr, subjects in decorated.items():
            method = getattr(self, attr)
            for subject in subjects:
                yield subject, method

        for subject, target in self.listeners.items():
            if isinstance(target, str):
                yield subject, getattr(self, target)
            else:
                yield subject, functools.partial(target, self)

    def _setup(self) -> None:
        super()._setup()
        for subject, callback in self._declared_listeners():
            self.subscribe(subject, callback)

    def update(self, dt: float) -> None:
        pass

    def process(self) -> None:
        pass

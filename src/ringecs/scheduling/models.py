"""Scheduling models: tick phases and the execution strategy protocol."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ringecs.systems import System


class Phase(Enum):
    """Tick phase. Every system's update finishes before any process starts."""

    UPDATE = "update"
    PROCESS = "process"


@runtime_checkable
class ExecutionStrategy(Protocol):
    """Protocol for pluggable system execution strategies.

    The strategy is injected into World and owns the ordered system list.
    """

    def register_system(self, system: System) -> None:
        """Append a system to the execution order."""
        ...

    def unregister_system(self, system: System) -> bool:
        """Remove a system. Returns True if it was registered."""
        ...

    @property
    def systems(self) -> tuple[System, ...]:
        """Registered systems in execution order."""
        ...

    def update(self, dt: float) -> None:
        """Run the update phase of every system."""
        ...

    def process(self) -> None:
        """Run the process phase of every system."""
        ...

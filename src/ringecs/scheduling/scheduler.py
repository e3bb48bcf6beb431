"""Two-phase system scheduler.

Usage:
    scheduler = PhasedScheduler()
    scheduler.register_system(physics)
    scheduler.register_system(renderer)
    scheduler.update(dt)   # physics.update, renderer.update
    scheduler.process()    # physics.process, renderer.process
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ringecs.scheduling.models import Phase

if TYPE_CHECKING:
    from ringecs.systems import System


class PhasedScheduler:
    """Runs systems in registration order, one full pass per phase.

    Each pass iterates a snapshot of the system list. A system removed
    during a pass is skipped if it has not run yet; a system added during a
    pass first runs in the next one.
    """

    def __init__(self) -> None:
        self._systems: list[System] = []
        self.current_phase: Phase | None = None
        self.tick_count = 0

    def register_system(self, system: System) -> None:
        """Append system to the execution order."""
        if system in self._systems:
            raise ValueError(f"{system.name} is already registered")
        self._systems.append(system)

    def unregister_system(self, system: System) -> bool:
        if system not in self._systems:
            return False
        self._systems.remove(system)
        return True

    def __contains__(self, system: object) -> bool:
        return system in self._systems

    @property
    def systems(self) -> tuple[System, ...]:
        return tuple(self._systems)

    def _run_phase(self, phase: Phase, *args: Any) -> None:
        self.current_phase = phase
        try:
            for system in tuple(self._systems):
                if system.active and system in self._systems:
                    getattr(system, phase.value)(*args)
        finally:
            self.current_phase = None

    def update(self, dt: float) -> None:
        """Run every system's update(dt)."""
        self._run_phase(Phase.UPDATE, dt)

    def process(self) -> None:
        """Run every system's process(), completing a tick."""
        self._run_phase(Phase.PROCESS)
        self.tick_count += 1

    def tick(self, dt: float) -> None:
        """Update pass followed by process pass."""
        self.update(dt)
        self.process()

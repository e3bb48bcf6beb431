"""System scheduling and execution."""

from ringecs.scheduling.models import ExecutionStrategy, Phase
from ringecs.scheduling.scheduler import PhasedScheduler

__all__ = [
    "PhasedScheduler",
    "ExecutionStrategy",
    "Phase",
]

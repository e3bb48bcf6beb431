"""World composition root.

Architecture Note:
    world/ is the stateful service layer that owns the store, the bus and
    the scheduler. Unlike core/ (stateless primitives), it maintains
    runtime state and drives the two-phase tick.
"""

from ringecs.world.world import World

__all__ = [
    "World",
]

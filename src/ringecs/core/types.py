"""Core type definitions for ringecs."""

from collections.abc import Callable
from typing import Any, Final

PRESENT: Final = True
"""Value stored for a component attached without data (a tag component)."""

type ComponentRecord = dict[str, Any]

type ComponentValue = ComponentRecord | bool
"""A component is either a flat key/value record or the `PRESENT` sentinel."""

type Callback = Callable[..., Any]
"""Subscriber signature: receives the positional and keyword args given to publish()."""

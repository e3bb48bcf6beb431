"""Subscription handle returned by the message bus."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ringecs.core.subject import Tokens, format_subject
from ringecs.core.types import Callback

if TYPE_CHECKING:
    from ringecs.bus.bus import MessageBus


@dataclass(frozen=True, slots=True)
class Subscription:
    """A (tokens, callback) registration on one bus.

    Handles compare equal when they name the same path and callback, so a
    handle can be rebuilt from the subject it was created with.
    """

    tokens: Tokens
    callback: Callback
    bus: MessageBus | None = field(default=None, compare=False, repr=False)

    @property
    def subject(self) -> str:
        return format_subject(self.tokens)

    def cancel(self) -> None:
        """Remove this registration from its bus. Safe to call repeatedly."""
        if self.bus is not None:
            self.bus.unsubscribe(self)

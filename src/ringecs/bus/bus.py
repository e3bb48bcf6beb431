"""Subject-addressed publish/subscribe bus.

Usage:
    bus = MessageBus()

    def on_health_changed(entity, value):
        ...

    handle = bus.subscribe("@health.~", on_health_changed)
    bus.publish("@health.~", entity, {"hp": 90})
    handle.cancel()

Delivery is synchronous: publish() returns after every subscriber has run.
Subscribers may subscribe, unsubscribe or publish from inside a callback.
Each publish delivers to a snapshot of the subscribers taken before the
first callback runs, so a callback added mid-publish is not called by the
publish in flight.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, overload

from ringecs.bus.models import Subscription
from ringecs.bus.node import BusNode
from ringecs.core.subject import Tokens, format_subject, to_tokens
from ringecs.core.types import Callback

logger = logging.getLogger(__name__)

type Subject = str | Sequence[str]
"""A subject string or a pre-split token sequence."""


class MessageBus:
    """Topic trie with single-level wildcard matching at the final segment.

    Subjects may be given as strings (parsed with the subject grammar) or as
    token sequences, which skip parsing. Publishing to a subject nobody
    listens to is a silent no-op.
    """

    def __init__(self) -> None:
        self._root = BusNode()

    def subscribe(self, subject: Subject, callback: Callback) -> Subscription:
        """Register callback at the node addressed by subject.

        Subscribing the same callback to the same subject twice keeps a
        single registration.

        Returns:
            Handle that removes exactly this registration.
        """
        tokens = to_tokens(subject)
        self._root.add(tokens, callback)
        logger.debug("Subscribed %r to %s", callback, format_subject(tokens))
        return Subscription(tokens=tokens, callback=callback, bus=self)

    @overload
    def unsubscribe(self, subject: Subscription) -> bool: ...

    @overload
    def unsubscribe(self, subject: Subject, callback: Callback) -> bool: ...

    def unsubscribe(self, subject: Subject | Subscription, callback: Callback | None = None) -> bool:
        """Remove a registration. Idempotent.

        Args:
            subject: Subject, token sequence or Subscription handle.
            callback: Callback to remove. Required unless a handle is given.

        Returns:
            True if a registration was removed, False if none existed.
        """
        if isinstance(subject, Subscription):
            tokens, callback = subject.tokens, subject.callback
        else:
            if callback is None:
                raise TypeError("unsubscribe() needs a callback unless given a Subscription")
            tokens = to_tokens(subject)

        removed = self._root.remove(tokens, callback)
        if removed:
            logger.debug("Unsubscribed %r from %s", callback, format_subject(tokens))
        return removed

    def publish(self, subject: Subject, *args: Any, **kwargs: Any) -> int:
        """Deliver args to every subscriber matching subject.

        Callbacks at the exact node and at the sibling `*` node of the final
        token are called, wildcard subscribers first, each group in
        subscription order. Exceptions raised by a callback propagate.

        Returns:
            Number of callbacks invoked.
        """
        tokens = to_tokens(subject)
        targets = self._root.collect(tokens)
        if targets and logger.isEnabledFor(logging.DEBUG):
            logger.debug("Publishing %s to %d subscriber(s)", format_subject(tokens), len(targets))
        for callback in targets:
            callback(*args, **kwargs)
        return len(targets)

    def subscriber_count(self, subject: Subject | None = None) -> int:
        """Count registrations at exactly subject, or in the whole trie if None."""
        if subject is None:
            return self._root.count()
        node = self._root.find(to_tokens(subject))
        return 0 if node is None else len(node.listeners)

    def is_subscribed(self, subject: Subject, callback: Callback) -> bool:
        node = self._root.find(to_tokens(subject))
        return node is not None and callback in node.listeners

    def clear(self) -> None:
        """Drop every registration."""
        self._root = BusNode()

    def node(self, tokens: Tokens) -> BusNode | None:
        """Trie node at tokens, for inspection."""
        return self._root.find(tokens)

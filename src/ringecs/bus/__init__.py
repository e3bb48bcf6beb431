"""Subject-addressed message bus: topic trie, subscriptions, publishing."""

from ringecs.bus.bus import MessageBus, Subject
from ringecs.bus.models import Subscription
from ringecs.bus.node import BusNode

__all__ = [
    "MessageBus",
    "Subject",
    "Subscription",
    "BusNode",
]

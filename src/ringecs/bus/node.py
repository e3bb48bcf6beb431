"""Topic trie node.

Each node owns its children exclusively and keeps the callbacks registered
at exactly its own path in subscription order.
"""

from __future__ import annotations

from collections.abc import Sequence

from ringecs.core.subject import WILDCARD
from ringecs.core.types import Callback


class BusNode:
    """One level of the subscription trie."""

    __slots__ = ("children", "listeners")

    def __init__(self) -> None:
        self.children: dict[str, BusNode] = {}
        # dict keys give an insertion-ordered set keyed by callback equality
        self.listeners: dict[Callback, None] = {}

    def is_empty(self) -> bool:
        return not self.children and not self.listeners

    def get_or_create_child(self, token: str) -> BusNode:
        node = self.children.get(token)
        if node is None:
            node = BusNode()
            self.children[token] = node
        return node

    def find(self, tokens: Sequence[str]) -> BusNode | None:
        """Follow tokens exactly. Returns None if any node is missing."""
        node: BusNode | None = self
        for token in tokens:
            node = node.children.get(token)
            if node is None:
                return None
        return node

    def add(self, tokens: Sequence[str], callback: Callback) -> None:
        node = self
        for token in tokens:
            node = node.get_or_create_child(token)
        node.listeners[callback] = None

    def remove(self, tokens: Sequence[str], callback: Callback) -> bool:
        """Remove a registration, pruning branches left empty.

        Returns:
            True if the callback was registered at that path.
        """
        path: list[tuple[BusNode, str]] = []
        node = self
        for token in tokens:
            child = node.children.get(token)
            if child is None:
                return False
            path.append((node, token))
            node = child

        if callback not in node.listeners:
            return False
        del node.listeners[callback]

        for parent, token in reversed(path):
            child = parent.children[token]
            if not child.is_empty():
                break
            del parent.children[token]
        return True

    def collect(self, tokens: Sequence[str]) -> list[Callback]:
        """Snapshot every callback a publish to `tokens` must reach.

        The sibling `*` node of the final token is matched as well, and its
        listeners come first. Wildcards never match above the final segment.
        """
        if not tokens:
            return list(self.listeners)

        parent = self.find(tokens[:-1])
        if parent is None:
            return []

        targets: list[Callback] = []
        final = tokens[-1]
        if final != WILDCARD:
            wildcard = parent.children.get(WILDCARD)
            if wildcard is not None:
                targets.extend(wildcard.listeners)
        exact = parent.children.get(final)
        if exact is not None:
            targets.extend(exact.listeners)
        return targets

    def count(self) -> int:
        """Total registrations in this subtree."""
        return len(self.listeners) + sum(child.count() for child in self.children.values())

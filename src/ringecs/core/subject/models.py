"""Subject tokens and reserved symbols.

Usage:
    from ringecs.core.subject import ENTITY_PREFIX, ADD_SUFFIX

    created = (ENTITY_PREFIX, ADD_SUFFIX)  # "#.+": any entity created
"""

from __future__ import annotations

type Tokens = tuple[str, ...]
"""Canonical token sequence produced by `parse()`."""

DELIMITER = "."

ENTITY_PREFIX = "#"
COMPONENT_PREFIX = "@"

ADD_SUFFIX = "+"
REMOVE_SUFFIX = "-"
CHANGE_SUFFIX = "~"
EVENT_SUFFIX = "!"

WILDCARD = "*"

PREFIXES = frozenset({ENTITY_PREFIX, COMPONENT_PREFIX})
MODIFIERS = frozenset({ADD_SUFFIX, REMOVE_SUFFIX, CHANGE_SUFFIX, EVENT_SUFFIX})
RESERVED_TOKENS = MODIFIERS | {WILDCARD}
SPLIT_CHARACTERS = frozenset({DELIMITER}) | PREFIXES

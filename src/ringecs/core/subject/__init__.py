"""Subject grammar: parsing, canonical form and reserved tokens."""

from ringecs.core.subject.grammar import (
    canonicalize,
    format_subject,
    parse,
    to_tokens,
    validate_identifier,
)
from ringecs.core.subject.models import (
    ADD_SUFFIX,
    CHANGE_SUFFIX,
    COMPONENT_PREFIX,
    DELIMITER,
    ENTITY_PREFIX,
    EVENT_SUFFIX,
    MODIFIERS,
    PREFIXES,
    REMOVE_SUFFIX,
    RESERVED_TOKENS,
    WILDCARD,
    Tokens,
)

__all__ = [
    # Grammar
    "parse",
    "canonicalize",
    "format_subject",
    "to_tokens",
    "validate_identifier",
    # Tokens
    "Tokens",
    "DELIMITER",
    "ENTITY_PREFIX",
    "COMPONENT_PREFIX",
    "ADD_SUFFIX",
    "REMOVE_SUFFIX",
    "CHANGE_SUFFIX",
    "EVENT_SUFFIX",
    "WILDCARD",
    "PREFIXES",
    "MODIFIERS",
    "RESERVED_TOKENS",
]

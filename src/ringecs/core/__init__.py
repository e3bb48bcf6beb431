"""Core functionalities: stateless primitives shared by every layer.

Architecture Note:
    core/ holds the subject grammar, identity types and error taxonomy.
    Nothing here owns runtime state. For stateful services, see bus/,
    storage/, systems/ and world/.
"""

from ringecs.core.errors import (
    DuplicateComponentError,
    DuplicateNameError,
    MissingComponentError,
    RingError,
    UnimplementedBehaviorError,
    UnknownEntityError,
)
from ringecs.core.identity import MAX_ENTITY_ID, EntityId, entity_token
from ringecs.core.subject import (
    ADD_SUFFIX,
    CHANGE_SUFFIX,
    COMPONENT_PREFIX,
    ENTITY_PREFIX,
    EVENT_SUFFIX,
    REMOVE_SUFFIX,
    WILDCARD,
    Tokens,
    canonicalize,
    format_subject,
    parse,
    to_tokens,
    validate_identifier,
)
from ringecs.core.types import PRESENT, Callback, ComponentRecord, ComponentValue

__all__ = [
    # Types
    "PRESENT",
    "Callback",
    "ComponentRecord",
    "ComponentValue",
    # Identity
    "EntityId",
    "MAX_ENTITY_ID",
    "entity_token",
    # Subject
    "Tokens",
    "parse",
    "canonicalize",
    "format_subject",
    "to_tokens",
    "validate_identifier",
    "ENTITY_PREFIX",
    "COMPONENT_PREFIX",
    "ADD_SUFFIX",
    "REMOVE_SUFFIX",
    "CHANGE_SUFFIX",
    "EVENT_SUFFIX",
    "WILDCARD",
    # Errors
    "RingError",
    "UnknownEntityError",
    "DuplicateNameError",
    "DuplicateComponentError",
    "MissingComponentError",
    "UnimplementedBehaviorError",
]

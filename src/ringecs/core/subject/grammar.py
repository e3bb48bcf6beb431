"""Subject parsing and canonicalization.

Subjects are dot-delimited strings. `#` and `@` scope the identifier that
follows them and become tokens of their own. A leading modifier is shorthand
for a trailing one:

    parse("+@health")          -> ("@", "health", "+")
    parse("@health.+")         -> ("@", "health", "+")
    parse("#42.@inventory.~")  -> ("#", "42", "@", "inventory", "~")
    parse("#.-")               -> ("#", "-")

Parsing never fails. Stray delimiters only produce fewer tokens.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ringecs.core.subject.models import (
    DELIMITER,
    MODIFIERS,
    PREFIXES,
    RESERVED_TOKENS,
    SPLIT_CHARACTERS,
    Tokens,
)

_MODIFIER_CHARACTERS = "".join(sorted(MODIFIERS))


def canonicalize(subject: str) -> str:
    """Rewrite leading modifier shorthand into trailing modifier segments.

    Leading modifiers are moved in the order they appear, so the result never
    starts with a modifier and canonicalizing twice changes nothing.

    Example:
        >>> canonicalize("+@health")
        '@health.+'
        >>> canonicalize("@health.~")
        '@health.~'
    """
    stripped = subject.lstrip(_MODIFIER_CHARACTERS)
    if len(stripped) == len(subject):
        return subject
    leading = subject[: len(subject) - len(stripped)]
    return DELIMITER.join([stripped, *leading])


def parse(subject: str) -> Tokens:
    """Split a subject string into its canonical token sequence.

    Args:
        subject: Human-authored subject string.

    Returns:
        Tuple of tokens. Scope prefixes (`#`, `@`) appear as standalone
        tokens immediately before the identifier they scope.
    """
    subject = canonicalize(subject)

    tokens: list[str] = []
    start = 0
    for index, char in enumerate(subject):
        if char not in SPLIT_CHARACTERS:
            continue
        if index > start:
            tokens.append(subject[start:index])
        if char in PREFIXES:
            tokens.append(char)
        start = index + 1
    if start < len(subject):
        tokens.append(subject[start:])
    return tuple(tokens)


def to_tokens(subject: str | Sequence[str]) -> Tokens:
    """Accept either a subject string or an already split token sequence."""
    if isinstance(subject, str):
        return parse(subject)
    return tuple(str(token) for token in subject)


def format_subject(tokens: Iterable[str]) -> str:
    """Render tokens back into a subject string.

    A scope prefix is glued to the identifier that follows it, so
    `("#", "42", "@", "hp", "~")` renders as `"#42.@hp.~"`.
    """
    segments: list[str] = []
    pending_prefix: str | None = None
    for token in tokens:
        if pending_prefix is not None:
            if token in PREFIXES or token in RESERVED_TOKENS:
                segments.append(pending_prefix)
                pending_prefix = None
            else:
                segments.append(pending_prefix + token)
                pending_prefix = None
                continue
        if token in PREFIXES:
            pending_prefix = token
        else:
            segments.append(token)
    if pending_prefix is not None:
        segments.append(pending_prefix)
    rendered = DELIMITER.join(segments)
    # A leading modifier would be read back as the trailing shorthand.
    if rendered and rendered[0] in MODIFIERS:
        rendered = DELIMITER + rendered
    return rendered


def validate_identifier(name: str, kind: str = "component") -> str:
    """Check that a name can be embedded in a subject as a single token.

    Args:
        name: Entity or component name.
        kind: "entity" or "component"; entity names may not be all digits
            since those would alias an entity-id token.

    Returns:
        The name, unchanged.

    Raises:
        ValueError: If the name is empty, contains a delimiter or scope
            prefix, or is a reserved token.
    """
    if not isinstance(name, str) or not name:
        raise ValueError(f"Invalid {kind} name: {name!r}")
    if any(char in SPLIT_CHARACTERS for char in name):
        raise ValueError(f"Invalid {kind} name {name!r}: may not contain '.', '@' or '#'")
    if name in RESERVED_TOKENS:
        raise ValueError(f"Invalid {kind} name {name!r}: reserved token")
    if kind == "entity" and name.isdigit():
        raise ValueError(f"Invalid entity name {name!r}: would alias an entity id")
    return name

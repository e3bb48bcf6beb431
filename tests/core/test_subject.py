"""Tests for the subject grammar.

Critical Invariants:
- Leading modifier shorthand equals the trailing form
- Scope prefixes become standalone tokens
- Parsing never fails and drops empty segments
- parse(s) == parse(canonicalize(s)) for every string
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ringecs.core.subject import canonicalize, format_subject, parse, validate_identifier

subject_text = st.text(alphabet="ab1.#@+-~!*", max_size=16)


@pytest.mark.parametrize(
    ("subject", "tokens"),
    [
        ("+@health", ("@", "health", "+")),
        ("@health.+", ("@", "health", "+")),
        ("#42.@inventory.~", ("#", "42", "@", "inventory", "~")),
        ("#.-", ("#", "-")),
        ("+#", ("#", "+")),
        ("-@", ("@", "-")),
        ("@health.*", ("@", "health", "*")),
        ("!alarm", ("alarm", "!")),
        ("plain.topic", ("plain", "topic")),
        ("#hero.@health.~", ("#", "hero", "@", "health", "~")),
    ],
)
def test_parse_examples(subject, tokens):
    assert parse(subject) == tokens


def test_leading_modifier_is_rewritten_as_trailing():
    """CRITICAL: '+@health' and '@health.+' denote the same subject."""
    assert parse("+@health") == parse("@health.+")
    assert parse("~#7") == parse("#7.~")


def test_empty_segments_are_dropped():
    assert parse("a..b") == ("a", "b")
    assert parse("..a.") == ("a",)
    assert parse("") == ()
    assert parse("...") == ()


def test_prefix_splits_without_dot():
    assert parse("a@b#c") == ("a", "@", "b", "#", "c")


def test_canonicalize_moves_every_leading_modifier():
    assert canonicalize("+@health") == "@health.+"
    assert canonicalize("+-x") == "x.+.-"
    assert canonicalize("@health.~") == "@health.~"
    assert canonicalize("+") == ".+"


@given(subject_text)
def test_parse_matches_canonical_form(subject):
    """CRITICAL: canonicalization never changes what a subject denotes."""
    assert parse(subject) == parse(canonicalize(subject))


@given(subject_text)
def test_canonicalize_is_idempotent(subject):
    once = canonicalize(subject)
    assert canonicalize(once) == once


@given(subject_text)
def test_formatted_tokens_parse_back(subject):
    tokens = parse(subject)
    assert parse(format_subject(tokens)) == tokens


def test_format_subject_glues_prefixes():
    assert format_subject(("#", "42", "@", "hp", "~")) == "#42.@hp.~"
    assert format_subject(("#", "+")) == "#.+"
    assert format_subject(("@", "health", "*")) == "@health.*"


@pytest.mark.parametrize("name", ["", "a.b", "@hp", "#1", "*", "+", "~"])
def test_validate_identifier_rejects_unsafe_names(name):
    with pytest.raises(ValueError):
        validate_identifier(name)


def test_validate_identifier_rejects_numeric_entity_names():
    assert validate_identifier("42") == "42"  # fine for components
    with pytest.raises(ValueError, match="alias an entity id"):
        validate_identifier("42", "entity")

"""Tests for user input escaping and parameter validation."""

from __future__ import annotations

import pytest

from armory.config import BLOCKED_CHARACTERS, DEFAULT_MODS, ITEM_TYPES
from armory.domain.filters import (
    escape_user_input,
    parse_numeric_term,
    validate_mod,
    validate_type,
)
from armory.errors import ValidationError

SAMPLES = [
    "",
    "vanilla",
    "ace'; db.dropDatabase(); '",
    '{"$gt": ""}',
    "back\\slash",
    "$$$;;;{{}}",
    "arifle_MX_F",
    "unicodé ✓ '$'",
]


@pytest.mark.parametrize("value", SAMPLES)
def test_escape_removes_every_blocked_character(value):
    escaped = escape_user_input(value)
    assert not set(escaped) & BLOCKED_CHARACTERS
    assert escaped == "".join(c for c in value if c not in BLOCKED_CHARACTERS)


@pytest.mark.parametrize("value", SAMPLES)
def test_escape_is_idempotent(value):
    once = escape_user_input(value)
    assert escape_user_input(once) == once


def test_escape_treats_none_as_empty():
    assert escape_user_input(None) == ""


def test_escape_keeps_ordinary_text():
    assert escape_user_input("ace'") == "ace"
    assert escape_user_input('{"$where": 1}') == "where: 1"


@pytest.mark.parametrize("mod", ["", *DEFAULT_MODS])
def test_validate_mod_accepts_supported_values(mod):
    assert validate_mod(mod, DEFAULT_MODS) == mod


def test_validate_mod_rejects_unknown_value():
    with pytest.raises(ValidationError) as excinfo:
        validate_mod("unsung", DEFAULT_MODS)

    message = str(excinfo.value)
    assert "(unsung)" in message
    assert "vanilla" in message and "immersioncigs" in message


@pytest.mark.parametrize("item_type", ["", *ITEM_TYPES])
def test_validate_type_accepts_known_categories(item_type):
    assert validate_type(item_type) == item_type


@pytest.mark.parametrize("item_type", ["Rifles", "primaries", "Vest"])
def test_validate_type_rejects_unknown_category(item_type):
    with pytest.raises(ValidationError, match=rf"\({item_type}\)"):
        validate_type(item_type)


def test_item_types_enumeration():
    assert len(ITEM_TYPES) == 24
    assert len(set(ITEM_TYPES)) == 24
    assert ITEM_TYPES[0] == "Primaries" and ITEM_TYPES[-1] == "Backpacks"


@pytest.mark.parametrize(
    ("term", "expected"),
    [
        ("5", 5),
        ("+7", 7),
        ("-3", -3),
        ("0042", 42),
        ("9223372036854775807", 2**63 - 1),
    ],
)
def test_parse_numeric_term_accepts_integers(term, expected):
    assert parse_numeric_term(term) == expected


@pytest.mark.parametrize(
    "term",
    ["rifle", "", " 5", "5 ", "1_000", "5.0", "1e3", "9223372036854775808", "٣"],
)
def test_parse_numeric_term_rejects_text(term):
    assert parse_numeric_term(term) is None

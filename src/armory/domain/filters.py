"""Sanitisation and validation of user-supplied query parameters."""

from __future__ import annotations

import logging
import re
from collections.abc import Collection

from armory.config import BLOCKED_CHARACTERS, ITEM_TYPES
from armory.errors import ValidationError

logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def escape_user_input(value: str | None) -> str:
    """Strip every query-significant character from ``value``.

    ``None`` is treated as an empty string. The result never contains a
    character from ``BLOCKED_CHARACTERS`` and escaping it again is a no-op.
    """

    if not value:
        return ""
    logger.debug("escaping user input string: %r", value)
    return "".join(char for char in value if char not in BLOCKED_CHARACTERS)


def validate_mod(mod: str, supported_mods: Collection[str]) -> str:
    """Return ``mod`` unchanged if it is empty or a supported mod."""

    if mod and mod not in supported_mods:
        raise ValidationError(
            f"Unidentified mod ({mod}). Available values are {list(supported_mods)}"
        )
    return mod


def validate_type(item_type: str) -> str:
    """Return ``item_type`` unchanged if it is empty or a known item category."""

    if item_type and item_type not in ITEM_TYPES:
        raise ValidationError(
            f"Unidentified object type ({item_type}). Available values are {list(ITEM_TYPES)}"
        )
    return item_type


def parse_numeric_term(term: str) -> int | None:
    """Interpret ``term`` as a signed 64-bit integer, or return ``None``.

    Only an optional sign followed by ASCII digits is accepted; surrounding
    whitespace, underscores and out-of-range values all count as text.
    """

    if not _INTEGER_RE.fullmatch(term):
        return None
    number = int(term)
    if not _INT64_MIN <= number <= _INT64_MAX:
        return None
    return number

"""Tokenisation rules for the collection text index."""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Any

_TOKEN_RE = re.compile(r"\w+", re.UNICODE)

# Fields never fed to the text index.
UNINDEXED_FIELDS = frozenset({"_id"})


def tokenize(text: str) -> list[str]:
    """Split ``text`` into lowercase word tokens."""

    return _TOKEN_RE.findall(text.lower())


def _string_values(value: Any) -> Iterator[str]:
    if isinstance(value, str):
        yield value
    elif isinstance(value, dict):
        for nested in value.values():
            yield from _string_values(nested)
    elif isinstance(value, list | tuple):
        for nested in value:
            yield from _string_values(nested)


def document_tokens(document: dict[str, Any]) -> set[str]:
    """Return the distinct tokens of every string value in ``document``.

    Keys are not indexed, only values; nested lists and objects are walked.
    """

    tokens: set[str] = set()
    for key, value in document.items():
        if key in UNINDEXED_FIELDS:
            continue
        for text in _string_values(value):
            tokens.update(tokenize(text))
    return tokens


def parse_text_query(query: str) -> tuple[set[str], set[str]]:
    """Split a search string into (wanted, excluded) token sets.

    Words prefixed with ``-`` exclude matching documents; all other words are
    alternatives, any one of which is enough for a match.
    """

    wanted: set[str] = set()
    excluded: set[str] = set()
    for word in query.split():
        if word.startswith("-") and len(word) > 1:
            excluded.update(tokenize(word[1:]))
        else:
            wanted.update(tokenize(word))
    return wanted - excluded, excluded

"""Result shaping shared by every listing endpoint.

Documents are gathered in store order, optionally cut down to one page,
then de-duplicated, serialised and sorted by their serialised text. The
page window is applied before sorting, so a page holds the n-th slice of
store order rather than of the sorted output.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from armory.errors import ValidationError

# Page size meaning "return everything".
UNBOUNDED = -1


def to_canonical_json(document: dict[str, Any]) -> str:
    """Serialise a document with sorted keys."""

    return json.dumps(document, sort_keys=True, ensure_ascii=False, allow_nan=False)


def page_offset(page: int, size: int) -> int:
    """Number of documents to skip for ``page`` of ``size`` documents.

    Page 0 always starts at the first document, whatever the size.
    """

    if page == 0:
        return 0
    return size * page


def _check_window(page: int, size: int) -> None:
    if page < 0:
        raise ValidationError(f"Invalid page ({page}). Pages start at 0")
    if size < UNBOUNDED:
        raise ValidationError(
            f"Invalid page size ({size}). Use a positive size or {UNBOUNDED} for all results"
        )


def render_page(
    documents: Sequence[dict[str, Any]], page: int = 0, size: int = UNBOUNDED
) -> list[str]:
    """Return the requested page as sorted, distinct canonical JSON strings."""

    _check_window(page, size)
    if size != UNBOUNDED:
        skip = page_offset(page, size)
        documents = documents[skip : skip + size]
    return sorted({to_canonical_json(document) for document in documents})

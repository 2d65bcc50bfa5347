"""Read-only query service over the per-mod collections."""

from __future__ import annotations

import logging
from collections.abc import Collection

from armory.domain.filters import (
    escape_user_input,
    parse_numeric_term,
    validate_mod,
    validate_type,
)
from armory.domain.pagination import UNBOUNDED, render_page
from armory.errors import NotFoundError
from armory.interfaces import Document, IDocumentCollection, IDocumentDatabase

logger = logging.getLogger(__name__)

COLLECTION_PREFIX = "data."

# Numeric fields compared against a search term that parses as an integer.
NUMERIC_SEARCH_FIELDS: tuple[str, ...] = ("count", "weight")


def collection_name_for(mod: str) -> str:
    """Return the collection holding the items of ``mod``."""

    return f"{COLLECTION_PREFIX}{mod}"


class QueryService:
    """Answer class listing and search requests.

    Every user-supplied string is escaped before it reaches the store, and
    mod/type filters are checked against their allow-lists.
    """

    def __init__(self, database: IDocumentDatabase, supported_mods: Collection[str]) -> None:
        self._database = database
        self._supported_mods = tuple(supported_mods)

    def list_classes(
        self,
        mod: str | None = None,
        item_type: str | None = None,
        page: int = 0,
        size: int = UNBOUNDED,
    ) -> list[str]:
        """List items, optionally restricted to one mod and/or one item type.

        Args:
            mod: Mod whose collection is read; empty or ``None`` reads all of them
            item_type: Exact ``type`` value to keep; empty or ``None`` keeps all
            page: Zero-based page number
            size: Page size, or ``UNBOUNDED`` for every result

        Returns:
            Canonical JSON strings of the matching items, sorted

        Raises:
            ValidationError: If the mod, type or page window is not allowed
            NotFoundError: If a listed collection disappears while reading
        """
        logger.info(
            "listing classes with mod=%r type=%r page=%s size=%s", mod, item_type, page, size
        )
        filtered_mod = validate_mod(escape_user_input(mod), self._supported_mods)
        filtered_type = validate_type(escape_user_input(item_type))

        documents: list[Document] = []
        target = collection_name_for(filtered_mod) if filtered_mod else None
        for name in self._database.list_collection_names():
            if target is not None and name != target:
                continue
            documents.extend(self._filter_by_type(self._retrieve_collection(name), filtered_type))
            if target is not None:
                break

        return render_page(documents, page, size)

    def search(self, term: str, page: int = 0, size: int = UNBOUNDED) -> list[str]:
        """Search every collection for ``term``.

        A term that reads as an integer is matched exactly against the
        numeric fields; any other term goes through the text index.
        """
        logger.info("searching classes with term=%r page=%s size=%s", term, page, size)
        filtered_term = escape_user_input(term)
        number = parse_numeric_term(filtered_term)

        documents: list[Document] = []
        for name in self._database.list_collection_names():
            collection = self._retrieve_collection(name)
            if number is not None:
                documents.extend(collection.find_any_eq(NUMERIC_SEARCH_FIELDS, number))
            else:
                documents.extend(collection.find_text(filtered_term))

        return render_page(documents, page, size)

    def _retrieve_collection(self, name: str) -> IDocumentCollection:
        if name not in self._database.list_collection_names():
            raise NotFoundError(f"{name} does not exist or is an unknown class type")
        return self._database.get_collection(name)

    @staticmethod
    def _filter_by_type(collection: IDocumentCollection, item_type: str) -> list[Document]:
        if not item_type:
            return collection.find()
        return collection.find_eq("type", item_type)

"""Document Store Protocol Interfaces.

This module defines the minimal contract the query and reload services
need from a document database: collection listing, lookup, CRUD and a
text index capability.
"""

from collections.abc import Iterable, Sequence
from typing import Any, Protocol

Document = dict[str, Any]


class ITextSearchable(Protocol):
    """Protocol for collections that maintain a full-text index."""

    def create_text_index(self) -> None:
        """Build (or rebuild) a text index over every string value in the collection."""
        ...

    def find_text(self, query: str) -> list[Document]:
        """Return documents matching any term of ``query``.

        Raises:
            NotFoundError: If the collection has no text index.
        """
        ...


class IDocumentCollection(ITextSearchable, Protocol):
    """Protocol for a single named collection of documents."""

    name: str

    def find(self) -> list[Document]:
        """Return every document in the collection."""
        ...

    def find_eq(self, field: str, value: Any) -> list[Document]:
        """Return documents whose ``field`` equals ``value``."""
        ...

    def find_any_eq(self, fields: Sequence[str], value: Any) -> list[Document]:
        """Return documents where at least one of ``fields`` equals ``value``."""
        ...

    def insert_one(self, document: Document) -> str:
        """Insert a document and return its ``_id``."""
        ...

    def insert_many(self, documents: Iterable[Document]) -> list[str]:
        """Insert documents and return their ``_id`` values."""
        ...

    def delete_many(self) -> int:
        """Delete every document and return the number removed."""
        ...

    def drop_indexes(self) -> None:
        """Remove the collection's text index."""
        ...

    def estimated_document_count(self) -> int:
        """Return the number of documents in the collection."""
        ...


class IDocumentDatabase(Protocol):
    """Protocol for a database holding named collections."""

    name: str

    def list_collection_names(self) -> list[str]:
        """Return the names of all existing collections."""
        ...

    def get_collection(self, name: str) -> IDocumentCollection:
        """Return a handle to ``name``; the collection is created on first write."""
        ...

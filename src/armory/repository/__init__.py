"""Document store implementation."""

from armory.repository.document_store import (
    DocumentClient,
    DocumentCollection,
    DocumentDatabase,
    new_object_id,
)

__all__ = [
    "DocumentClient",
    "DocumentCollection",
    "DocumentDatabase",
    "new_object_id",
]

"""Protocol-based interfaces for the document store.

Services depend on these protocols rather than the SQLAlchemy-backed
implementation, so tests can substitute lightweight fakes.
"""

from armory.interfaces.store import (
    Document,
    IDocumentCollection,
    IDocumentDatabase,
    ITextSearchable,
)

__all__ = [
    "Document",
    "IDocumentCollection",
    "IDocumentDatabase",
    "ITextSearchable",
]

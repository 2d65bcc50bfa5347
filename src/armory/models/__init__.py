"""SQLAlchemy models for the document store."""

from .base import Base, TimestampCreatedMixin
from .document import CollectionRecord, DocumentRecord, TextTokenRecord

__all__ = [
    "Base",
    "CollectionRecord",
    "DocumentRecord",
    "TextTokenRecord",
    "TimestampCreatedMixin",
]

"""Storage models backing the document database.

A database file holds any number of named collections. Each document row
keeps the original item as a JSON body; text index tokens live in their own
table so a collection's index can be dropped and rebuilt independently.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, Boolean, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampCreatedMixin


class CollectionRecord(Base, TimestampCreatedMixin):
    """A named collection and whether it currently carries a text index."""

    __tablename__ = "collections"

    name: Mapped[str] = mapped_column(String(255), primary_key=True)
    text_indexed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    documents: Mapped[list[DocumentRecord]] = relationship(
        back_populates="collection_record",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<CollectionRecord(name='{self.name}', text_indexed={self.text_indexed})>"


class DocumentRecord(Base, TimestampCreatedMixin):
    """One stored document."""

    __tablename__ = "documents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    collection: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("collections.name", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    doc_id: Mapped[str] = mapped_column(String(24), nullable=False, index=True)
    body: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    collection_record: Mapped[CollectionRecord] = relationship(back_populates="documents")
    tokens: Mapped[list[TextTokenRecord]] = relationship(
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<DocumentRecord(id={self.id}, collection='{self.collection}')>"


class TextTokenRecord(Base):
    """A single (document, token) entry of a collection's text index."""

    __tablename__ = "text_tokens"
    __table_args__ = (Index("ix_text_tokens_collection_token", "collection", "token"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    document_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("documents.id", ondelete="CASCADE"), nullable=False, index=True
    )
    collection: Mapped[str] = mapped_column(String(255), nullable=False)
    token: Mapped[str] = mapped_column(String(255), nullable=False)

    document: Mapped[DocumentRecord] = relationship(back_populates="tokens")

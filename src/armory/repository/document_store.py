"""SQLite-backed document database.

Each logical database lives in its own SQLite file (or in-memory engine),
holding named collections of JSON documents plus a per-collection
inverted text index.
"""

from __future__ import annotations

import logging
import secrets
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from sqlalchemy import Engine, and_, create_engine, delete, event, func, or_, select, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from armory.errors import ConnectivityError, NotFoundError
from armory.interfaces import Document
from armory.models import Base, CollectionRecord, DocumentRecord, TextTokenRecord
from armory.repository.text_index import document_tokens, parse_text_query

logger = logging.getLogger(__name__)

DATABASE_PLACEHOLDER = "{database}"


def new_object_id() -> str:
    """Return a fresh 24-character hexadecimal document identifier."""

    return secrets.token_hex(12)


def _configure_sqlite(dbapi_connection: Any, connection_record: Any) -> None:  # noqa: ARG001
    """Enable WAL mode and foreign key enforcement on every new connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _field_equals(field: str, value: Any):
    path = f'$."{field}"'
    condition = func.json_extract(DocumentRecord.body, path) == value
    # json_extract reports JSON true/false as 1/0, so pin the stored JSON type.
    if isinstance(value, bool):
        json_types: tuple[str, ...] = ("true", "false")
    elif isinstance(value, int | float):
        json_types = ("integer", "real")
    else:
        return condition
    return and_(condition, func.json_type(DocumentRecord.body, path).in_(json_types))


class DocumentCollection:
    """A named collection inside a :class:`DocumentDatabase`."""

    def __init__(self, database: DocumentDatabase, name: str) -> None:
        self.database = database
        self.name = name

    def __repr__(self) -> str:
        return f"<DocumentCollection({self.database.name!r}, {self.name!r})>"

    def _record(self, session: Session, *, create: bool = False) -> CollectionRecord | None:
        record = session.get(CollectionRecord, self.name)
        if record is None and create:
            record = CollectionRecord(name=self.name, text_indexed=False)
            session.add(record)
            session.flush()
        return record

    def _select_bodies(self, *criteria: Any) -> list[Document]:
        stmt = (
            select(DocumentRecord.body)
            .where(DocumentRecord.collection == self.name, *criteria)
            .order_by(DocumentRecord.id)
        )
        with self.database.session() as session:
            return [dict(body) for body in session.scalars(stmt)]

    def find(self) -> list[Document]:
        return self._select_bodies()

    def find_eq(self, field: str, value: Any) -> list[Document]:
        return self._select_bodies(_field_equals(field, value))

    def find_any_eq(self, fields: Sequence[str], value: Any) -> list[Document]:
        return self._select_bodies(or_(*(_field_equals(field, value) for field in fields)))

    def find_text(self, query: str) -> list[Document]:
        with self.database.session() as session:
            record = self._record(session)
            if record is None or not record.text_indexed:
                raise NotFoundError(f"text index required for collection {self.name}")

        wanted, excluded = parse_text_query(query)
        if not wanted:
            return []

        def _matching(tokens: set[str]):
            return select(TextTokenRecord.document_id).where(
                TextTokenRecord.collection == self.name,
                TextTokenRecord.token.in_(tokens),
            )

        criteria = [DocumentRecord.id.in_(_matching(wanted))]
        if excluded:
            criteria.append(DocumentRecord.id.not_in(_matching(excluded)))
        return self._select_bodies(*criteria)

    def insert_one(self, document: Document) -> str:
        return self.insert_many([document])[0]

    def insert_many(self, documents: Iterable[Document]) -> list[str]:
        bodies = [dict(document) for document in documents]
        if not bodies:
            return []
        for body in bodies:
            body.setdefault("_id", new_object_id())

        with self.database.session() as session, session.begin():
            record = self._record(session, create=True)
            rows = [
                DocumentRecord(collection=self.name, doc_id=str(body["_id"]), body=body)
                for body in bodies
            ]
            session.add_all(rows)
            session.flush()
            if record.text_indexed:
                self._index_rows(session, rows)
        return [str(body["_id"]) for body in bodies]

    def delete_many(self) -> int:
        with self.database.session() as session, session.begin():
            session.execute(
                delete(TextTokenRecord).where(TextTokenRecord.collection == self.name)
            )
            result = session.execute(
                delete(DocumentRecord).where(DocumentRecord.collection == self.name)
            )
        return result.rowcount or 0

    def drop_indexes(self) -> None:
        with self.database.session() as session, session.begin():
            record = self._record(session)
            if record is None:
                return
            session.execute(
                delete(TextTokenRecord).where(TextTokenRecord.collection == self.name)
            )
            record.text_indexed = False

    def create_text_index(self) -> None:
        with self.database.session() as session, session.begin():
            record = self._record(session, create=True)
            session.execute(
                delete(TextTokenRecord).where(TextTokenRecord.collection == self.name)
            )
            rows = session.scalars(
                select(DocumentRecord).where(DocumentRecord.collection == self.name)
            ).all()
            self._index_rows(session, rows)
            record.text_indexed = True

    def _index_rows(self, session: Session, rows: Iterable[DocumentRecord]) -> None:
        session.add_all(
            TextTokenRecord(document_id=row.id, collection=self.name, token=token)
            for row in rows
            for token in sorted(document_tokens(row.body))
        )

    def estimated_document_count(self) -> int:
        stmt = select(func.count(DocumentRecord.id)).where(DocumentRecord.collection == self.name)
        with self.database.session() as session:
            return session.execute(stmt).scalar() or 0


class DocumentDatabase:
    """A single logical database of named collections."""

    def __init__(self, name: str, engine: Engine) -> None:
        self.name = name
        self.engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    def __repr__(self) -> str:
        return f"<DocumentDatabase({self.name!r})>"

    @contextmanager
    def session(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
        finally:
            session.close()

    def list_collection_names(self) -> list[str]:
        with self.session() as session:
            stmt = select(CollectionRecord.name).order_by(CollectionRecord.name)
            return list(session.scalars(stmt))

    def get_collection(self, name: str) -> DocumentCollection:
        return DocumentCollection(self, name)


class DocumentClient:
    """Opens :class:`DocumentDatabase` instances from a SQLAlchemy URL template.

    ``url_template`` may contain ``{database}``, which is replaced by the
    database name (``sqlite:///./var/{database}.db``). A template without
    the placeholder must point at an in-memory SQLite database; every name
    then gets its own isolated in-memory engine.

    Example:
        ```python
        with DocumentClient("sqlite:///./var/{database}.db") as client:
            client.ping()
            names = client.get_database("arma-api").list_collection_names()
        ```
    """

    def __init__(self, url_template: str) -> None:
        self.url_template = url_template
        self._databases: dict[str, DocumentDatabase] = {}

    def __enter__(self) -> DocumentClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _url_for(self, name: str) -> str:
        if DATABASE_PLACEHOLDER in self.url_template:
            return self.url_template.replace(DATABASE_PLACEHOLDER, name)
        return self.url_template

    def _create_engine(self, name: str) -> Engine:
        url = make_url(self._url_for(name))
        if not url.drivername.startswith("sqlite"):
            raise ConnectivityError(f"unsupported store backend: {url.drivername}")

        in_memory = url.database in (None, "", ":memory:")
        if not in_memory and DATABASE_PLACEHOLDER not in self.url_template:
            raise ConnectivityError(
                f"store url must contain {DATABASE_PLACEHOLDER} to separate databases"
            )

        options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if in_memory:
            options["poolclass"] = StaticPool
        else:
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        engine = create_engine(url, **options)
        event.listen(engine, "connect", _configure_sqlite)
        return engine

    def get_database(self, name: str) -> DocumentDatabase:
        """Return the database called ``name``, creating its schema on first use."""

        database = self._databases.get(name)
        if database is not None:
            return database

        try:
            engine = self._create_engine(name)
            Base.metadata.create_all(bind=engine)
        except (SQLAlchemyError, OSError) as exc:
            raise ConnectivityError(f"cannot open database {name}: {exc}") from exc

        logger.debug("opened database %s", name)
        database = DocumentDatabase(name, engine)
        self._databases[name] = database
        return database

    def ping(self, name: str) -> None:
        """Check that ``name`` answers a trivial query.

        Raises:
            ConnectivityError: If the database cannot be opened or queried.
        """
        database = self.get_database(name)
        try:
            with database.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise ConnectivityError(f"database {name} is unreachable: {exc}") from exc

    def close(self) -> None:
        for database in self._databases.values():
            database.engine.dispose()
        self._databases.clear()

"""Backup-and-reload pipeline for the production collections."""

from __future__ import annotations

import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Any

from armory.errors import IngestError
from armory.interfaces import Document, IDocumentDatabase
from armory.services.query_service import collection_name_for

logger = logging.getLogger(__name__)

SOURCE_SUFFIX = ".json"


def _reject_constant(name: str) -> Any:
    raise IngestError(f"invalid JSON: {name} is not a JSON value")


def _is_blank(value: Any) -> bool:
    # A type of '""' comes from placeholder entries in exported configs.
    return value is None or str(value) in ("", '""')


def convert_item(item: Any) -> tuple[str, Document]:
    """Turn one source entry into ``(collection name, document)``.

    Raises:
        IngestError: If the entry is not an object or lacks a ``type`` or ``mod``.
    """

    if not isinstance(item, dict):
        raise IngestError(f"expected a JSON object, got {type(item).__name__}")
    if _is_blank(item.get("type")):
        raise IngestError(f"missing or empty type in {item.get('classname', item)!r}")
    mod = item.get("mod")
    if _is_blank(mod) or not isinstance(mod, str):
        raise IngestError(f"missing or invalid mod in {item.get('classname', item)!r}")
    return collection_name_for(mod), dict(item)


class ReloadService:
    """Back up every production collection, then reload production from source files.

    Stages run in order and always run to completion:

    1. copy each production collection into the backup database and clear it
    2. rebuild the text index of every backup collection
    3. ingest every ``*.json`` file of ``source_dir`` into ``data.<mod>``
    4. rebuild the text index of every production collection

    A file that cannot be read or contains a rejected entry marks the run as
    failed, but the remaining files are still ingested.
    """

    def __init__(
        self,
        production: IDocumentDatabase,
        backup: IDocumentDatabase,
        source_dir: Path,
    ) -> None:
        self.production = production
        self.backup = backup
        self.source_dir = Path(source_dir)
        self.file_errors: dict[str, list[str]] = {}

    def run(self) -> bool:
        """Execute the full pipeline and return ``True`` if every file ingested cleanly.

        Raises:
            IngestError: If the source directory does not exist; nothing is touched then.
        """
        if not self.source_dir.is_dir():
            raise IngestError(f"source directory {self.source_dir} does not exist")

        self.file_errors = {}
        self.backup_collections()
        self.index_backup()
        self.ingest_sources()
        self.index_production()

        logger.info("updater finished, %d file(s) failed", len(self.file_errors))
        return not self.file_errors

    def backup_collections(self) -> None:
        for name in self.production.list_collection_names():
            logger.info("backing up and resetting %s", name)

            backup_collection = self.backup.get_collection(name)
            if backup_collection.estimated_document_count() > 0:
                backup_collection.delete_many()

            production_collection = self.production.get_collection(name)
            documents = production_collection.find()
            if documents:
                backup_collection.insert_many(documents)

            production_collection.delete_many()
            production_collection.drop_indexes()

    def index_backup(self) -> None:
        for name in self.backup.list_collection_names():
            collection = self.backup.get_collection(name)
            collection.drop_indexes()
            collection.create_text_index()

    def ingest_sources(self) -> None:
        for path in sorted(self.source_dir.iterdir()):
            if not path.is_file() or path.suffix.lower() != SOURCE_SUFFIX:
                logger.info("skipping non json file in data directory: %s", path)
                continue
            self.ingest_file(path)

    def ingest_file(self, path: Path) -> int:
        """Load one source file and insert its valid entries; return how many were inserted."""

        logger.info("parsing %s", path)
        errors: list[str] = []
        try:
            items = self._read_items(path)
        except IngestError as exc:
            logger.error("could not load %s: %s", path, exc)
            self.file_errors[str(path)] = [str(exc)]
            return 0

        grouped: dict[str, list[Document]] = defaultdict(list)
        for position, item in enumerate(items):
            try:
                name, document = convert_item(item)
            except IngestError as exc:
                logger.warning(
                    "could not create document from entry %d of %s: %s", position, path, exc
                )
                errors.append(f"entry {position}: {exc}")
                continue
            grouped[name].append(document)

        inserted = 0
        for name, documents in grouped.items():
            logger.debug("adding %d object(s) from %s to %s", len(documents), path, name)
            inserted += len(self.production.get_collection(name).insert_many(documents))

        if errors:
            logger.error("failed to parse file, see messages above for more info: %s", path)
            self.file_errors[str(path)] = errors
        else:
            logger.info("%s successfully parsed, %d object(s) added", path, inserted)
        return inserted

    @staticmethod
    def _read_items(path: Path) -> list[Any]:
        try:
            with path.open("r", encoding="utf-8") as handle:
                data = json.load(handle, parse_constant=_reject_constant)
        except OSError as exc:
            raise IngestError(f"could not read file: {exc}") from exc
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise IngestError(f"invalid JSON: {exc}") from exc
        if not isinstance(data, list):
            raise IngestError(f"expected a JSON array, got {type(data).__name__}")
        return data

    def index_production(self) -> None:
        for name in self.production.list_collection_names():
            logger.info("updating index for %s collection", name)
            self.production.get_collection(name).create_text_index()

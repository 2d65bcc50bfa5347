"""Runtime state backing the Armory HTTP API."""

from __future__ import annotations

import logging

from armory.config import Settings, get_settings
from armory.repository import DocumentClient, DocumentDatabase
from armory.services import QueryService

logger = logging.getLogger(__name__)


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        client: DocumentClient | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.client = client or DocumentClient(self.settings.store_url)
        self.client.ping(self.settings.database_name)
        self.database: DocumentDatabase = self.client.get_database(self.settings.database_name)
        self.queries = QueryService(self.database, self.settings.supported_mods)
        logger.info("serving database %s", self.database.name)

    async def shutdown(self) -> None:
        self.client.close()


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()

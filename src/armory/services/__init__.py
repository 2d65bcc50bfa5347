"""Service layer: the query service and the reload pipeline.

Both services receive their database handles explicitly, so tests can pass
in-memory databases or protocol fakes:

    from armory.repository import DocumentClient
    from armory.services import QueryService

    client = DocumentClient("sqlite://")
    service = QueryService(client.get_database("arma-api"), ["vanilla"])
    service.list_classes(mod="vanilla", item_type="Primaries")
"""

from armory.services.query_service import QueryService, collection_name_for
from armory.services.reload_service import ReloadService, convert_item

__all__ = [
    "QueryService",
    "ReloadService",
    "collection_name_for",
    "convert_item",
]

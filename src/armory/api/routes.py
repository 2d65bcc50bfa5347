"""HTTP routes for the Armory API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from armory.api.runtime import ApiState
from armory.domain.pagination import UNBOUNDED
from armory.errors import NotFoundError, ValidationError

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]
PageParam = Annotated[int, Query(description="Zero-based page number")]
SizeParam = Annotated[int, Query(description=f"Page size, {UNBOUNDED} returns every result")]


def _json_array(items: list[str]) -> Response:
    return Response(content="[" + ", ".join(items) + "]", media_type="application/json")


def _query_failed(exc: Exception) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.get("/health")
def health(state: ApiStateDep) -> dict[str, object]:
    return {
        "status": "ok",
        "database": state.database.name,
        "collections": len(state.database.list_collection_names()),
    }


@router.get("/classes/search/{term}")
def search_classes(
    term: str,
    state: ApiStateDep,
    page: PageParam = 0,
    size: SizeParam = UNBOUNDED,
) -> Response:
    """Search every mod for a classname, config key or config value."""
    try:
        items = state.queries.search(term, page=page, size=size)
    except (ValidationError, NotFoundError) as exc:
        raise _query_failed(exc) from exc
    return _json_array(items)


@router.get("/classes")
@router.get("/classes/{mod}")
def list_classes(
    state: ApiStateDep,
    mod: str | None = None,
    item_type: Annotated[str | None, Query(alias="type")] = None,
    page: PageParam = 0,
    size: SizeParam = UNBOUNDED,
) -> Response:
    """List classes of every mod, or of ``mod``, optionally filtered by ``type``."""
    try:
        items = state.queries.list_classes(mod=mod, item_type=item_type, page=page, size=size)
    except (ValidationError, NotFoundError) as exc:
        raise _query_failed(exc) from exc
    return _json_array(items)

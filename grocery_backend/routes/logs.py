from __future__ import annotations

from fastapi import APIRouter, HTTPException

from ..logs import search_operation_logs, entity_history

router = APIRouter()


@router.get("/api/logs/search")
def api_logs_search(
    page: int = 1,
    size: int = 20,
    action: str | None = None,
    query: str | None = None,
    entity_type: str | None = None,
    entity_id: int | None = None,
    ts_from: str | None = None,
    ts_to: str | None = None,
):
    total, items = search_operation_logs(
        query, action, ts_from, ts_to, page, size,
        entity_type=entity_type, entity_id=entity_id,
    )
    return {"total": total, "items": items}


@router.get("/api/logs/history/{entity_type}/{entity_id}")
def api_logs_history(entity_type: str, entity_id: int):
    """Successful changes to one item, list or product, oldest first."""
    try:
        return {"items": entity_history(entity_type.upper(), entity_id)}
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))

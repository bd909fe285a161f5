from __future__ import annotations

import sqlite3

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ..logs import LogContext
from ..services.grocery_list_item_svc import (
    list_items, list_items_for_list, get_item, create_item, update_item, delete_item,
)

router = APIRouter()


class ItemBody(BaseModel):
    grocery_list_id: int
    product_id: int
    amount: int = Field(..., gt=0)


@router.get("/api/items")
def api_items_list():
    return {"items": list_items()}


@router.get("/api/lists/{list_id}/items")
def api_items_for_list(list_id: int):
    return {"items": list_items_for_list(list_id)}


@router.get("/api/items/{item_id}")
def api_item_get(item_id: int):
    it = get_item(item_id)
    if it is None:
        raise HTTPException(status_code=404, detail="item_not_found")
    return it


@router.post("/api/items", status_code=201)
def api_item_create(body: ItemBody):
    log = LogContext("ITEM_CREATE")
    log.set_payload(body.model_dump())
    try:
        out = create_item(body.model_dump(), log)
        log.write("OK")
        return out
    except ValueError as ve:
        log.write("ERROR", str(ve))
        raise HTTPException(status_code=400, detail=str(ve))
    except sqlite3.IntegrityError as ie:
        log.write("ERROR", str(ie))
        raise HTTPException(status_code=409, detail=str(ie))
    except Exception as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/api/items/{item_id}")
def api_item_update(item_id: int, body: ItemBody):
    log = LogContext("ITEM_UPDATE")
    log.set_payload({"id": item_id, **body.model_dump()})
    try:
        out = update_item(item_id, body.model_dump(), log)
        log.write("OK")
        return out
    except ValueError as ve:
        log.write("ERROR", str(ve))
        raise HTTPException(status_code=400, detail=str(ve))
    except sqlite3.IntegrityError as ie:
        log.write("ERROR", str(ie))
        raise HTTPException(status_code=409, detail=str(ie))
    except Exception as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/api/items/{item_id}")
def api_item_delete(item_id: int):
    log = LogContext("ITEM_DELETE")
    log.set_payload({"id": item_id})
    try:
        delete_item(item_id, log)
        log.write("OK")
        return {"message": "ok"}
    except LookupError as le:
        log.write("ERROR", str(le))
        raise HTTPException(status_code=404, detail=str(le))
    except Exception as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=str(e))

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from ..logs import LogContext
from ..services.catalog_svc import list_products, list_grocery_lists, delete_grocery_list, delete_product

router = APIRouter()


@router.get("/api/products")
def api_products():
    return {"items": list_products()}


@router.get("/api/lists")
def api_lists():
    return {"items": list_grocery_lists()}


@router.delete("/api/lists/{list_id}")
def api_list_delete(list_id: int):
    log = LogContext("GROCERY_LIST_DELETE")
    log.set_payload({"id": list_id})
    try:
        delete_grocery_list(list_id, log)
        log.write("OK")
        return {"message": "ok"}
    except LookupError as le:
        log.write("ERROR", str(le))
        raise HTTPException(status_code=404, detail=str(le))
    except Exception as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/api/products/{product_id}")
def api_product_delete(product_id: int):
    log = LogContext("PRODUCT_DELETE")
    log.set_payload({"id": product_id})
    try:
        delete_product(product_id, log)
        log.write("OK")
        return {"message": "ok"}
    except LookupError as le:
        log.write("ERROR", str(le))
        raise HTTPException(status_code=404, detail=str(le))
    except Exception as e:
        log.write("ERROR", str(e))
        raise HTTPException(status_code=500, detail=str(e))

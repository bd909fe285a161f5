from __future__ import annotations

import logging
from typing import Any

from ..db import Database
from ..logs import LogContext, ENTITY_LIST, ENTITY_PRODUCT
from .schema_svc import ensure_schema

logger = logging.getLogger(__name__)


def list_products(db: Database | None = None) -> list[dict[str, Any]]:
    return [p.to_dict() for p in ensure_schema(db).products.list_all()]


def list_grocery_lists(db: Database | None = None) -> list[dict[str, Any]]:
    return [gl.to_dict() for gl in ensure_schema(db).lists.list_all()]


def delete_grocery_list(list_id: int, log: LogContext, db: Database | None = None) -> dict[str, Any]:
    """Delete a list; its items go with it (ON DELETE CASCADE)."""
    repos = ensure_schema(db)
    gl = repos.lists.get(list_id)
    if gl is None or repos.lists.delete(gl) is None:
        raise LookupError("grocery_list_not_found")
    logger.info("grocery list %s deleted", list_id)
    log.set_entity(ENTITY_LIST, list_id)
    log.set_before(gl.to_dict())
    return gl.to_dict()


def delete_product(product_id: int, log: LogContext, db: Database | None = None) -> dict[str, Any]:
    """Delete a product; every item referencing it goes with it."""
    repos = ensure_schema(db)
    p = repos.products.get(product_id)
    if p is None or repos.products.delete(p) is None:
        raise LookupError("product_not_found")
    logger.info("product %s deleted", product_id)
    log.set_entity(ENTITY_PRODUCT, product_id)
    log.set_before(p.to_dict())
    return p.to_dict()

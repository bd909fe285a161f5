from __future__ import annotations

import logging
from typing import Any

from ..db import Database
from ..logs import LogContext, ENTITY_ITEM
from ..domain.models import GroceryListItem
from .schema_svc import ensure_schema

logger = logging.getLogger(__name__)


def _amount(data: dict) -> int:
    amount = int(data["amount"])
    if amount <= 0:
        raise ValueError("amount_must_be_positive")
    return amount


def list_items(db: Database | None = None) -> list[dict[str, Any]]:
    return [it.to_dict() for it in ensure_schema(db).items.list_all()]


def list_items_for_list(grocery_list_id: int, db: Database | None = None) -> list[dict[str, Any]]:
    return [it.to_dict() for it in ensure_schema(db).items.list_by_list_id(grocery_list_id)]


def get_item(item_id: int, db: Database | None = None) -> dict[str, Any] | None:
    it = ensure_schema(db).items.get(item_id)
    return it.to_dict() if it else None


def create_item(data: dict, log: LogContext, db: Database | None = None) -> dict[str, Any]:
    """data: grocery_list_id, product_id, amount"""
    amount = _amount(data)
    repos = ensure_schema(db)
    grocery_list_id = int(data["grocery_list_id"])
    product_id = int(data["product_id"])
    if repos.lists.get(grocery_list_id) is None:
        raise ValueError("grocery_list_not_found")
    if repos.products.get(product_id) is None:
        raise ValueError("product_not_found")

    item = repos.items.add(GroceryListItem(0, grocery_list_id, product_id, amount))
    logger.info("grocery list item %s added to list %s", item.id, item.grocery_list_id)
    log.set_entity(ENTITY_ITEM, item.id)
    log.set_after(item.to_dict())
    return item.to_dict()


def update_item(item_id: int, data: dict, log: LogContext, db: Database | None = None) -> dict[str, Any]:
    """Full-record overwrite. The row is not required to exist."""
    amount = _amount(data)
    repos = ensure_schema(db)
    before = repos.items.get(item_id)
    item = GroceryListItem(item_id, int(data["grocery_list_id"]), int(data["product_id"]), amount)
    item = repos.items.update(item)
    log.set_entity(ENTITY_ITEM, item_id)
    log.set_before(before.to_dict() if before else None)
    log.set_after(item.to_dict())
    return item.to_dict()


def delete_item(item_id: int, log: LogContext, db: Database | None = None) -> dict[str, Any]:
    repos = ensure_schema(db)
    before = repos.items.get(item_id)
    removed = repos.items.delete(GroceryListItem(item_id, 0, 0, 0))
    if removed is None:
        raise LookupError("item_not_found")
    logger.info("grocery list item %s deleted", item_id)
    log.set_entity(ENTITY_ITEM, item_id)
    log.set_before(before.to_dict() if before else None)
    return {"id": item_id}

from __future__ import annotations

from dataclasses import dataclass

from ..db import Database
from ..repository.product_repo import ProductRepository
from ..repository.grocery_list_repo import GroceryListRepository
from ..repository.grocery_list_item_repo import GroceryListItemRepository


@dataclass
class Repositories:
    products: ProductRepository
    lists: GroceryListRepository
    items: GroceryListItemRepository


# One set of repositories per DB file. Constructing a repository re-runs its seed
# inserts, so rebuilding per request would bring deleted seed rows back.
_REPOS: dict[str, Repositories] = {}


def ensure_schema(db: Database | None = None) -> Repositories:
    """Create and seed all tables. Parents come first so the item seed rows satisfy their foreign keys."""
    db = db or Database()
    key = db.db_path
    repos = _REPOS.get(key)
    if repos is None:
        products = ProductRepository(db)
        lists = GroceryListRepository(db)
        items = GroceryListItemRepository(db)
        repos = _REPOS[key] = Repositories(products, lists, items)
    return repos


def reset_repositories():
    _REPOS.clear()

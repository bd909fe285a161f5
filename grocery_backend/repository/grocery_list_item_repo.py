"""GroceryListItem table access.

Every call opens its own connection through the injected Database and closes it
before returning. The mirror (`items`) is only rebuilt by initialize() and
list_all(); add/update/delete leave it stale until the next full listing.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from ..db import Database
from ..domain.models import GroceryListItem

logger = logging.getLogger(__name__)

DDL = """
CREATE TABLE IF NOT EXISTS GroceryListItem (
    Id INTEGER NOT NULL PRIMARY KEY AUTOINCREMENT,
    GroceryListId INTEGER NOT NULL,
    ProductId INTEGER NOT NULL,
    Amount INTEGER NOT NULL,
    FOREIGN KEY(GroceryListId) REFERENCES GroceryList(Id) ON DELETE CASCADE,
    FOREIGN KEY(ProductId) REFERENCES Product(Id) ON DELETE CASCADE
)
"""

# (Id, GroceryListId, ProductId, Amount)
SEED_ROWS = [
    (1, 1, 1, 3),
    (2, 1, 2, 1),
    (3, 1, 3, 4),
    (4, 2, 1, 2),
    (5, 2, 2, 5),
]

_COLUMNS = "Id, GroceryListId, ProductId, Amount"


class GroceryListItemRepository:

    def __init__(self, db: Database | None = None):
        self.db = db or Database()
        self._items: List[GroceryListItem] = []
        self.initialize()

    @property
    def items(self) -> List[GroceryListItem]:
        """Snapshot of the mirror as of the last full listing."""
        return list(self._items)

    def initialize(self) -> None:
        self.db.create_table(DDL)
        self.db.insert_multiple_with_transaction(
            (f"INSERT OR IGNORE INTO GroceryListItem({_COLUMNS}) VALUES(?,?,?,?)", row)
            for row in SEED_ROWS
        )
        self.list_all()

    def list_all(self) -> List[GroceryListItem]:
        with self.db.connect() as conn:
            rows = conn.execute(f"SELECT {_COLUMNS} FROM GroceryListItem ORDER BY Id").fetchall()
        self._items = [GroceryListItem.from_row(r) for r in rows]
        logger.debug("grocery list item mirror refreshed: %d rows", len(self._items))
        return list(self._items)

    def list_by_list_id(self, grocery_list_id: int) -> List[GroceryListItem]:
        with self.db.connect() as conn:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM GroceryListItem WHERE GroceryListId=? ORDER BY Id",
                (grocery_list_id,),
            ).fetchall()
        return [GroceryListItem.from_row(r) for r in rows]

    def get(self, item_id: int) -> Optional[GroceryListItem]:
        with self.db.connect() as conn:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM GroceryListItem WHERE Id=?", (item_id,)
            ).fetchone()
        return GroceryListItem.from_row(row) if row else None

    def add(self, item: GroceryListItem) -> GroceryListItem:
        with self.db.connect() as conn:
            cur = conn.execute(
                "INSERT INTO GroceryListItem(GroceryListId, ProductId, Amount) VALUES(?,?,?)",
                (item.grocery_list_id, item.product_id, item.amount),
            )
            item.id = int(cur.lastrowid)
        return item

    def update(self, item: GroceryListItem) -> GroceryListItem:
        # Last writer wins; a missing row is not reported.
        with self.db.connect() as conn:
            cur = conn.execute(
                "UPDATE GroceryListItem SET GroceryListId=?, ProductId=?, Amount=? WHERE Id=?",
                (item.grocery_list_id, item.product_id, item.amount, item.id),
            )
            if cur.rowcount == 0:
                logger.debug("update matched no GroceryListItem row for id=%s", item.id)
        return item

    def delete(self, item: GroceryListItem) -> Optional[GroceryListItem]:
        with self.db.connect() as conn:
            cur = conn.execute("DELETE FROM GroceryListItem WHERE Id=?", (item.id,))
            removed = cur.rowcount
        return item if removed > 0 else None

from __future__ import annotations

from typing import List, Optional

from ..db import Database
from ..domain.models import GroceryList

DDL = """
CREATE TABLE IF NOT EXISTS GroceryList (
    Id INTEGER NOT NULL PRIMARY KEY AUTOINCREMENT,
    Name TEXT NOT NULL,
    Date TEXT NOT NULL,
    Color TEXT NOT NULL,
    ClientId INTEGER NOT NULL
)
"""

SEED_ROWS = [
    (1, "Boodschappen familieweekend", "2024-12-14", "#FF6A00", 1),
    (2, "Kantine", "2024-12-07", "#626262", 1),
]

_COLUMNS = "Id, Name, Date, Color, ClientId"


class GroceryListRepository:

    def __init__(self, db: Database | None = None):
        self.db = db or Database()
        self.initialize()

    def initialize(self) -> None:
        self.db.create_table(DDL)
        self.db.insert_multiple_with_transaction(
            (f"INSERT OR IGNORE INTO GroceryList({_COLUMNS}) VALUES(?,?,?,?,?)", row)
            for row in SEED_ROWS
        )

    def list_all(self) -> List[GroceryList]:
        with self.db.connect() as conn:
            rows = conn.execute(f"SELECT {_COLUMNS} FROM GroceryList ORDER BY Id").fetchall()
        return [GroceryList.from_row(r) for r in rows]

    def get(self, list_id: int) -> Optional[GroceryList]:
        with self.db.connect() as conn:
            row = conn.execute(f"SELECT {_COLUMNS} FROM GroceryList WHERE Id=?", (list_id,)).fetchone()
        return GroceryList.from_row(row) if row else None

    def delete(self, grocery_list: GroceryList) -> Optional[GroceryList]:
        with self.db.connect() as conn:
            cur = conn.execute("DELETE FROM GroceryList WHERE Id=?", (grocery_list.id,))
            removed = cur.rowcount
        return grocery_list if removed > 0 else None

from __future__ import annotations

from typing import List, Optional

from ..db import Database
from ..domain.models import Product

DDL = """
CREATE TABLE IF NOT EXISTS Product (
    Id INTEGER NOT NULL PRIMARY KEY AUTOINCREMENT,
    Name TEXT NOT NULL,
    Stock INTEGER NOT NULL DEFAULT 0
)
"""

SEED_ROWS = [
    (1, "Melk", 300),
    (2, "Kaas", 100),
    (3, "Brood", 400),
]


class ProductRepository:

    def __init__(self, db: Database | None = None):
        self.db = db or Database()
        self.initialize()

    def initialize(self) -> None:
        self.db.create_table(DDL)
        self.db.insert_multiple_with_transaction(
            ("INSERT OR IGNORE INTO Product(Id, Name, Stock) VALUES(?,?,?)", row)
            for row in SEED_ROWS
        )

    def list_all(self) -> List[Product]:
        with self.db.connect() as conn:
            rows = conn.execute("SELECT Id, Name, Stock FROM Product ORDER BY Id").fetchall()
        return [Product.from_row(r) for r in rows]

    def get(self, product_id: int) -> Optional[Product]:
        with self.db.connect() as conn:
            row = conn.execute("SELECT Id, Name, Stock FROM Product WHERE Id=?", (product_id,)).fetchone()
        return Product.from_row(row) if row else None

    def delete(self, product: Product) -> Optional[Product]:
        with self.db.connect() as conn:
            cur = conn.execute("DELETE FROM Product WHERE Id=?", (product.id,))
            removed = cur.rowcount
        return product if removed > 0 else None

from __future__ import annotations

from dataclasses import dataclass, asdict
from sqlite3 import Row


@dataclass
class GroceryListItem:
    """A (list, product, quantity) association. id is 0 until the row is stored."""
    id: int
    grocery_list_id: int
    product_id: int
    amount: int

    @classmethod
    def from_row(cls, r: Row) -> "GroceryListItem":
        return cls(int(r["Id"]), int(r["GroceryListId"]), int(r["ProductId"]), int(r["Amount"]))

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Product:
    id: int
    name: str
    stock: int

    @classmethod
    def from_row(cls, r: Row) -> "Product":
        return cls(int(r["Id"]), r["Name"], int(r["Stock"]))

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class GroceryList:
    id: int
    name: str
    date: str
    color: str
    client_id: int

    @classmethod
    def from_row(cls, r: Row) -> "GroceryList":
        return cls(int(r["Id"]), r["Name"], r["Date"], r["Color"], int(r["ClientId"]))

    def to_dict(self) -> dict:
        return asdict(self)

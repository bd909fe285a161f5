#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Grocery list manager (SQLite)

Commands:
  init                Create tables and insert the seed products, lists and items
  list                Print all grocery list items (or those of one list)
  add                 Add a product to a grocery list
  update              Overwrite an item's list, product and amount
  remove              Delete an item by id

Notes:
- The DB path comes from --db, else GROCERY_DB_PATH, else config.yaml, else ./grocery.db.
- Output is one JSON object per line so it can be piped into other tools.
"""

import argparse
import json
import sys

from grocery_backend.db import Database
from grocery_backend.domain.models import GroceryListItem
from grocery_backend.services.schema_svc import ensure_schema


def _emit(obj):
    print(json.dumps(obj, ensure_ascii=False))


# ---------------- Commands ----------------

def cmd_init(args):
    repos = ensure_schema(Database(args.db))
    print(f"DB initialized: {len(repos.items.items)} items seeded.")


def cmd_list(args):
    repos = ensure_schema(Database(args.db))
    if args.list_id is not None:
        rows = repos.items.list_by_list_id(args.list_id)
    else:
        rows = repos.items.list_all()
    for it in rows:
        _emit(it.to_dict())


def cmd_add(args):
    repos = ensure_schema(Database(args.db))
    if repos.lists.get(args.list_id) is None:
        print(f"[ERROR] grocery list {args.list_id} not found", file=sys.stderr)
        return 1
    if repos.products.get(args.product_id) is None:
        print(f"[ERROR] product {args.product_id} not found", file=sys.stderr)
        return 1
    it = repos.items.add(GroceryListItem(0, args.list_id, args.product_id, args.amount))
    _emit(it.to_dict())


def cmd_update(args):
    repos = ensure_schema(Database(args.db))
    it = repos.items.update(GroceryListItem(args.id, args.list_id, args.product_id, args.amount))
    _emit(it.to_dict())


def cmd_remove(args):
    repos = ensure_schema(Database(args.db))
    it = repos.items.delete(GroceryListItem(args.id, 0, 0, 0))
    if it is None:
        print(f"[WARN] item {args.id} not found", file=sys.stderr)
        return 1
    _emit({"removed": args.id})


def _positive_int(v):
    n = int(v)
    if n <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return n


def main(argv=None):
    parser = argparse.ArgumentParser(description="Grocery list manager")
    parser.add_argument("--db", default=None, help="SQLite file (overrides GROCERY_DB_PATH / config.yaml)")
    sub = parser.add_subparsers()

    p_init = sub.add_parser("init", help="create tables and seed data")
    p_init.set_defaults(func=cmd_init)

    p_list = sub.add_parser("list", help="list grocery list items")
    p_list.add_argument("--list-id", type=int, required=False)
    p_list.set_defaults(func=cmd_list)

    p_add = sub.add_parser("add", help="add an item to a list")
    p_add.add_argument("--list-id", type=int, required=True)
    p_add.add_argument("--product-id", type=int, required=True)
    p_add.add_argument("--amount", type=_positive_int, required=True)
    p_add.set_defaults(func=cmd_add)

    p_upd = sub.add_parser("update", help="overwrite an item")
    p_upd.add_argument("--id", type=int, required=True)
    p_upd.add_argument("--list-id", type=int, required=True)
    p_upd.add_argument("--product-id", type=int, required=True)
    p_upd.add_argument("--amount", type=_positive_int, required=True)
    p_upd.set_defaults(func=cmd_update)

    p_rm = sub.add_parser("remove", help="delete an item")
    p_rm.add_argument("--id", type=int, required=True)
    p_rm.set_defaults(func=cmd_remove)

    args = parser.parse_args(argv)
    if hasattr(args, "func"):
        return args.func(args) or 0
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())

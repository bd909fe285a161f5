"""Repository layer: DB access (SQLite).

Each repository owns one table and talks to it through an injected Database,
so services never carry SQL strings.
"""
from __future__ import annotations

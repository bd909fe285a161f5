import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "grocery_test.db"
    # Point the backend to this temp DB
    os.environ["GROCERY_DB_PATH"] = str(path)
    return str(path)


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Drop all tables before each test so seeds and AUTOINCREMENT start fresh.
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("GROCERY_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    from grocery_backend.services.schema_svc import reset_repositories
    reset_repositories()
    conn = sqlite3.connect(tmp_db_path)
    try:
        for t in ("GroceryListItem", "GroceryList", "Product", "operation_log"):
            conn.execute(f"DROP TABLE IF EXISTS {t}")
        conn.commit()
    finally:
        conn.close()
    yield
    reset_repositories()


@pytest.fixture()
def db(tmp_db_path):
    from grocery_backend.db import Database
    return Database(tmp_db_path)


@pytest.fixture()
def repos(db):
    from grocery_backend.services.schema_svc import ensure_schema
    return ensure_schema(db)


@pytest.fixture()
def client(tmp_db_path):
    # Ensure log and data schemas exist before creating client
    from grocery_backend.logs import ensure_log_schema
    from grocery_backend.services.schema_svc import ensure_schema
    ensure_log_schema()
    ensure_schema()
    from grocery_backend.api import app
    from fastapi.testclient import TestClient
    return TestClient(app)

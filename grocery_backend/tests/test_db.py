import sqlite3

import pytest
from grocery_backend.db import Database, get_conn, get_db_path


def test_db_path_from_env(tmp_db_path):
    assert get_db_path() == tmp_db_path


def test_get_conn_enables_foreign_keys():
    with get_conn() as conn:
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1


def test_connect_closes_after_use(db):
    with db.connect() as conn:
        conn.execute("SELECT 1")
    with pytest.raises(RuntimeError):
        db.connection


def test_create_table_is_idempotent(db):
    ddl = "CREATE TABLE IF NOT EXISTS scratch (id INTEGER PRIMARY KEY, v TEXT)"
    db.create_table(ddl)
    db.create_table(ddl)
    with db.connect() as conn:
        row = conn.execute("SELECT name FROM sqlite_master WHERE name='scratch'").fetchone()
        assert row is not None
        conn.execute("DROP TABLE scratch")


def test_insert_multiple_rolls_back_on_error(db):
    db.create_table("CREATE TABLE IF NOT EXISTS scratch (id INTEGER PRIMARY KEY, v TEXT NOT NULL)")
    with pytest.raises(sqlite3.IntegrityError):
        db.insert_multiple_with_transaction([
            "INSERT INTO scratch(id, v) VALUES(1, 'a')",
            "INSERT INTO scratch(id, v) VALUES(2, NULL)",
        ])
    with db.connect() as conn:
        assert conn.execute("SELECT COUNT(1) AS c FROM scratch").fetchone()["c"] == 0
        conn.execute("DROP TABLE scratch")


def test_db_path_from_config_yaml(monkeypatch, tmp_path):
    from grocery_backend import db as db_mod
    target = tmp_path / "nested" / "from_cfg.db"
    monkeypatch.delenv("GROCERY_DB_PATH", raising=False)
    monkeypatch.setattr(db_mod, "_read_config_yaml", lambda: {"test_db_path": str(target)})
    assert get_db_path() == str(target)
    assert target.parent.is_dir()


def test_open_connection_slot_is_per_thread(db):
    import threading
    conn = db.open_connection()
    seen = {}

    def other():
        seen["other"] = db.open_connection()
        db.close_connection()

    t = threading.Thread(target=other)
    t.start()
    t.join()
    assert seen["other"] is not conn
    # the other thread's close must not touch this thread's connection
    assert db.connection.execute("SELECT 1").fetchone()[0] == 1
    db.close_connection()
    with pytest.raises(RuntimeError):
        db.connection


def test_concurrent_reads_on_shared_repositories(repos):
    from concurrent.futures import ThreadPoolExecutor

    def work(_):
        for _ in range(50):
            assert repos.items.get(1) is not None
            assert [i.id for i in repos.items.list_by_list_id(1)] == [1, 2, 3]
        return True

    with ThreadPoolExecutor(max_workers=8) as ex:
        assert all(ex.map(work, range(8)))


def test_insert_multiple_binds_parameters(db):
    db.create_table("CREATE TABLE IF NOT EXISTS scratch (id INTEGER PRIMARY KEY, v TEXT NOT NULL)")
    db.insert_multiple_with_transaction([
        ("INSERT INTO scratch(id, v) VALUES(?, ?)", (1, "Jan's boodschappen")),
        "INSERT INTO scratch(id, v) VALUES(2, 'plain')",
    ])
    with db.connect() as conn:
        rows = conn.execute("SELECT v FROM scratch ORDER BY id").fetchall()
        assert [r["v"] for r in rows] == ["Jan's boodschappen", "plain"]
        conn.execute("DROP TABLE scratch")


def test_cors_origins_from_env(monkeypatch):
    from grocery_backend.db import get_cors_origins
    monkeypatch.setenv("GROCERY_CORS_ORIGINS", "http://a.example, http://b.example")
    assert get_cors_origins() == ["http://a.example", "http://b.example"]
    monkeypatch.setenv("GROCERY_CORS_ORIGINS", "")
    assert get_cors_origins() == []

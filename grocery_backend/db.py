from __future__ import annotations

# grocery_backend/db.py
import sqlite3
import threading
from contextlib import contextmanager
from typing import Iterable, Iterator, Sequence, Tuple, Union
import os
import yaml

# DB path resolution order:
# 1) env GROCERY_DB_PATH (highest priority)
# 2) config.yaml test_db_path (when running under test)
# 3) config.yaml db_path
# 4) fallback: grocery.db at the project root
_PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
_ROOT_DB = os.path.join(_PROJECT_ROOT, "grocery.db")

Statement = Union[str, Tuple[str, Sequence]]


def _read_config_yaml() -> dict:
    cfg_path = os.path.join(_PROJECT_ROOT, "config.yaml")
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}
    out = {}
    for k in ("db_path", "test_db_path"):
        v = cfg.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    origins = cfg.get("cors_origins")
    if isinstance(origins, list):
        out["cors_origins"] = [str(o).strip() for o in origins if str(o).strip()]
    return out


def get_cors_origins() -> list[str]:
    """Browser origins allowed to call the API; empty means CORS stays off."""
    env = os.environ.get("GROCERY_CORS_ORIGINS")
    if env is not None:
        return [o.strip() for o in env.split(",") if o.strip()]
    return _read_config_yaml().get("cors_origins", [])


def get_db_path() -> str:
    env_path = os.environ.get("GROCERY_DB_PATH")
    cfg = _read_config_yaml()
    is_test = (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)

    if env_path:
        path = env_path
    elif is_test and cfg.get("test_db_path"):
        path = cfg["test_db_path"]
    elif cfg.get("db_path"):
        path = cfg["db_path"]
    else:
        path = _ROOT_DB

    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


def _connect(path: str) -> sqlite3.Connection:
    conn = sqlite3.connect(
        path,
        detect_types=sqlite3.PARSE_DECLTYPES | sqlite3.PARSE_COLNAMES,
        check_same_thread=False,
        isolation_level=None,
    )
    conn.execute("PRAGMA foreign_keys = ON;")
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_conn(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """
    Open a SQLite connection. Uses the explicit db_path if given, otherwise get_db_path().
    Foreign keys are ON and row_factory is sqlite3.Row.
    """
    conn = _connect(db_path or get_db_path())
    try:
        yield conn
    finally:
        conn.close()


class Database:
    """Connection lifecycle shared by the repositories.

    Each operation opens a connection, runs its statements and closes it again;
    nothing is pooled. connect() never shares its connection, so one Database can
    serve threadpool requests concurrently. The open_connection/close_connection
    slot is per thread. The path is resolved lazily so a Database built before the
    environment is configured still picks up GROCERY_DB_PATH.
    """

    def __init__(self, db_path: str | None = None):
        self._db_path = db_path
        self._local = threading.local()

    @property
    def db_path(self) -> str:
        return self._db_path or get_db_path()

    @property
    def connection(self) -> sqlite3.Connection:
        conn = getattr(self._local, "conn", None)
        if conn is None:
            raise RuntimeError("connection_not_open")
        return conn

    def open_connection(self) -> sqlite3.Connection:
        conn = getattr(self._local, "conn", None)
        if conn is None:
            conn = self._local.conn = _connect(self.db_path)
        return conn

    def close_connection(self) -> None:
        conn = getattr(self._local, "conn", None)
        if conn is not None:
            conn.close()
            self._local.conn = None

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        conn = _connect(self.db_path)
        try:
            yield conn
        finally:
            conn.close()

    def create_table(self, ddl: str) -> None:
        with self.connect() as conn:
            conn.execute(ddl)

    def insert_multiple_with_transaction(self, statements: Iterable[Statement]) -> None:
        """Run every statement in one transaction; all or nothing.

        A statement is plain SQL or a (sql, params) pair for bound values."""
        with self.connect() as conn:
            conn.execute("BEGIN")
            try:
                for stmt in statements:
                    if isinstance(stmt, str):
                        conn.execute(stmt)
                    else:
                        conn.execute(*stmt)
            except sqlite3.Error:
                conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")

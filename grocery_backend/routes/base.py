from fastapi import APIRouter

from ..db import get_conn

router = APIRouter()

APP_NAME = "grocery-api"
APP_VERSION = "0.1.0"


@router.get("/health")
def health():
    """Liveness plus row counts, so an empty or unseeded DB is visible at a glance."""
    with get_conn() as conn:
        counts = {
            t: conn.execute(f"SELECT COUNT(1) AS c FROM {t}").fetchone()["c"]
            for t in ("Product", "GroceryList", "GroceryListItem")
        }
    return {"status": "ok", "rows": counts}


@router.get("/version")
def version():
    return {"app": APP_NAME, "version": APP_VERSION}

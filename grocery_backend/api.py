"""
FastAPI app entry point aggregating per-domain routers under grocery_backend/routes.
Run as `uvicorn grocery_backend.api:app` (install the `serve` extra for uvicorn).
"""
from __future__ import annotations


from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .db import get_cors_origins
from .logs import ensure_log_schema, LogContext
from .services.schema_svc import ensure_schema


app = FastAPI(title="grocery-api", version="0.1.0")

_origins = get_cors_origins()
if _origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.on_event("startup")
def on_startup():
    ensure_log_schema()
    try:
        ensure_schema()
    except Exception as e:
        LogContext("STARTUP").write("ERROR", f"ensure_schema_failed: {e}")
        raise


# Include routers (split by business domain)
from .routes import base as base_routes
from .routes import items as items_routes
from .routes import catalog as catalog_routes
from .routes import logs as logs_routes

app.include_router(base_routes.router)
app.include_router(items_routes.router)
app.include_router(catalog_routes.router)
app.include_router(logs_routes.router)

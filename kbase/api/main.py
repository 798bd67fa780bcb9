"""
FastAPI application entry point for the kbase API.

Provides REST endpoints for workspaces, items, tags and search.
"""

import logging
import sqlite3

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from kbase import __version__
from kbase.api.routes import health, items, search, tags, workspaces
from kbase.core.config import get_cors_origins
from kbase.core.db.errors import BackendQueryError, NotFoundError

logger = logging.getLogger(__name__)

app = FastAPI(title="kbase API", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(NotFoundError)
def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(BackendQueryError)
def backend_query_handler(request: Request, exc: BackendQueryError):
    logger.warning("Query rejected for %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(sqlite3.IntegrityError)
def integrity_handler(request: Request, exc: sqlite3.IntegrityError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(ValueError)
def value_error_handler(request: Request, exc: ValueError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# Include routers
app.include_router(workspaces.router, prefix="/api", tags=["workspaces"])
app.include_router(items.router, prefix="/api", tags=["items"])
app.include_router(tags.router, prefix="/api", tags=["tags"])
app.include_router(search.router, prefix="/api", tags=["search"])
app.include_router(health.router, prefix="/api", tags=["health"])

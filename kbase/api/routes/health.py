"""
Health check API route.
"""
from fastapi import APIRouter, Depends

from kbase import __version__
from kbase.api.deps import get_db
from kbase.core.db import Database

router = APIRouter()


@router.get("/health")
def health(db: Database = Depends(get_db)):
    """
    Health check endpoint.

    Opening the database also ensures its schema, so a ready response
    means the store is usable.
    """
    return {
        "status": "ready",
        "version": __version__,
        "database": db.conn.db_path,
    }

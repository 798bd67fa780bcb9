"""
Search API routes.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from kbase.api.deps import get_db
from kbase.api.schemas import SearchHit, SearchResponse
from kbase.core.db import Database
from kbase.core.db.constants import MAX_SEARCH_LIMIT
from kbase.core.models import ItemType
from kbase.services.search import SearchService

router = APIRouter()


@router.get("/search", response_model=SearchResponse)
def search(
    q: Optional[str] = Query(None),
    workspace_id: Optional[str] = Query(None),
    item_type: Optional[ItemType] = Query(None),
    tags: Optional[List[str]] = Query(None),
    limit: Optional[int] = Query(None, ge=0, le=MAX_SEARCH_LIMIT),
    db: Database = Depends(get_db),
):
    """
    Search items by text with optional facets.

    Parameters
    ----------
    q : str, optional
        Free-form query; omitted or blank lists all matching items newest first
    workspace_id : str, optional
        Restrict to one workspace
    item_type : ItemType, optional
        Restrict to one item type
    tags : List[str], optional
        Required tags; repeat the parameter or pass a comma-separated list
    limit : int, optional
        Maximum results (default 50)
    """
    results = SearchService(db).search(q, workspace_id, item_type, tags, limit)
    return SearchResponse(
        query=q,
        results=[SearchHit.from_result(r) for r in results],
        count=len(results),
    )


@router.get("/search/tags", response_model=SearchResponse)
def search_by_tags(
    tags: List[str] = Query(...),
    workspace_id: Optional[str] = Query(None),
    match_all: bool = Query(False),
    db: Database = Depends(get_db),
):
    """
    Find items by tags, newest first.

    Parameters
    ----------
    tags : List[str]
        Tag names; repeat the parameter or pass a comma-separated list
    workspace_id : str, optional
        Restrict to one workspace
    match_all : bool
        Require every tag instead of any of them
    """
    results = SearchService(db).search_by_tags(workspace_id, tags, match_all)
    return SearchResponse(
        results=[SearchHit.from_result(r) for r in results],
        count=len(results),
    )


@router.get("/items/{item_id}/similar", response_model=SearchResponse)
def similar_items(
    item_id: str,
    limit: Optional[int] = Query(None, ge=0, le=MAX_SEARCH_LIMIT),
    db: Database = Depends(get_db),
):
    """
    Items sharing tags with ``item_id``, most shared tags first.

    An unknown or untagged item has no similar items.
    """
    results = SearchService(db).find_similar(item_id, limit)
    return SearchResponse(
        results=[SearchHit.from_result(r) for r in results],
        count=len(results),
    )

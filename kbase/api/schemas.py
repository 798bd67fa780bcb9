"""
Pydantic schemas for API request/response models.
"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from kbase.core.models import ItemType, RankKind, SearchResult, Tag, Workspace


class SearchHit(BaseModel):
    """One search result with its rank flattened for display."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    workspace_id: str
    item_type: ItemType
    title: str = ""
    content: Optional[str] = None
    file_path: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    rank_kind: RankKind
    score: Optional[Union[int, float]] = None

    @classmethod
    def from_result(cls, result: SearchResult) -> "SearchHit":
        return cls(
            id=result.id,
            workspace_id=result.workspace_id,
            item_type=result.item_type,
            title=result.title,
            content=result.content,
            file_path=result.file_path,
            created_at=result.created_at,
            updated_at=result.updated_at,
            rank_kind=result.rank.kind,
            score=result.score,
        )


class SearchResponse(BaseModel):
    """Search results with the query that produced them."""

    query: Optional[str] = None
    results: List[SearchHit] = Field(default_factory=list)
    count: int = 0


class WorkspaceCreate(BaseModel):
    """Request body for creating a workspace."""

    name: str = Field(..., min_length=1)
    description: Optional[str] = None


class WorkspaceUpdate(BaseModel):
    """Request body for renaming or describing a workspace."""

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None


class WorkspaceOut(Workspace):
    """Workspace with its item count."""

    item_count: int = 0


class ItemCreate(BaseModel):
    """Request body for creating an item."""

    workspace_id: str
    item_type: ItemType = ItemType.DOCUMENT
    title: str = ""
    content: Optional[str] = None
    content_plain: Optional[str] = None
    file_path: Optional[str] = None
    file_size: Optional[int] = None
    mime_type: Optional[str] = None


class TagCreate(BaseModel):
    """Request body for creating a tag."""

    name: str = Field(..., min_length=1)
    color: Optional[str] = None


class TagOut(Tag):
    """Tag with the number of items carrying it."""

    item_count: int = 0

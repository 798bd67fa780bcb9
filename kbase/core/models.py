"""
Domain models for the knowledge base.

These models represent workspaces, typed items, tags and search results
independent of the SQLite storage layout.

All models use Pydantic for validation, serialization, and type safety.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict


class ItemType(str, Enum):
    """Kinds of items a workspace can hold."""

    DOCUMENT = "document"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"


class Workspace(BaseModel):
    """A named container of items."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[str] = None
    name: str = ""
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Item(BaseModel):
    """
    A single piece of content in a workspace.

    ``content`` holds the editor representation; ``content_plain`` is the
    plain-text mirror that feeds the full-text index.
    """

    model_config = ConfigDict(from_attributes=True)

    id: Optional[str] = None
    workspace_id: str
    item_type: ItemType = ItemType.DOCUMENT
    title: str = ""
    content: Optional[str] = None
    content_plain: Optional[str] = None
    file_path: Optional[str] = None
    file_size: Optional[int] = None
    mime_type: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ItemUpdate(BaseModel):
    """
    Partial update for an item.

    Only fields that were explicitly set are written, so passing None clears
    a nullable field. ``title`` cannot be cleared; a None title is ignored.
    """

    title: Optional[str] = None
    content: Optional[str] = None
    content_plain: Optional[str] = None
    file_path: Optional[str] = None
    file_size: Optional[int] = None
    mime_type: Optional[str] = None

    def changes(self) -> Dict[str, Any]:
        """Return the explicitly set fields and their new values."""
        changes = self.model_dump(exclude_unset=True)
        if changes.get("title", "") is None:
            del changes["title"]
        return changes


class Tag(BaseModel):
    """A workspace-independent label shared across items."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[str] = None
    name: str
    color: Optional[str] = None
    created_at: Optional[datetime] = None


class RankKind(str, Enum):
    """Which query path produced a rank."""

    RELEVANCE = "relevance"  # full-text relevance, higher is better
    TAG_MATCH = "tag_match"  # constant placeholder for tag-set search
    OVERLAP = "overlap"  # count of shared tags
    UNRANKED = "unranked"  # filter-only search, ordered by recency


class Rank(BaseModel):
    """
    Ordering value attached to a search result.

    Ranks only compare with ranks of the same kind; mixing kinds raises
    ``TypeError`` instead of silently comparing unrelated scales.
    """

    model_config = ConfigDict(frozen=True)

    kind: RankKind
    value: Optional[Union[int, float]] = None

    @classmethod
    def relevance(cls, score: float) -> "Rank":
        return cls(kind=RankKind.RELEVANCE, value=float(score))

    @classmethod
    def tag_match(cls) -> "Rank":
        return cls(kind=RankKind.TAG_MATCH, value=0.0)

    @classmethod
    def overlap(cls, shared: int) -> "Rank":
        return cls(kind=RankKind.OVERLAP, value=int(shared))

    @classmethod
    def unranked(cls) -> "Rank":
        return cls(kind=RankKind.UNRANKED)

    def _comparable_value(self, other: "Rank") -> Union[int, float]:
        if other.kind != self.kind:
            raise TypeError(
                f"cannot compare {self.kind.value} rank with {other.kind.value} rank"
            )
        return self.value or 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        return (self.value or 0) < other._comparable_value(self)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        return (self.value or 0) <= other._comparable_value(self)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        return (self.value or 0) > other._comparable_value(self)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Rank):
            return NotImplemented
        return (self.value or 0) >= other._comparable_value(self)


class SearchResult(BaseModel):
    """Read-only projection of an item returned by a search path."""

    model_config = ConfigDict(frozen=True)

    id: str
    workspace_id: str
    item_type: ItemType
    title: str = ""
    content: Optional[str] = None
    file_path: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    rank: Rank

    @property
    def score(self) -> Optional[Union[int, float]]:
        """Numeric rank value; only meaningful next to results of the same kind."""
        return self.rank.value


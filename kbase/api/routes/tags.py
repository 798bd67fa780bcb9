"""
Tag API routes.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from kbase.api.deps import get_db
from kbase.api.schemas import TagCreate, TagOut
from kbase.core.db import Database

router = APIRouter()


@router.post("/tags", response_model=TagOut, status_code=201)
def create_tag(body: TagCreate, db: Database = Depends(get_db)):
    """Create a tag. Duplicate names are rejected with 409."""
    tag = db.tags.create(body.name, body.color)
    return TagOut(**tag.model_dump())


@router.get("/tags", response_model=List[TagOut])
def list_tags(db: Database = Depends(get_db)):
    """List all tags with their item counts."""
    return [
        TagOut(**tag.model_dump(), item_count=db.tags.get_item_count(tag.id))
        for tag in db.tags.list()
    ]


@router.get("/tags/{tag_id}", response_model=TagOut)
def get_tag(tag_id: str, db: Database = Depends(get_db)):
    """Get one tag."""
    tag = db.tags.get(tag_id)
    if not tag:
        raise HTTPException(status_code=404, detail="Tag not found")
    return TagOut(**tag.model_dump(), item_count=db.tags.get_item_count(tag.id))


@router.delete("/tags/{tag_id}", status_code=204)
def delete_tag(tag_id: str, db: Database = Depends(get_db)):
    """Delete a tag and remove it from every item."""
    if not db.tags.delete(tag_id):
        raise HTTPException(status_code=404, detail="Tag not found")
    return Response(status_code=204)

"""
Item and item-tag API routes.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from kbase.api.deps import get_db
from kbase.api.schemas import ItemCreate
from kbase.core.db import Database
from kbase.core.models import Item, ItemType, ItemUpdate, Tag

router = APIRouter()


@router.post("/items", response_model=Item, status_code=201)
def create_item(body: ItemCreate, db: Database = Depends(get_db)):
    """Create an item in an existing workspace."""
    return db.items.create(Item(**body.model_dump()))


@router.get("/items", response_model=List[Item])
def list_items(
    workspace_id: str = Query(...),
    item_type: Optional[ItemType] = Query(None),
    db: Database = Depends(get_db),
):
    """
    List a workspace's items, most recently updated first.

    Parameters
    ----------
    workspace_id : str
        Workspace to list
    item_type : ItemType, optional
        Only list items of this type
    """
    if item_type:
        return db.items.list_by_type(workspace_id, item_type)
    return db.items.list_by_workspace(workspace_id)


@router.get("/items/{item_id}", response_model=Item)
def get_item(item_id: str, db: Database = Depends(get_db)):
    """Get one item."""
    item = db.items.get(item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")
    return item


@router.patch("/items/{item_id}", response_model=Item)
def update_item(item_id: str, body: ItemUpdate, db: Database = Depends(get_db)):
    """Apply a partial update to an item."""
    return db.items.update(item_id, body)


@router.delete("/items/{item_id}", status_code=204)
def delete_item(item_id: str, db: Database = Depends(get_db)):
    """Delete an item with its tag associations."""
    if not db.items.delete(item_id):
        raise HTTPException(status_code=404, detail="Item not found")
    return Response(status_code=204)


@router.get("/items/{item_id}/tags", response_model=List[Tag])
def get_item_tags(item_id: str, db: Database = Depends(get_db)):
    """Tags on an item, by name."""
    if not db.items.get(item_id):
        raise HTTPException(status_code=404, detail="Item not found")
    return db.tags.list_for_item(item_id)


@router.put("/items/{item_id}/tags/{tag_id}", response_model=List[Tag])
def attach_tag(item_id: str, tag_id: str, db: Database = Depends(get_db)):
    """Attach a tag to an item; returns the item's tags afterwards."""
    db.tags.attach(item_id, tag_id)
    return db.tags.list_for_item(item_id)


@router.delete("/items/{item_id}/tags/{tag_id}", response_model=List[Tag])
def detach_tag(item_id: str, tag_id: str, db: Database = Depends(get_db)):
    """Remove a tag from an item; returns the item's tags afterwards."""
    db.tags.detach(item_id, tag_id)
    return db.tags.list_for_item(item_id)

"""
Workspace API routes.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from kbase.api.deps import get_db
from kbase.api.schemas import WorkspaceCreate, WorkspaceOut, WorkspaceUpdate
from kbase.core.db import Database

router = APIRouter()


def _with_count(db: Database, workspace) -> WorkspaceOut:
    return WorkspaceOut(
        **workspace.model_dump(),
        item_count=db.workspaces.get_item_count(workspace.id),
    )


@router.post("/workspaces", response_model=WorkspaceOut, status_code=201)
def create_workspace(body: WorkspaceCreate, db: Database = Depends(get_db)):
    """Create a workspace."""
    workspace = db.workspaces.create(body.name, body.description)
    return _with_count(db, workspace)


@router.get("/workspaces", response_model=List[WorkspaceOut])
def list_workspaces(db: Database = Depends(get_db)):
    """List workspaces, most recently updated first."""
    return [_with_count(db, ws) for ws in db.workspaces.list()]


@router.get("/workspaces/{workspace_id}", response_model=WorkspaceOut)
def get_workspace(workspace_id: str, db: Database = Depends(get_db)):
    """Get one workspace."""
    workspace = db.workspaces.get(workspace_id)
    if not workspace:
        raise HTTPException(status_code=404, detail="Workspace not found")
    return _with_count(db, workspace)


@router.patch("/workspaces/{workspace_id}", response_model=WorkspaceOut)
def update_workspace(
    workspace_id: str, body: WorkspaceUpdate, db: Database = Depends(get_db)
):
    """Rename a workspace or change its description."""
    workspace = db.workspaces.update(workspace_id, body.name, body.description)
    return _with_count(db, workspace)


@router.delete("/workspaces/{workspace_id}", status_code=204)
def delete_workspace(workspace_id: str, db: Database = Depends(get_db)):
    """Delete a workspace together with its items."""
    if not db.workspaces.delete(workspace_id):
        raise HTTPException(status_code=404, detail="Workspace not found")
    return Response(status_code=204)

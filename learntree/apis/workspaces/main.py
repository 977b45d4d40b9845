from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, status

from learntree.apis.deps import CurrentWorkspace
from learntree.core.config import settings
from learntree.modules.tree.models import ROOT_ID
from learntree.modules.tree.utils import count_nodes
from learntree.modules.workspace.state import Workspace, workspace_manager
from .schemas import CreateWorkspaceRequest, WorkspaceRead, WorkspaceSummary


router = APIRouter()


def _summary(ws: Workspace) -> WorkspaceSummary:
    return WorkspaceSummary(
        id=ws.id,
        created_at=ws.created_at.isoformat(),
        last_activity=ws.last_activity.isoformat(),
        total_nodes=count_nodes(ws.tree),
        total_cards=len(ws.cards),
    )


def _read(ws: Workspace) -> WorkspaceRead:
    return WorkspaceRead(
        **_summary(ws).model_dump(),
        tree=ws.tree,
        stats=ws.stats(),
        can_undo=ws.history.can_undo,
        can_redo=ws.history.can_redo,
    )


@router.post(
    f"/{settings.app.version}/workspaces",
    response_model=WorkspaceRead,
    status_code=status.HTTP_201_CREATED,
    tags=["workspaces"],
)
async def create_workspace(req: Optional[CreateWorkspaceRequest] = None) -> WorkspaceRead:
    tree = req.tree if req else None
    if tree is not None and tree.id != ROOT_ID:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Tree root id must be '{ROOT_ID}'",
        )
    ws = workspace_manager.create(tree=tree)
    return _read(ws)


@router.get(
    f"/{settings.app.version}/workspaces",
    response_model=list[WorkspaceSummary],
    tags=["workspaces"],
)
async def list_workspaces() -> list[WorkspaceSummary]:
    return [_summary(ws) for ws in workspace_manager.list_workspaces()]


@router.get(
    f"/{settings.app.version}/workspaces/{{workspace_id}}",
    response_model=WorkspaceRead,
    tags=["workspaces"],
)
async def get_workspace_state(ws: CurrentWorkspace) -> WorkspaceRead:
    return _read(ws)


@router.delete(
    f"/{settings.app.version}/workspaces/{{workspace_id}}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["workspaces"],
)
async def delete_workspace(ws: CurrentWorkspace) -> None:
    workspace_manager.delete(ws.id)

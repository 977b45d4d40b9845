from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from learntree.apis.deps import CurrentWorkspace, to_http_error
from learntree.core.config import settings
from learntree.modules.tree.models import ROOT_ID, TreeNode
from learntree.modules.workspace.state import Workspace
from .schemas import (
    AddNodeRequest,
    HistoryItem,
    MoveNodeRequest,
    NodeResponse,
    ProgressResponse,
    TreeResponse,
    UpdateNodeRequest,
)


router = APIRouter()

BASE = f"/{settings.app.version}/workspaces/{{workspace_id}}"


def _tree(ws: Workspace) -> TreeResponse:
    return TreeResponse(
        tree=ws.tree,
        can_undo=ws.history.can_undo,
        can_redo=ws.history.can_redo,
    )


@router.get(f"{BASE}/tree", response_model=TreeResponse, tags=["tree"])
async def get_tree(ws: CurrentWorkspace) -> TreeResponse:
    return _tree(ws)


@router.put(f"{BASE}/tree", response_model=TreeResponse, tags=["tree"])
async def replace_tree(tree: TreeNode, ws: CurrentWorkspace) -> TreeResponse:
    if tree.id != ROOT_ID:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Tree root id must be '{ROOT_ID}'",
        )
    ws.replace_tree(tree)
    return _tree(ws)


@router.post(
    f"{BASE}/nodes",
    response_model=NodeResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["tree"],
)
async def add_node(req: AddNodeRequest, ws: CurrentWorkspace) -> NodeResponse:
    try:
        node = ws.add_node(req.parent_id, req.name, status=req.status, node_id=req.id)
    except ValueError as e:
        raise to_http_error(e) from e
    return NodeResponse(node=node, tree=_tree(ws))


@router.patch(f"{BASE}/nodes/{{node_id}}", response_model=NodeResponse, tags=["tree"])
async def update_node(
    node_id: str, req: UpdateNodeRequest, ws: CurrentWorkspace
) -> NodeResponse:
    try:
        node = ws.update_node(node_id, **req.model_dump(exclude_unset=True))
    except ValueError as e:
        raise to_http_error(e) from e
    return NodeResponse(node=node, tree=_tree(ws))


@router.delete(f"{BASE}/nodes/{{node_id}}", response_model=TreeResponse, tags=["tree"])
async def delete_node(node_id: str, ws: CurrentWorkspace) -> TreeResponse:
    try:
        ws.delete_node(node_id)
    except ValueError as e:
        raise to_http_error(e) from e
    return _tree(ws)


@router.post(
    f"{BASE}/nodes/{{node_id}}/move", response_model=NodeResponse, tags=["tree"]
)
async def move_node(
    node_id: str, req: MoveNodeRequest, ws: CurrentWorkspace
) -> NodeResponse:
    try:
        node = ws.move_node(node_id, req.target_id)
    except ValueError as e:
        raise to_http_error(e) from e
    return NodeResponse(node=node, tree=_tree(ws))


@router.post(f"{BASE}/undo", response_model=TreeResponse, tags=["tree"])
async def undo(ws: CurrentWorkspace) -> TreeResponse:
    try:
        ws.undo()
    except ValueError as e:
        raise to_http_error(e) from e
    return _tree(ws)


@router.post(f"{BASE}/redo", response_model=TreeResponse, tags=["tree"])
async def redo(ws: CurrentWorkspace) -> TreeResponse:
    try:
        ws.redo()
    except ValueError as e:
        raise to_http_error(e) from e
    return _tree(ws)


@router.get(f"{BASE}/history", response_model=list[HistoryItem], tags=["tree"])
async def get_history(ws: CurrentWorkspace) -> list[HistoryItem]:
    return [
        HistoryItem(
            action=e.action,
            description=e.description,
            node_id=e.node_id,
            timestamp=e.timestamp,
            current=i == ws.history.cursor,
        )
        for i, e in enumerate(ws.history.entries)
    ]


@router.get(f"{BASE}/progress", response_model=ProgressResponse, tags=["tree"])
async def get_progress(ws: CurrentWorkspace, node_id: str = ROOT_ID) -> ProgressResponse:
    try:
        p = ws.progress(node_id)
    except ValueError as e:
        raise to_http_error(e) from e
    percent = round(100 * p.learnt / p.total, 1) if p.total else 0.0
    return ProgressResponse(node_id=node_id, learnt=p.learnt, total=p.total, percent=percent)

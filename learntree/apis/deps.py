from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, status

from learntree.modules.workspace.state import Workspace, workspace_manager

ERROR_RESPONSES: dict[str, tuple[int, str]] = {
    "node_not_found": (status.HTTP_404_NOT_FOUND, "Node not found"),
    "card_not_found": (status.HTTP_404_NOT_FOUND, "Card not found"),
    "duplicate_node": (status.HTTP_409_CONFLICT, "Node id already exists"),
    "root_immutable": (status.HTTP_409_CONFLICT, "The root node cannot be moved or deleted"),
    "invalid_move": (status.HTTP_409_CONFLICT, "Cannot move a node into itself or its descendants"),
    "nothing_to_undo": (status.HTTP_409_CONFLICT, "Nothing to undo"),
    "nothing_to_redo": (status.HTTP_409_CONFLICT, "Nothing to redo"),
}


async def get_workspace(workspace_id: str) -> Workspace:
    ws = workspace_manager.get(workspace_id)
    if not ws:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workspace not found")
    return ws


CurrentWorkspace = Annotated[Workspace, Depends(get_workspace)]


def to_http_error(e: ValueError) -> Exception:
    """Translate a workspace error code into an HTTPException; unknown errors pass through."""
    mapped = ERROR_RESPONSES.get(str(e))
    if mapped is None:
        return e
    code, detail = mapped
    return HTTPException(status_code=code, detail=detail)

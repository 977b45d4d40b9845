from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from learntree.modules.tree.models import NodeStatus, TreeNode


class TreeResponse(BaseModel):
    tree: TreeNode
    can_undo: bool
    can_redo: bool


class AddNodeRequest(BaseModel):
    parent_id: str = Field(..., description="Id of the node to append under")
    name: str = Field(..., min_length=1)
    status: NodeStatus = NodeStatus.NO_STATUS
    id: Optional[str] = Field(default=None, description="Client-chosen id; generated when omitted")


class UpdateNodeRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    status: Optional[NodeStatus] = None
    is_expanded: Optional[bool] = None


class MoveNodeRequest(BaseModel):
    target_id: str


class NodeResponse(BaseModel):
    node: TreeNode
    tree: TreeResponse


class HistoryItem(BaseModel):
    action: str
    description: str
    node_id: Optional[str] = None
    timestamp: int
    current: bool = False


class ProgressResponse(BaseModel):
    node_id: str
    learnt: int
    total: int
    percent: float

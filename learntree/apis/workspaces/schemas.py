from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from learntree.modules.cards.deck import DeckStats
from learntree.modules.tree.models import TreeNode


class CreateWorkspaceRequest(BaseModel):
    tree: Optional[TreeNode] = None


class WorkspaceSummary(BaseModel):
    id: str
    created_at: str
    last_activity: str
    total_nodes: int
    total_cards: int


class WorkspaceRead(WorkspaceSummary):
    tree: TreeNode
    stats: DeckStats
    can_undo: bool = False
    can_redo: bool = False

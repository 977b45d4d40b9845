"""Pydantic models for the topic tree.

Nodes are frozen: edits build new nodes along the changed path and share
untouched subtrees, so a history snapshot is just a reference to a root.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ROOT_ID = "root"
DEFAULT_ROOT_NAME = "My Knowledge"


class NodeStatus(str, Enum):
    NO_STATUS = "no-status"
    VISITED = "visited"
    LEARNING = "learning"
    LEARNT = "learnt"


class TreeNode(BaseModel):
    """A topic in the learner's tree; children are owned by their parent."""

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, alias_generator=to_camel
    )

    id: str
    name: str
    children: list[TreeNode] = Field(default_factory=list)
    status: NodeStatus = NodeStatus.NO_STATUS
    is_expanded: bool = True

    @property
    def is_root(self) -> bool:
        return self.id == ROOT_ID


TreeNode.model_rebuild()

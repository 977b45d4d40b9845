"""Topic tree exports."""

from .models import DEFAULT_ROOT_NAME, ROOT_ID, NodeStatus, TreeNode
from .edits import add_node, delete_node, move_node, update_node
from .history import HistoryEntry, TreeHistory
from .utils import (
    Progress,
    calculate_progress,
    count_nodes,
    default_tree,
    empty_tree,
    find_node,
    find_node_by_path,
    find_parent,
    find_path_to_node,
    generate_id,
    iter_nodes,
    make_node,
    node_ids,
)

__all__ = [
    "DEFAULT_ROOT_NAME",
    "ROOT_ID",
    "NodeStatus",
    "TreeNode",
    "add_node",
    "delete_node",
    "move_node",
    "update_node",
    "HistoryEntry",
    "TreeHistory",
    "Progress",
    "calculate_progress",
    "count_nodes",
    "default_tree",
    "empty_tree",
    "find_node",
    "find_node_by_path",
    "find_parent",
    "find_path_to_node",
    "generate_id",
    "iter_nodes",
    "make_node",
    "node_ids",
]

"""Immutable tree edits.

Each edit rebuilds the ancestor chain of the changed node and reuses every
other subtree by reference. When nothing changes the input root is returned
as-is, so ``new is old`` tells a caller the edit was a no-op.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from learntree.modules.tree.models import ROOT_ID, NodeStatus, TreeNode
from learntree.modules.tree.utils import find_node, is_descendant

EDITABLE_FIELDS = frozenset({"name", "status", "is_expanded"})


def _rebuild(
    node: TreeNode, node_id: str, fn: Callable[[TreeNode], TreeNode]
) -> TreeNode:
    if node.id == node_id:
        return fn(node)
    new_children: list[TreeNode] = []
    changed = False
    for child in node.children:
        new_child = _rebuild(child, node_id, fn)
        changed = changed or new_child is not child
        new_children.append(new_child)
    if not changed:
        return node
    return node.model_copy(update={"children": new_children})


def update_node(root: TreeNode, node_id: str, **changes: Any) -> TreeNode:
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise TypeError(f"Cannot update node fields: {sorted(unknown)}")
    if "status" in changes:
        changes["status"] = NodeStatus(changes["status"])

    def apply(node: TreeNode) -> TreeNode:
        diff = {k: v for k, v in changes.items() if getattr(node, k) != v}
        return node.model_copy(update=diff) if diff else node

    return _rebuild(root, node_id, apply)


def add_node(root: TreeNode, parent_id: str, node: TreeNode) -> TreeNode:
    def append(parent: TreeNode) -> TreeNode:
        return parent.model_copy(
            update={"children": [*parent.children, node], "is_expanded": True}
        )

    return _rebuild(root, parent_id, append)


def delete_node(root: TreeNode, node_id: str) -> TreeNode:
    if node_id == ROOT_ID:
        return root
    new_children: list[TreeNode] = []
    changed = False
    for child in root.children:
        if child.id == node_id:
            changed = True
            continue
        new_child = delete_node(child, node_id)
        changed = changed or new_child is not child
        new_children.append(new_child)
    if not changed:
        return root
    return root.model_copy(update={"children": new_children})


def move_node(root: TreeNode, node_id: str, target_id: str) -> TreeNode:
    """Detach ``node_id`` and append it as the last child of ``target_id``.

    Moving the root, moving onto itself or below one of its own descendants,
    and unknown ids all leave the tree untouched.
    """
    if node_id == ROOT_ID or node_id == target_id:
        return root
    moving: Optional[TreeNode] = find_node(root, node_id)
    if moving is None or find_node(root, target_id) is None:
        return root
    if is_descendant(root, node_id, target_id):
        return root
    detached = delete_node(root, node_id)
    return add_node(detached, target_id, moving)

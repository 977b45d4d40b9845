from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional
from uuid import uuid4

from learntree.modules.tree.models import (
    DEFAULT_ROOT_NAME,
    ROOT_ID,
    NodeStatus,
    TreeNode,
)


@dataclass(frozen=True)
class Progress:
    learnt: int
    total: int


def find_node(root: TreeNode, node_id: str) -> Optional[TreeNode]:
    if root.id == node_id:
        return root
    for child in root.children:
        found = find_node(child, node_id)
        if found is not None:
            return found
    return None


def find_parent(root: TreeNode, node_id: str) -> Optional[TreeNode]:
    for child in root.children:
        if child.id == node_id:
            return root
        found = find_parent(child, node_id)
        if found is not None:
            return found
    return None


def find_path_to_node(
    root: TreeNode, node_id: str, current_path: Optional[list[str]] = None
) -> Optional[list[str]]:
    """Names from the root down to ``node_id``, both ends included."""
    path = [*(current_path or []), root.name]
    if root.id == node_id:
        return path
    for child in root.children:
        found = find_path_to_node(child, node_id, path)
        if found is not None:
            return found
    return None


def find_node_by_path(root: TreeNode, names: list[str]) -> Optional[TreeNode]:
    current = root
    for name in names:
        match = next((c for c in current.children if c.name == name), None)
        if match is None:
            return None
        current = match
    return current


def iter_nodes(
    root: TreeNode, path: Optional[list[str]] = None
) -> Iterator[tuple[TreeNode, list[str]]]:
    """Pre-order walk yielding each node with its ancestor names.

    The root is yielded with an empty path and its children also start from an
    empty path; the root's own name never appears in a card path.
    """
    path = path or []
    yield root, path
    child_path = [] if root.id == ROOT_ID else [*path, root.name]
    for child in root.children:
        yield from iter_nodes(child, child_path)


def node_ids(root: TreeNode, *, include_root: bool = False) -> set[str]:
    ids = {node.id for node, _ in iter_nodes(root)}
    if not include_root:
        ids.discard(ROOT_ID)
    return ids


def count_nodes(root: TreeNode) -> int:
    return 1 + sum(count_nodes(child) for child in root.children)


def is_descendant(root: TreeNode, ancestor_id: str, node_id: str) -> bool:
    ancestor = find_node(root, ancestor_id)
    if ancestor is None:
        return False
    return any(find_node(child, node_id) is not None for child in ancestor.children)


def calculate_progress(node: TreeNode) -> Progress:
    """Count learnt leaves against all leaves below ``node``."""
    if not node.children:
        return Progress(learnt=1 if node.status == NodeStatus.LEARNT else 0, total=1)
    learnt = 0
    total = 0
    for child in node.children:
        p = calculate_progress(child)
        learnt += p.learnt
        total += p.total
    return Progress(learnt=learnt, total=total)


def generate_id() -> str:
    return uuid4().hex


def make_node(name: str, *, node_id: Optional[str] = None, **kwargs) -> TreeNode:
    return TreeNode(id=node_id or generate_id(), name=name, **kwargs)


def empty_tree(name: str = DEFAULT_ROOT_NAME) -> TreeNode:
    return TreeNode(id=ROOT_ID, name=name)


def default_tree(name: str = DEFAULT_ROOT_NAME) -> TreeNode:
    """Starter tree a new workspace is seeded with."""
    return TreeNode(
        id=ROOT_ID,
        name=name,
        children=[
            TreeNode(
                id="sample-1",
                name="JavaScript Fundamentals",
                children=[
                    TreeNode(id="sample-1-1", name="Variables and Data Types"),
                    TreeNode(id="sample-1-2", name="Functions"),
                ],
            ),
            TreeNode(
                id="sample-2",
                name="CSS Styling",
                children=[TreeNode(id="sample-2-1", name="Flexbox")],
            ),
        ],
    )

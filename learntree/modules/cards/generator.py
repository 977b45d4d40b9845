"""Derive fresh cards from the topic tree.

Only one question template exists: the learner is asked which branch a topic
belongs to, and the answer names its parent.
"""

from __future__ import annotations

from learntree.modules.cards.models import (
    BRANCH_QUESTION,
    PATH_SEPARATOR,
    Card,
    Difficulty,
    LearningContext,
    QuestionType,
)
from learntree.modules.tree.models import ROOT_ID, TreeNode
from learntree.modules.tree.utils import iter_nodes

COMPLEX_WORDS = (
    "algorithm",
    "architecture",
    "implementation",
    "optimization",
    "integration",
)


def calculate_difficulty(node: TreeNode, path: list[str]) -> Difficulty:
    level = Difficulty.BEGINNER
    depth = len(path)
    child_count = len(node.children)

    if depth >= 3:
        level = Difficulty.ADVANCED
    elif depth >= 1:
        level = Difficulty.INTERMEDIATE

    if child_count > 5:
        level = Difficulty.ADVANCED
    elif child_count > 2 and level == Difficulty.BEGINNER:
        level = Difficulty.INTERMEDIATE

    lowered = node.name.lower()
    if level == Difficulty.BEGINNER and any(w in lowered for w in COMPLEX_WORDS):
        level = Difficulty.INTERMEDIATE

    return level


def create_card(node: TreeNode, path: list[str], now: int) -> Card:
    parent_name = path[-1] if path else "Root"
    child_count = len(node.children)
    full = [*path, node.name]

    return Card(
        id=node.id,
        question=BRANCH_QUESTION,
        answer=f"{node.name} belongs to {parent_name}.",
        question_type=QuestionType.BRANCH_IDENTIFICATION,
        status=node.status,
        path=full,
        full_path=PATH_SEPARATOR.join(full),
        folder=path[0] if path else node.name,
        depth=len(path),
        difficulty=calculate_difficulty(node, path),
        learning_context=LearningContext(
            hierarchy=len(path),
            has_children=child_count > 0,
            is_leaf=child_count == 0,
            is_branch=child_count > 0,
            child_count=child_count,
        ),
        reviews=0,
        interval=1,
        ease_factor=2.5,
        due_date=now,
        last_reviewed=None,
        is_customized=False,
    )


def generate_cards_from_tree(tree: TreeNode, now: int) -> list[Card]:
    """One fresh card per non-root node, in pre-order."""
    return [
        create_card(node, path, now)
        for node, path in iter_nodes(tree)
        if node.id != ROOT_ID
    ]

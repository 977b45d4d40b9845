"""Tree-to-cards synchronization.

``synchronize`` is the only place the card set changes shape. It regenerates
every card from the tree, keeps learner progress for cards that already
exist, keeps hand-edited question/answer text, and drops cards whose node is
gone. The result's key set always equals the tree's non-root node ids.
"""

from __future__ import annotations

from typing import Mapping, Optional

from learntree.core.clock import resolve_now
from learntree.core.logging import get_logger
from learntree.modules.cards.generator import generate_cards_from_tree
from learntree.modules.cards.models import Card, CardMap
from learntree.modules.tree.models import TreeNode

logger = get_logger(__name__)


def _merge(fresh: Card, existing: Card) -> Card:
    update = existing.progress()
    update["status"] = existing.status
    update["is_customized"] = bool(existing.is_customized)
    if existing.is_customized:
        update["question"] = existing.question
        update["answer"] = existing.answer
    return fresh.model_copy(update=update)


def synchronize(
    tree: TreeNode,
    existing_cards: Mapping[str, Card],
    now: Optional[int] = None,
) -> CardMap:
    """Reconcile ``existing_cards`` with ``tree`` and return a new card map."""
    ts = resolve_now(now)
    result: CardMap = {}
    added = 0

    for fresh in generate_cards_from_tree(tree, ts):
        existing = existing_cards.get(fresh.id)
        if existing is None:
            result[fresh.id] = fresh
            added += 1
        else:
            result[fresh.id] = _merge(fresh, existing)

    pruned = sum(1 for card_id in existing_cards if card_id not in result)
    logger.debug(
        "Synchronized cards: total=%d added=%d pruned=%d",
        len(result),
        added,
        pruned,
    )
    return result


def customize_card(card: Card, *, question: str, answer: str) -> Card:
    """Hand-edit a card; the text then survives every later sync."""
    return card.model_copy(
        update={"question": question, "answer": answer, "is_customized": True}
    )


def reset_customization(card: Card) -> Card:
    return card.model_copy(update={"is_customized": False})

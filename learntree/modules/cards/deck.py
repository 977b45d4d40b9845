"""Card selection for study sessions: filters, ordering and deck stats."""

from __future__ import annotations

import random
from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel

from learntree.modules.cards.models import Card, Difficulty
from learntree.modules.tree.models import NodeStatus


class StudyMode(str, Enum):
    BREADTH_FIRST = "breadth-first"
    DUE = "due"
    NEW = "new"
    REVIEW = "review"
    ALL = "all"


class StudyFilters(BaseModel):
    folder: Optional[str] = None
    status: Optional[NodeStatus] = None
    difficulty: Optional[Difficulty] = None
    mode: StudyMode = StudyMode.BREADTH_FIRST


class DeckStats(BaseModel):
    total: int
    due: int
    mastered: int
    new: int


def deck_stats(cards: Iterable[Card], now: int) -> DeckStats:
    items = list(cards)
    return DeckStats(
        total=len(items),
        due=sum(1 for c in items if c.is_due(now)),
        mastered=sum(1 for c in items if c.is_mastered()),
        new=sum(1 for c in items if c.reviews == 0),
    )


def _matches(card: Card, filters: StudyFilters, now: int) -> bool:
    if filters.folder is not None and card.folder != filters.folder:
        return False
    if filters.status is not None and card.status != filters.status:
        return False
    if filters.difficulty is not None and card.difficulty != filters.difficulty:
        return False
    if filters.mode == StudyMode.DUE:
        return card.is_due(now)
    if filters.mode == StudyMode.NEW:
        return card.reviews == 0
    if filters.mode == StudyMode.REVIEW:
        return card.reviews > 0
    return True


def filter_cards(
    cards: Iterable[Card], filters: StudyFilters, now: int
) -> list[Card]:
    return [c for c in cards if _matches(c, filters, now)]


def build_study_queue(
    cards: Iterable[Card],
    filters: StudyFilters,
    now: int,
    *,
    limit: int = 25,
    rng: Optional[random.Random] = None,
) -> list[Card]:
    """Pick up to ``limit`` cards for a session.

    Breadth-first mode puts shallow topics first and overdue cards ahead of
    the rest at the same depth. Remaining ties are shuffled when ``rng`` is
    given and otherwise keep their input order.
    """
    selected = filter_cards(cards, filters, now)
    if filters.mode == StudyMode.BREADTH_FIRST:
        if rng is not None:
            rng.shuffle(selected)
        selected.sort(key=lambda c: (c.depth, not c.due_date < now))
    return selected[: max(0, limit)]


def folders(cards: Iterable[Card]) -> list[str]:
    return sorted({c.folder for c in cards})

"""SM-2 variant review scheduling and mastery status transitions.

``schedule_next`` updates the interval math, ``advance_status`` moves the
mastery status. The host calls them in that order so status rules see the
post-review counters; ``review_card`` bundles the two.
"""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Optional

from learntree.core.clock import resolve_now
from learntree.modules.cards.models import Card
from learntree.modules.tree.models import NodeStatus

INITIAL_INTERVAL = 1
MINIMUM_INTERVAL = 1
# Not applied to intervals yet; kept for the planned cap.
MAXIMUM_INTERVAL = 365
MINIMUM_EASE_FACTOR = 1.3
MS_PER_DAY = 24 * 60 * 60 * 1000


class Quality(IntEnum):
    AGAIN = 0
    HARD = 1
    GOOD = 3
    EASY = 4


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def next_ease_factor(ease_factor: float, quality: int) -> float:
    miss = 5 - quality
    return max(MINIMUM_EASE_FACTOR, ease_factor + (0.1 - miss * (0.08 + miss * 0.02)))


def schedule_next(card: Card, quality: int, now: Optional[int] = None) -> Card:
    """Return ``card`` rescheduled after a review rated ``quality``."""
    ts = resolve_now(now)
    reviews = card.reviews
    interval = card.interval
    ease_factor = card.ease_factor

    if quality < 3:
        reviews = 0
        interval = INITIAL_INTERVAL
    else:
        if reviews == 0:
            interval = INITIAL_INTERVAL
        elif reviews == 1:
            interval = MINIMUM_INTERVAL
        else:
            interval = _round_half_up(interval * ease_factor)
        reviews += 1
        ease_factor = next_ease_factor(ease_factor, quality)

    return card.model_copy(
        update={
            "reviews": reviews,
            "interval": interval,
            "ease_factor": ease_factor,
            "last_reviewed": ts,
            "due_date": ts + interval * MS_PER_DAY,
        }
    )


def advance_status(card: Card, quality: int) -> Card:
    """Apply the mastery state machine; only ``status`` can change."""
    status = card.status
    reviews = card.reviews

    if reviews == 1 and status == NodeStatus.NO_STATUS:
        status = NodeStatus.VISITED
    elif reviews >= 3 and quality >= 3 and status == NodeStatus.VISITED:
        status = NodeStatus.LEARNING
    elif (
        reviews >= 10
        and card.interval >= 30
        and quality >= 3
        and status == NodeStatus.LEARNING
    ):
        status = NodeStatus.LEARNT
    elif quality < 2 and reviews > 1:
        if status == NodeStatus.LEARNT:
            status = NodeStatus.LEARNING
        elif status == NodeStatus.LEARNING:
            status = NodeStatus.VISITED

    if status == card.status:
        return card
    return card.model_copy(update={"status": status})


def review_card(card: Card, quality: int, now: Optional[int] = None) -> Card:
    return advance_status(schedule_next(card, quality, now), quality)

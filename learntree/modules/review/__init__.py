"""Review scheduler exports."""

from .scheduler import (
    INITIAL_INTERVAL,
    MAXIMUM_INTERVAL,
    MINIMUM_EASE_FACTOR,
    MINIMUM_INTERVAL,
    MS_PER_DAY,
    Quality,
    advance_status,
    next_ease_factor,
    review_card,
    schedule_next,
)

__all__ = [
    "INITIAL_INTERVAL",
    "MAXIMUM_INTERVAL",
    "MINIMUM_EASE_FACTOR",
    "MINIMUM_INTERVAL",
    "MS_PER_DAY",
    "Quality",
    "advance_status",
    "next_ease_factor",
    "review_card",
    "schedule_next",
]

"""Card module exports."""

from .models import Card, CardMap, Difficulty, LearningContext, QuestionType
from .generator import calculate_difficulty, create_card, generate_cards_from_tree
from .sync import customize_card, reset_customization, synchronize
from .deck import (
    DeckStats,
    StudyFilters,
    StudyMode,
    build_study_queue,
    deck_stats,
    filter_cards,
    folders,
)

__all__ = [
    "Card",
    "CardMap",
    "Difficulty",
    "LearningContext",
    "QuestionType",
    "calculate_difficulty",
    "create_card",
    "generate_cards_from_tree",
    "customize_card",
    "reset_customization",
    "synchronize",
    "DeckStats",
    "StudyFilters",
    "StudyMode",
    "build_study_queue",
    "deck_stats",
    "filter_cards",
    "folders",
]

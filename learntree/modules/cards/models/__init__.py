from .card import (
    BRANCH_QUESTION,
    PATH_SEPARATOR,
    PROGRESS_FIELDS,
    Card,
    CardMap,
    Difficulty,
    LearningContext,
    QuestionType,
)

__all__ = [
    "BRANCH_QUESTION",
    "PATH_SEPARATOR",
    "PROGRESS_FIELDS",
    "Card",
    "CardMap",
    "Difficulty",
    "LearningContext",
    "QuestionType",
]

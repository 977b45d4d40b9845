"""Pydantic models for cards derived from the topic tree.

A card carries two kinds of data: fields regenerated from the tree on every
sync, and review progress that only the scheduler changes. Derived fields
have defaults so that cards from older exports still validate; the next sync
fills them in.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from learntree.core.clock import now_ms
from learntree.modules.tree.models import NodeStatus

BRANCH_QUESTION = "What branch does this belong to?"
PATH_SEPARATOR = " → "

DEFAULT_INTERVAL = 1
DEFAULT_EASE_FACTOR = 2.5

PROGRESS_FIELDS = ("reviews", "interval", "ease_factor", "due_date", "last_reviewed")


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class QuestionType(str, Enum):
    BRANCH_IDENTIFICATION = "branch-identification"


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class LearningContext(_CamelModel):
    hierarchy: int = 0
    has_children: bool = False
    is_leaf: bool = True
    is_branch: bool = False
    child_count: int = 0


class Card(_CamelModel):
    """Flashcard bound 1:1 to a non-root tree node by ``id``."""

    id: str
    question: str
    answer: str
    question_type: QuestionType = QuestionType.BRANCH_IDENTIFICATION
    status: NodeStatus = NodeStatus.NO_STATUS
    path: list[str] = Field(default_factory=list)
    full_path: str = ""
    folder: str = ""
    depth: int = 0
    difficulty: Difficulty = Difficulty.BEGINNER
    learning_context: LearningContext = Field(default_factory=LearningContext)

    reviews: int = Field(default=0, ge=0)
    interval: int = Field(default=DEFAULT_INTERVAL, ge=1)
    ease_factor: float = Field(default=DEFAULT_EASE_FACTOR, ge=1.3)
    due_date: int = Field(default_factory=now_ms)
    last_reviewed: Optional[int] = None
    is_customized: bool = False

    def progress(self) -> dict:
        return {name: getattr(self, name) for name in PROGRESS_FIELDS}

    def is_due(self, now: int) -> bool:
        return self.due_date <= now

    def is_mastered(self) -> bool:
        return self.reviews >= 10 and self.interval >= 30


CardMap = dict[str, Card]

from __future__ import annotations

from pydantic import BaseModel, Field

from learntree.modules.cards.models import Card


class CustomizeCardRequest(BaseModel):
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)


class ReviewRequest(BaseModel):
    quality: int = Field(..., description="Recall rating: 0 again, 1 hard, 3 good, 4 easy")


class CardListResponse(BaseModel):
    total: int
    cards: list[Card] = Field(default_factory=list)


class StudyQueueResponse(BaseModel):
    total_matching: int
    cards: list[Card] = Field(default_factory=list)

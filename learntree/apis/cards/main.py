from __future__ import annotations

import random
from typing import Optional

from fastapi import APIRouter, Query

from learntree.apis.deps import CurrentWorkspace, to_http_error
from learntree.core.clock import now_ms
from learntree.core.config import settings
from learntree.modules.cards.deck import (
    DeckStats,
    StudyFilters,
    StudyMode,
    filter_cards,
    folders,
)
from learntree.modules.cards.models import Card, Difficulty
from learntree.modules.tree.models import NodeStatus
from .schemas import (
    CardListResponse,
    CustomizeCardRequest,
    ReviewRequest,
    StudyQueueResponse,
)


router = APIRouter()

BASE = f"/{settings.app.version}/workspaces/{{workspace_id}}"


def _filters(
    folder: Optional[str] = None,
    status: Optional[NodeStatus] = None,
    difficulty: Optional[Difficulty] = None,
    mode: StudyMode = StudyMode.ALL,
) -> StudyFilters:
    return StudyFilters(folder=folder, status=status, difficulty=difficulty, mode=mode)


@router.get(f"{BASE}/cards", response_model=CardListResponse, tags=["cards"])
async def list_cards(
    ws: CurrentWorkspace,
    folder: Optional[str] = None,
    status: Optional[NodeStatus] = None,
    difficulty: Optional[Difficulty] = None,
    mode: StudyMode = StudyMode.ALL,
) -> CardListResponse:
    cards = filter_cards(
        ws.cards.values(), _filters(folder, status, difficulty, mode), now_ms()
    )
    return CardListResponse(total=len(cards), cards=cards)


@router.get(f"{BASE}/cards/stats", response_model=DeckStats, tags=["cards"])
async def get_stats(ws: CurrentWorkspace) -> DeckStats:
    return ws.stats()


@router.get(f"{BASE}/cards/folders", response_model=list[str], tags=["cards"])
async def list_folders(ws: CurrentWorkspace) -> list[str]:
    return folders(ws.cards.values())


@router.get(f"{BASE}/study", response_model=StudyQueueResponse, tags=["cards"])
async def get_study_queue(
    ws: CurrentWorkspace,
    folder: Optional[str] = None,
    status: Optional[NodeStatus] = None,
    difficulty: Optional[Difficulty] = None,
    mode: StudyMode = StudyMode.BREADTH_FIRST,
    limit: Optional[int] = Query(default=None, ge=1, le=500),
) -> StudyQueueResponse:
    filters = _filters(folder, status, difficulty, mode)
    now = now_ms()
    queue = ws.study_queue(filters, limit=limit, now=now, rng=random.Random())
    matching = len(filter_cards(ws.cards.values(), filters, now))
    return StudyQueueResponse(total_matching=matching, cards=queue)


@router.get(f"{BASE}/cards/{{card_id}}", response_model=Card, tags=["cards"])
async def get_card(card_id: str, ws: CurrentWorkspace) -> Card:
    try:
        return ws.get_card(card_id)
    except ValueError as e:
        raise to_http_error(e) from e


@router.put(f"{BASE}/cards/{{card_id}}", response_model=Card, tags=["cards"])
async def customize_card(
    card_id: str, req: CustomizeCardRequest, ws: CurrentWorkspace
) -> Card:
    try:
        return ws.customize_card(card_id, question=req.question, answer=req.answer)
    except ValueError as e:
        raise to_http_error(e) from e


@router.post(f"{BASE}/cards/{{card_id}}/reset", response_model=Card, tags=["cards"])
async def reset_card(card_id: str, ws: CurrentWorkspace) -> Card:
    try:
        return ws.reset_card(card_id)
    except ValueError as e:
        raise to_http_error(e) from e


@router.post(f"{BASE}/cards/{{card_id}}/review", response_model=Card, tags=["cards"])
async def review_card(
    card_id: str, req: ReviewRequest, ws: CurrentWorkspace
) -> Card:
    try:
        return ws.review(card_id, req.quality)
    except ValueError as e:
        raise to_http_error(e) from e

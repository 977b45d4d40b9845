"""Serialize a tree and its cards to JSON or a flat CSV."""

from __future__ import annotations

import csv
import io
import json
from typing import Mapping, Optional

from learntree.core.clock import iso_from_ms, resolve_now
from learntree.core.config import settings
from learntree.modules.cards.models import Card
from learntree.modules.tree.models import TreeNode
from learntree.modules.tree.utils import count_nodes

EXPORT_VERSION = "1.0.0"

CSV_HEADERS = [
    "Question",
    "Answer",
    "Status",
    "Difficulty",
    "Reviews",
    "Interval",
    "Due Date",
    "Folder",
    "Path",
    "Depth",
]


def export_payload(
    tree: TreeNode, cards: Mapping[str, Card], now: Optional[int] = None
) -> dict:
    return {
        "version": EXPORT_VERSION,
        "timestamp": resolve_now(now),
        "treeData": tree.model_dump(by_alias=True, mode="json"),
        "cardsData": {
            card_id: card.model_dump(by_alias=True, mode="json")
            for card_id, card in cards.items()
        },
        "metadata": {
            "totalNodes": count_nodes(tree),
            "totalCards": len(cards),
            "exportedBy": settings.study.exported_by,
        },
    }


def export_json(
    tree: TreeNode, cards: Mapping[str, Card], now: Optional[int] = None
) -> str:
    return json.dumps(export_payload(tree, cards, now), indent=2, ensure_ascii=False)


def export_csv(cards: Mapping[str, Card]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for card in cards.values():
        writer.writerow(
            [
                card.question,
                card.answer,
                card.status.value,
                card.difficulty.value,
                card.reviews,
                card.interval,
                iso_from_ms(card.due_date),
                card.folder,
                card.full_path,
                card.depth,
            ]
        )
    return buf.getvalue()

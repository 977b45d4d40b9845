"""Parse imported payloads into a tree and card map.

Several payload shapes are accepted, checked in this order:

- export: ``{"version", "treeData", "cardsData", ...}`` as written by the exporter
- direct: ``{"treeData", "cardsData"?}``
- legacy: ``{"taxonomyTree", "cardsData"}`` from older releases
- cards: a JSON array of cards, placed under an empty root
- tree: a bare tree whose root id is ``"root"``

Structural checks happen here; the sync engine assumes well-formed input.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from pydantic import ValidationError

from learntree.core.config import settings
from learntree.core.logging import get_logger
from learntree.modules.cards.models import Card, CardMap
from learntree.modules.tree.models import ROOT_ID, TreeNode
from learntree.modules.tree.utils import empty_tree

logger = get_logger(__name__)


class ImportFormatError(ValueError):
    def __init__(self, message: str) -> None:
        super().__init__(f"Import failed: {message}")


class ImportShape(str, Enum):
    EXPORT = "export"
    DIRECT = "direct"
    LEGACY = "legacy"
    CARDS = "cards"
    TREE = "tree"


@dataclass
class ImportResult:
    tree: TreeNode
    shape: ImportShape
    cards: CardMap = field(default_factory=dict)


def _check_tree(node: Any, where: str = "root") -> None:
    if not isinstance(node, dict):
        raise ImportFormatError(f"Invalid tree structure at {where}: expected an object")
    if not node.get("id") or not node.get("name") or not isinstance(
        node.get("children"), list
    ):
        raise ImportFormatError(
            f"Invalid tree structure at {where}: missing required fields (id, name, children array)"
        )
    for child in node["children"]:
        _check_tree(child, where=str(child.get("id", "?")) if isinstance(child, dict) else "?")


def _check_cards(cards: Any) -> None:
    if not isinstance(cards, dict):
        raise ImportFormatError("Invalid cards structure: cardsData must be an object")
    for key, card in cards.items():
        if not isinstance(card, dict) or not (
            card.get("id") and card.get("question") and card.get("answer")
        ):
            raise ImportFormatError(
                f"Invalid card structure in card {key}: missing required fields (id, question, answer)"
            )


def _build(tree_data: dict, cards_data: dict, shape: ImportShape) -> ImportResult:
    _check_tree(tree_data)
    _check_cards(cards_data)
    try:
        tree = TreeNode.model_validate(tree_data)
        cards = {c.id: c for c in (Card.model_validate(v) for v in cards_data.values())}
    except ValidationError as e:
        raise ImportFormatError(str(e)) from e
    return ImportResult(tree=tree, cards=cards, shape=shape)


def detect_shape(data: Any) -> ImportShape:
    if isinstance(data, list):
        return ImportShape.CARDS
    if not isinstance(data, dict):
        raise ImportFormatError("Unrecognized data format: expected a JSON object or array")
    if data.get("version") and data.get("treeData") and "cardsData" in data:
        return ImportShape.EXPORT
    if data.get("treeData"):
        return ImportShape.DIRECT
    if data.get("taxonomyTree") and "cardsData" in data:
        return ImportShape.LEGACY
    if data.get("id") == ROOT_ID and "children" in data:
        return ImportShape.TREE
    raise ImportFormatError(
        "Unrecognized data format. Expected an export file, treeData/cardsData, "
        "or a tree whose root id is 'root'."
    )


def import_payload(payload: Union[str, bytes, dict, list]) -> ImportResult:
    if isinstance(payload, (str, bytes)):
        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            raise ImportFormatError(f"Invalid JSON: {e.msg}") from e
    else:
        data = payload

    shape = detect_shape(data)
    logger.info("Importing payload", extra={"shape": shape.value})

    if shape in (ImportShape.EXPORT, ImportShape.DIRECT):
        return _build(data["treeData"], data.get("cardsData") or {}, shape)
    if shape == ImportShape.LEGACY:
        return _build(data["taxonomyTree"], data["cardsData"] or {}, shape)
    if shape == ImportShape.TREE:
        return _build(data, {}, shape)

    cards_data = {c["id"]: c for c in data if isinstance(c, dict) and c.get("id")}
    root = empty_tree(settings.study.root_name)
    return _build(root.model_dump(by_alias=True, mode="json"), cards_data, shape)

"""In-memory workspaces holding a learner's tree, cards and history.

A workspace is the state layer around the core: every tree mutation goes
through ``_commit``, which re-synchronizes the card map and records an undo
snapshot. Reviews and card edits touch single cards and leave the tree and
its history alone. Workspaces live in process memory only.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Union
from uuid import uuid4

from learntree.core.clock import resolve_now
from learntree.core.config import settings
from learntree.core.logging import get_logger
from learntree.modules.cards.deck import (
    DeckStats,
    StudyFilters,
    build_study_queue,
    deck_stats,
)
from learntree.modules.cards.models import Card, CardMap
from learntree.modules.cards.sync import (
    customize_card,
    reset_customization,
    synchronize,
)
from learntree.modules.review.scheduler import review_card
from learntree.modules.transfer.exporter import export_csv, export_json
from learntree.modules.transfer.importer import ImportResult, import_payload
from learntree.modules.tree.edits import add_node, delete_node, move_node, update_node
from learntree.modules.tree.history import HistoryEntry, TreeHistory
from learntree.modules.tree.models import ROOT_ID, NodeStatus, TreeNode
from learntree.modules.tree.utils import (
    Progress,
    calculate_progress,
    default_tree,
    find_node,
    generate_id,
    is_descendant,
)

logger = get_logger(__name__)


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _short_id() -> str:
    # 8-char slice from uuid4
    return uuid4().hex[:8]


@dataclass
class Workspace:
    id: str
    tree: TreeNode
    cards: CardMap = field(default_factory=dict)
    history: TreeHistory = field(
        default_factory=lambda: TreeHistory(limit=settings.study.history_limit)
    )
    created_at: datetime = field(default_factory=_now_utc)
    last_activity: datetime = field(default_factory=_now_utc)

    def __post_init__(self) -> None:
        self.cards = synchronize(self.tree, self.cards)
        self.history.record(
            HistoryEntry(
                action="INIT", description="Workspace created", tree_snapshot=self.tree
            )
        )

    # Tree mutations -----------------------------------------------------
    def _commit(
        self,
        tree: TreeNode,
        *,
        action: str,
        description: str,
        node_id: Optional[str] = None,
        record: bool = True,
    ) -> TreeNode:
        self.tree = tree
        self.cards = synchronize(tree, self.cards)
        if record:
            self.history.record(
                HistoryEntry(
                    action=action,
                    description=description,
                    tree_snapshot=tree,
                    node_id=node_id,
                )
            )
        self.last_activity = _now_utc()
        logger.info(
            description,
            extra={"workspace": self.id, "node_id": node_id or "-"},
        )
        return tree

    def _require_node(self, node_id: str) -> TreeNode:
        node = find_node(self.tree, node_id)
        if node is None:
            raise ValueError("node_not_found")
        return node

    def add_node(
        self,
        parent_id: str,
        name: str,
        *,
        status: NodeStatus = NodeStatus.NO_STATUS,
        node_id: Optional[str] = None,
    ) -> TreeNode:
        self._require_node(parent_id)
        node_id = node_id or generate_id()
        if find_node(self.tree, node_id) is not None:
            raise ValueError("duplicate_node")
        node = TreeNode(id=node_id, name=name, status=status)
        self._commit(
            add_node(self.tree, parent_id, node),
            action="ADD_NODE",
            description=f"Added '{name}'",
            node_id=node.id,
        )
        return node

    def update_node(self, node_id: str, **changes: Any) -> TreeNode:
        node = self._require_node(node_id)
        changes = {k: v for k, v in changes.items() if v is not None}
        tree = update_node(self.tree, node_id, **changes)
        if tree is not self.tree:
            # Expand/collapse is a view toggle, not an undoable edit
            structural = set(changes) - {"is_expanded"}
            self._commit(
                tree,
                action="UPDATE_NODE",
                description=f"Updated '{node.name}'",
                node_id=node_id,
                record=bool(structural),
            )
        return self._require_node(node_id)

    def delete_node(self, node_id: str) -> None:
        if node_id == ROOT_ID:
            raise ValueError("root_immutable")
        node = self._require_node(node_id)
        self._commit(
            delete_node(self.tree, node_id),
            action="DELETE_NODE",
            description=f"Deleted '{node.name}'",
            node_id=node_id,
        )

    def move_node(self, node_id: str, target_id: str) -> TreeNode:
        if node_id == ROOT_ID:
            raise ValueError("root_immutable")
        node = self._require_node(node_id)
        target = self._require_node(target_id)
        if node_id == target_id or is_descendant(self.tree, node_id, target_id):
            raise ValueError("invalid_move")
        self._commit(
            move_node(self.tree, node_id, target_id),
            action="MOVE_NODE",
            description=f"Moved '{node.name}' to '{target.name}'",
            node_id=node_id,
        )
        return self._require_node(node_id)

    def replace_tree(self, tree: TreeNode, *, description: str = "Replaced tree") -> None:
        self._commit(tree, action="SET_TREE", description=description)

    def undo(self) -> TreeNode:
        snapshot = self.history.undo()
        if snapshot is None:
            raise ValueError("nothing_to_undo")
        return self._commit(snapshot, action="UNDO", description="Undo", record=False)

    def redo(self) -> TreeNode:
        snapshot = self.history.redo()
        if snapshot is None:
            raise ValueError("nothing_to_redo")
        return self._commit(snapshot, action="REDO", description="Redo", record=False)

    def progress(self, node_id: str = ROOT_ID) -> Progress:
        return calculate_progress(self._require_node(node_id))

    # Cards ----------------------------------------------------------------
    def get_card(self, card_id: str) -> Card:
        card = self.cards.get(card_id)
        if card is None:
            raise ValueError("card_not_found")
        return card

    def _store(self, card: Card) -> Card:
        self.cards = {**self.cards, card.id: card}
        self.last_activity = _now_utc()
        return card

    def customize_card(self, card_id: str, *, question: str, answer: str) -> Card:
        card = self.get_card(card_id)
        return self._store(customize_card(card, question=question, answer=answer))

    def reset_card(self, card_id: str) -> Card:
        card = reset_customization(self.get_card(card_id))
        self._store(card)
        # Regenerate question/answer now rather than on the next tree edit
        self.cards = synchronize(self.tree, self.cards)
        return self.cards[card_id]

    def review(self, card_id: str, quality: int, now: Optional[int] = None) -> Card:
        card = review_card(self.get_card(card_id), quality, now)
        logger.info(
            "Reviewed card q=%s interval=%s status=%s",
            quality,
            card.interval,
            card.status.value,
            extra={"workspace": self.id, "node_id": card_id},
        )
        return self._store(card)

    def stats(self, now: Optional[int] = None) -> DeckStats:
        return deck_stats(self.cards.values(), resolve_now(now))

    def study_queue(
        self,
        filters: StudyFilters,
        *,
        limit: Optional[int] = None,
        now: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> list[Card]:
        return build_study_queue(
            self.cards.values(),
            filters,
            resolve_now(now),
            limit=settings.study.session_size if limit is None else limit,
            rng=rng,
        )

    # Import / export ------------------------------------------------------
    def import_data(self, payload: Union[str, bytes, dict, list]) -> ImportResult:
        result = import_payload(payload)
        self.cards = result.cards
        self._commit(
            result.tree,
            action="IMPORT",
            description=f"Imported {result.shape.value} payload",
        )
        return result

    def export_json(self, now: Optional[int] = None) -> str:
        return export_json(self.tree, self.cards, now)

    def export_csv(self) -> str:
        return export_csv(self.cards)


class WorkspaceManager:
    def __init__(self) -> None:
        self.workspaces: dict[str, Workspace] = {}

    def create(self, *, tree: Optional[TreeNode] = None) -> Workspace:
        ws_id = _short_id()
        ws = Workspace(id=ws_id, tree=tree or default_tree(settings.study.root_name))
        self.workspaces[ws_id] = ws
        logger.info("Workspace created", extra={"workspace": ws_id})
        return ws

    def get(self, workspace_id: str) -> Optional[Workspace]:
        return self.workspaces.get(workspace_id)

    def delete(self, workspace_id: str) -> bool:
        return self.workspaces.pop(workspace_id, None) is not None

    def list_workspaces(self) -> list[Workspace]:
        return sorted(self.workspaces.values(), key=lambda w: w.created_at)


workspace_manager = WorkspaceManager()

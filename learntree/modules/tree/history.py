"""Snapshot-based undo/redo for the topic tree.

History is a list of whole-tree snapshots with a cursor pointing at the
current one. Trees are immutable, so a snapshot costs one reference plus
whatever nodes the edit rebuilt.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from learntree.core.clock import now_ms
from learntree.modules.tree.models import TreeNode


@dataclass(frozen=True)
class HistoryEntry:
    action: str
    description: str
    tree_snapshot: TreeNode
    node_id: Optional[str] = None
    timestamp: int = field(default_factory=now_ms)


class TreeHistory:
    def __init__(self, *, limit: int = 100) -> None:
        self.limit = max(1, int(limit))
        self._entries: list[HistoryEntry] = []
        self._cursor = -1

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current(self) -> Optional[HistoryEntry]:
        if self._cursor < 0:
            return None
        return self._entries[self._cursor]

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def record(self, entry: HistoryEntry) -> None:
        # A new action discards the redo tail
        del self._entries[self._cursor + 1 :]
        self._entries.append(entry)
        overflow = len(self._entries) - self.limit
        if overflow > 0:
            del self._entries[:overflow]
        self._cursor = len(self._entries) - 1

    def undo(self) -> Optional[TreeNode]:
        if not self.can_undo:
            return None
        self._cursor -= 1
        return self._entries[self._cursor].tree_snapshot

    def redo(self) -> Optional[TreeNode]:
        if not self.can_redo:
            return None
        self._cursor += 1
        return self._entries[self._cursor].tree_snapshot

"""Quick inspector for learntree export files.

Summarizes tree and card counts, checks that the card ids match the tree's
non-root node ids, and prints a few sample and due cards. Useful before
importing a file produced by an older release.

Usage:
  uv run scripts/inspect_export.py path/to/export.json
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure project root is on sys.path so `learntree` package imports resolve
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from learntree.core.clock import iso_from_ms, now_ms
from learntree.modules.cards.deck import deck_stats
from learntree.modules.transfer.importer import ImportFormatError, import_payload
from learntree.modules.tree.utils import count_nodes, node_ids


def main(argv: list[str]) -> int:
    if len(argv) != 1:
        print("usage: inspect_export.py EXPORT_JSON")
        return 2

    try:
        result = import_payload(Path(argv[0]).read_text(encoding="utf-8"))
    except ImportFormatError as e:
        print(f"❌ {e}")
        return 1

    tree, cards = result.tree, result.cards
    now = now_ms()
    print("Export summary:")
    print(f"- Shape: {result.shape.value}")
    print(f"- Nodes (incl. root): {count_nodes(tree)}")
    print(f"- Cards: {len(cards)}")

    ids = node_ids(tree)
    orphans = sorted(set(cards) - ids)
    missing = sorted(ids - set(cards))
    print(f"- Orphan cards (no node): {len(orphans)}")
    for card_id in orphans[:5]:
        print(f"    • {card_id}")
    print(f"- Nodes without a card: {len(missing)}")
    for node_id in missing[:5]:
        print(f"    • {node_id}")

    stats = deck_stats(cards.values(), now)
    print(
        f"- Due: {stats.due} | Mastered: {stats.mastered} | New: {stats.new}"
    )

    if not cards:
        print("- No cards found.")
        return 0

    print("\nSample cards:")
    for card in list(cards.values())[:3]:
        flag = " (customized)" if card.is_customized else ""
        print(f"  - Q: {card.question[:100]!r}{flag}")
        print(f"    A: {card.answer[:120]!r}")

    due = sorted((c for c in cards.values() if c.is_due(now)), key=lambda c: c.due_date)
    if due:
        print("\nMost overdue:")
        for card in due[:5]:
            print(
                f"  • {card.full_path or card.id} | due={iso_from_ms(card.due_date)} "
                f"| reviews={card.reviews} | status={card.status.value}"
            )

    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))

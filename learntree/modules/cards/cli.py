from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from learntree.core.clock import resolve_now
from learntree.modules.cards.deck import deck_stats
from learntree.modules.cards.sync import synchronize
from learntree.modules.review.scheduler import review_card
from learntree.modules.transfer.exporter import export_csv, export_json
from learntree.modules.transfer.importer import ImportFormatError, import_payload


def _load_payload(args: argparse.Namespace) -> str:
    if args.input == "-":
        return sys.stdin.read()
    path = Path(args.input)
    if not path.is_file():
        raise SystemExit(f"Input file not found: {args.input}")
    return path.read_text(encoding="utf-8")


def _emit(text: str, output: str | None) -> None:
    if output:
        Path(output).write_text(text, encoding="utf-8")
    else:
        print(text)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="learntree", description="Topic tree flashcards CLI"
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    def add_io(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--input", "-i", default="-", help="Export/tree JSON file ('-' for stdin)"
        )
        p.add_argument("--output", "-o", help="Write to this file instead of stdout")

    s = sub.add_parser("sync", help="Reconcile cards with the tree and print an export")
    add_io(s)

    c = sub.add_parser("csv", help="Print the synchronized cards as CSV")
    add_io(c)

    r = sub.add_parser("review", help="Apply one review rating to a card")
    add_io(r)
    r.add_argument("--card", required=True, help="Card (node) id")
    r.add_argument(
        "--quality", "-q", type=int, required=True, help="0 again, 1 hard, 3 good, 4 easy"
    )

    st = sub.add_parser("stats", help="Print deck statistics")
    add_io(st)

    args = parser.parse_args(argv)
    try:
        result = import_payload(_load_payload(args))
    except ImportFormatError as e:
        raise SystemExit(str(e))

    now = resolve_now()
    tree = result.tree
    cards = synchronize(tree, result.cards, now)

    if args.cmd == "sync":
        _emit(export_json(tree, cards, now), args.output)
        return 0
    if args.cmd == "csv":
        _emit(export_csv(cards), args.output)
        return 0
    if args.cmd == "review":
        card = cards.get(args.card)
        if card is None:
            raise SystemExit(f"Card not found: {args.card}")
        cards = {**cards, card.id: review_card(card, args.quality, now)}
        _emit(export_json(tree, cards, now), args.output)
        return 0
    if args.cmd == "stats":
        stats = deck_stats(cards.values(), now)
        _emit(json.dumps(stats.model_dump(), indent=2), args.output)
        return 0

    parser.print_help()
    return 2


if __name__ == "__main__":
    raise SystemExit(main())

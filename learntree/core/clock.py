"""Wall-clock helpers. Timestamps are epoch milliseconds throughout."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def resolve_now(now: Optional[int] = None) -> int:
    return now_ms() if now is None else int(now)


def iso_from_ms(ms: Optional[int]) -> Optional[str]:
    if ms is None:
        return None
    dt = datetime.fromtimestamp(ms / 1000, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")

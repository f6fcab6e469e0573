from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class RecordRow:
    """One ticket as returned by the full statistics export.

        Only ``record_id`` is mandatory. Missing values are kept as None here;
        fallback tokens are applied when the row is formatted.
        """

    record_id: str
    title: str | None = None
    category: str | None = None
    problem: str | None = None
    status: str | None = None
    priority: str | None = None
    requester: str | None = None
    opened_at: datetime | None = None
    assignee: str | None = None
    resolved_at: datetime | None = None
    resolution_days: float | int | None = None
    opening_reason: str | None = None
    raw_payload: dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass(frozen=True)
class TabularDocument:
    header: tuple[str, ...]
    rows: tuple[tuple[Any, ...], ...] = ()

    def __len__(self) -> int:
        return len(self.rows)


@dataclass
class FetchResult:
    """Outcome of a statistics fetch. ``error`` is set when the fetch failed."""

    records: list[RecordRow] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

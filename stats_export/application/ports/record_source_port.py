from __future__ import annotations
from typing import Protocol
from stats_export.domain.records import FetchResult


class RecordSourcePort(Protocol):
    def fetch_records(self, user_email: str) -> FetchResult:
        """Return every ticket visible to ``user_email``; never raises."""
        ...

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Sequence


class ExportKind(str, Enum):
    TABULAR = "tabular"
    SINGLE_RASTER = "single_raster"
    DOCUMENT = "document"


class ExportState(str, Enum):
    IDLE = "idle"
    BUSY = "busy"
    ERROR = "error"


# allowed state changes of the export orchestrator
TRANSITIONS: dict[ExportState, frozenset[ExportState]] = {
    ExportState.IDLE: frozenset({ExportState.BUSY}),
    ExportState.BUSY: frozenset({ExportState.IDLE, ExportState.ERROR}),
    ExportState.ERROR: frozenset({ExportState.IDLE}),
}


@dataclass(frozen=True)
class ExportRequest:
    kind: ExportKind
    filename: str
    surfaces: Sequence[Any] = field(default_factory=tuple)


@dataclass(frozen=True)
class ExportOutcome:
    kind: ExportKind
    path: Path | None = None
    error: str | None = None
    degraded: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and self.path is not None

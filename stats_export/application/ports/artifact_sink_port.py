from __future__ import annotations
from pathlib import Path
from typing import Protocol


class ArtifactSinkPort(Protocol):
    def deliver(self, filename: str, payload: bytes) -> Path:
        """Persist a finished artifact and return where it ended up."""
        ...

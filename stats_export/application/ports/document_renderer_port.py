from __future__ import annotations
from typing import Protocol
from stats_export.domain.artifacts import DocumentArtifact
from stats_export.domain.records import RecordRow, TabularDocument


class DocumentRendererPort(Protocol):
    def render(self, document: DocumentArtifact) -> bytes:
        ...


class TabularEncoderPort(Protocol):
    def __call__(
        self,
        document: TabularDocument,
        records: list[RecordRow],
        generated_by: str,
    ) -> bytes:
        ...

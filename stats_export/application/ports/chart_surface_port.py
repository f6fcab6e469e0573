from __future__ import annotations
from typing import Protocol


class ChartSurface(Protocol):
    surface_id: str
    title: str

    def is_available(self) -> bool:
        ...

    def produce_raster(
        self,
        scale: float,
        background: str,
        allow_cross_origin: bool,
    ) -> bytes:
        """Snapshot the currently rendered pixels as encoded image bytes."""
        ...

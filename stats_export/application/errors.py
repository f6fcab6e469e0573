from __future__ import annotations
from stats_export.shared.errors import (
    AssemblyError,
    DeliveryError,
    ExportError,
    ExportInProgressError,
    SurfaceUnavailable,
)


__all__ = [
    "AssemblyError",
    "DeliveryError",
    "ExportError",
    "ExportInProgressError",
    "SurfaceUnavailable",
]

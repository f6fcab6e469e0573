from __future__ import annotations


class ExportError(RuntimeError):
    """Base class for failures that abort an export operation."""


class NetworkError(ExportError):
    """Raised when the statistics API cannot be reached or answers with garbage."""


class SurfaceUnavailable(ExportError):
    """Raised when a chart surface is not mounted or cannot produce a snapshot."""


class AssemblyError(ExportError):
    """Raised when rasters cannot be laid out or rendered into a document."""


class DeliveryError(ExportError):
    """Raised when an artifact cannot be written to its destination."""


class ExportInProgressError(ExportError):
    """Raised when an export is requested while another one is still running."""


class ChartCatalogError(RuntimeError):
    """Raised when the chart catalog cannot be loaded, parsed, or validated."""

from __future__ import annotations
import logging
from io import BytesIO
from PIL import Image, UnidentifiedImageError
from stats_export.application.ports.chart_surface_port import ChartSurface
from stats_export.domain.artifacts import RasterArtifact
from stats_export.application.errors import SurfaceUnavailable


logger = logging.getLogger(__name__)

DEFAULT_BACKGROUND = "#ffffff"


def rasterize(
    surface: ChartSurface,
    scale: float = 2.0,
    background: str = DEFAULT_BACKGROUND,
    allow_cross_origin: bool = True,
) -> RasterArtifact:
    """Snapshot a chart surface into an RGBA PNG raster.

        The surface is only borrowed for the duration of the call. Raises
        SurfaceUnavailable if the surface is not mounted, if its snapshot
        fails, or if the snapshot bytes are not a decodable image.
        """

    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale!r}")

    if not surface.is_available():
        logger.error("Chart surface %s is not available for rasterization", surface.surface_id)
        raise SurfaceUnavailable(f"Chart '{surface.title}' is not available")

    try:
        raw = surface.produce_raster(scale, background, allow_cross_origin)
    except SurfaceUnavailable:
        raise
    except Exception as exc:
        logger.exception("Snapshot of chart surface %s failed", surface.surface_id)
        raise SurfaceUnavailable(f"Chart '{surface.title}' could not be captured") from exc

    try:
        with Image.open(BytesIO(raw)) as image:
            rgba = image.convert("RGBA")
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        logger.error("Chart surface %s produced an unreadable snapshot", surface.surface_id)
        raise SurfaceUnavailable(f"Chart '{surface.title}' produced an invalid image") from exc

    with BytesIO() as buffer:
        rgba.save(buffer, format="PNG")
        payload = buffer.getvalue()

    logger.info(
        "Rasterized chart %s at scale %.1f: %dx%d px",
        surface.surface_id,
        scale,
        rgba.width,
        rgba.height,
    )
    return RasterArtifact(
        width=rgba.width,
        height=rgba.height,
        payload=payload,
        caption=surface.title,
    )

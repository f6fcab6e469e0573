from __future__ import annotations
from io import BytesIO
import pytest
from PIL import Image
from stats_export.application.rasterizer import rasterize
from stats_export.shared.errors import SurfaceUnavailable


def _png(width: int, height: int, mode: str = "RGB") -> bytes:
    with BytesIO() as buffer:
        Image.new(mode, (width, height), "white").save(buffer, format="PNG")
        return buffer.getvalue()

class FakeSurface:
    def __init__(self, payload: bytes | None = None, available: bool = True, error: Exception | None = None) -> None:
        self.surface_id = "bar_chart"
        self.title = "Chamados por Mês"
        self._payload = payload if payload is not None else _png(40, 20)
        self._available = available
        self._error = error
        self.calls: list[tuple[float, str, bool]] = []

    def is_available(self) -> bool:
        return self._available

    def produce_raster(self, scale: float, background: str, allow_cross_origin: bool) -> bytes:
        self.calls.append((scale, background, allow_cross_origin))
        if self._error is not None:
            raise self._error
        return self._payload

def test_rasterize_returns_rgba_png_with_pixel_size_and_caption() -> None:
    surface = FakeSurface(payload=_png(40, 20, mode="RGB"))

    raster = rasterize(surface, scale=2.0, background="#ffffff", allow_cross_origin=True)

    assert (raster.width, raster.height) == (40, 20)
    assert raster.caption == "Chamados por Mês"
    with Image.open(BytesIO(raster.payload)) as image:
        assert image.format == "PNG"
        assert image.mode == "RGBA"
    assert surface.calls == [(2.0, "#ffffff", True)]

def test_unavailable_surface_raises_without_snapshot() -> None:
    surface = FakeSurface(available=False)

    with pytest.raises(SurfaceUnavailable):
        rasterize(surface)

    assert surface.calls == []

def test_snapshot_failure_is_wrapped_in_surface_unavailable() -> None:
    surface = FakeSurface(error=RuntimeError("canvas tainted"))

    with pytest.raises(SurfaceUnavailable) as excinfo:
        rasterize(surface)

    assert isinstance(excinfo.value.__cause__, RuntimeError)

def test_undecodable_snapshot_raises_surface_unavailable() -> None:
    surface = FakeSurface(payload=b"not an image")

    with pytest.raises(SurfaceUnavailable):
        rasterize(surface)

@pytest.mark.parametrize("scale", [0, -1.5])
def test_non_positive_scale_is_rejected(scale: float) -> None:
    with pytest.raises(ValueError):
        rasterize(FakeSurface(), scale=scale)

from __future__ import annotations
import math
import pytest
from stats_export.application.document_builder import LayoutStyle, PaginatedDocumentBuilder
from stats_export.domain.artifacts import BlockKind, PageGeometry, RasterArtifact
from stats_export.shared.errors import AssemblyError


def _raster(width: int, height: int, caption: str = "chart") -> RasterArtifact:
    return RasterArtifact(width=width, height=height, payload=b"png", caption=caption)

# 100 mm tall pages with 10 mm margins: 80 mm of usable height, body starts at the margin
SMALL_PAGE = PageGeometry(width=100.0, height=100.0, margin=10.0)
FLAT_STYLE = LayoutStyle(body_start_y=10.0, caption_height=10.0, block_spacing=0.0)

def _sections(count: int) -> list[tuple[RasterArtifact, str]]:
    # 800x300 px scaled to 80 mm wide -> 30 mm tall, 40 mm with the caption
    return [(_raster(800, 300, f"chart {i}"), f"chart {i}") for i in range(count)]

def test_image_is_scaled_to_content_width_keeping_aspect_ratio() -> None:
    builder = PaginatedDocumentBuilder()

    document = builder.build([(_raster(1000, 500), "Chamados por Mês")])

    image = document.pages[0].image_blocks[0]
    assert image.x == 20.0
    assert image.width == pytest.approx(170.0)
    assert image.height == pytest.approx(85.0)

def test_first_page_has_title_and_requester_then_sections() -> None:
    builder = PaginatedDocumentBuilder()

    document = builder.build([(_raster(1000, 500), "Chamados por Mês")], title="Relatório", requester="Ana")

    texts = [(b.text, b.y) for b in document.pages[0].blocks if b.kind is BlockKind.TEXT]
    assert texts == [("Relatório", 20.0), ("Por: Ana", 40.0), ("Chamados por Mês", 60.0)]
    assert document.pages[0].image_blocks[0].y == 70.0

def test_requester_defaults_to_sistema() -> None:
    document = PaginatedDocumentBuilder().build([])

    assert document.requester == "Sistema"
    assert document.page_count == 1
    assert document.pages[0].blocks[1].text == "Por: Sistema"

def test_overflow_emits_ceil_of_cumulative_over_capacity_pages() -> None:
    builder = PaginatedDocumentBuilder(geometry=SMALL_PAGE, style=FLAT_STYLE)
    sections = _sections(5)

    document = builder.build(sections)

    capacity = SMALL_PAGE.height - 2 * SMALL_PAGE.margin
    cumulative = 5 * 40.0
    assert document.page_count == math.ceil(cumulative / capacity) == 3
    assert [len(page.image_blocks) for page in document.pages] == [2, 2, 1]

def test_caption_always_shares_the_page_with_its_image() -> None:
    builder = PaginatedDocumentBuilder(geometry=SMALL_PAGE, style=LayoutStyle(body_start_y=10.0, block_spacing=5.0))

    document = builder.build(_sections(7))

    placed: list[str] = []
    for page in document.pages:
        blocks = [b for b in page.blocks if b.text is None or b.text.startswith("chart")]
        for caption, image in zip(blocks[::2], blocks[1::2]):
            assert caption.kind is BlockKind.TEXT
            assert image.kind is BlockKind.IMAGE
            assert image.raster is not None and image.raster.caption == caption.text
            assert image.y == caption.y + 10.0
            assert image.y + image.height <= SMALL_PAGE.height - SMALL_PAGE.margin
            placed.append(caption.text or "")
    assert placed == [f"chart {i}" for i in range(7)]

def test_later_pages_start_at_margin_without_title() -> None:
    builder = PaginatedDocumentBuilder()
    # 1000x800 px -> 136 mm tall images, only one fits per page after the header
    sections = [(_raster(1000, 800), f"c{i}") for i in range(3)]

    document = builder.build(sections)

    assert document.page_count == 3
    second = document.pages[1]
    assert second.blocks[0].text == "c1"
    assert second.blocks[0].y == 20.0

def test_zero_sized_raster_raises_assembly_error() -> None:
    with pytest.raises(AssemblyError):
        PaginatedDocumentBuilder().build([(_raster(0, 100), "broken")])

def test_image_taller_than_a_page_is_scaled_down_to_fit() -> None:
    builder = PaginatedDocumentBuilder(geometry=SMALL_PAGE, style=FLAT_STYLE)

    document = builder.build([(_raster(100, 1000), "tall")])

    image = document.pages[0].image_blocks[0]
    assert image.height == pytest.approx(70.0)
    assert image.width == pytest.approx(7.0)
    assert image.y + image.height <= SMALL_PAGE.height - SMALL_PAGE.margin

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable
from stats_export.domain.artifacts import (
    A4_PORTRAIT,
    BlockKind,
    DocumentArtifact,
    Page,
    PageGeometry,
    PageLayout,
    PlacedBlock,
    RasterArtifact,
)
from stats_export.application.errors import AssemblyError


logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Relatório de Estatísticas - Chamados"
DEFAULT_REQUESTER = "Sistema"


@dataclass(frozen=True)
class LayoutStyle:
    title_y: float = 20.0
    requester_y: float = 40.0
    body_start_y: float = 60.0
    title_font_size: float = 20.0
    caption_font_size: float = 14.0
    caption_height: float = 10.0
    block_spacing: float = 20.0


DEFAULT_STYLE = LayoutStyle()


class PaginatedDocumentBuilder:
    """Lays out chart rasters top to bottom over fixed-size pages.

        Each caption and its image form one unit: when the unit does not fit
        below the cursor, a new page is opened before either is placed.
        Placement is a single pass in input order; nothing is moved once
        placed.
        """

    def __init__(
        self,
        geometry: PageGeometry = A4_PORTRAIT,
        style: LayoutStyle = DEFAULT_STYLE,
    ) -> None:
        if geometry.content_width <= 0:
            raise ValueError("Page margins leave no room for content")
        self._geometry = geometry
        self._style = style

    def build(
        self,
        sections: Iterable[tuple[RasterArtifact, str]],
        title: str = DEFAULT_TITLE,
        requester: str | None = None,
    ) -> DocumentArtifact:
        requester_name = requester or DEFAULT_REQUESTER
        document = DocumentArtifact(
            title=title,
            requester=requester_name,
            geometry=self._geometry,
        )
        layout = PageLayout(geometry=self._geometry)

        page = self._open_page(document, layout)
        self._place_header(page, title, requester_name)
        layout.cursor = self._style.body_start_y

        for index, (raster, caption) in enumerate(sections):
            image_width, image_height = self._display_size(raster, index)
            unit_height = self._style.caption_height + image_height

            if not layout.fits(unit_height) and layout.cursor > self._geometry.margin:
                page = self._open_page(document, layout)

            self._place_section(page, layout, raster, caption, image_width, image_height)
            layout.advance(unit_height + self._style.block_spacing)

        logger.info(
            "Laid out %d page(s) for document %r",
            document.page_count,
            document.title,
        )
        return document

    def _open_page(self, document: DocumentArtifact, layout: PageLayout) -> Page:
        page = Page(number=len(document.pages) + 1)
        document.pages.append(page)
        layout.reset()
        return page

    def _place_header(self, page: Page, title: str, requester: str) -> None:
        width = self._geometry.content_width
        margin = self._geometry.margin
        for text, y in ((title, self._style.title_y), (f"Por: {requester}", self._style.requester_y)):
            page.blocks.append(
                PlacedBlock(
                    kind=BlockKind.TEXT,
                    x=margin,
                    y=y,
                    width=width,
                    height=self._style.caption_height,
                    text=text,
                    font_size=self._style.title_font_size,
                    align="center",
                )
            )

    def _display_size(self, raster: RasterArtifact, index: int) -> tuple[float, float]:
        if raster.width <= 0 or raster.height <= 0:
            raise AssemblyError(
                f"Raster #{index} has invalid size {raster.width}x{raster.height}"
            )

        width = self._geometry.content_width
        height = width * raster.aspect_ratio

        # tallest image that still fits with its caption on an empty page
        max_height = (
            self._geometry.bottom_limit
            - self._geometry.margin
            - self._style.caption_height
        )
        if max_height <= 0:
            raise AssemblyError("Page is too small to hold a caption and an image")
        if height > max_height:
            logger.info(
                "Raster #%d is taller than a page (%.1f mm); scaling down to %.1f mm",
                index,
                height,
                max_height,
            )
            width = max_height / raster.aspect_ratio
            height = max_height
        return width, height

    def _place_section(
        self,
        page: Page,
        layout: PageLayout,
        raster: RasterArtifact,
        caption: str,
        image_width: float,
        image_height: float,
    ) -> None:
        margin = self._geometry.margin
        caption_y = layout.cursor
        page.blocks.append(
            PlacedBlock(
                kind=BlockKind.TEXT,
                x=margin,
                y=caption_y,
                width=self._geometry.content_width,
                height=self._style.caption_height,
                text=caption,
                font_size=self._style.caption_font_size,
            )
        )
        page.blocks.append(
            PlacedBlock(
                kind=BlockKind.IMAGE,
                x=margin,
                y=caption_y + self._style.caption_height,
                width=image_width,
                height=image_height,
                raster=raster,
            )
        )

from __future__ import annotations
import logging
from io import BytesIO
from reportlab.lib.colors import Color, black
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas
from stats_export.domain.artifacts import BlockKind, DocumentArtifact, PlacedBlock
from stats_export.shared.errors import AssemblyError


logger = logging.getLogger(__name__)

FOOTER_TEXT = "Sistema de Chamados - Relatório Confidencial"
FOOTER_FONT_SIZE = 8
FOOTER_OFFSET = 10.0
FOOTER_COLOR = Color(0.5, 0.5, 0.5)
FONT_NAME = "Helvetica"


class PdfDocumentRenderer:
    """Draws an already laid-out DocumentArtifact with the reportlab canvas.

        Layout coordinates are millimetres measured from the top of the page;
        the canvas measures points from the bottom, so every block is flipped
        here. No layout decisions are taken at this stage.
        """

    def render(self, document: DocumentArtifact) -> bytes:
        if not document.pages:
            raise AssemblyError("Document has no pages to render")

        geometry = document.geometry
        buffer = BytesIO()
        try:
            pdf = canvas.Canvas(
                buffer,
                pagesize=(geometry.width * mm, geometry.height * mm),
            )
            pdf.setTitle(document.title)
            pdf.setAuthor(document.requester)

            total_pages = document.page_count
            for page in document.pages:
                for block in page.blocks:
                    if block.kind is BlockKind.TEXT:
                        self._draw_text(pdf, block, geometry.height)
                    else:
                        self._draw_image(pdf, block, geometry.height)
                self._draw_footer(pdf, page.number, total_pages, geometry.width, geometry.height)
                pdf.showPage()

            pdf.save()
            payload = buffer.getvalue()
        except AssemblyError:
            raise
        except Exception as exc:
            logger.exception("Failed to render PDF document %r", document.title)
            raise AssemblyError("Failed to render PDF document") from exc
        finally:
            buffer.close()

        logger.info("Rendered PDF with %d page(s), %d bytes", document.page_count, len(payload))
        return payload

    def _draw_text(self, pdf: canvas.Canvas, block: PlacedBlock, page_height: float) -> None:
        # text blocks are anchored on their baseline, like the layout's cursor
        baseline = (page_height - block.y) * mm
        pdf.setFont(FONT_NAME, block.font_size)
        pdf.setFillColor(black)
        text = block.text or ""
        if block.align == "center":
            pdf.drawCentredString((block.x + block.width / 2) * mm, baseline, text)
        else:
            pdf.drawString(block.x * mm, baseline, text)

    def _draw_image(self, pdf: canvas.Canvas, block: PlacedBlock, page_height: float) -> None:
        if block.raster is None:
            raise AssemblyError(f"Image block at y={block.y:.1f} mm carries no raster")

        bottom = (page_height - block.y - block.height) * mm
        pdf.drawImage(
            ImageReader(BytesIO(block.raster.payload)),
            block.x * mm,
            bottom,
            width=block.width * mm,
            height=block.height * mm,
            mask="auto",
        )

    def _draw_footer(
        self,
        pdf: canvas.Canvas,
        page_number: int,
        total_pages: int,
        page_width: float,
        page_height: float,
    ) -> None:
        baseline = FOOTER_OFFSET * mm
        pdf.setFont(FONT_NAME, FOOTER_FONT_SIZE)
        pdf.setFillColor(FOOTER_COLOR)
        pdf.drawString(20 * mm, baseline, FOOTER_TEXT)
        pdf.drawRightString(
            (page_width - 20) * mm,
            baseline,
            f"Página {page_number} de {total_pages}",
        )

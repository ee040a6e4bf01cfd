"""PDF generation using ReportLab."""

import logging
from io import BytesIO

from reportlab.lib.colors import HexColor
from reportlab.pdfgen import canvas

from postergen.render.document import ImageOp, LineOp, PosterDocument, RectOp, TextOp
from postergen.utils.album_art import CoverArt
from postergen.utils.dimensions import mm_to_points

logger = logging.getLogger(__name__)

# Built-in PDF fonts by (family, weight)
PDF_FONTS = {
    ("helvetica", "normal"): "Helvetica",
    ("helvetica", "bold"): "Helvetica-Bold",
    ("times", "normal"): "Times-Roman",
    ("times", "bold"): "Times-Bold",
    ("courier", "normal"): "Courier",
    ("courier", "bold"): "Courier-Bold",
}


def resolve_pdf_font(family: str, weight: str) -> str:
    """Map a family/weight pair to a built-in PDF font, falling back to Helvetica."""
    return PDF_FONTS.get((family.lower(), weight), PDF_FONTS[("helvetica", weight)])


class PDFRenderer:
    """Replays a poster document onto a ReportLab canvas."""

    def render(self, doc: PosterDocument) -> bytes:
        """
        Render document to PDF bytes.

        Args:
            doc: Document to render.

        Returns:
            PDF file content.
        """
        buffer = BytesIO()
        page_width, page_height = doc.geometry.to_points()
        c = canvas.Canvas(buffer, pagesize=(page_width, page_height))
        c.setTitle(f"Poster {doc.geometry.page_size.upper()}")

        images: dict[str, CoverArt | None] = {}
        for op in doc.operations:
            if isinstance(op, RectOp):
                self._draw_rect(c, op, page_height)
            elif isinstance(op, LineOp):
                self._draw_line(c, op, page_height)
            elif isinstance(op, TextOp):
                self._draw_text(c, op, page_height)
            elif isinstance(op, ImageOp):
                self._draw_image(c, op, page_height, images)

        c.showPage()
        c.save()
        return buffer.getvalue()

    def _draw_rect(self, c: canvas.Canvas, op: RectOp, page_height: float) -> None:
        x = mm_to_points(op.x)
        width = mm_to_points(op.width)
        height = mm_to_points(op.height)
        # Page units grow downwards; PDF points grow upwards
        y = page_height - mm_to_points(op.y) - height

        c.setFillColor(HexColor(op.fill))
        c.setStrokeColor(HexColor(op.stroke))
        c.setLineWidth(mm_to_points(op.line_width))
        c.rect(x, y, width, height, fill=int("F" in op.style), stroke=int("D" in op.style or op.style == "S"))

    def _draw_line(self, c: canvas.Canvas, op: LineOp, page_height: float) -> None:
        c.setStrokeColor(HexColor(op.color))
        c.setLineWidth(mm_to_points(op.line_width))
        c.line(
            mm_to_points(op.x1),
            page_height - mm_to_points(op.y1),
            mm_to_points(op.x2),
            page_height - mm_to_points(op.y2),
        )

    def _draw_text(self, c: canvas.Canvas, op: TextOp, page_height: float) -> None:
        c.setFont(resolve_pdf_font(op.font_family, op.font_weight), op.font_size)
        c.setFillColor(HexColor(op.color))
        x = mm_to_points(op.x)
        y = page_height - mm_to_points(op.y)
        if op.align == "center":
            c.drawCentredString(x, y, op.text)
        elif op.align == "right":
            c.drawRightString(x, y, op.text)
        else:
            c.drawString(x, y, op.text)

    def _draw_image(
        self,
        c: canvas.Canvas,
        op: ImageOp,
        page_height: float,
        images: dict[str, CoverArt | None],
    ) -> None:
        if op.source not in images:
            try:
                images[op.source] = CoverArt.from_source(op.source)
            except Exception as e:
                logger.warning(f"Skipping image that could not be loaded: {e}")
                images[op.source] = None
        art = images[op.source]
        if art is None:
            return

        width = mm_to_points(op.width)
        height = mm_to_points(op.height)
        c.drawImage(
            art.to_image_reader(),
            mm_to_points(op.x),
            page_height - mm_to_points(op.y) - height,
            width=width,
            height=height,
            preserveAspectRatio=False,
        )

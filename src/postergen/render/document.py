"""In-memory poster document.

Templates draw onto a ``PosterDocument`` using page units (millimeters, origin
at the top-left corner, y growing downwards). The document records every
drawing call as an operation; renderers replay the operations onto a
ReportLab canvas (PDF) or a Pillow image (PNG).
"""

import base64
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Union

from postergen.types import FontWeight, HexColor, TextAlign
from postergen.utils.colors import normalize_hex
from postergen.utils.dimensions import PageGeometry

RectStyle = Literal["S", "F", "FD"]  # stroke, fill, fill + stroke


@dataclass(frozen=True)
class RectOp:
    """Rectangle; ``style`` selects stroke and/or fill."""

    x: float
    y: float
    width: float
    height: float
    style: RectStyle
    fill: HexColor
    stroke: HexColor
    line_width: float


@dataclass(frozen=True)
class LineOp:
    """Straight line segment."""

    x1: float
    y1: float
    x2: float
    y2: float
    color: HexColor
    line_width: float


@dataclass(frozen=True)
class TextOp:
    """Single line of text; ``y`` is the baseline."""

    text: str
    x: float
    y: float
    align: TextAlign
    font_family: str
    font_weight: FontWeight
    font_size: float  # points
    color: HexColor


@dataclass(frozen=True)
class ImageOp:
    """Image placed by data URI, URL or path."""

    source: str
    x: float
    y: float
    width: float
    height: float


DrawOp = Union[RectOp, LineOp, TextOp, ImageOp]


class PosterDocument:
    """
    Drawable document for one page.

    Drawing state (colors, font, line width) is sticky, like a PDF graphics
    state: it applies to every subsequent call until changed.
    """

    def __init__(self, geometry: PageGeometry) -> None:
        """
        Initialize an empty document.

        Args:
            geometry: Page size, orientation and scale.
        """
        self.geometry = geometry
        self.operations: list[DrawOp] = []

        self._fill_color: HexColor = "#000000"
        self._draw_color: HexColor = "#000000"
        self._text_color: HexColor = "#000000"
        self._line_width: float = 0.2
        self._font_family = "helvetica"
        self._font_weight: FontWeight = "normal"
        self._font_size: float = 16

    @property
    def width(self) -> float:
        return self.geometry.width

    @property
    def height(self) -> float:
        return self.geometry.height

    # ------------------------------------------------------------------
    # Drawing state
    # ------------------------------------------------------------------

    def set_fill_color(self, color: str) -> None:
        self._fill_color = normalize_hex(color)

    def set_draw_color(self, color: str) -> None:
        self._draw_color = normalize_hex(color)

    def set_text_color(self, color: str) -> None:
        self._text_color = normalize_hex(color)

    def set_line_width(self, width: float) -> None:
        self._line_width = width

    def set_font(self, family: str | None = None, weight: FontWeight | None = None, size: float | None = None) -> None:
        """Set any of font family, weight and size (points)."""
        if family is not None:
            self._font_family = family
        if weight is not None:
            self._font_weight = weight
        if size is not None:
            self._font_size = size

    @property
    def font_size(self) -> float:
        return self._font_size

    # ------------------------------------------------------------------
    # Drawing calls
    # ------------------------------------------------------------------

    def rect(self, x: float, y: float, width: float, height: float, style: RectStyle = "S") -> None:
        self.operations.append(
            RectOp(x, y, width, height, style, self._fill_color, self._draw_color, self._line_width)
        )

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.operations.append(LineOp(x1, y1, x2, y2, self._draw_color, self._line_width))

    def text(self, text: str, x: float, y: float, align: TextAlign = "left") -> None:
        self.operations.append(
            TextOp(
                text,
                x,
                y,
                align,
                self._font_family,
                self._font_weight,
                self._font_size,
                self._text_color,
            )
        )

    def add_image(self, source: str, x: float, y: float, width: float, height: float) -> None:
        self.operations.append(ImageOp(source, x, y, width, height))

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def texts(self) -> list[str]:
        """Visible text strings in drawing order."""
        return [op.text for op in self.operations if isinstance(op, TextOp)]

    def images(self) -> list[ImageOp]:
        return [op for op in self.operations if isinstance(op, ImageOp)]

    def filled_rects(self) -> list[RectOp]:
        return [op for op in self.operations if isinstance(op, RectOp) and "F" in op.style]

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_pdf_bytes(self) -> bytes:
        """Serialize the document to PDF."""
        from postergen.render.pdf import PDFRenderer

        return PDFRenderer().render(self)

    def to_png_bytes(self, dpi: int) -> bytes:
        """Rasterize the document and encode it as PNG."""
        from postergen.render.image import RasterRenderer, save_image_to_bytes

        return save_image_to_bytes(RasterRenderer(dpi=dpi).render(self), format="PNG")

    def output_data_uri(self) -> str:
        """PDF data URI, suitable for embedding the preview."""
        encoded = base64.b64encode(self.to_pdf_bytes()).decode("ascii")
        return f"data:application/pdf;base64,{encoded}"

    def save(self, output_path: str | Path) -> Path:
        """Write the document as PDF and return the path."""
        output_path = Path(output_path)
        output_path.write_bytes(self.to_pdf_bytes())
        return output_path

"""Rasterization of poster documents using Pillow."""

import logging
from io import BytesIO

from PIL import Image, ImageDraw, ImageFont

from postergen.render.document import ImageOp, LineOp, PosterDocument, RectOp, TextOp
from postergen.utils.album_art import CoverArt
from postergen.utils.dimensions import BASE_UNITS_PER_INCH, DPI_DEFAULT, MM_PER_POINT

logger = logging.getLogger(__name__)

# TrueType candidates by weight; Pillow's bundled font is the fallback
_TRUETYPE_FONTS = {
    "normal": ("DejaVuSans.ttf", "Arial.ttf", "LiberationSans-Regular.ttf"),
    "bold": ("DejaVuSans-Bold.ttf", "Arial Bold.ttf", "LiberationSans-Bold.ttf"),
}

_ANCHORS = {"left": "ls", "center": "ms", "right": "rs"}


def load_font(weight: str, pixel_size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """
    Load a font at the given pixel size.

    Tries common TrueType fonts and falls back to Pillow's default font.
    """
    for name in _TRUETYPE_FONTS.get(weight, _TRUETYPE_FONTS["normal"]):
        try:
            return ImageFont.truetype(name, pixel_size)
        except OSError:
            continue
    return ImageFont.load_default(size=pixel_size)


class RasterRenderer:
    """Replays a poster document onto a Pillow image."""

    def __init__(self, dpi: int = DPI_DEFAULT) -> None:
        """
        Initialize raster renderer.

        Args:
            dpi: Output resolution. One document unit maps to dpi / 72 pixels.
        """
        self.dpi = dpi
        self.pixels_per_unit = dpi / BASE_UNITS_PER_INCH

    def render(self, doc: PosterDocument) -> Image.Image:
        """
        Rasterize a document.

        Args:
            doc: Document to render.

        Returns:
            RGB image sized round(page dimension * dpi / 72).
        """
        size = doc.geometry.to_pixels(self.dpi)
        img = Image.new("RGB", size, (255, 255, 255))
        draw = ImageDraw.Draw(img)

        images: dict[str, CoverArt | None] = {}
        for op in doc.operations:
            if isinstance(op, RectOp):
                self._draw_rect(draw, op)
            elif isinstance(op, LineOp):
                self._draw_line(draw, op)
            elif isinstance(op, TextOp):
                self._draw_text(draw, op)
            elif isinstance(op, ImageOp):
                self._draw_image(img, op, images)
        return img

    def _px(self, value: float) -> int:
        return round(value * self.pixels_per_unit)

    def _draw_rect(self, draw: ImageDraw.ImageDraw, op: RectOp) -> None:
        box = (self._px(op.x), self._px(op.y), self._px(op.x + op.width), self._px(op.y + op.height))
        fill = op.fill if "F" in op.style else None
        outline = op.stroke if op.style in ("S", "FD") else None
        draw.rectangle(box, fill=fill, outline=outline, width=max(1, self._px(op.line_width)))

    def _draw_line(self, draw: ImageDraw.ImageDraw, op: LineOp) -> None:
        draw.line(
            (self._px(op.x1), self._px(op.y1), self._px(op.x2), self._px(op.y2)),
            fill=op.color,
            width=max(1, self._px(op.line_width)),
        )

    def _draw_text(self, draw: ImageDraw.ImageDraw, op: TextOp) -> None:
        # Font size is in points; convert through document units to pixels
        pixel_size = max(1, round(op.font_size * MM_PER_POINT * self.pixels_per_unit))
        font = load_font(op.font_weight, pixel_size)
        draw.text(
            (self._px(op.x), self._px(op.y)),
            op.text,
            font=font,
            fill=op.color,
            anchor=_ANCHORS.get(op.align, "ls"),
        )

    def _draw_image(self, img: Image.Image, op: ImageOp, images: dict[str, CoverArt | None]) -> None:
        if op.source not in images:
            try:
                images[op.source] = CoverArt.from_source(op.source)
            except Exception as e:
                logger.warning(f"Skipping image that could not be loaded: {e}")
                images[op.source] = None
        art = images[op.source]
        if art is None:
            return

        target = (max(1, self._px(op.width)), max(1, self._px(op.height)))
        img.paste(art.resize_and_crop(target), (self._px(op.x), self._px(op.y)))


def save_image_to_bytes(img: Image.Image, format: str = "PNG") -> bytes:
    """
    Save PIL Image to bytes.

    Args:
        img: PIL Image object.
        format: Image format (PNG, JPEG, etc.).

    Returns:
        Image as bytes.
    """
    buffer = BytesIO()
    img.save(buffer, format=format)
    return buffer.getvalue()

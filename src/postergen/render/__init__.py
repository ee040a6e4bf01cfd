"""Poster documents and their PDF/PNG renderers."""

from postergen.render.document import PosterDocument
from postergen.render.image import RasterRenderer, save_image_to_bytes
from postergen.render.pdf import PDFRenderer

__all__ = [
    "PDFRenderer",
    "PosterDocument",
    "RasterRenderer",
    "save_image_to_bytes",
]

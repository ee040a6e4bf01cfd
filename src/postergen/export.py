"""Export pipeline: page geometry, template invocation, PDF/PNG serialization."""

import hashlib
import logging
import os
from collections import OrderedDict
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping

from pydantic import BaseModel, ConfigDict, Field

from postergen.api.models import Album
from postergen.config import format_output_name
from postergen.design.templates import get_template
from postergen.render.document import PosterDocument
from postergen.schema import PosterType
from postergen.types import Orientation, OutputFormat, PageSizeName
from postergen.utils.album_art import extract_palette
from postergen.utils.dimensions import DPI_DEFAULT, DPI_MAX, DPI_MIN, get_page_geometry

logger = logging.getLogger(__name__)

PDF_NAME_TEMPLATE = "{type}-poster-{size}.pdf"
PNG_NAME_TEMPLATE = "{type}-poster-{size}-{dpi}dpi.png"

# Palettes kept per pipeline, keyed by a digest of the image source
PALETTE_CACHE_SIZE = 32

PaletteExtractor = Callable[[str], "list[str] | None"]


class ExportOptions(BaseModel):
    """Page size, orientation, format and resolution chosen for one export."""

    model_config = ConfigDict(frozen=True)

    page_size: PageSizeName = "a0"
    orientation: Orientation = "portrait"
    output_format: OutputFormat = "pdf"
    dpi: int = Field(default=DPI_DEFAULT, ge=DPI_MIN, le=DPI_MAX)
    """Raster resolution (PNG only)."""


def preview_options(config: Mapping[str, Any]) -> ExportOptions:
    """
    Default options for live previews: A0 portrait.

    A poster type that carries its own orientation field (movie posters)
    previews in that orientation.
    """
    orientation = config.get("poster_orientation")
    if orientation in ("portrait", "landscape"):
        return ExportOptions(orientation=orientation)
    return ExportOptions()


@dataclass
class Artifact:
    """A finished export, ready to be handed off for download."""

    filename: str
    content: bytes
    media_type: str
    width: int | None = None  # pixels (PNG only)
    height: int | None = None

    def save(self, destination: str | Path = ".") -> Path:
        """
        Write the artifact.

        Args:
            destination: Directory (the artifact's filename is used) or file path.
                A path ending in a separator or without a suffix is a directory
                and is created when missing.

        Returns:
            Path written.
        """
        path = Path(destination)
        if path.is_dir() or str(destination).endswith(("/", os.sep)) or not path.suffix:
            path.mkdir(parents=True, exist_ok=True)
            path = path / self.filename
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.content)
        logger.info(f"Saved {self.filename} to {path}")
        return path


class ExportPipeline:
    """
    Renders poster documents through the template registry.

    Palette extraction results are cached per image source (least recently
    used sources are dropped past PALETTE_CACHE_SIZE).
    """

    def __init__(self, palette_extractor: PaletteExtractor = extract_palette) -> None:
        """
        Initialize pipeline.

        Args:
            palette_extractor: Function returning hex colors for an image source.
        """
        self.palette_extractor = palette_extractor
        self._palettes: OrderedDict[str, list[str]] = OrderedDict()

    def is_ready(self, poster_type: PosterType, external: Album | None) -> bool:
        """Whether all required inputs for rendering are available."""
        return external is not None or not poster_type.requires_catalog

    def palette_for(self, source: str | None) -> list[str]:
        """Cached palette for an image source; empty when extraction fails."""
        if not source:
            return []
        digest = hashlib.sha256(source.encode()).hexdigest()
        if digest in self._palettes:
            self._palettes.move_to_end(digest)
            return self._palettes[digest]

        try:
            colors = self.palette_extractor(source)
        except Exception as e:
            logger.error(f"Palette extraction failed: {e}")
            colors = None
        self._palettes[digest] = list(colors or [])
        if len(self._palettes) > PALETTE_CACHE_SIZE:
            self._palettes.popitem(last=False)
        return self._palettes[digest]

    def render_document(
        self,
        poster_type: PosterType,
        config: Mapping[str, Any],
        external: Album | None,
        options: ExportOptions,
    ) -> PosterDocument:
        """
        Render a document at the geometry described by ``options``.

        The template is chosen by the config's ``template`` value.
        """
        geometry = get_page_geometry(options.page_size, options.orientation)
        doc = PosterDocument(geometry)
        template = get_template(config.get("template"))

        image_key = poster_type.image_key
        palette = self.palette_for(config.get(image_key)) if template.uses_palette else []

        template.render(
            doc,
            config,
            external,
            geometry.width,
            geometry.height,
            geometry.scale,
            poster_type=poster_type,
            palette=palette,
        )
        return doc

    def render_preview(
        self,
        poster_type: PosterType,
        config: Mapping[str, Any],
        external: Album | None,
    ) -> PosterDocument | None:
        """
        Render the live preview document.

        Returns:
            Document, or None when required catalog data is missing.
        """
        if not self.is_ready(poster_type, external):
            logger.warning(f"Preview skipped: no {poster_type.name} data loaded yet")
            return None
        return self.render_document(poster_type, config, external, preview_options(config))

    def export_artifact(
        self,
        poster_type: PosterType,
        config: Mapping[str, Any],
        external: Album | None,
        options: ExportOptions,
    ) -> Artifact | None:
        """
        Render at the requested geometry and serialize to PDF or PNG.

        Returns:
            Artifact, or None when required catalog data is missing.
        """
        if not self.is_ready(poster_type, external):
            logger.warning(f"Export refused: no {poster_type.name} data loaded yet")
            return None

        logger.info(
            f"Exporting {poster_type.name} poster as {options.output_format.upper()} "
            f"({options.page_size.upper()} {options.orientation})"
        )
        doc = self.render_document(poster_type, config, external, options)

        if options.output_format == "pdf":
            return Artifact(
                filename=format_output_name(PDF_NAME_TEMPLATE, poster_type.name, options.page_size),
                content=doc.to_pdf_bytes(),
                media_type="application/pdf",
            )

        width, height = doc.geometry.to_pixels(options.dpi)
        logger.info(f"Rasterizing at {options.dpi} DPI ({width}x{height} px)")
        return Artifact(
            filename=format_output_name(PNG_NAME_TEMPLATE, poster_type.name, options.page_size, options.dpi),
            content=doc.to_png_bytes(options.dpi),
            media_type="image/png",
            width=width,
            height=height,
        )

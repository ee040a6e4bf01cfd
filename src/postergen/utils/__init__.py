"""Utility modules."""

from postergen.utils.album_art import CoverArt, extract_palette, to_data_uri
from postergen.utils.colors import normalize_hex, rgb_to_hex
from postergen.utils.dimensions import (
    A0_HEIGHT_MM,
    A0_WIDTH_MM,
    PAGE_SIZE_ORDER,
    PageGeometry,
    get_page_geometry,
    mm_to_points,
    page_dimensions,
    points_to_mm,
    scale_factor,
)

__all__ = [
    "A0_HEIGHT_MM",
    "A0_WIDTH_MM",
    "CoverArt",
    "PAGE_SIZE_ORDER",
    "PageGeometry",
    "extract_palette",
    "get_page_geometry",
    "mm_to_points",
    "normalize_hex",
    "page_dimensions",
    "points_to_mm",
    "rgb_to_hex",
    "scale_factor",
    "to_data_uri",
]

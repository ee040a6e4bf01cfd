"""Paper sizes, page geometry and unit conversion."""

from dataclasses import dataclass as _dataclass

from postergen.types import Orientation, PageSizeName

# Ordered from largest to smallest; the index is the size's rank.
PAGE_SIZE_ORDER: tuple[PageSizeName, ...] = ("a0", "a1", "a2", "a3", "a4")

# A0 baseline in millimeters (portrait)
A0_WIDTH_MM = 841.0
A0_HEIGHT_MM = 1189.0

# Document base unit to pixel reference used when rasterizing
BASE_UNITS_PER_INCH = 72

MM_PER_POINT = 25.4 / 72

# DPI settings for PNG export
DPI_MIN = 72
DPI_DEFAULT = 300
DPI_MAX = 1200


@_dataclass(frozen=True)
class PageGeometry:
    """Page dimensions in millimeters plus the scale relative to A0."""

    width: float
    height: float
    scale: float
    page_size: PageSizeName
    orientation: Orientation

    def to_points(self) -> tuple[float, float]:
        """
        Convert to points (PDF coordinate system).

        Returns:
            (width, height) in points.
        """
        return (mm_to_points(self.width), mm_to_points(self.height))

    def to_pixels(self, dpi: int) -> tuple[int, int]:
        """
        Pixel size of the raster buffer for this page.

        The page dimension (in document units) is multiplied by dpi / 72.

        Args:
            dpi: Requested output resolution.

        Returns:
            (width, height) in pixels.
        """
        factor = dpi / BASE_UNITS_PER_INCH
        return (round(self.width * factor), round(self.height * factor))


def size_rank(page_size: str) -> int:
    """
    Zero-based index of a page size in A0..A4.

    Raises:
        ValueError: If the page size is not one of a0..a4.
    """
    name = page_size.lower()
    if name not in PAGE_SIZE_ORDER:
        raise ValueError(
            f"Unknown page size '{page_size}'. Supported: {', '.join(PAGE_SIZE_ORDER)}"
        )
    return PAGE_SIZE_ORDER.index(name)  # type: ignore[arg-type]


def scale_factor(page_size: str) -> float:
    """
    Linear size multiplier of a page size relative to A0.

    Halves every two steps down the series: A0 = 1, A2 = 0.5, A4 = 0.25.
    """
    return 2 ** (-size_rank(page_size) / 2)


def page_dimensions(page_size: str, orientation: Orientation = "portrait") -> tuple[float, float]:
    """
    Page (width, height) in millimeters.

    Args:
        page_size: One of a0..a4.
        orientation: "portrait" or "landscape" (swaps width and height).
    """
    scale = scale_factor(page_size)
    width = A0_WIDTH_MM * scale
    height = A0_HEIGHT_MM * scale
    if orientation == "landscape":
        return (height, width)
    return (width, height)


def get_page_geometry(page_size: str, orientation: Orientation = "portrait") -> PageGeometry:
    """Resolve a page size and orientation into full page geometry."""
    width, height = page_dimensions(page_size, orientation)
    return PageGeometry(
        width=width,
        height=height,
        scale=scale_factor(page_size),
        page_size=page_size.lower(),  # type: ignore[arg-type]
        orientation=orientation,
    )


def mm_to_points(mm: float) -> float:
    """
    Convert millimeters to points (72 points per inch).

    Args:
        mm: Measurement in millimeters.

    Returns:
        Measurement in points.
    """
    return mm / MM_PER_POINT


def points_to_mm(points: float) -> float:
    """
    Convert points to millimeters.

    Args:
        points: Measurement in points.

    Returns:
        Measurement in millimeters.
    """
    return points * MM_PER_POINT

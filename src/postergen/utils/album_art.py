"""Cover artwork loading, embedding and color extraction."""

import base64
import binascii
import logging
from io import BytesIO
from pathlib import Path

import requests
from PIL import Image
from Pylette import extract_colors
from Pylette.types import ExtractionMethod
from reportlab.lib.utils import ImageReader

from postergen.types import HexColor
from postergen.utils.colors import rgb_to_hex

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15


def is_data_uri(source: str) -> bool:
    return source.startswith("data:")


def decode_data_uri(source: str) -> tuple[str, bytes]:
    """
    Split a base64 data URI into (mime type, raw bytes).

    Raises:
        ValueError: If the URI is not a base64 data URI.
    """
    header, sep, payload = source.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise ValueError("Not a base64 data URI")
    mime_type = header[len("data:"):-len(";base64")] or "application/octet-stream"
    try:
        return mime_type, base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e


def to_data_uri(data: bytes, mime_type: str = "image/jpeg") -> str:
    """Encode raw bytes as a base64 data URI."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def load_image_bytes(source: str, timeout: float = DEFAULT_TIMEOUT) -> bytes:
    """
    Load raw image bytes from a data URI, an http(s) URL or a local path.

    Raises:
        ValueError: If a data URI is malformed.
        requests.RequestException: If downloading fails.
        OSError: If a local file cannot be read.
    """
    if is_data_uri(source):
        return decode_data_uri(source)[1]
    if source.startswith(("http://", "https://")):
        response = requests.get(source, timeout=timeout)
        response.raise_for_status()
        return response.content
    return Path(source).expanduser().read_bytes()


def fetch_as_data_uri(url: str, timeout: float = DEFAULT_TIMEOUT) -> str | None:
    """
    Download an image and embed it as a data URI.

    Returns:
        Data URI, or None if the download failed.
    """
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error(f"Failed to download image {url}: {e}")
        return None
    mime_type = response.headers.get("content-type", "image/jpeg").split(";")[0].strip()
    return to_data_uri(response.content, mime_type or "image/jpeg")


class CoverArt:
    """Manages cover artwork with color extraction and image processing."""

    def __init__(self, image_bytes: bytes):
        """
        Load and prepare image from bytes.

        Args:
            image_bytes: Raw image data (JPEG, PNG, etc.).
        """
        self._image = Image.open(BytesIO(image_bytes))
        if self._image.mode != "RGB":
            self._image = self._image.convert("RGB")
        self._color_palette: list[HexColor] | None = None

    @classmethod
    def from_source(cls, source: str, timeout: float = DEFAULT_TIMEOUT) -> "CoverArt":
        """Load artwork from a data URI, URL or path."""
        return cls(load_image_bytes(source, timeout=timeout))

    @property
    def image(self) -> Image.Image:
        """Get original PIL Image."""
        return self._image

    def get_color_palette(self, max_colors: int = 5) -> list[HexColor]:
        """
        Extract and cache dominant colors.

        Args:
            max_colors: Maximum number of colors to extract (default: 5).

        Returns:
            List of "#rrggbb" strings, most dominant first.
        """
        if self._color_palette is None:
            self._color_palette = self._extract_dominant_colors(self._image, max_colors)
        return self._color_palette

    def resize_and_crop(self, target_size: tuple[int, int]) -> Image.Image:
        """
        Resize and center-crop the image to cover the target size.

        Args:
            target_size: (width, height) in pixels

        Returns:
            Cropped PIL.Image copy (original unchanged)
        """
        target_width, target_height = target_size
        target_ratio = target_width / target_height
        img_ratio = self._image.width / self._image.height

        # Determine resize dimensions to cover target area
        if img_ratio > target_ratio:
            new_height = target_height
            new_width = max(target_width, int(target_height * img_ratio))
        else:
            new_width = target_width
            new_height = max(target_height, int(target_width / img_ratio))

        img = self._image.resize((new_width, new_height), Image.Resampling.LANCZOS)

        left = (new_width - target_width) // 2
        top = (new_height - target_height) // 2
        return img.crop((left, top, left + target_width, top + target_height))

    def to_image_reader(self) -> ImageReader:
        """ReportLab ImageReader for the original image."""
        return self.pil_to_image_reader(self._image)

    @staticmethod
    def pil_to_image_reader(image: Image.Image) -> ImageReader:
        """
        Convert any PIL Image to ReportLab ImageReader.

        Args:
            image: PIL Image object to convert.

        Returns:
            ImageReader object ready for canvas.drawImage().
        """
        img_buffer = BytesIO()
        image.save(img_buffer, format="PNG")
        img_buffer.seek(0)
        return ImageReader(img_buffer)

    def _extract_dominant_colors(self, image: Image.Image, max_colors: int = 5) -> list[HexColor]:
        """
        Extract dominant colors from an image using Pylette (K-means).

        Args:
            image: PIL Image object.
            max_colors: Maximum number of colors to extract.

        Returns:
            Up to max_colors hex colors, sorted by frequency.
        """
        palette = extract_colors(image=image, palette_size=max_colors, resize=True, mode=ExtractionMethod.KM)

        colors: list[HexColor] = []
        for color in palette:
            # Pylette returns RGB as (R, G, B) in 0-255 range
            r, g, b = color.rgb[:3]
            hex_color = rgb_to_hex(r, g, b)
            if hex_color not in colors:
                colors.append(hex_color)
        return colors[:max_colors]


def extract_palette(source: str, max_colors: int = 5) -> list[HexColor] | None:
    """
    Extract a color palette from an image.

    Args:
        source: Data URI, URL or path of the image.
        max_colors: Maximum number of colors.

    Returns:
        Hex colors, or None if the image could not be loaded or analyzed.
    """
    if not source:
        return None
    try:
        return CoverArt.from_source(source).get_color_palette(max_colors=max_colors)
    except Exception as e:
        logger.error(f"Error getting palette from image: {e}")
        return None

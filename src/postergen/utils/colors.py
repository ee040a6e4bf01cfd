"""Hex color helpers."""

import re

from postergen.types import HexColor

_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def is_hex_color(value: object) -> bool:
    """Check for "#rgb" or "#rrggbb"."""
    return isinstance(value, str) and bool(_HEX_RE.match(value))


def normalize_hex(value: str) -> HexColor:
    """
    Normalize a hex color to lower-case "#rrggbb".

    Args:
        value: "#rgb" or "#rrggbb" string.

    Returns:
        Six-digit lower-case hex color.

    Raises:
        ValueError: If the value is not a hex color.
    """
    if not is_hex_color(value):
        raise ValueError(f"Not a hex color: {value!r}")
    digits = value[1:]
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return f"#{digits.lower()}"


def rgb_to_hex(r: int, g: int, b: int) -> HexColor:
    """Convert 0-255 RGB components to "#rrggbb"."""
    return f"#{int(r):02x}{int(g):02x}{int(b):02x}"

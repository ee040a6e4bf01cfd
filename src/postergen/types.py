"""Type aliases used across the postergen package."""

from typing import Literal, Union

# Color types
HexColor = str  # "#rrggbb"

# Config values (file fields may be None until something is uploaded)
ConfigValue = Union[str, int, float, None]

# Export options
PageSizeName = Literal["a0", "a1", "a2", "a3", "a4"]
Orientation = Literal["portrait", "landscape"]
OutputFormat = Literal["pdf", "png"]

# Text placement
TextAlign = Literal["left", "center", "right"]
FontWeight = Literal["normal", "bold"]

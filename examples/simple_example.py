#!/usr/bin/env python3
"""
Simple Example: Album Poster

Fetches an album from Spotify, switches it to the modern template and
exports an A2 PDF.
"""

from postergen import ExportOptions, create_album_session, load_config

# Load config (for Spotify credentials)
config = load_config()

session = create_album_session(
    "https://open.spotify.com/album/4aawyAB9vmqN3uQ7FjRGTy",  # Replace with your album URL
    config,
    {"cover_source": "high-res", "bg_color": "#101820", "text_color": "#f2aa4c"},
)
session.update("template", "modern")
session.update("font_size", 60)

artifact = session.export(ExportOptions(page_size="a2"))
path = artifact.save(".")

print(f"✓ Poster saved to: {path}")

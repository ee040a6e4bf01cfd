#!/usr/bin/env python3
"""
Movie Example: Landscape PNG

Movie posters need no catalog access; the poster image is read from disk.
"""

import sys

from postergen import ExportOptions, create_session

session = create_session(
    "movie",
    {
        "title": "Metropolis",
        "director": "Fritz Lang",
        "poster_orientation": "landscape",
        "template": "classic",
    },
)

# Upload the poster image the same way the editor form does
if len(sys.argv) > 1:
    session.form().control("poster").change(sys.argv[1])

artifact = session.export(
    ExportOptions(page_size="a3", orientation="landscape", output_format="png", dpi=150)
)
path = artifact.save(".")

print(f"✓ Poster saved to: {path} ({artifact.width}x{artifact.height} px)")

"""Printable album and movie poster generator."""

__version__ = "0.1.0"

# High-level Python API
from postergen.api.builder import (
    create_album_session,
    create_session,
    render_poster,
    render_poster_to_file,
)
from postergen.api.models import Album, Track
from postergen.api.spotify import SpotifyClient
from postergen.config import load_config
from postergen.export import Artifact, ExportOptions, ExportPipeline
from postergen.schema import ALBUM_SCHEMA, MOVIE_SCHEMA, get_poster_type
from postergen.session import EditorSession, SessionState
from postergen.store import UnknownKeyError

__all__ = [
    "ALBUM_SCHEMA",
    "Album",
    "Artifact",
    "EditorSession",
    "ExportOptions",
    "ExportPipeline",
    "MOVIE_SCHEMA",
    "SessionState",
    "SpotifyClient",
    "Track",
    "UnknownKeyError",
    "create_album_session",
    "create_session",
    "get_poster_type",
    "load_config",
    "render_poster",
    "render_poster_to_file",
]

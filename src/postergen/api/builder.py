"""High-level API for programmatic poster creation."""

import logging
from pathlib import Path
from typing import Any, Mapping

from postergen.api.models import Album
from postergen.api.spotify import SpotifyClient
from postergen.config import Config
from postergen.export import Artifact, ExportOptions, ExportPipeline
from postergen.schema import get_poster_type
from postergen.session import EditorSession
from postergen.store import initialize, merge

logger = logging.getLogger(__name__)


def create_session(
    poster_type: str,
    values: Mapping[str, Any] | None = None,
    pipeline: ExportPipeline | None = None,
) -> EditorSession:
    """
    Create an editing session for a poster type.

    Args:
        poster_type: Poster type name ("album" or "movie").
        values: Initial field values applied over the schema defaults.
        pipeline: Optional shared export pipeline.

    Returns:
        EditorSession. Album sessions are not ready until ``load`` succeeds.

    Raises:
        ValueError: If the poster type is unknown.
        UnknownKeyError: If ``values`` contains a key the schema lacks.

    Example:
        ```python
        from postergen import create_session

        session = create_session("movie", {"title": "Metropolis", "director": "Fritz Lang"})
        session.export().save("posters/")
        ```
    """
    kind = get_poster_type(poster_type)
    config = initialize(kind.schema)
    if values:
        config = merge(config, values)
    return EditorSession(kind, pipeline=pipeline, config=config)


def create_album_session(
    url: str,
    config: Config,
    values: Mapping[str, Any] | None = None,
    pipeline: ExportPipeline | None = None,
) -> EditorSession:
    """
    Create an album session and load it from the catalog.

    Args:
        url: Spotify album URL, ``spotify:album:`` URI or bare album ID.
        config: Configuration with catalog credentials (from load_config()).
        values: Initial field values (``cover_source``, colors, ...).
        pipeline: Optional shared export pipeline.

    Returns:
        Ready EditorSession.

    Raises:
        ConnectionError: If the album could not be loaded.

    Example:
        ```python
        from postergen import create_album_session, load_config

        session = create_album_session("https://open.spotify.com/album/4aawyAB9vmqN3uQ7FjRGTy", load_config())
        session.update("template", "modern")
        ```
    """
    session = create_session("album", values, pipeline)
    client = SpotifyClient(config.spotify)
    album_id = SpotifyClient.extract_id_from_url(url)

    logger.info(f"Fetching album {album_id}...")
    result = session.load(client, album_id)
    if not result.ok:
        raise ConnectionError(f"Failed to load album {album_id}: {result.error}")
    return session


def render_poster(
    poster_type: str,
    values: Mapping[str, Any],
    external: Album | None = None,
    options: ExportOptions | None = None,
    pipeline: ExportPipeline | None = None,
) -> Artifact:
    """
    Render a poster in one call, without a session.

    Args:
        poster_type: Poster type name.
        values: Field values applied over the schema defaults.
        external: Catalog metadata (required for album posters).
        options: Page size, orientation, format and DPI. Default: A0 portrait PDF.
        pipeline: Optional export pipeline.

    Returns:
        Artifact.

    Raises:
        ValueError: If the poster type is unknown or required catalog data is missing.
    """
    kind = get_poster_type(poster_type)
    config = merge(initialize(kind.schema), values)
    pipeline = pipeline or ExportPipeline()

    artifact = pipeline.export_artifact(kind, config, external, options or ExportOptions())
    if artifact is None:
        raise ValueError(f"Cannot render {kind.name} poster: catalog data is required")
    return artifact


def render_poster_to_file(
    poster_type: str,
    values: Mapping[str, Any],
    output_path: str | Path,
    external: Album | None = None,
    options: ExportOptions | None = None,
) -> Path:
    """
    Render a poster and write it to disk.

    Args:
        poster_type: Poster type name.
        values: Field values applied over the schema defaults.
        output_path: Directory (artifact name is used) or file path.
        external: Catalog metadata (required for album posters).
        options: Export options.

    Returns:
        Path written.
    """
    artifact = render_poster(poster_type, values, external, options)
    path = artifact.save(output_path)
    logger.info(f"Poster saved to: {path}")
    return path

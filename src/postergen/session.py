"""Editing session: config map, readiness gating and preview/export state."""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from postergen.api.itunes import find_uncompressed_cover
from postergen.api.models import Album
from postergen.export import Artifact, ExportOptions, ExportPipeline
from postergen.form import ConfigForm
from postergen.render.document import PosterDocument
from postergen.schema import PosterType
from postergen.store import ConfigMap, initialize, merge, reset, update
from postergen.types import ConfigValue
from postergen.utils.album_art import fetch_as_data_uri

logger = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = "idle"
    PREVIEWING = "previewing"
    EXPORTING = "exporting"


class CatalogClient(Protocol):
    def get_access_token(self) -> str | None: ...

    def get_album(self, token: str | None, album_id: str) -> Album | None: ...


@dataclass
class LoadResult:
    """Outcome of loading catalog data into a session."""

    album: Album | None = None
    cover: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.album is not None and self.error is None


class EditorSession:
    """
    One poster being edited.

    The session owns the config map, re-renders a preview after every change
    once it is ready, and produces artifacts on request. Renders are
    serialized with a lock; a render that finishes after a newer config was
    applied is discarded.
    """

    def __init__(
        self,
        poster_type: PosterType,
        pipeline: ExportPipeline | None = None,
        config: ConfigMap | None = None,
    ) -> None:
        """
        Initialize session.

        Args:
            poster_type: Poster type being edited.
            pipeline: Export pipeline (shared palette cache).
            config: Starting config map; defaults from the poster type's schema.
        """
        self.poster_type = poster_type
        self.pipeline = pipeline or ExportPipeline()
        self.config = config if config is not None else initialize(poster_type.schema)
        self.external: Album | None = None
        self.state = SessionState.IDLE
        self.preview: PosterDocument | None = None
        self._ready = not poster_type.requires_catalog
        self._lock = threading.Lock()
        self._generation = 0
        self._rendered_generation = -1

        if self._ready:
            self.refresh_preview()

    @property
    def ready(self) -> bool:
        """Whether every input required for rendering has resolved."""
        return self._ready

    @property
    def generation(self) -> int:
        """Counter bumped on every applied config change."""
        return self._generation

    def load(self, client: CatalogClient, album_id: str, country: str = "us") -> LoadResult:
        """
        Fetch catalog data and merge it into the config map.

        Resolution order is token, album record, cover. The session becomes
        ready only after all three have been attempted and the album exists.

        Args:
            client: Catalog client.
            album_id: Catalog album ID.
            country: iTunes store used for high-resolution covers.

        Returns:
            LoadResult describing what was resolved.
        """
        token = client.get_access_token()
        if not token:
            logger.warning("Cannot load album: no access token")
            return LoadResult(error="authentication failed")

        album = client.get_album(token, album_id)
        if album is None:
            logger.warning(f"Cannot load album {album_id}")
            return LoadResult(error=f"album {album_id} not found")

        cover = self._resolve_cover(album, country)
        self.external = album
        self._apply(
            merge(
                self.config,
                {
                    self.poster_type.title_key: album.title,
                    self.poster_type.credit_key: album.artist,
                    self.poster_type.image_key: cover or "",
                },
            )
        )
        self._ready = True
        logger.info(f"Loaded {album.artist} - {album.title}")
        self.refresh_preview()
        return LoadResult(album=album, cover=cover)

    def _resolve_cover(self, album: Album, country: str) -> str | None:
        url = None
        if self.config.get("cover_source") == "high-res":
            url = find_uncompressed_cover(f"{album.artist} {album.title}", country=country)
            if url is None:
                logger.info("No high-resolution cover found, using catalog cover")
        url = url or album.cover_url
        if not url:
            return None
        # Embedded so later renders need no network access; keep the URL if the download fails.
        return fetch_as_data_uri(url) or url

    def _apply(self, config: ConfigMap) -> None:
        self.config = config
        self._generation += 1

    def update(self, key: str, value: ConfigValue) -> None:
        """
        Set one config value and re-render the preview.

        Raises:
            UnknownKeyError: If ``key`` is not a field of the schema.
        """
        self._apply(update(self.config, key, value))
        self.refresh_preview()

    def reset(self, key: str) -> None:
        """Reset one field to its default and re-render the preview."""
        self._apply(reset(self.config, key))
        self.refresh_preview()

    def form(self) -> ConfigForm:
        """Config form whose edits are applied to this session."""
        form: ConfigForm

        def on_change(key: str, value: ConfigValue) -> None:
            self.update(key, value)
            form.refresh(self.config)

        form = ConfigForm(self.poster_type.schema, self.config, on_change)
        return form

    def refresh_preview(self) -> PosterDocument | None:
        """
        Re-render the live preview from the current config.

        Returns:
            Preview document, or None when not ready.
        """
        if not self._ready:
            logger.debug("Preview deferred until catalog data has loaded")
            return None

        generation = self._generation
        config = self.config
        with self._lock:
            doc = self.pipeline.render_preview(self.poster_type, config, self.external)
            if doc is None:
                return None
            if generation < self._generation or generation < self._rendered_generation:
                logger.debug(f"Discarding stale preview (generation {generation})")
                return self.preview
            self.preview = doc
            self._rendered_generation = generation
            if self.state is SessionState.IDLE:
                self.state = SessionState.PREVIEWING
        return doc

    def preview_data_uri(self) -> str | None:
        """Current preview as a PDF data URI."""
        return self.preview.output_data_uri() if self.preview else None

    def export(self, options: ExportOptions | None = None) -> Artifact | None:
        """
        Produce a downloadable artifact.

        Failures are logged and leave the session previewing.

        Returns:
            Artifact, or None when not ready or rendering failed.
        """
        if not self._ready:
            logger.warning("Export refused: catalog data has not loaded")
            return None

        options = options or ExportOptions()
        self.state = SessionState.EXPORTING
        try:
            with self._lock:
                return self.pipeline.export_artifact(self.poster_type, self.config, self.external, options)
        except Exception:
            logger.exception("Export failed")
            return None
        finally:
            self.state = SessionState.PREVIEWING

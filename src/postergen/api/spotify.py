"""Spotify Web API client."""

import logging
from urllib.parse import urlparse

import requests
import spotipy
from spotipy.cache_handler import MemoryCacheHandler
from spotipy.exceptions import SpotifyException
from spotipy.oauth2 import SpotifyClientCredentials, SpotifyOauthError

from postergen.api.models import Album, AlbumSummary, SearchPage
from postergen.config import SpotifyConfig

logger = logging.getLogger(__name__)

API_HOST = "api.spotify.com"

# Raised by spotipy calls: API errors, token errors and transport failures
CATALOG_ERRORS = (SpotifyException, SpotifyOauthError, requests.RequestException)


class SpotifyClient:
    """
    Client for the Spotify Web API (client-credentials flow).

    Every call catches request and API errors, logs them and returns None
    (or an empty page) so callers can show an empty state.
    """

    def __init__(self, config: SpotifyConfig) -> None:
        """
        Initialize Spotify client.

        The app token is cached in memory by the credentials manager and
        refreshed when it expires.

        Args:
            config: Client credentials and request settings.
        """
        self.config = config
        self.auth_manager = SpotifyClientCredentials(
            client_id=config.client_id,
            client_secret=config.client_secret,
            requests_timeout=config.timeout,
            cache_handler=MemoryCacheHandler(),
        )
        self.sp = spotipy.Spotify(auth_manager=self.auth_manager, requests_timeout=config.timeout)

    def get_access_token(self) -> str | None:
        """
        Fetch an app access token.

        Returns:
            Bearer token, or None if authentication failed.
        """
        try:
            token = self.auth_manager.get_access_token(as_dict=False)
        except CATALOG_ERRORS as e:
            logger.error(f"Failed to fetch access token: {e}")
            return None

        if not token:
            logger.error("Authentication failed: no token in response")
            return None
        return token

    def get_album(self, token: str | None, album_id: str) -> Album | None:
        """
        Fetch album by ID.

        Args:
            token: Access token from get_access_token(); nothing is requested without one.
            album_id: Spotify album ID.

        Returns:
            Album with tracks, release date and label, or None on failure.
        """
        if not token:
            return None

        try:
            data = self.sp.album(album_id, market=self.config.market)
        except CATALOG_ERRORS as e:
            logger.error(f"Failed to fetch album {album_id}: {e}")
            return None

        if not data:
            return None
        try:
            return Album.from_api(data)
        except (KeyError, TypeError) as e:
            logger.error(f"Unexpected album payload for {album_id}: {e}")
            return None

    def search(
        self,
        token: str | None,
        query: str | None = None,
        limit: int = 20,
        cursor: str | None = None,
    ) -> SearchPage:
        """
        Search albums, or list new releases when no query is given.

        Args:
            token: Access token from get_access_token().
            query: Search text. Empty/None lists new releases.
            limit: Page size (1-50).
            cursor: ``next`` value of a previous page ("load more").

        Returns:
            SearchPage; empty when the request failed.
        """
        if not token:
            return SearchPage(items=[])

        if cursor and not self._is_api_url(cursor):
            logger.warning(f"Ignoring cursor outside the Spotify API: {cursor}")
            return SearchPage(items=[])

        try:
            if cursor:
                data = self.sp.next({"next": cursor})
            elif query:
                data = self.sp.search(q=query, type="album", limit=limit, market=self.config.market)
            else:
                data = self.sp.new_releases(country=self.config.market, limit=limit)
        except CATALOG_ERRORS as e:
            logger.error(f"Spotify album search failed: {e}")
            return SearchPage(items=[])

        albums = (data or {}).get("albums") or {}
        items = []
        for item in albums.get("items") or []:
            if not item or "id" not in item:
                continue
            items.append(AlbumSummary.from_api(item))
        return SearchPage(items=items, next=albums.get("next"), total=albums.get("total"))

    @staticmethod
    def _is_api_url(url: str) -> bool:
        parsed = urlparse(url)
        return parsed.scheme == "https" and parsed.hostname == API_HOST

    @staticmethod
    def extract_id_from_url(url: str) -> str:
        """
        Extract an album ID from a Spotify URL, URI or bare ID.

        Examples:
            https://open.spotify.com/album/4aawyAB9vmqN3uQ7FjRGTy?si=x
            spotify:album:4aawyAB9vmqN3uQ7FjRGTy
            4aawyAB9vmqN3uQ7FjRGTy

        Raises:
            ValueError: If the URL is for something other than an album.
        """
        url = url.strip()
        if url.startswith("spotify:"):
            parts = url.split(":")
            if len(parts) != 3 or parts[1] != "album":
                raise ValueError(f"Not an album URI: {url}")
            return parts[2]

        if "://" in url:
            segments = [s for s in urlparse(url).path.split("/") if s]
            if len(segments) < 2 or segments[-2] != "album":
                raise ValueError(f"Not an album URL: {url}")
            return segments[-1]

        if not url or "/" in url:
            raise ValueError(f"Invalid album ID: {url!r}")
        return url

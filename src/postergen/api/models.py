"""Data models for catalog albums, tracks and search results."""

from dataclasses import dataclass, field


def artists_to_string(artists: list[str]) -> str:
    """Join artist names for display."""
    return ", ".join(name for name in artists if name)


@dataclass
class Track:
    """Represents a single track."""

    title: str
    duration: int  # seconds
    track_number: int
    artists: list[str] = field(default_factory=list)

    def format_duration(self) -> str:
        """
        Format duration as MM:SS.

        Returns:
            Formatted duration string.
        """
        minutes = self.duration // 60
        seconds = self.duration % 60
        return f"{minutes}:{seconds:02d}"

    @classmethod
    def from_api(cls, data: dict, position: int = 0) -> "Track":
        return cls(
            title=data.get("name") or "Unknown",
            duration=(data.get("duration_ms") or 0) // 1000,
            track_number=data.get("track_number") or position,
            artists=[a.get("name", "") for a in data.get("artists") or []],
        )


@dataclass
class Album:
    """Represents an album with metadata and tracks."""

    id: str
    title: str
    artists: list[str]
    images: list[str]  # URLs, largest first
    tracks: list[Track] = field(default_factory=list)
    release_date: str | None = None
    label: str | None = None
    total_tracks: int | None = None

    @property
    def artist(self) -> str:
        """All artist names as one display string."""
        return artists_to_string(self.artists)

    @property
    def cover_url(self) -> str | None:
        """Largest cover image URL, if any."""
        return self.images[0] if self.images else None

    @property
    def year(self) -> int | None:
        """Release year parsed from the release date."""
        if not self.release_date:
            return None
        try:
            return int(self.release_date[:4])
        except ValueError:
            return None

    def total_duration(self) -> int:
        """
        Calculate total album duration in seconds.

        Returns:
            Total duration in seconds.
        """
        return sum(track.duration for track in self.tracks)

    def format_total_duration(self) -> str:
        """
        Format total duration as HH:MM:SS or MM:SS.

        Returns:
            Formatted duration string.
        """
        total = self.total_duration()
        hours = total // 3600
        minutes = (total % 3600) // 60
        seconds = total % 60

        if hours > 0:
            return f"{hours}:{minutes:02d}:{seconds:02d}"
        return f"{minutes}:{seconds:02d}"

    @classmethod
    def from_api(cls, data: dict) -> "Album":
        """Build an album from a Spotify album object."""
        images = sorted(
            data.get("images") or [],
            key=lambda image: (image.get("width") or 0) * (image.get("height") or 0),
            reverse=True,
        )
        track_items = (data.get("tracks") or {}).get("items") or []
        tracks = [Track.from_api(item, position=i) for i, item in enumerate(track_items, start=1)]
        tracks.sort(key=lambda t: t.track_number)
        return cls(
            id=data["id"],
            title=data.get("name") or "Unknown Album",
            artists=[a.get("name", "") for a in data.get("artists") or []],
            images=[image["url"] for image in images if image.get("url")],
            tracks=tracks,
            release_date=data.get("release_date"),
            label=data.get("label"),
            total_tracks=data.get("total_tracks"),
        )


@dataclass
class AlbumSummary:
    """Album as listed in search results and new releases."""

    id: str
    title: str
    artists: list[str]
    images: list[str]
    release_date: str | None = None

    @property
    def artist(self) -> str:
        return artists_to_string(self.artists)

    @classmethod
    def from_api(cls, data: dict) -> "AlbumSummary":
        album = Album.from_api({**data, "tracks": None})
        return cls(
            id=album.id,
            title=album.title,
            artists=album.artists,
            images=album.images,
            release_date=album.release_date,
        )


@dataclass
class SearchResultCard:
    """Display card for one search result."""

    id: str
    title: str
    description: str
    image: str

    @classmethod
    def from_summary(cls, album: AlbumSummary) -> "SearchResultCard":
        return cls(
            id=album.id,
            title=album.title,
            description=album.artist,
            image=album.images[0] if album.images else "",
        )


@dataclass
class SearchPage:
    """One page of search results; ``next`` is an opaque cursor for the following page."""

    items: list[AlbumSummary]
    next: str | None = None
    total: int | None = None

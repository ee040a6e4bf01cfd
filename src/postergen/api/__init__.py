"""Catalog clients and metadata models."""

from postergen.api.itunes import find_uncompressed_cover
from postergen.api.models import Album, AlbumSummary, SearchPage, SearchResultCard, Track
from postergen.api.spotify import SpotifyClient

__all__ = [
    "Album",
    "AlbumSummary",
    "SearchPage",
    "SearchResultCard",
    "SpotifyClient",
    "Track",
    "find_uncompressed_cover",
]

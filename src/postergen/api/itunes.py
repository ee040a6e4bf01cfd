"""High-resolution cover lookup through the iTunes Search API."""

import logging

import requests

logger = logging.getLogger(__name__)

SEARCH_URL = "https://itunes.apple.com/search"
ORIGINAL_ARTWORK_HOST = "https://a5.mzstatic.com/us/r1000/0/"


def uncompressed_artwork_url(artwork_url: str) -> str | None:
    """
    Rewrite an iTunes thumbnail URL to the uncompressed original.

    Thumbnail URLs look like
    ``https://is1-ssl.mzstatic.com/image/thumb/Music/v4/aa/bb/cc/<id>/source/100x100bb.jpg``;
    the original lives under the same path on the r1000 host, without the
    trailing size segment.
    """
    parts = artwork_url.split("/image/thumb/")
    if len(parts) != 2:
        return None
    path = "/".join(parts[1].split("/")[:-1])
    if not path:
        return None
    return f"{ORIGINAL_ARTWORK_HOST}{path}"


def find_uncompressed_cover(
    search_text: str, country: str = "us", timeout: float = 15.0
) -> str | None:
    """
    Find the uncompressed cover of the best-matching album.

    Args:
        search_text: Free text, usually "<artist> <album>".
        country: iTunes store country code.
        timeout: Request timeout in seconds.

    Returns:
        Cover URL, or None if nothing was found or the request failed.
    """
    params = {"term": search_text, "country": country, "entity": "album", "limit": 1}
    try:
        response = requests.get(SEARCH_URL, params=params, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Error fetching album cover: {e}")
        return None

    results = data.get("results") or []
    if not results:
        logger.info(f"No iTunes album found for '{search_text}'")
        return None

    artwork_url = results[0].get("artworkUrl100")
    if not artwork_url:
        return None
    return uncompressed_artwork_url(artwork_url)

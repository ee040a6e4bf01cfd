from unittest.mock import MagicMock, patch

import requests

from postergen.api.itunes import SEARCH_URL, find_uncompressed_cover, uncompressed_artwork_url

THUMBNAIL = "https://is1-ssl.mzstatic.com/image/thumb/Music115/v4/aa/bb/cc/abc-def/source/100x100bb.jpg"
ORIGINAL = "https://a5.mzstatic.com/us/r1000/0/Music115/v4/aa/bb/cc/abc-def/source"


def make_response(payload):
    response = MagicMock()
    response.json.return_value = payload
    return response


def test_uncompressed_artwork_url() -> None:
    assert uncompressed_artwork_url(THUMBNAIL) == ORIGINAL


def test_uncompressed_artwork_url_rejects_other_hosts() -> None:
    assert uncompressed_artwork_url("https://example.com/cover.jpg") is None


def test_find_uncompressed_cover() -> None:
    with patch("postergen.api.itunes.requests.get") as get:
        get.return_value = make_response({"resultCount": 1, "results": [{"artworkUrl100": THUMBNAIL}]})
        assert find_uncompressed_cover("Pitbull Global Warming") == ORIGINAL

    assert get.call_args.args[0] == SEARCH_URL
    params = get.call_args.kwargs["params"]
    assert params["term"] == "Pitbull Global Warming"
    assert params["country"] == "us"
    assert params["entity"] == "album"


def test_find_uncompressed_cover_no_results() -> None:
    with patch("postergen.api.itunes.requests.get") as get:
        get.return_value = make_response({"resultCount": 0, "results": []})
        assert find_uncompressed_cover("nothing at all", country="de") is None
    assert get.call_args.kwargs["params"]["country"] == "de"


def test_find_uncompressed_cover_network_error() -> None:
    with patch("postergen.api.itunes.requests.get", side_effect=requests.ConnectionError("offline")):
        assert find_uncompressed_cover("Pitbull") is None

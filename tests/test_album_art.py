from unittest.mock import MagicMock, patch

import pytest
import requests
from PIL import Image

from conftest import encode_png
from postergen.utils.album_art import (
    CoverArt,
    decode_data_uri,
    extract_palette,
    fetch_as_data_uri,
    load_image_bytes,
    to_data_uri,
)


def test_data_uri_round_trip(png_bytes) -> None:
    uri = to_data_uri(png_bytes, "image/png")
    assert decode_data_uri(uri) == ("image/png", png_bytes)


@pytest.mark.parametrize("uri", ["data:image/png,plain", "data:image/png;base64,@@@@", "https://x"])
def test_decode_data_uri_rejects_malformed(uri) -> None:
    with pytest.raises(ValueError):
        decode_data_uri(uri)


def test_load_image_bytes_from_path_and_uri(png_file, png_data_uri, png_bytes) -> None:
    assert load_image_bytes(str(png_file)) == png_bytes
    assert load_image_bytes(png_data_uri) == png_bytes


def test_fetch_as_data_uri(png_bytes) -> None:
    response = MagicMock(content=png_bytes, headers={"content-type": "image/png; charset=binary"})
    with patch("postergen.utils.album_art.requests.get", return_value=response):
        assert fetch_as_data_uri("https://i.scdn.co/image/large") == to_data_uri(png_bytes, "image/png")


def test_fetch_as_data_uri_failure() -> None:
    with patch("postergen.utils.album_art.requests.get", side_effect=requests.Timeout("slow")):
        assert fetch_as_data_uri("https://i.scdn.co/image/large") is None


def test_cover_art_converts_to_rgb() -> None:
    art = CoverArt(encode_png())
    assert art.image.mode == "RGB"


def test_resize_and_crop_center_crops() -> None:
    art = CoverArt(encode_png(size=(200, 100)))
    cropped = art.resize_and_crop((50, 50))
    assert cropped.size == (50, 50)


def test_palette_of_striped_image(tmp_path) -> None:
    image = Image.new("RGB", (80, 80))
    stripes = [(200, 30, 30), (30, 200, 30), (30, 30, 200), (240, 240, 240), (20, 20, 20)]
    for i, color in enumerate(stripes):
        image.paste(color, (i * 16, 0, (i + 1) * 16, 80))
    path = tmp_path / "stripes.png"
    image.save(path)

    colors = extract_palette(str(path))
    assert colors
    assert len(colors) <= 5
    assert all(color.startswith("#") and len(color) == 7 for color in colors)


def test_palette_of_unloadable_source_is_none(tmp_path) -> None:
    assert extract_palette(str(tmp_path / "missing.png")) is None
    assert extract_palette("") is None

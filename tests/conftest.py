"""Shared fixtures: generated images, a sample album and fake catalog clients."""

import base64
from io import BytesIO

import pytest
from PIL import Image

from postergen.api.models import Album, Track
from postergen.export import ExportPipeline


def encode_png(color: tuple[int, int, int] = (255, 0, 0), size: tuple[int, int] = (64, 64)) -> bytes:
    image = Image.new("RGB", size, color)
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    return encode_png()


@pytest.fixture()
def png_data_uri(png_bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(png_bytes).decode()


@pytest.fixture()
def png_file(tmp_path, png_bytes):
    path = tmp_path / "cover.png"
    path.write_bytes(png_bytes)
    return path


@pytest.fixture()
def album() -> Album:
    return Album(
        id="4aawyAB9vmqN3uQ7FjRGTy",
        title="Global Warming",
        artists=["Pitbull"],
        images=["https://i.scdn.co/image/large", "https://i.scdn.co/image/small"],
        tracks=[
            Track(title="Global Warming", duration=85, track_number=1),
            Track(title="Don't Stop the Party", duration=206, track_number=2),
        ],
        release_date="2012-11-16",
        label="Mr.305/Polo Grounds Music/RCA Records",
        total_tracks=2,
    )


class FakePalette:
    """Palette extractor returning fixed colors and recording its calls."""

    def __init__(self, colors: list[str] | None):
        self.colors = colors
        self.calls: list[str] = []

    def __call__(self, source: str) -> list[str] | None:
        self.calls.append(source)
        return self.colors


@pytest.fixture()
def fake_palette() -> FakePalette:
    return FakePalette(["#112233", "#445566", "#778899"])


@pytest.fixture()
def pipeline(fake_palette) -> ExportPipeline:
    return ExportPipeline(palette_extractor=fake_palette)


class FakeCatalog:
    """Catalog client returning canned results."""

    def __init__(self, album: Album | None, token: str | None = "token"):
        self.album = album
        self.token = token
        self.requested: list[str] = []

    def get_access_token(self) -> str | None:
        return self.token

    def get_album(self, token: str | None, album_id: str) -> Album | None:
        self.requested.append(album_id)
        return self.album


@pytest.fixture()
def catalog(album) -> FakeCatalog:
    return FakeCatalog(album)

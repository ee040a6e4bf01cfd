from unittest.mock import patch

import pytest

from conftest import FakeCatalog
from postergen.api.builder import create_session, render_poster
from postergen.export import ExportOptions
from postergen.schema import get_poster_type
from postergen.session import EditorSession, SessionState
from postergen.store import UnknownKeyError


@pytest.fixture()
def album_session(pipeline) -> EditorSession:
    return EditorSession(get_poster_type("album"), pipeline=pipeline)


def test_album_session_waits_for_catalog_data(album_session) -> None:
    assert not album_session.ready
    assert album_session.state is SessionState.IDLE
    album_session.update("title", "Draft")
    assert album_session.preview is None
    assert album_session.export() is None
    assert album_session.state is SessionState.IDLE


def test_movie_session_is_ready_immediately(pipeline) -> None:
    session = EditorSession(get_poster_type("movie"), pipeline=pipeline)
    assert session.ready
    assert session.state is SessionState.PREVIEWING
    assert session.preview is not None
    assert session.preview_data_uri().startswith("data:application/pdf;base64,")


def test_load_merges_catalog_data(album_session, catalog, album, png_data_uri) -> None:
    with patch("postergen.session.fetch_as_data_uri", return_value=png_data_uri) as fetch:
        result = album_session.load(catalog, album.id)

    assert result.ok
    assert result.album is album
    fetch.assert_called_once_with("https://i.scdn.co/image/large")
    assert album_session.ready
    assert album_session.state is SessionState.PREVIEWING
    assert album_session.config["title"] == "Global Warming"
    assert album_session.config["artist"] == "Pitbull"
    assert album_session.config["cover"] == png_data_uri
    assert album_session.preview.texts()[:2] == ["Pitbull", "Global Warming"]


def test_load_uses_high_res_cover_when_selected(album_session, catalog, album, png_data_uri) -> None:
    album_session.update("cover_source", "high-res")
    with patch(
        "postergen.session.find_uncompressed_cover", return_value="https://a5.mzstatic.com/us/r1000/0/x.jpg"
    ) as lookup, patch("postergen.session.fetch_as_data_uri", return_value=png_data_uri) as fetch:
        album_session.load(catalog, album.id)

    lookup.assert_called_once_with("Pitbull Global Warming", country="us")
    fetch.assert_called_once_with("https://a5.mzstatic.com/us/r1000/0/x.jpg")


def test_high_res_lookup_falls_back_to_catalog_cover(album_session, catalog, album, png_data_uri) -> None:
    album_session.update("cover_source", "high-res")
    with patch("postergen.session.find_uncompressed_cover", return_value=None), patch(
        "postergen.session.fetch_as_data_uri", return_value=png_data_uri
    ) as fetch:
        album_session.load(catalog, album.id)
    fetch.assert_called_once_with("https://i.scdn.co/image/large")


def test_cover_url_kept_when_download_fails(album_session, catalog, album) -> None:
    with patch("postergen.session.fetch_as_data_uri", return_value=None):
        album_session.load(catalog, album.id)
    assert album_session.config["cover"] == "https://i.scdn.co/image/large"


def test_load_without_token(album_session, album) -> None:
    result = album_session.load(FakeCatalog(album, token=None), album.id)
    assert not result.ok
    assert result.error == "authentication failed"
    assert not album_session.ready


def test_load_missing_album(album_session) -> None:
    catalog = FakeCatalog(None)
    result = album_session.load(catalog, "missing")
    assert not result.ok
    assert catalog.requested == ["missing"]
    assert not album_session.ready


def test_update_rerenders_preview(album_session, catalog, album, png_data_uri) -> None:
    with patch("postergen.session.fetch_as_data_uri", return_value=png_data_uri):
        album_session.load(catalog, album.id)
    generation = album_session.generation

    album_session.update("template", "minimal")

    assert album_session.generation == generation + 1
    assert album_session.preview.images() == []
    album_session.reset("template")
    assert album_session.config["template"] == "classic"
    assert len(album_session.preview.images()) == 1


def test_update_unknown_key(album_session) -> None:
    with pytest.raises(UnknownKeyError):
        album_session.update("director", "nobody")


def test_form_edits_flow_into_session(pipeline) -> None:
    session = EditorSession(get_poster_type("movie"), pipeline=pipeline)
    form = session.form()

    form.control("font_size").change(500)
    form.control("bg_color").change("#0F0")

    assert session.config["font_size"] == 100
    assert session.config["bg_color"] == "#00ff00"
    assert form.control("font_size").value == 100
    assert form.modified_keys() == ["font_size", "bg_color"]


def test_export_returns_to_previewing(pipeline) -> None:
    session = create_session("movie", {"title": "Metropolis"}, pipeline=pipeline)
    artifact = session.export(ExportOptions(page_size="a4", output_format="png", dpi=72))
    assert artifact.filename == "movie-poster-a4-72dpi.png"
    assert session.state is SessionState.PREVIEWING


def test_export_failure_is_not_fatal(pipeline) -> None:
    session = create_session("movie", pipeline=pipeline)
    with patch.object(pipeline, "export_artifact", side_effect=OSError("disk full")):
        assert session.export() is None
    assert session.state is SessionState.PREVIEWING


def test_stale_render_is_discarded(pipeline) -> None:
    session = create_session("movie", {"title": "First"}, pipeline=pipeline)
    original = pipeline.render_preview

    def slow_render(poster_type, config, external):
        doc = original(poster_type, config, external)
        # A newer edit lands while this render is in flight
        session._generation += 1
        return doc

    current = session.preview
    with patch.object(pipeline, "render_preview", side_effect=slow_render):
        assert session.refresh_preview() is current
    assert session.preview is current


def test_create_session_rejects_unknown_type() -> None:
    with pytest.raises(ValueError):
        create_session("book")


def test_render_poster_requires_catalog_for_albums(pipeline) -> None:
    with pytest.raises(ValueError, match="catalog data"):
        render_poster("album", {"title": "Bad"}, pipeline=pipeline)


def test_render_poster_for_album(pipeline, album) -> None:
    artifact = render_poster("album", {"title": album.title}, external=album, pipeline=pipeline)
    assert artifact.content.startswith(b"%PDF")


@pytest.mark.parametrize("error", [MemoryError(), RuntimeError("renderer crashed")])
def test_export_renderer_error_is_not_fatal(pipeline, caplog, error) -> None:
    session = create_session("movie", pipeline=pipeline)
    with patch("postergen.render.image.RasterRenderer.render", side_effect=error):
        assert session.export(ExportOptions(page_size="a4", output_format="png", dpi=72)) is None
    assert session.state is SessionState.PREVIEWING
    assert "Export failed" in caplog.text

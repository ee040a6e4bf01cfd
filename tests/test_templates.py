import pytest

from postergen.design.templates import TEMPLATES, get_template, template_names
from postergen.export import ExportOptions, ExportPipeline
from postergen.render.document import PosterDocument, RectOp
from postergen.schema import ALBUM_SCHEMA, MOVIE_SCHEMA, PosterType, Schema, TextField, get_poster_type
from postergen.store import initialize, merge, update
from postergen.utils.dimensions import get_page_geometry


def render(template_name, config, external=None, page_size="a0", poster_type=None, palette=None) -> PosterDocument:
    geometry = get_page_geometry(page_size)
    doc = PosterDocument(geometry)
    get_template(template_name).render(
        doc,
        config,
        external,
        geometry.width,
        geometry.height,
        geometry.scale,
        poster_type=poster_type,
        palette=palette,
    )
    return doc


@pytest.fixture()
def album_config(png_data_uri):
    return merge(
        initialize(ALBUM_SCHEMA),
        {"title": "Global Warming", "artist": "Pitbull", "cover": png_data_uri},
    )


def test_registry_names() -> None:
    assert template_names() == ["classic", "minimal", "modern"]
    assert set(TEMPLATES) == {"classic", "minimal", "modern"}


def test_edited_text_is_rendered() -> None:
    schema = Schema(name="custom", fields=(TextField(key="title", label="Title", default="X"),))
    config = update(initialize(schema), "title", "Y")

    doc = render("minimal", config)

    assert doc.texts() == ["Y"]


def test_empty_palette_renders_no_swatches(album_config, album) -> None:
    pipeline = ExportPipeline(palette_extractor=lambda source: [])
    doc = pipeline.render_document(get_poster_type("album"), album_config, album, ExportOptions())

    # Only the background fill remains
    assert len(doc.filled_rects()) == 1


def test_failed_palette_renders_no_swatches(album_config, album) -> None:
    pipeline = ExportPipeline(palette_extractor=lambda source: None)
    doc = pipeline.render_document(get_poster_type("album"), album_config, album, ExportOptions())
    assert len(doc.filled_rects()) == 1


def test_unknown_template_renders_like_classic(album_config, album) -> None:
    palette = ["#112233", "#445566"]
    classic = render("classic", album_config, album, palette=palette)
    fallback = render("nonexistent", album_config, album, palette=palette)
    assert fallback.operations == classic.operations


def test_background_is_filled_first() -> None:
    config = update(initialize(ALBUM_SCHEMA), "bg_color", "#ff0000")
    for name in template_names():
        doc = render(name, config)
        first = doc.operations[0]
        assert isinstance(first, RectOp)
        assert (first.x, first.y, first.width, first.height) == (0, 0, 841.0, 1189.0)
        assert first.style == "F"
        assert first.fill == "#ff0000"


def test_classic_layout(album_config, album) -> None:
    doc = render("classic", album_config, album, palette=["#112233", "#445566", "#778899"])

    texts = doc.texts()
    assert texts[:2] == ["Pitbull", "Global Warming"]
    assert "Released 2012-11-16" in texts
    assert "Mr.305/Polo Grounds Music/RCA Records" in texts
    assert "2 tracks, 4:51" in texts
    assert "1. Global Warming" in texts
    assert "3:26" in texts

    images = doc.images()
    assert len(images) == 1
    assert images[0].width == images[0].height

    swatches = doc.filled_rects()[1:]
    assert [rect.fill for rect in swatches] == ["#112233", "#445566", "#778899"]


def test_classic_caps_swatches_at_five(album_config) -> None:
    palette = ["#000001", "#000002", "#000003", "#000004", "#000005", "#000006", "#000007"]
    doc = render("classic", album_config, palette=palette)
    assert len(doc.filled_rects()) == 1 + 5


def test_classic_skips_invalid_palette_entries(album_config) -> None:
    doc = render("classic", album_config, palette=["#112233", "not-a-color"])
    assert [rect.fill for rect in doc.filled_rects()[1:]] == ["#112233"]


def test_missing_metadata_is_omitted() -> None:
    config = initialize(ALBUM_SCHEMA)
    for name in template_names():
        doc = render(name, config)
        assert doc.texts() == []
        assert doc.images() == []


def test_minimal_text_positions(album_config) -> None:
    doc = render("minimal", album_config)
    credit, title = [op for op in doc.operations if hasattr(op, "text")]
    assert credit.text == "Pitbull"
    assert credit.y == pytest.approx(1189 / 2 - 20)
    assert title.y == pytest.approx(1189 / 2 + 20)
    assert credit.align == title.align == "center"
    assert credit.font_size == title.font_size == 40


def test_modern_centers_large_cover(album_config) -> None:
    doc = render("modern", album_config)
    (image,) = doc.images()
    assert image.width == pytest.approx(841 / 2)
    assert image.x == pytest.approx((841 - image.width) / 2)
    assert image.y == pytest.approx(1189 / 4)


def test_sizes_scale_with_page(album_config) -> None:
    a0 = render("minimal", album_config, page_size="a0")
    a2 = render("minimal", album_config, page_size="a2")
    a0_sizes = [op.font_size for op in a0.operations if hasattr(op, "font_size")]
    a2_sizes = [op.font_size for op in a2.operations if hasattr(op, "font_size")]
    assert a2_sizes == [pytest.approx(size / 2) for size in a0_sizes]


def test_movie_roles(png_data_uri) -> None:
    movie = get_poster_type("movie")
    config = merge(
        initialize(MOVIE_SCHEMA),
        {"title": "Metropolis", "director": "Fritz Lang", "poster": png_data_uri},
    )
    doc = render("modern", config, poster_type=movie)
    assert doc.texts() == ["Fritz Lang", "Metropolis"]
    assert doc.images()[0].source == png_data_uri


def test_custom_role_keys() -> None:
    schema = Schema(
        name="book",
        fields=(
            TextField(key="name", label="Name", default="Dune"),
            TextField(key="author", label="Author", default="Frank Herbert"),
        ),
    )
    book = PosterType(name="book", schema=schema, title_key="name", credit_key="author", image_key="jacket")
    doc = render("minimal", initialize(schema), poster_type=book)
    assert doc.texts() == ["Frank Herbert", "Dune"]


def test_modern_captions_release_year(album_config, album) -> None:
    doc = render("modern", album_config, album)
    assert doc.texts() == ["Pitbull", "Global Warming", "2012"]

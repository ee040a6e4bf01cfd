import pytest
from pydantic import ValidationError

from postergen.schema import (
    ALBUM_SCHEMA,
    MOVIE_SCHEMA,
    ChoiceField,
    ChoiceOption,
    ColorField,
    FileField,
    RangeField,
    Schema,
    TextField,
    defaults,
    get_poster_type,
)


@pytest.mark.parametrize("schema", [ALBUM_SCHEMA, MOVIE_SCHEMA])
def test_defaults_has_one_entry_per_descriptor(schema) -> None:
    values = defaults(schema)
    assert list(values) == schema.keys()
    for field in schema.fields:
        assert values[field.key] == field.default


def test_album_schema_fields() -> None:
    assert ALBUM_SCHEMA.keys() == [
        "artist",
        "title",
        "font_size",
        "outer_margin",
        "bg_color",
        "text_color",
        "template",
        "cover_source",
        "cover",
    ]
    font_size = ALBUM_SCHEMA.get("font_size")
    assert (font_size.min, font_size.max, font_size.default) == (20, 100, 40)
    assert ALBUM_SCHEMA.get("outer_margin").default == 50
    assert ALBUM_SCHEMA.get("template").option_ids() == ["classic", "minimal", "modern"]


def test_movie_schema_differs_from_album() -> None:
    assert MOVIE_SCHEMA.get("outer_margin").default == 10
    assert MOVIE_SCHEMA.get("poster").default is None
    assert MOVIE_SCHEMA.get("poster_orientation").default == "portrait"
    assert "artist" not in MOVIE_SCHEMA


def test_descriptors_are_discriminated_by_kind() -> None:
    schema = Schema.model_validate(
        {
            "name": "custom",
            "fields": [
                {"kind": "text", "key": "title", "label": "Title", "default": "X"},
                {"kind": "color", "key": "bg", "label": "Background", "default": "#ff0000"},
                {"kind": "range", "key": "size", "label": "Size", "min": 0, "max": 10, "default": 5},
            ],
        }
    )
    assert [type(field) for field in schema.fields] == [TextField, ColorField, RangeField]


def test_duplicate_keys_rejected() -> None:
    with pytest.raises(ValidationError, match="duplicate"):
        Schema(
            name="bad",
            fields=(
                TextField(key="title", label="A"),
                TextField(key="title", label="B"),
            ),
        )


def test_range_default_must_be_within_bounds() -> None:
    with pytest.raises(ValidationError):
        RangeField(key="size", label="Size", min=0, max=10, default=11)
    with pytest.raises(ValidationError):
        RangeField(key="size", label="Size", min=10, max=0, default=5)


def test_range_clamp() -> None:
    field = RangeField(key="size", label="Size", min=0, max=100, default=50)
    assert field.clamp(150) == 100
    assert field.clamp(-3) == 0
    assert field.clamp(42) == 42


@pytest.mark.parametrize(
    "kwargs",
    [
        {"default": True},
        {"default": "5"},
        {"max": False},
        {"step": 0},
    ],
)
def test_range_rejects_non_numeric_definitions(kwargs) -> None:
    with pytest.raises(ValidationError):
        RangeField(**{"key": "size", "label": "Size", "min": 0, "max": 10, "default": 5, **kwargs})


def test_range_clamp_snaps_to_step() -> None:
    field = RangeField(key="margin", label="Margin", min=0, max=100, default=10, step=5)
    assert field.clamp(12) == 10
    assert field.clamp(13) == 15
    assert field.clamp(99) == 100
    half = RangeField(key="weight", label="Weight", min=1, max=3, default=2.0, step=0.5)
    assert half.clamp(1.8) == 2.0


def test_choice_default_must_be_an_option() -> None:
    options = (ChoiceOption(id="a", label="A"), ChoiceOption(id="b", label="B"))
    with pytest.raises(ValidationError):
        ChoiceField(key="pick", label="Pick", default="c", options=options)
    field = ChoiceField(key="pick", label="Pick", default="b", options=options)
    assert field.get_option("b").label == "B"
    assert field.get_option("zzz") is None


def test_color_default_must_be_long_hex() -> None:
    with pytest.raises(ValidationError):
        ColorField(key="bg", label="Background", default="red")


def test_file_accept_parsing() -> None:
    field = FileField(key="cover", label="Cover", accept="image/jpeg, image/PNG")
    assert field.accepted_types() == ["image/jpeg", "image/png"]
    assert FileField(key="any", label="Any").accepted_types() == []


def test_get_poster_type() -> None:
    assert get_poster_type("Album").requires_catalog is True
    movie = get_poster_type("movie")
    assert movie.requires_catalog is False
    assert (movie.credit_key, movie.image_key) == ("director", "poster")
    with pytest.raises(ValueError, match="Unknown poster type"):
        get_poster_type("book")

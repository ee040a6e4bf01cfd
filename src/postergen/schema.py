"""Declarative field schemas for each poster type."""

from dataclasses import dataclass
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, model_validator

from postergen.types import ConfigValue
from postergen.utils.colors import is_hex_color


class _BaseField(BaseModel):
    """Common descriptor attributes."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(min_length=1)
    label: str


class TextField(_BaseField):
    """Free text parameter."""

    kind: Literal["text"] = "text"
    default: str = ""


class ColorField(_BaseField):
    """Hex color parameter ("#rrggbb")."""

    kind: Literal["color"] = "color"
    default: str = "#000000"

    @model_validator(mode="after")
    def _check_default(self) -> "ColorField":
        if not is_hex_color(self.default) or len(self.default) != 7:
            raise ValueError(f"Field '{self.key}': default {self.default!r} is not a #rrggbb color")
        return self


class RangeField(_BaseField):
    """Bounded numeric parameter, edited with a slider."""

    kind: Literal["range"] = "range"
    default: StrictInt | StrictFloat
    min: StrictInt | StrictFloat
    max: StrictInt | StrictFloat
    step: StrictInt | StrictFloat = 1
    """Slider increment; values snap to multiples of it counted from ``min``."""

    @model_validator(mode="after")
    def _check_bounds(self) -> "RangeField":
        if self.step <= 0:
            raise ValueError(f"Field '{self.key}': step must be positive")
        if self.min > self.max:
            raise ValueError(f"Field '{self.key}': min {self.min} is greater than max {self.max}")
        if not self.min <= self.default <= self.max:
            raise ValueError(
                f"Field '{self.key}': default {self.default} outside [{self.min}, {self.max}]"
            )
        return self

    def clamp(self, value: int | float) -> int | float:
        """Snap a value to the step grid, then clamp it into [min, max]."""
        steps = round((value - self.min) / self.step)
        return max(self.min, min(self.max, self.min + steps * self.step))


class ChoiceOption(BaseModel):
    """One selectable option of a choice field."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    description: str | None = None


class ChoiceField(_BaseField):
    """Single choice among an ordered list of options."""

    kind: Literal["choice"] = "choice"
    default: str
    options: tuple[ChoiceOption, ...]

    @model_validator(mode="after")
    def _check_default(self) -> "ChoiceField":
        ids = self.option_ids()
        if len(set(ids)) != len(ids):
            raise ValueError(f"Field '{self.key}': duplicate option ids")
        if self.default not in ids:
            raise ValueError(f"Field '{self.key}': default {self.default!r} is not an option id")
        return self

    def option_ids(self) -> list[str]:
        """Option ids in declaration order."""
        return [option.id for option in self.options]

    def get_option(self, option_id: str) -> ChoiceOption | None:
        """Look up an option by id."""
        for option in self.options:
            if option.id == option_id:
                return option
        return None


class FileField(_BaseField):
    """Uploaded file, stored as a base64 data URI."""

    kind: Literal["file"] = "file"
    default: str | None = None
    accept: str | None = None
    """Comma-separated MIME filter (e.g. "image/jpeg, image/png" or "image/*")."""

    def accepted_types(self) -> list[str]:
        """Parsed MIME filter; empty means anything is accepted."""
        if not self.accept:
            return []
        return [part.strip().lower() for part in self.accept.split(",") if part.strip()]


FieldDescriptor = Annotated[
    Union[TextField, ColorField, RangeField, ChoiceField, FileField],
    Field(discriminator="kind"),
]


class Schema(BaseModel):
    """
    Ordered, immutable sequence of field descriptors for one poster type.

    Keys must be unique; every descriptor validates its own default, so a
    malformed schema fails when it is defined rather than at render time.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    fields: tuple[FieldDescriptor, ...]

    @model_validator(mode="after")
    def _check_unique_keys(self) -> "Schema":
        seen: set[str] = set()
        for descriptor in self.fields:
            if descriptor.key in seen:
                raise ValueError(f"Schema '{self.name}': duplicate field key '{descriptor.key}'")
            seen.add(descriptor.key)
        return self

    def __contains__(self, key: object) -> bool:
        return any(descriptor.key == key for descriptor in self.fields)

    def keys(self) -> list[str]:
        """Field keys in schema order."""
        return [descriptor.key for descriptor in self.fields]

    def get(self, key: str) -> FieldDescriptor | None:
        """Look up a descriptor by key."""
        for descriptor in self.fields:
            if descriptor.key == key:
                return descriptor
        return None


def defaults(schema: Schema) -> dict[str, ConfigValue]:
    """Map every descriptor's key to its declared default."""
    return {descriptor.key: descriptor.default for descriptor in schema.fields}


# ============================================================================
# Built-in schemas
# ============================================================================

TEMPLATE_OPTIONS = (
    ChoiceOption(id="classic", label="Classic", description="Bordered layout with cover, title and metadata"),
    ChoiceOption(id="minimal", label="Minimal", description="Centered text only"),
    ChoiceOption(id="modern", label="Modern", description="Large centered cover with captions"),
)

ALBUM_SCHEMA = Schema(
    name="album",
    fields=(
        TextField(key="artist", label="Artist Name", default=""),
        TextField(key="title", label="Album Name", default=""),
        RangeField(key="font_size", label="Font Size", min=20, max=100, default=40),
        RangeField(key="outer_margin", label="Outer Margin Size", min=0, max=100, default=50),
        ColorField(key="bg_color", label="Background Color", default="#ffffff"),
        ColorField(key="text_color", label="Text Color", default="#000000"),
        ChoiceField(key="template", label="Template", default="classic", options=TEMPLATE_OPTIONS),
        ChoiceField(
            key="cover_source",
            label="Cover Source",
            default="catalog",
            options=(
                ChoiceOption(id="catalog", label="Catalog", description="Cover from the music catalog"),
                ChoiceOption(id="high-res", label="High Resolution", description="Uncompressed cover from iTunes"),
            ),
        ),
        FileField(key="cover", label="Cover", default="", accept="image/jpeg, image/png"),
    ),
)

MOVIE_SCHEMA = Schema(
    name="movie",
    fields=(
        TextField(key="title", label="Movie Title", default=""),
        TextField(key="director", label="Director", default=""),
        RangeField(key="font_size", label="Font Size", min=20, max=100, default=40),
        RangeField(key="outer_margin", label="Outer Margin Size", min=0, max=100, default=10),
        ColorField(key="bg_color", label="Background Color", default="#ffffff"),
        ColorField(key="text_color", label="Text Color", default="#000000"),
        ChoiceField(key="template", label="Template", default="classic", options=TEMPLATE_OPTIONS),
        ChoiceField(
            key="poster_orientation",
            label="Poster Orientation",
            default="portrait",
            options=(
                ChoiceOption(id="landscape", label="Landscape"),
                ChoiceOption(id="portrait", label="Portrait"),
            ),
        ),
        FileField(key="poster", label="Movie Poster", default=None, accept="image/*"),
    ),
)


@dataclass(frozen=True)
class PosterType:
    """
    A schema plus the config keys that fill each template role.

    Templates read title/credit/image through these keys so the same layouts
    serve album and movie posters.
    """

    name: str
    schema: Schema
    title_key: str = "title"
    credit_key: str = "artist"
    image_key: str = "cover"
    requires_catalog: bool = False


POSTER_TYPES: dict[str, PosterType] = {
    "album": PosterType(
        name="album",
        schema=ALBUM_SCHEMA,
        title_key="title",
        credit_key="artist",
        image_key="cover",
        requires_catalog=True,
    ),
    "movie": PosterType(
        name="movie",
        schema=MOVIE_SCHEMA,
        title_key="title",
        credit_key="director",
        image_key="poster",
    ),
}


def get_poster_type(name: str) -> PosterType:
    """
    Get a poster type by name.

    Raises:
        ValueError: If the poster type is unknown.
    """
    try:
        return POSTER_TYPES[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown poster type '{name}'. Supported: {', '.join(POSTER_TYPES)}"
        ) from None

"""Base abstractions for poster templates."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping

from postergen.api.models import Album
from postergen.render.document import PosterDocument
from postergen.schema import PosterType
from postergen.utils.colors import is_hex_color

DEFAULT_BACKGROUND = "#ffffff"
DEFAULT_TEXT_COLOR = "#000000"
DEFAULT_FONT_SIZE = 40
DEFAULT_MARGIN = 10


@dataclass
class RenderContext:
    """Everything a template needs to paint one page."""

    doc: PosterDocument
    config: Mapping[str, Any]
    external: Album | None
    page_width: float  # mm
    page_height: float  # mm
    scale: float  # relative to A0
    poster_type: PosterType | None = None
    palette: list[str] = field(default_factory=list)

    def _value(self, key: str) -> Any:
        return self.config.get(key)

    def _text(self, key: str) -> str:
        value = self._value(key)
        return value if isinstance(value, str) else ""

    @property
    def title(self) -> str:
        return self._text(self.poster_type.title_key if self.poster_type else "title")

    @property
    def credit(self) -> str:
        return self._text(self.poster_type.credit_key if self.poster_type else "artist")

    @property
    def image(self) -> str | None:
        """Cover/poster image source; None when nothing is set."""
        value = self._value(self.poster_type.image_key if self.poster_type else "cover")
        return value if isinstance(value, str) and value else None

    @property
    def background(self) -> str:
        value = self._value("bg_color")
        return value if is_hex_color(value) else DEFAULT_BACKGROUND

    @property
    def text_color(self) -> str:
        value = self._value("text_color")
        return value if is_hex_color(value) else DEFAULT_TEXT_COLOR

    @property
    def margin(self) -> float:
        """Outer margin in mm, pre-scaled to the page size."""
        value = self._value("outer_margin")
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            value = DEFAULT_MARGIN
        return value * self.scale

    @property
    def font_size(self) -> float:
        """Base font size in points, pre-scaled to the page size."""
        value = self._value("font_size")
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            value = DEFAULT_FONT_SIZE
        return value * self.scale

    def scaled(self, offset: float) -> float:
        """Scale a fixed A0 offset (mm) to the current page size."""
        return offset * self.scale


class Template(ABC):
    """
    Base class for poster templates.

    Subclasses implement ``draw``; ``render`` paints the background first so
    every template starts from the configured background color.
    """

    name: str = ""
    uses_palette: bool = False

    def render(
        self,
        doc: PosterDocument,
        config: Mapping[str, Any],
        external: Album | None,
        page_width: float,
        page_height: float,
        scale: float,
        poster_type: PosterType | None = None,
        palette: list[str] | None = None,
    ) -> None:
        """
        Paint the poster onto ``doc``.

        Args:
            doc: Document to draw on.
            config: Config map values.
            external: Catalog metadata (None for posters without a catalog record).
            page_width: Page width in mm.
            page_height: Page height in mm.
            scale: Scale factor relative to A0.
            poster_type: Poster type supplying the title/credit/image keys.
            palette: Colors extracted from the cover (classic swatches).
        """
        context = RenderContext(
            doc=doc,
            config=config,
            external=external,
            page_width=page_width,
            page_height=page_height,
            scale=scale,
            poster_type=poster_type,
            palette=list(palette or []),
        )
        self.fill_background(context)
        self.draw(context)

    def fill_background(self, context: RenderContext) -> None:
        doc = context.doc
        doc.set_fill_color(context.background)
        doc.rect(0, 0, context.page_width, context.page_height, style="F")

    @abstractmethod
    def draw(self, context: RenderContext) -> None:
        """
        Draw the template's content.

        Args:
            context: Rendering context with document, config and geometry.
        """
        pass

    @staticmethod
    def draw_text(context: RenderContext, text: str, x: float, y: float, size: float, weight: str = "normal") -> None:
        """Draw centered text, omitting empty strings."""
        if not text:
            return
        doc = context.doc
        doc.set_text_color(context.text_color)
        doc.set_font(weight=weight, size=size)  # type: ignore[arg-type]
        doc.text(text, x, y, align="center")

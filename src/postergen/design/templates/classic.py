"""Classic bordered poster layout."""

from postergen.design.base import RenderContext, Template
from postergen.utils.colors import is_hex_color
from postergen.utils.dimensions import MM_PER_POINT

MAX_SWATCHES = 5


class ClassicTemplate(Template):
    """
    Bordered layout.

    Top to bottom: credit line, square cover, title, divider, then a metadata
    panel (release details and color swatches on the left, track list on the
    right) when catalog data is available.
    """

    name = "classic"
    uses_palette = True

    def draw(self, context: RenderContext) -> None:
        doc = context.doc
        width, height = context.page_width, context.page_height
        margin = context.margin
        padding = context.scaled(20)
        font_size = context.font_size

        # Border
        doc.set_draw_color(context.text_color)
        doc.set_line_width(context.scaled(1))
        doc.rect(margin, margin, width - 2 * margin, height - 2 * margin, style="S")

        self.draw_text(context, context.credit, width / 2, margin + context.scaled(40), font_size, weight="bold")

        # Cover keeps its slot even when no image is set
        cover_size = max(0.0, min(width - 2 * (margin + padding), height * 0.55))
        cover_top = margin + context.scaled(60)
        if context.image and cover_size > 0:
            doc.add_image(context.image, (width - cover_size) / 2, cover_top, cover_size, cover_size)

        title_y = cover_top + cover_size + context.scaled(30)
        self.draw_text(context, context.title, width / 2, title_y, font_size * 0.8, weight="bold")

        divider_y = title_y + context.scaled(12)
        doc.line(margin + padding, divider_y, width - margin - padding, divider_y)

        self._draw_metadata_panel(context, divider_y + context.scaled(15))

    def _draw_metadata_panel(self, context: RenderContext, top: float) -> None:
        """Release details, swatches and track list below the divider."""
        doc = context.doc
        album = context.external
        left = context.margin + context.scaled(20)
        right = context.page_width - context.margin - context.scaled(20)
        bottom = context.page_height - context.margin - context.scaled(20)

        small_size = context.font_size * 0.35
        line_height = small_size * MM_PER_POINT * 1.6
        y = top + line_height

        doc.set_text_color(context.text_color)
        doc.set_font(weight="normal", size=small_size)

        if album is not None:
            details = [
                f"Released {album.release_date}" if album.release_date else "",
                album.label or "",
                f"{len(album.tracks)} tracks, {album.format_total_duration()}" if album.tracks else "",
            ]
            for line in details:
                if not line or y > bottom:
                    continue
                doc.text(line, left, y, align="left")
                y += line_height

        self._draw_swatches(context, left, y, bottom)

        if album is not None and album.tracks:
            column_x = (context.page_width / 2) + context.scaled(10)
            track_y = top + line_height
            for track in album.tracks:
                if track_y > bottom:
                    break
                doc.text(f"{track.track_number}. {track.title}", column_x, track_y, align="left")
                doc.text(track.format_duration(), right, track_y, align="right")
                track_y += line_height

    def _draw_swatches(self, context: RenderContext, left: float, top: float, bottom: float) -> None:
        """Adjacent filled squares, one per palette color."""
        swatch = context.scaled(20)
        if not context.palette or top + swatch > bottom:
            return
        doc = context.doc
        colors = [color for color in context.palette if is_hex_color(color)][:MAX_SWATCHES]
        for i, color in enumerate(colors):
            doc.set_fill_color(color)
            doc.rect(left + i * swatch, top, swatch, swatch, style="F")

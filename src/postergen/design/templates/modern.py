"""Image-forward poster layout."""

from postergen.design.base import RenderContext, Template


class ModernTemplate(Template):
    """Large centered cover with the credit, title and release year as captions below it."""

    name = "modern"

    def draw(self, context: RenderContext) -> None:
        width, height = context.page_width, context.page_height
        margin = context.margin

        cover_size = min(width / 2, height / 2)
        cover_top = max(margin, height / 4)
        if context.image:
            context.doc.add_image(context.image, (width - cover_size) / 2, cover_top, cover_size, cover_size)

        self.draw_text(
            context, context.credit, width / 2, height - margin - context.scaled(80), context.font_size, weight="bold"
        )
        self.draw_text(
            context, context.title, width / 2, height - margin - context.scaled(50), context.font_size * 0.8
        )

        album = context.external
        if album is not None and album.year:
            self.draw_text(
                context, str(album.year), width / 2, height - margin - context.scaled(30), context.font_size * 0.5
            )

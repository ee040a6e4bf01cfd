"""Text-only poster layout."""

from postergen.design.base import RenderContext, Template


class MinimalTemplate(Template):
    """Credit and title centered on the page, nothing else."""

    name = "minimal"

    def draw(self, context: RenderContext) -> None:
        center_x = context.page_width / 2
        center_y = context.page_height / 2
        offset = context.scaled(20)

        self.draw_text(context, context.credit, center_x, center_y - offset, context.font_size)
        self.draw_text(context, context.title, center_x, center_y + offset, context.font_size)

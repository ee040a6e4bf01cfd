"""Design system for poster templates."""

from postergen.design.base import RenderContext, Template
from postergen.design.templates import TEMPLATES, get_template

__all__ = [
    "RenderContext",
    "TEMPLATES",
    "Template",
    "get_template",
]

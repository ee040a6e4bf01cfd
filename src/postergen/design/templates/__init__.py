"""Registry of named poster templates."""

import logging

from postergen.design.base import Template
from postergen.design.templates.classic import ClassicTemplate
from postergen.design.templates.minimal import MinimalTemplate
from postergen.design.templates.modern import ModernTemplate

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "classic"

TEMPLATES: dict[str, Template] = {
    template.name: template
    for template in (ClassicTemplate(), MinimalTemplate(), ModernTemplate())
}


def get_template(name: str | None) -> Template:
    """
    Look up a template by name.

    Unknown or missing names fall back to the classic template.
    """
    template = TEMPLATES.get((name or "").lower())
    if template is None:
        logger.warning(f"Unknown template '{name}', falling back to '{DEFAULT_TEMPLATE}'")
        return TEMPLATES[DEFAULT_TEMPLATE]
    return template


def template_names() -> list[str]:
    return list(TEMPLATES)


__all__ = [
    "ClassicTemplate",
    "DEFAULT_TEMPLATE",
    "MinimalTemplate",
    "ModernTemplate",
    "TEMPLATES",
    "get_template",
    "template_names",
]

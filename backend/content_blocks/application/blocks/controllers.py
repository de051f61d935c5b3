from markupsafe import Markup

from content_blocks.domain.templates import resolve_template
from .rendering import css_classes


class BlockController:
    """Renders one block (draft or live row) through its type's templates."""

    def __init__(self, block, manager):
        self.block = block
        self.manager = manager

    def template_context(self):
        return {
            "block": self.block,
            "controller": self,
            "css_classes": css_classes(self.block, self.manager),
        }

    def render(self, registry, area=None):
        area = area or self.block.area
        template = resolve_template(self.block.type, area, registry)
        return registry.render(template, **self.template_context())


class ContentBlockController(BlockController):
    def template_context(self):
        context = super().template_context()
        content = self.block.content or {}
        context["html"] = Markup(content.get("html", ""))
        return context

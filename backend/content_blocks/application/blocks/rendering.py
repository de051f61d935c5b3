from flask import current_app
from jinja2 import TemplateNotFound

TEMPLATE_DIR = "blocks"


class FlaskTemplateRegistry:
    """Template name N lives at blocks/N.html in the app's Jinja environment."""

    def __init__(self, env=None):
        self.env = env if env is not None else current_app.jinja_env

    def path_for(self, name):
        return f"{TEMPLATE_DIR}/{name}.html"

    def has_template(self, name):
        try:
            self.env.get_template(self.path_for(name))
        except TemplateNotFound:
            return False
        return True

    def render(self, name, **context):
        return self.env.get_template(self.path_for(name)).render(**context)


def css_classes(block, manager):
    """
    Lower-cased type ancestry (most specific first), plus the block's extra
    classes when the manager allows them.
    """
    classes = " ".join(manager.types.ancestry(block.type)).lower()
    if manager.get_use_extra_css_classes() and block.extra_css_classes:
        classes = f"{classes} {block.extra_css_classes.strip()}"
    return classes


def render_block(block, manager, *, area=None, registry=None):
    controller_cls = manager.types.controller_for(block.type)
    controller = controller_cls(block, manager)
    return controller.render(registry or FlaskTemplateRegistry(), area=area)

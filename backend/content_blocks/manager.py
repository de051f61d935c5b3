from flask import current_app
from content_blocks.domain.block_types import BlockTypeRegistry, BASE_BLOCK_TYPE
from content_blocks.domain.permissions import ViewerCapabilityChecker
from content_blocks.publishing.filesystem import FilesystemPublisher

EXTENSION_KEY = "content_blocks"


class BlockManager:
    """
    Per-application holder for block configuration and collaborators:
    the type registry, the extra-CSS-classes flag, view hooks, the
    capability checker and the optional static publisher.
    """

    def __init__(self, app=None, *, checker=None):
        self.types = BlockTypeRegistry()
        self.view_hooks = []
        self.checker = checker or ViewerCapabilityChecker()
        self.use_extra_css_classes = False
        self.publisher = None

        self._register_default_types()

        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self.use_extra_css_classes = app.config.get("BLOCKS_USE_EXTRA_CSS_CLASSES", False)

        if app.config.get("BLOCKS_FILESYSTEM_PUBLISHER"):
            self.publisher = FilesystemPublisher(app.config["STATIC_CACHE_DIR"])

        app.extensions[EXTENSION_KEY] = self

    def _register_default_types(self):
        from content_blocks.application.blocks.controllers import (
            BlockController,
            ContentBlockController,
        )

        self.types.register(BASE_BLOCK_TYPE, controller=BlockController)
        self.types.register("ContentBlock", controller=ContentBlockController, parent=BASE_BLOCK_TYPE)

    def register_block_type(self, name, controller=None, parent=BASE_BLOCK_TYPE):
        return self.types.register(name, controller=controller, parent=parent)

    def add_view_hook(self, hook):
        """hook(block, viewer) returning True/False overrides the block's policy."""
        self.view_hooks.append(hook)
        return hook

    def get_use_extra_css_classes(self):
        return self.use_extra_css_classes


def get_block_manager() -> BlockManager:
    return current_app.extensions[EXTENSION_KEY]

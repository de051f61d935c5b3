from flask import current_app
from .usage import pages_affected_by_changes


def republish_block(block, manager):
    """
    Notify the static publisher (when configured) that every page showing
    block needs regenerating.
    """
    if manager.publisher is None:
        return []

    urls = pages_affected_by_changes(block)
    current_app.logger.info("Republishing %d page(s) for block %s", len(urls), block.id)
    return manager.publisher.republish(urls)

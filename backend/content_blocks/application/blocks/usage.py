from content_blocks.models.block_live import BlockLive
from content_blocks.extensions import db


def pages_count(block):
    return len(block.pages)


def pages_affected_by_changes(block):
    """Links of every page the block is placed on."""
    return [page.link() for page in block.pages]


def usage_list_as_string(block):
    pages = ", ".join(page.slug for page in block.pages)
    sets = ", ".join(block_set.title for block_set in block.block_sets)

    if pages and sets:
        return f"Pages: {pages}<br />Block Sets: {sets}"
    if pages:
        return f"Pages: {pages}"
    if sets:
        return f"Block Sets: {sets}"
    return None


def is_published(block):
    if block is None or block.id is None:
        return False
    return db.session.get(BlockLive, block.id) is not None

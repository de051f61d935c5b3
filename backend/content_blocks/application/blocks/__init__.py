from .create_block import create_block
from .update_block import update_block
from .duplicate_block import duplicate_block
from .delete_block import delete_block
from .publish_block import publish_block, unpublish_block
from .placement import (
    create_page,
    assign_block_to_page,
    create_block_set,
    assign_blocks_to_set,
    live_placements,
)

__all__ = [
    "create_block",
    "update_block",
    "duplicate_block",
    "delete_block",
    "publish_block",
    "unpublish_block",
    "create_page",
    "assign_block_to_page",
    "create_block_set",
    "assign_blocks_to_set",
    "live_placements",
]

from typing import Any, Dict, Optional
from flask import current_app
from content_blocks.extensions import db
from content_blocks.models.block import Block
from content_blocks.domain.invariants.block import assert_block
from content_blocks.manager import get_block_manager
from content_blocks.utils.audit import log_action
from content_blocks.utils.transaction import transactional
from .fields import block_with_defaults
from .republish import republish_block


def create_block(
    *,
    data: Dict[str, Any],
    actor_id: Optional[str],
) -> Block:
    """
    Create a new block in the draft slot.

    Invariants are checked before the row is added, so a rejected block
    leaves the store untouched.
    """
    manager = get_block_manager()

    block = block_with_defaults(data)
    assert_block(block, manager.types)

    with transactional():
        db.session.add(block)
        db.session.flush()  # ensures block.id is available

        log_action(
            action="block.create",
            entity_type="block",
            entity_id=block.id,
            actor_id=actor_id,
            payload={
                "title": block.title,
                "type": block.type,
                "view_policy": block.view_policy,
            },
        )

    current_app.logger.info("Created block %s (%s)", block.id, block.type)
    republish_block(block, manager)
    return block

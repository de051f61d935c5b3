from typing import Dict, Optional
from flask import current_app
from content_blocks.extensions import db
from content_blocks.models.block import Block
from content_blocks.models.block_live import BlockLive
from content_blocks.models.base import utc_now
from content_blocks.domain.invariants.block import assert_block
from content_blocks.manager import get_block_manager
from content_blocks.utils.audit import log_action
from content_blocks.utils.transaction import transactional
from content_blocks.utils.versioning import snapshot_block, next_version
from .republish import republish_block


def publish_block(
    *,
    block: Block,
    actor_id: Optional[str],
) -> Dict[str, int]:
    """
    Copy the draft slot into the live slot and bump its version.
    """
    manager = get_block_manager()
    assert_block(block, manager.types)

    with transactional():
        live = db.session.get(BlockLive, block.id)
        version = next_version(live)

        if live is None:
            live = BlockLive()
            live.id = block.id

        for field, value in snapshot_block(block).items():
            setattr(live, field, value)
        live.version = version
        live.published_by = actor_id
        live.published_at = utc_now()

        db.session.add(live)

        log_action(
            action="block.publish",
            entity_type="block",
            entity_id=block.id,
            actor_id=actor_id,
            payload={"version": version},
        )

    current_app.logger.info("Published block %s at version %d", block.id, version)
    republish_block(block, manager)

    return {
        "block_id": block.id,
        "version": version,
    }


def unpublish_block(
    *,
    block: Block,
    actor_id: Optional[str],
) -> None:
    """Remove the live slot; the draft stays editable."""
    manager = get_block_manager()

    live = db.session.get(BlockLive, block.id)
    if live is None:
        raise ValueError("Block is not published")

    with transactional():
        db.session.delete(live)

        log_action(
            action="block.unpublish",
            entity_type="block",
            entity_id=block.id,
            actor_id=actor_id,
            payload={"version": live.version},
        )

    republish_block(block, manager)

from typing import Optional
from flask import current_app
from content_blocks.extensions import db
from content_blocks.models.block import Block
from content_blocks.manager import get_block_manager
from content_blocks.utils.audit import log_action
from content_blocks.utils.transaction import transactional
from .usage import pages_affected_by_changes


def delete_block(
    *,
    block: Block,
    actor_id: Optional[str],
) -> None:
    """
    Hard-delete a block.

    Page and block set placements are severed before the row goes, in the
    same transaction, so no join rows are left behind.
    """
    manager = get_block_manager()
    block_id = block.id
    affected_urls = pages_affected_by_changes(block)

    with transactional():
        block.pages.clear()
        block.block_sets.clear()
        block.viewer_groups.clear()
        db.session.flush()

        # Live slot goes with the draft (delete-orphan cascade)
        db.session.delete(block)

        log_action(
            action="block.delete",
            entity_type="block",
            entity_id=block_id,
            actor_id=actor_id,
            payload={"pages": affected_urls},
        )

    current_app.logger.info("Deleted block %s", block_id)
    if manager.publisher is not None:
        manager.publisher.republish(affected_urls)

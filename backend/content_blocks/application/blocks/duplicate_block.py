from typing import Optional
from flask import current_app
from content_blocks.extensions import db
from content_blocks.models.block import Block
from content_blocks.utils.audit import log_action
from content_blocks.utils.transaction import transactional

DUPLICATED_FIELDS = ("title", "type", "area", "weight", "view_policy", "extra_css_classes")


def duplicate_block(
    *,
    block: Block,
    actor_id: Optional[str],
) -> Block:
    """
    Copy a block into a new, unpublished draft.

    Viewer groups travel with the copy; page and block set placements do
    not, so the duplicate is orphaned until reassigned.
    """
    copy = Block()
    for field in DUPLICATED_FIELDS:
        setattr(copy, field, getattr(block, field))
    copy.content = dict(block.content or {})
    copy.viewer_groups = list(block.viewer_groups)
    copy.pages = []
    copy.block_sets = []

    with transactional():
        db.session.add(copy)
        db.session.flush()

        log_action(
            action="block.duplicate",
            entity_type="block",
            entity_id=copy.id,
            actor_id=actor_id,
            payload={"source_id": block.id},
        )

    current_app.logger.info("Duplicated block %s as %s", block.id, copy.id)
    return copy

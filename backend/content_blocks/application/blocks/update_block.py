from typing import Any, Dict, Optional
from content_blocks.models.block import Block
from content_blocks.domain.invariants.block import assert_block
from content_blocks.manager import get_block_manager
from content_blocks.utils.audit import log_action
from content_blocks.utils.transaction import transactional
from .fields import apply_block_fields
from .republish import republish_block


def update_block(
    *,
    block: Block,
    data: Dict[str, Any],
    actor_id: Optional[str],
) -> Block:
    """
    Update mutable fields on a block's draft slot.

    Design rules:
    - Only whitelisted fields are mutable
    - No silent no-op updates
    - Invariants always revalidated
    """
    manager = get_block_manager()

    with transactional():
        changed_fields = apply_block_fields(block, data)

        if not changed_fields:
            raise ValueError("No valid fields provided for update")

        assert_block(block, manager.types)

        log_action(
            action="block.update",
            entity_type="block",
            entity_id=block.id,
            actor_id=actor_id,
            payload={"fields": changed_fields},
        )

    republish_block(block, manager)
    return block

from ..visibility import ViewPolicy
from .exceptions import InvariantViolation

VALID_VIEW_POLICIES = {policy.value for policy in ViewPolicy}


def assert_block_title(block):
    if not block.title or not str(block.title).strip():
        raise InvariantViolation("Block Title is required")


def assert_block_view_policy(block):
    if block.view_policy not in VALID_VIEW_POLICIES:
        raise InvariantViolation(
            f"Invalid view policy: {block.view_policy!r}"
        )


def assert_block_type(block, registry):
    if not registry.is_registered(block.type):
        raise InvariantViolation(f"Unknown block type: {block.type!r}")


def assert_block_content(block):
    if block.content is not None and not isinstance(block.content, dict):
        raise InvariantViolation("Block content must be an object")


def assert_block(block, registry):
    assert_block_title(block)
    assert_block_view_policy(block)
    assert_block_type(block, registry)
    assert_block_content(block)

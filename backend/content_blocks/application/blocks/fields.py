from typing import Any, Dict, Iterable
from content_blocks.extensions import db
from content_blocks.domain.visibility import ViewPolicy
from content_blocks.models.block import Block
from content_blocks.models.group import Group
from content_blocks.domain.invariants.exceptions import InvariantViolation

ALLOWED_BLOCK_FIELDS = ("title", "type", "area", "view_policy", "extra_css_classes", "content")


def coerce_view_policy(value):
    if isinstance(value, ViewPolicy):
        return value.value
    return value


def load_groups(group_ids: Iterable[str]):
    group_ids = list(dict.fromkeys(group_ids or []))
    if not group_ids:
        return []

    groups = Group.query.filter(Group.id.in_(group_ids)).all()
    missing = set(group_ids) - {group.id for group in groups}
    if missing:
        raise InvariantViolation(f"Unknown viewer groups: {sorted(missing)}")
    return groups


def apply_block_fields(block, data: Dict[str, Any]) -> list[str]:
    """
    Copy whitelisted fields from data onto block.
    Returns the names of fields that actually changed.

    Nothing is flushed while fields are applied: a half-applied block may
    break column constraints until the invariants have rejected it.
    """
    changed_fields: list[str] = []

    with db.session.no_autoflush:
        groups = None
        if "viewer_group_ids" in data:
            groups = load_groups(data["viewer_group_ids"])

        for field in ALLOWED_BLOCK_FIELDS:
            if field not in data:
                continue
            value = data[field]
            if field == "view_policy":
                value = coerce_view_policy(value)
            if getattr(block, field) != value:
                setattr(block, field, value)
                changed_fields.append(field)

        if groups is not None and {g.id for g in groups} != block.viewer_group_ids:
            block.viewer_groups = groups
            changed_fields.append("viewer_group_ids")

    return changed_fields


def block_with_defaults(data: Dict[str, Any]):
    block = Block()
    block.type = "ContentBlock"
    block.view_policy = ViewPolicy.ANYONE.value
    block.content = {}
    apply_block_fields(block, data)
    return block

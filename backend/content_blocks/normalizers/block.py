from content_blocks.application.blocks.rendering import css_classes
from content_blocks.application.blocks.usage import (
    is_published,
    pages_count,
    usage_list_as_string,
)


def normalize_block(block, manager, admin=False):
    base = {
        "id": block.id,
        "title": block.title,
        "type": block.type,
        "css_classes": css_classes(block, manager),
    }

    if admin:
        base["area"] = block.area
        base["view_policy"] = block.view_policy
        base["extra_css_classes"] = block.extra_css_classes
        base["viewer_group_ids"] = sorted(block.viewer_group_ids)
        base["content"] = block.content or {}
        base["pages_count"] = pages_count(block)
        base["usage"] = usage_list_as_string(block)
        base["is_published"] = is_published(block)
        base["created_at"] = block.created_at.isoformat() if block.created_at else None
        base["updated_at"] = block.updated_at.isoformat() if block.updated_at else None

    return base


def normalize_block_set(block_set, manager):
    return {
        "id": block_set.id,
        "title": block_set.title,
        "blocks": [normalize_block(b, manager) for b in block_set.blocks],
    }

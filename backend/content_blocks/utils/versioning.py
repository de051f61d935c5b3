def snapshot_block(block):
    """Renderable and gating fields copied into the live slot."""
    return {
        "title": block.title,
        "type": block.type,
        "area": block.area,
        "view_policy": block.view_policy,
        "extra_css_classes": block.extra_css_classes,
        "content": block.content,
        "viewer_group_ids": sorted(block.viewer_group_ids),
    }


def next_version(live):
    return (live.version + 1) if live else 1

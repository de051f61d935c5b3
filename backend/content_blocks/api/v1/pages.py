from flask import g, request, jsonify
from content_blocks.models.block import Block
from content_blocks.models.page import Page
from content_blocks.domain.permissions import BLOCK_EDIT
from content_blocks.domain.visibility import can_view
from content_blocks.manager import get_block_manager
from content_blocks.application.blocks import (
    create_page,
    assign_block_to_page,
    live_placements,
)
from content_blocks.application.blocks.rendering import css_classes, render_block
from content_blocks.utils.decorators import capability_required, viewer_optional
from . import v1_bp


@v1_bp.route("/pages", methods=["POST"])
@capability_required(BLOCK_EDIT)
def create_page_route():
    data = request.get_json(silent=True) or {}
    page = create_page(data=data, actor_id=g.current_user.id)

    return jsonify({
        "id": page.id,
        "link": page.link(),
        "message": "Page created successfully"
    }), 201


@v1_bp.route("/pages/<page_id>/blocks", methods=["POST"])
@capability_required(BLOCK_EDIT)
def assign_page_block(page_id):
    page = Page.query.filter_by(id=page_id).first_or_404()
    data = request.get_json(silent=True) or {}

    block_id = data.get("block_id")
    if not block_id:
        return jsonify({"error": "block_id is required"}), 400

    sort = data.get("sort", 0)
    if not isinstance(sort, int) or isinstance(sort, bool):
        return jsonify({"error": "sort must be an integer"}), 400

    block = Block.query.filter_by(id=block_id).first_or_404()

    assign_block_to_page(
        page=page,
        block=block,
        actor_id=g.current_user.id,
        block_area=data.get("block_area"),
        sort=sort,
    )

    return jsonify({"message": "Block placed on page"}), 200


@v1_bp.route("/pages/<slug>/blocks", methods=["GET"])
@viewer_optional
def list_page_blocks(slug):
    """Published blocks on a page that the current viewer may see, rendered."""
    manager = get_block_manager()
    viewer = g.current_viewer
    page = Page.query.filter_by(slug=slug.strip("/")).first_or_404()

    blocks = []
    for live, area in live_placements(page):
        if not can_view(live, viewer, checker=manager.checker, hooks=manager.view_hooks):
            continue
        blocks.append({
            "id": live.id,
            "title": live.title,
            "area": area,
            "css_classes": css_classes(live, manager),
            "html": render_block(live, manager, area=area),
        })

    return jsonify({
        "page": {"id": page.id, "title": page.title, "link": page.link()},
        "blocks": blocks,
    }), 200

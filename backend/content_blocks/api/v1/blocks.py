from flask import g, request, jsonify
from content_blocks.extensions import db
from content_blocks.models.block import Block
from content_blocks.models.block_live import BlockLive
from content_blocks.domain.permissions import (
    BLOCK_CREATE,
    BLOCK_DELETE,
    BLOCK_EDIT,
    BLOCK_PUBLISH,
    can_edit,
)
from content_blocks.domain.visibility import can_view
from content_blocks.manager import get_block_manager
from content_blocks.application.blocks import (
    create_block,
    update_block,
    duplicate_block,
    delete_block,
    publish_block,
    unpublish_block,
)
from content_blocks.application.blocks.cms_fields import block_cms_fields
from content_blocks.application.blocks.rendering import css_classes, render_block
from content_blocks.normalizers.block import normalize_block
from content_blocks.normalizers.pagination import normalize_pagination
from content_blocks.utils.decorators import capability_required, viewer_optional
from content_blocks.utils.optimistic_lock import enforce_optimistic_lock
from . import v1_bp


def _actor_id():
    user = g.get("current_user")
    return user.id if user else None


def _get_block(block_id):
    return Block.query.filter_by(id=block_id).first_or_404()


@v1_bp.route("/blocks", methods=["GET"])
@capability_required(BLOCK_EDIT)
def list_blocks():
    manager = get_block_manager()

    page_num = request.args.get("page", 1, type=int)
    per_page = min(request.args.get("per_page", 20, type=int), 100)

    query = Block.query
    if block_type := request.args.get("type"):
        query = query.filter_by(type=block_type)

    pagination = query.order_by(Block.title.asc()).paginate(
        page=page_num, per_page=per_page, error_out=False
    )

    return jsonify(
        normalize_pagination(
            pagination.items,
            lambda b: normalize_block(b, manager, admin=True),
            page=page_num,
            per_page=per_page,
            total=pagination.total,
        )
    )


@v1_bp.route("/blocks", methods=["POST"])
@capability_required(BLOCK_CREATE)
def create():
    data = request.get_json(silent=True) or {}
    block = create_block(data=data, actor_id=_actor_id())

    return jsonify({
        "id": block.id,
        "message": "Block created successfully"
    }), 201


@v1_bp.route("/blocks/<block_id>", methods=["GET"])
@capability_required(BLOCK_EDIT)
def get_block(block_id):
    block = _get_block(block_id)
    return jsonify(normalize_block(block, get_block_manager(), admin=True))


@v1_bp.route("/blocks/<block_id>/fields", methods=["GET"])
@capability_required(BLOCK_EDIT)
def get_block_fields(block_id):
    block = _get_block(block_id)
    return jsonify(block_cms_fields(block, get_block_manager()))


@v1_bp.route("/blocks/<block_id>", methods=["PUT"])
@capability_required(BLOCK_EDIT)
def update(block_id):
    block = _get_block(block_id)

    # -----------------------
    # Optimistic Locking Check
    # -----------------------
    enforce_optimistic_lock(block)

    data = request.get_json(silent=True) or {}

    try:
        update_block(block=block, data=data, actor_id=_actor_id())
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    return jsonify({"message": "Block updated successfully"}), 200


@v1_bp.route("/blocks/<block_id>", methods=["DELETE"])
@capability_required(BLOCK_DELETE)
def delete(block_id):
    block = _get_block(block_id)
    delete_block(block=block, actor_id=_actor_id())
    return jsonify({"message": "Block deleted successfully"}), 200


@v1_bp.route("/blocks/<block_id>/duplicate", methods=["POST"])
@capability_required(BLOCK_CREATE)
def duplicate(block_id):
    block = _get_block(block_id)
    copy = duplicate_block(block=block, actor_id=_actor_id())
    return jsonify({
        "id": copy.id,
        "message": "Block duplicated successfully"
    }), 201


@v1_bp.route("/blocks/<block_id>/publish", methods=["POST"])
@capability_required(BLOCK_PUBLISH)
def publish(block_id):
    block = _get_block(block_id)
    result = publish_block(block=block, actor_id=_actor_id())
    return jsonify({
        "message": "Block published",
        "version": result["version"]
    }), 200


@v1_bp.route("/blocks/<block_id>/unpublish", methods=["POST"])
@capability_required(BLOCK_PUBLISH)
def unpublish(block_id):
    block = _get_block(block_id)

    try:
        unpublish_block(block=block, actor_id=_actor_id())
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    return jsonify({"message": "Block unpublished successfully"}), 200


@v1_bp.route("/blocks/<block_id>/render", methods=["GET"])
@viewer_optional
def render(block_id):
    manager = get_block_manager()
    viewer = g.current_viewer
    stage = request.args.get("stage", "live")

    if stage == "live":
        target = db.get_or_404(BlockLive, block_id)
    elif stage == "draft":
        if not can_edit(manager.checker, viewer):
            return jsonify({"error": "Insufficient permissions"}), 403
        target = _get_block(block_id)
    else:
        return jsonify({"error": "Invalid stage"}), 400

    if not can_view(target, viewer, checker=manager.checker, hooks=manager.view_hooks):
        return jsonify({"error": "Not allowed to view this block"}), 403

    html = render_block(target, manager, area=request.args.get("area"))

    return jsonify({
        "id": target.id,
        "stage": stage,
        "css_classes": css_classes(target, manager),
        "html": html,
    }), 200

from flask import g, request, jsonify
from content_blocks.models.block_set import BlockSet
from content_blocks.domain.permissions import BLOCK_EDIT
from content_blocks.manager import get_block_manager
from content_blocks.application.blocks import create_block_set, assign_blocks_to_set
from content_blocks.normalizers.block import normalize_block_set
from content_blocks.utils.decorators import capability_required
from . import v1_bp


@v1_bp.route("/block-sets", methods=["POST"])
@capability_required(BLOCK_EDIT)
def create_block_set_route():
    data = request.get_json(silent=True) or {}
    block_set = create_block_set(data=data, actor_id=g.current_user.id)

    return jsonify({
        "id": block_set.id,
        "message": "Block set created successfully"
    }), 201


@v1_bp.route("/block-sets/<block_set_id>", methods=["GET"])
@capability_required(BLOCK_EDIT)
def get_block_set(block_set_id):
    block_set = BlockSet.query.filter_by(id=block_set_id).first_or_404()
    return jsonify(normalize_block_set(block_set, get_block_manager()))


@v1_bp.route("/block-sets/<block_set_id>/blocks", methods=["POST"])
@capability_required(BLOCK_EDIT)
def assign_block_set_blocks(block_set_id):
    block_set = BlockSet.query.filter_by(id=block_set_id).first_or_404()
    data = request.get_json(silent=True) or {}

    block_ids = data.get("block_ids")
    if not isinstance(block_ids, list):
        return jsonify({"error": "block_ids must be a list"}), 400

    assign_blocks_to_set(block_set=block_set, block_ids=block_ids, actor_id=g.current_user.id)
    return jsonify(normalize_block_set(block_set, get_block_manager())), 200

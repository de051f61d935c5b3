from flask import jsonify
from content_blocks.domain.permissions import provide_permissions
from content_blocks.utils.decorators import capability_required
from . import v1_bp


@v1_bp.route("/permissions", methods=["GET"])
@capability_required()
def list_permissions():
    return jsonify(provide_permissions()), 200

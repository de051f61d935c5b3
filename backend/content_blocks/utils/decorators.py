from functools import wraps
from flask import g, jsonify
from content_blocks.application.blocks.viewers import load_current_viewer
from content_blocks.domain.permissions import ADMIN, has_capability
from content_blocks.manager import get_block_manager


def viewer_optional(fn):
    """Attach g.current_viewer (anonymous when no valid token is sent)."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        load_current_viewer()
        return fn(*args, **kwargs)
    return wrapper


def capability_required(*codes):
    """
    Require an authenticated viewer holding ADMIN or any of codes.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            viewer = load_current_viewer()

            if not viewer.is_authenticated:
                return jsonify({"error": "Authentication required"}), 401

            checker = get_block_manager().checker
            if not has_capability(checker, viewer, ADMIN, *codes):
                return jsonify({"error": "Insufficient permissions"}), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator

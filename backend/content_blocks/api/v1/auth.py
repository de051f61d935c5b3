from flask import request, jsonify
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token
)
from content_blocks.models.member import Member
from . import v1_bp


@v1_bp.route("/auth/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "Invalid request body"}), 400

    email = data.get("email")
    password = data.get("password")

    if not email or not password:
        return jsonify({"error": "Email and password required"}), 400

    member = Member.query.filter_by(email=email).first()

    if not member or not member.check_password(password):
        return jsonify({"error": "Invalid credentials"}), 401

    if not member.is_active:
        return jsonify({"error": "Member account disabled"}), 403

    access_token = create_access_token(identity=member.id)
    refresh_token = create_refresh_token(identity=member.id)

    return jsonify({
        "access_token": access_token,
        "refresh_token": refresh_token
    }), 200

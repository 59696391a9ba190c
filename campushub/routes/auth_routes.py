from flask import Blueprint, request, jsonify, make_response
from flask_jwt_extended import jwt_required
from campushub.extensions import limiter
from campushub.exceptions import MissingFieldsError, UnauthorizedError
from campushub.services import UserService
from campushub.utils.auth import get_current_user

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/signup", methods=["POST"])
@limiter.limit("10 per minute")
def sign_up():
    user_data = request.get_json(silent=True)
    if not user_data:
        return jsonify({"error": "No data provided"}), 400

    result = UserService.sign_up(user_data)
    return make_response(jsonify(result), 201)


@auth_bp.route("/signin", methods=["POST"])
@limiter.limit("20 per minute")
def sign_in():
    user_data = request.get_json(silent=True)
    if not user_data:
        return jsonify({"error": "No data provided"}), 400

    required_fields = ["student_id", "password"]
    missing_fields = [field for field in required_fields if not user_data.get(field)]
    if missing_fields:
        raise MissingFieldsError(missing_fields)

    result = UserService.sign_in(user_data["student_id"], user_data["password"])
    return jsonify(result), 200


@auth_bp.route("/session", methods=["GET"])
@jwt_required()
def get_session():
    user = get_current_user()
    if not user:
        raise UnauthorizedError("Not authenticated")
    return jsonify(user.to_dict()), 200


@auth_bp.route("/signout", methods=["POST"])
def sign_out():
    # Tokens are stateless; the client discards its copy
    return jsonify({"success": True}), 200
